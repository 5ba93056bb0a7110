"""
Form/query string encoding with bracketed keys for nested values:

    {'k': ['a', 'b'], 'f': {'x': 1}}  ->  k%5B0%5D=a&k%5B1%5D=b&f%5Bx%5D=1

Decoded, that reads k[0]=a&k[1]=b&f[x]=1.
"""
from collections.abc import Mapping
from typing import Any, List, Tuple
from urllib.parse import quote_plus


def _scalar(value: Any) -> str:
    if value is True:
        return '1'
    if value is False:
        return '0'
    return str(value)


def _flatten(key: str, value: Any) -> List[Tuple[str, str]]:
    if value is None:
        return []

    if isinstance(value, Mapping):
        pairs = []
        for sub_key, sub_value in value.items():
            pairs.extend(_flatten(f"{key}[{sub_key}]", sub_value))
        return pairs

    if isinstance(value, (list, tuple)):
        pairs = []
        for index, item in enumerate(value):
            pairs.extend(_flatten(f"{key}[{index}]", item))
        return pairs

    return [(key, _scalar(value))]


def flatten_params(params: Mapping[str, Any]) -> List[Tuple[str, str]]:
    """Expand nested parameter values into ordered (bracketed key, value) pairs."""
    pairs = []
    for key, value in params.items():
        pairs.extend(_flatten(str(key), value))
    return pairs


def build_query(params: Mapping[str, Any]) -> str:
    return '&'.join(
        f"{quote_plus(key)}={quote_plus(value)}" for key, value in flatten_params(params)
    )
