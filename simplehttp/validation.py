"""
Validation predicates shared by the Request setters.
"""
import math
import re
from enum import Enum
from urllib.parse import urlparse

HOST_PATTERN: re.Pattern = re.compile(r"^[A-Za-z0-9_]([A-Za-z0-9_\-\.]*[A-Za-z0-9_])?$")


class Method(str, Enum):
    GET = "GET"
    POST = "POST"


def is_valid_url(url) -> bool:
    """Check that url is an absolute URL with a scheme and a host. Any scheme is accepted."""
    if not url or not isinstance(url, str):
        return False

    if any(ch.isspace() for ch in url):
        return False

    try:
        parsed = urlparse(url)
        hostname = parsed.hostname
        parsed.port  # raises ValueError on a malformed port
    except ValueError:
        return False

    if not parsed.scheme or not parsed.netloc or not hostname:
        return False

    # IPv6 literals come back from urlparse without their brackets
    if ':' in hostname:
        return parsed.netloc.find('[') != -1

    return HOST_PATTERN.match(hostname) is not None


def is_valid_method(method) -> bool:
    if isinstance(method, Method):
        return True
    return isinstance(method, str) and method in {m.value for m in Method}


def coerce_timeout(timeout):
    """Return timeout as an int, or None if it can't be read as one."""
    if isinstance(timeout, bool):
        return None
    try:
        return int(timeout)
    except (TypeError, ValueError, OverflowError):
        pass

    # numeric strings like "1.5" truncate the same way floats do
    if isinstance(timeout, str):
        try:
            value = float(timeout.strip())
        except ValueError:
            return None
        if not math.isfinite(value):
            return None
        return int(value)

    return None


def is_valid_timeout(timeout) -> bool:
    value = coerce_timeout(timeout)
    return value is not None and value > 0
