"""
Encapsulates the actual network call. One blocking httpx request per call,
redirects followed, result rendered back into a raw header+body capture so
the Response parser sees the same shape a curl header dump would give.
"""
from dataclasses import dataclass
from typing import List, Optional

import httpx
import structlog

from .exceptions import TransportError
from .params import build_query
from .response import UNWRAP_STATUS_CODES
from .validation import Method

logger = structlog.get_logger(__name__)

DEFAULT_TIMEOUT = 30
DEFAULT_MAX_REDIRECTS = 20
DEFAULT_USER_AGENT = 'simplehttp/0.1.0 (+https://github.com/simplehttp/simplehttp)'
FORM_CONTENT_TYPE = 'application/x-www-form-urlencoded'


@dataclass
class TransportConfig:
    """Options for a single transport call."""
    timeout: int = DEFAULT_TIMEOUT
    validate_tls: bool = True
    user_agent: str = DEFAULT_USER_AGENT
    max_redirects: int = DEFAULT_MAX_REDIRECTS
    transport: Optional[httpx.BaseTransport] = None


def _render_head(response: httpx.Response) -> str:
    lines = [f"{response.http_version} {response.status_code} {response.reason_phrase}"]
    for name, value in response.headers.raw:
        lines.append(f"{name.decode('latin-1')}: {value.decode('latin-1')}")
    return "\r\n".join(lines) + "\r\n\r\n"


def render_raw(response: httpx.Response) -> str:
    """Render an httpx response (and its unwrappable redirect hops) as a raw HTTP capture."""
    parts: List[str] = []
    for hop in response.history:
        if hop.status_code in UNWRAP_STATUS_CODES:
            parts.append(_render_head(hop))
    parts.append(_render_head(response))
    parts.append(response.text)
    return "".join(parts)


def perform(method: Method, url: str, config: TransportConfig, data: Optional[dict] = None) -> str:
    """Send one request and return the raw response capture.

    Args:
        method: GET or POST
        url: Full request URL, query string included
        config: Transport options
        data: Post parameters, only sent for POST requests

    Returns:
        Raw response text: status line(s), headers, blank line, body

    Raises:
        TransportError: On DNS, TLS, connection, timeout or redirect failures.
            HTTP error statuses are not raised.
    """
    headers = {'User-Agent': config.user_agent}
    content = None

    if method == Method.POST:
        headers['Content-Type'] = FORM_CONTENT_TYPE
        content = build_query(data or {})

    try:
        with httpx.Client(
            verify=config.validate_tls,
            timeout=httpx.Timeout(config.timeout),
            follow_redirects=True,
            max_redirects=config.max_redirects,
            transport=config.transport,
        ) as client:
            logger.debug("sending_request", method=method.value, url=url)
            response = client.request(method.value, url, headers=headers, content=content)
            return render_raw(response)

    except httpx.TimeoutException as e:
        logger.warning("request_timeout", url=url, timeout_seconds=config.timeout)
        raise TransportError(f"Timeout after {config.timeout}s: {e}", url=url) from e

    except httpx.RequestError as e:
        logger.warning("transport_error", url=url, error=str(e))
        raise TransportError(f"Request to {url} failed: {e}", url=url) from e
