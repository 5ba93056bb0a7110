"""
Parse a raw HTTP capture (status line, headers, blank line, body) into a Response.

A capture can hold several header blocks when interim or redirect responses
precede the real one, e.g. "HTTP/1.1 100 Continue\r\n\r\nHTTP/1.1 200 OK...".
Those are unwrapped by re-parsing the body of the interim block.
"""
from typing import Dict, NamedTuple, Optional, Union

import structlog
from lxml import etree, html

logger = structlog.get_logger(__name__)

HEADER_BODY_SEPARATOR = "\r\n\r\n"
LINE_SEPARATOR = "\r\n"
STATUS_CODE_OFFSET = 9
UNWRAP_STATUS_CODES = (100, 301, 302, 303)
DEFAULT_MAX_UNWRAP_DEPTH = 10
HTML_MEDIA_TYPES = ('text/html',)


class _ParsedResponse(NamedTuple):
    status_code: int
    headers: Dict[str, str]
    raw_body: str


def _parse_status_code(line: str) -> int:
    code = line[STATUS_CODE_OFFSET:STATUS_CODE_OFFSET + 3]
    return int(code) if len(code) == 3 and code.isdigit() else 0


def _parse(raw: str, depth: int, max_depth: int) -> _ParsedResponse:
    header_section, _, raw_body = raw.partition(HEADER_BODY_SEPARATOR)

    status_code = 0
    headers: Dict[str, str] = {}

    for line in header_section.split(LINE_SEPARATOR):
        if not line:
            continue

        if line[:5].upper() == 'HTTP/':
            status_code = _parse_status_code(line)

            if status_code in UNWRAP_STATUS_CODES:
                if depth < max_depth:
                    return _parse(raw_body, depth + 1, max_depth)
                logger.warning("unwrap_depth_exceeded", status_code=status_code, max_depth=max_depth)
            continue

        name, sep, value = line.partition(':')
        if not sep:
            continue
        headers[name.strip()] = value.strip()

    return _ParsedResponse(status_code, headers, raw_body)


class Response:
    """
    Status code, headers and body of a single HTTP response.

    The body is additionally parsed into an lxml document when the
    Content-Type is text/html. A Response is never modified after construction.
    """

    def __init__(self, raw: Union[str, bytes, None], max_unwrap_depth: int = DEFAULT_MAX_UNWRAP_DEPTH):
        if raw is None:
            raw = ''
        elif isinstance(raw, bytes):
            raw = raw.decode('utf-8', errors='replace')

        parsed = _parse(raw, 0, max_unwrap_depth)

        self._status_code = parsed.status_code
        self._headers = parsed.headers
        self._raw_body = parsed.raw_body
        self._parsed_body = self._parse_body()

    @property
    def status_code(self) -> int:
        return self._status_code

    @property
    def headers(self) -> Dict[str, str]:
        return dict(self._headers)

    @property
    def raw_body(self) -> str:
        return self._raw_body

    @property
    def parsed_body(self) -> Optional[html.HtmlElement]:
        return self._parsed_body

    @property
    def content_type(self) -> Optional[str]:
        """Media type of the body without parameters, e.g. 'text/html' for 'text/html; charset=utf-8'."""
        value = self._headers.get('Content-Type')
        if value is None:
            for name, header_value in self._headers.items():
                if name.lower() == 'content-type':
                    value = header_value
                    break

        if value is None:
            return None
        return value.split(';', 1)[0].strip()

    def _parse_body(self) -> Optional[html.HtmlElement]:
        if not self._raw_body.strip():
            return None

        content_type = self.content_type
        if content_type is None or content_type.lower() not in HTML_MEDIA_TYPES:
            return None

        parser = html.HTMLParser(recover=True, encoding='utf-8')
        try:
            return html.document_fromstring(self._raw_body.encode('utf-8'), parser=parser)
        except etree.LxmlError as e:
            logger.warning("html_parse_failed", error=str(e))
            return None

    def __eq__(self, other):
        if not isinstance(other, Response):
            return NotImplemented
        return (
            self._status_code == other._status_code
            and self._headers == other._headers
            and self._raw_body == other._raw_body
        )

    __hash__ = None

    def __repr__(self):
        return f"<Response [{self._status_code}] headers={len(self._headers)} body={len(self._raw_body)}B>"
