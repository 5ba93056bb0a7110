"""
Request builder: holds validated request settings and submits them through
the transport, producing a Response.
"""
from typing import Any, Dict, Optional, Union

import httpx
import structlog

from .exceptions import ValidationError
from .params import build_query
from .response import DEFAULT_MAX_UNWRAP_DEPTH, Response
from .transport import (
    DEFAULT_MAX_REDIRECTS,
    DEFAULT_TIMEOUT,
    DEFAULT_USER_AGENT,
    TransportConfig,
    perform,
)
from .validation import Method, coerce_timeout, is_valid_method, is_valid_timeout, is_valid_url

logger = structlog.get_logger(__name__)


class Request:
    """
    A single HTTP or HTTPS request. All setters validate their input, raise
    ValidationError on bad values and return the request for chaining:

        response = Request('http://www.example.com').add_query_parameter('q', 'x').send()

    Disabling TLS validation is only meant for debugging against badly
    configured servers.
    """

    def __init__(
        self,
        url: Optional[str] = None,
        method: Union[Method, str, None] = Method.GET,
        validate_tls: bool = True,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self._url: Optional[str] = None
        self._method = Method.GET
        self._timeout = DEFAULT_TIMEOUT
        self._query_parameters: Dict[str, Any] = {}
        self._post_parameters: Dict[str, Any] = {}
        self._response: Optional[Response] = None

        self.validate_tls = validate_tls
        self.user_agent = DEFAULT_USER_AGENT
        self.max_redirects = DEFAULT_MAX_REDIRECTS
        self.max_unwrap_depth = DEFAULT_MAX_UNWRAP_DEPTH
        self.transport = transport

        if url is not None:
            self.set_url(url)

        if method is not None:
            self.set_method(method)

    @classmethod
    def from_config(cls, config, url: Optional[str] = None, method: Union[Method, str] = Method.GET,
                    transport: Optional[httpx.BaseTransport] = None) -> 'Request':
        """Create a request with its defaults taken from a Config instance."""
        request_config = config.request

        request = cls(url, method, validate_tls=request_config.get('validate_tls', True), transport=transport)
        request.set_timeout(request_config.get('timeout', DEFAULT_TIMEOUT))
        request.user_agent = request_config.get('user_agent', DEFAULT_USER_AGENT)
        request.max_redirects = request_config.get('max_redirects', DEFAULT_MAX_REDIRECTS)
        request.max_unwrap_depth = config.get('response', 'max_unwrap_depth', default=DEFAULT_MAX_UNWRAP_DEPTH)
        return request

    def set_url(self, url: str) -> 'Request':
        if not is_valid_url(url):
            raise ValidationError(f"Invalid request URL '{url}' given")

        self._url = url
        return self

    def get_url(self) -> Optional[str]:
        return self._url

    def set_method(self, method: Union[Method, str]) -> 'Request':
        if not is_valid_method(method):
            raise ValidationError(f"Invalid request method '{method}' given")

        self._method = Method(method)
        return self

    def get_method(self) -> Method:
        return self._method

    def set_timeout(self, timeout) -> 'Request':
        """Set the connect and overall timeout in seconds. Strings like '15' are accepted."""
        if not is_valid_timeout(timeout):
            raise ValidationError(f"Invalid timeout '{timeout}' given")

        self._timeout = coerce_timeout(timeout)
        return self

    def get_timeout(self) -> int:
        return self._timeout

    def add_query_parameter(self, key: str, value: Any) -> 'Request':
        """Add a value to the query string. Lists are sent as key[0]=..&key[1]=.."""
        self._query_parameters[key] = value
        return self

    def get_query_parameters(self) -> Dict[str, Any]:
        return dict(self._query_parameters)

    def add_post_parameter(self, key: str, value: Any) -> 'Request':
        """Add a value to the POST body.

        This does not change the request method; post parameters are
        ignored unless the method is POST.
        """
        self._post_parameters[key] = value
        return self

    def get_post_parameters(self) -> Dict[str, Any]:
        return dict(self._post_parameters)

    def build_request_url(self) -> Optional[str]:
        """Combine the base URL with the encoded query parameters."""
        url = self._url
        if url is None:
            return None

        if self._query_parameters:
            url += ('&' if '?' in url else '?') + build_query(self._query_parameters)

        return url

    def send(self) -> Response:
        """Submit the request and return the parsed Response.

        Raises:
            ValidationError: If no URL has been set
            TransportError: If the request fails below the HTTP level
        """
        request_url = self.build_request_url()
        if request_url is None:
            raise ValidationError("Cannot send a request without a request URL")

        config = TransportConfig(
            timeout=self._timeout,
            validate_tls=self.validate_tls,
            user_agent=self.user_agent,
            max_redirects=self.max_redirects,
            transport=self.transport,
        )

        data = self._post_parameters if self._method == Method.POST else None
        raw = perform(self._method, request_url, config, data=data)

        self._response = Response(raw, max_unwrap_depth=self.max_unwrap_depth)
        logger.debug(
            "request_sent",
            method=self._method.value,
            url=request_url,
            status_code=self._response.status_code,
        )
        return self._response

    def get_last_response(self) -> Optional[Response]:
        return self._response

    is_valid_url = staticmethod(is_valid_url)
    is_valid_method = staticmethod(is_valid_method)
    is_valid_timeout = staticmethod(is_valid_timeout)
