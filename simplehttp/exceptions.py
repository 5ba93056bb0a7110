from typing import Optional


class SimpleHTTPError(Exception):
    """Base exception for simplehttp errors."""
    pass


class ValidationError(SimpleHTTPError, ValueError):
    """Raised when a request setter receives a value it cannot accept."""
    pass


class TransportError(SimpleHTTPError):
    """Raised when the request fails below the HTTP level (DNS, TLS, connect, timeout)."""
    def __init__(self, message: str, url: Optional[str] = None):
        super().__init__(message)
        self.url = url
