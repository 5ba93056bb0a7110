"""simplehttp - build a request, send it, parse the response."""

from .exceptions import SimpleHTTPError, ValidationError, TransportError
from .request import Request
from .response import Response
from .validation import Method

__version__ = "0.1.0"
