from pathlib import Path

import httpx
import pytest

FIXTURES = Path(__file__).parent / "fixtures"


def _read_fixture(name: str) -> str:
    # read bytes so CRLF line endings survive
    raw = (FIXTURES / name).read_bytes().decode("utf-8")
    if "\r\n" not in raw:
        raw = raw.replace("\n", "\r\n")
    return raw


@pytest.fixture
def load_fixture():
    """Load a raw captured response from tests/fixtures."""
    return _read_fixture


@pytest.fixture
def example_html() -> str:
    return (
        "<!doctype html><html><head><title>Example Domain</title></head>"
        "<body><h1>Example Domain</h1></body></html>"
    )


@pytest.fixture
def recorded():
    """MockTransport that records every request and answers with a handler set by the test."""
    class Recorder:
        def __init__(self):
            self.requests = []
            self.handler = lambda request: httpx.Response(200, text="ok")

        def __call__(self, request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return self.handler(request)

        @property
        def transport(self) -> httpx.MockTransport:
            return httpx.MockTransport(self)

    return Recorder()
