import httpx
from pytest import fixture

from gemini_client import Gemini


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it served."""

    def __init__(self, handler):
        self.requests: list[httpx.Request] = []

        def record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(record)


@fixture
def make_client():
    def factory(handler, model=None):
        transport = RecordingTransport(handler)
        client = Gemini("test-key", model, transport=transport)
        return client, transport

    return factory
