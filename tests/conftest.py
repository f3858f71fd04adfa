"""Shared fixtures for the Cayley SDK tests."""

import pytest

from cayley_sdk import Graph


class RecordingTransport:
    """Transport stand-in that records queries and replays canned bodies."""

    def __init__(self, *responses: bytes):
        self.sent = []
        self.responses = list(responses)
        self.closed = False

    def send(self, query: str) -> bytes:
        self.sent.append(query)
        if self.responses:
            return self.responses.pop(0)
        return b'{"result": null}'

    def close(self):
        self.closed = True


@pytest.fixture
def transport():
    return RecordingTransport()


@pytest.fixture
def graph(transport):
    return Graph(transport=transport)
