import json
import sys
from pathlib import Path

import pytest
import tornado.websocket

# Ensure repository root is importable for `import relay`
ROOT = Path(__file__).resolve().parent
REPO_ROOT = ROOT.parent
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))


class FakeConnection:
    """Stands in for a WebSocketHandler: records every JSON message written to it."""

    def __init__(self, name: str, closed: bool = False):
        self.name = name
        self.closed = closed
        self.sent = []

    def write_message(self, message):
        if self.closed:
            raise tornado.websocket.WebSocketClosedError()
        self.sent.append(json.loads(message))

    def events(self):
        return [m["event"] for m in self.sent]

    def __repr__(self):
        return f"FakeConnection({self.name!r})"


class FakeTicker:
    def __init__(self, code: int):
        self.code = code
        self.stop_calls = 0

    def stop(self):
        self.stop_calls += 1


@pytest.fixture
def connection():
    return FakeConnection


@pytest.fixture
def tickers():
    return []


@pytest.fixture
def scheduler(tickers):
    def schedule(code):
        ticker = FakeTicker(code)
        tickers.append(ticker)
        return ticker

    return schedule
