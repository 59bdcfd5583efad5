"""Shared fixtures: fresh store per test with a ticking clock, live server."""

import itertools
import threading
from collections.abc import Iterator
from datetime import UTC, datetime, timedelta

import pytest

from issuetracker.api.server import IssueTrackerServer, make_server
from issuetracker.config import AppConfig, ServerConfig
from issuetracker.store import IssueStore

START = datetime(2024, 1, 1, 12, 0, 0, tzinfo=UTC)


class FakeClock:
    """Returns START, then advances one second per call."""

    def __init__(self, start: datetime = START, step: timedelta = timedelta(seconds=1)) -> None:
        self.now = start
        self.step = step

    def __call__(self) -> datetime:
        current = self.now
        self.now += self.step
        return current


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store(clock: FakeClock) -> IssueStore:
    """Empty store with deterministic ids issue-1, issue-2, ..."""
    counter = itertools.count(1)
    return IssueStore(clock=clock, id_factory=lambda: f"issue-{next(counter)}")


@pytest.fixture
def live_server(store: IssueStore) -> Iterator[IssueTrackerServer]:
    """Real server on an ephemeral localhost port, serving in a daemon thread."""
    config = AppConfig(server=ServerConfig(host="127.0.0.1", port=0))
    server = make_server(config, store)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    try:
        yield server
    finally:
        server.shutdown()
        server.server_close()
        thread.join(timeout=5)


@pytest.fixture
def base_url(live_server: IssueTrackerServer) -> str:
    host, port = live_server.server_address[:2]
    return f"http://{host}:{port}"
