"""Fixtures for integration tests: an in-process fake gstd."""

from __future__ import annotations

import json
import socketserver
import threading
import time
from collections.abc import Iterator
from dataclasses import dataclass, field

import pytest

TERMINATOR = b"\x00"


@dataclass
class FakeDaemonState:
    """What the fake daemon has seen and how it should answer."""

    requests: list[str] = field(default_factory=list)
    connections: int = 0
    codes: dict[str, int] = field(default_factory=dict)
    delays: dict[str, float] = field(default_factory=dict)
    # Prefixes answered by closing the connection without a reply
    hang_up: set[str] = field(default_factory=set)
    # Send responses without the NUL terminator and close afterwards
    close_instead_of_terminator: bool = False
    lock: threading.Lock = field(default_factory=threading.Lock)

    def _lookup(self, table: dict, request: str):
        matches = [prefix for prefix in table if request.startswith(prefix)]
        return table[max(matches, key=len)] if matches else None


class FakeDaemonHandler(socketserver.BaseRequestHandler):
    """Answers each received chunk as one request."""

    def handle(self) -> None:
        state: FakeDaemonState = self.server.state  # type: ignore[attr-defined]
        with state.lock:
            state.connections += 1

        while True:
            data = self.request.recv(4096)
            if not data:
                return

            request = data.decode("utf-8")
            with state.lock:
                state.requests.append(request)

            if any(request.startswith(prefix) for prefix in state.hang_up):
                return

            delay = state._lookup(state.delays, request)
            if delay:
                time.sleep(delay)

            code = state._lookup(state.codes, request) or 0
            body = json.dumps({"code": code, "description": "fake", "response": None})

            if state.close_instead_of_terminator:
                self.request.sendall(body.encode("utf-8"))
                return
            self.request.sendall(body.encode("utf-8") + TERMINATOR)


class FakeDaemon(socketserver.ThreadingTCPServer):
    daemon_threads = True
    allow_reuse_address = True

    def __init__(self) -> None:
        super().__init__(("127.0.0.1", 0), FakeDaemonHandler)
        self.state = FakeDaemonState()

    @property
    def port(self) -> int:
        return self.server_address[1]


@pytest.fixture
def fake_daemon() -> Iterator[FakeDaemon]:
    """A fake gstd listening on a free localhost port."""
    server = FakeDaemon()
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    yield server
    server.shutdown()
    server.server_close()


@pytest.fixture
def free_port() -> int:
    """A localhost port with nothing listening on it."""
    with socketserver.TCPServer(("127.0.0.1", 0), socketserver.BaseRequestHandler) as server:
        return server.server_address[1]
