"""Mock transport for testing."""

from __future__ import annotations

import json
import threading
import time
from typing import Any

from ..exceptions import TransportError
from .base import BaseClientTransport, TransportConfig

DEFAULT_RESPONSE = json.dumps({"code": 0, "description": "Success", "response": None})


def _match(table: dict[str, Any], request: str) -> Any:
    """Return the entry whose key is the longest prefix of request."""
    best: str | None = None
    for prefix in table:
        if request.startswith(prefix) and (best is None or len(prefix) > len(best)):
            best = prefix
    return table[best] if best is not None else None


class MockClientTransport(BaseClientTransport):
    """Mock transport for testing.

    Records requests and answers with canned responses. Every table is keyed
    by request prefix; the longest matching prefix wins.
    No actual I/O - everything is in-memory.

    Usage:
        transport = MockClientTransport()
        transport.set_code("create /pipelines", 3)

        client = GstClient(transport=transport)
        assert client.pipeline_create("p0", "fakesrc ! fakesink") == 3
        assert transport.recorded_requests == ["create /pipelines p0 fakesrc ! fakesink"]
    """

    def __init__(self) -> None:
        super().__init__(TransportConfig(address="mock", port=0))
        self.default_response = DEFAULT_RESPONSE
        self._responses: dict[str, str] = {}
        self._errors: dict[str, TransportError] = {}
        self._delays: dict[str, float] = {}
        self._gates: dict[str, threading.Event] = {}
        self._recorded_requests: list[str] = []
        self._recorded = threading.Condition()

    @property
    def recorded_requests(self) -> list[str]:
        """Get all requests sent through this transport."""
        with self._recorded:
            return self._recorded_requests.copy()

    def set_response(self, prefix: str, response: str | dict[str, Any]) -> None:
        """Set the raw response for requests starting with prefix."""
        if isinstance(response, dict):
            response = json.dumps(response)
        self._responses[prefix] = response

    def set_code(self, prefix: str, code: int) -> None:
        """Answer requests starting with prefix with the given code."""
        self.set_response(prefix, {"code": code, "description": "mock", "response": None})

    def set_error(self, prefix: str, error: TransportError) -> None:
        """Raise error for requests starting with prefix."""
        self._errors[prefix] = error

    def set_delay(self, prefix: str, seconds: float) -> None:
        """Sleep before answering requests starting with prefix."""
        self._delays[prefix] = seconds

    def set_gate(self, prefix: str, gate: threading.Event) -> None:
        """Block requests starting with prefix until gate is set."""
        self._gates[prefix] = gate

    def wait_for_request(self, prefix: str, timeout: float = 5.0) -> bool:
        """Block until a request starting with prefix has been sent."""
        with self._recorded:
            return self._recorded.wait_for(
                lambda: any(r.startswith(prefix) for r in self._recorded_requests),
                timeout=timeout,
            )

    def clear(self) -> None:
        """Clear recorded requests and canned behaviour."""
        with self._recorded:
            self._recorded_requests.clear()
        self._responses.clear()
        self._errors.clear()
        self._delays.clear()
        self._gates.clear()

    def _do_connect(self) -> None:
        """No-op for mock."""
        pass

    def _do_close(self) -> None:
        """No-op for mock."""
        pass

    def _do_send(self, request: str) -> str:
        """Record request and return canned response."""
        with self._recorded:
            self._recorded_requests.append(request)
            self._recorded.notify_all()

        gate = _match(self._gates, request)
        if gate is not None:
            gate.wait()

        delay = _match(self._delays, request)
        if delay:
            time.sleep(delay)

        error = _match(self._errors, request)
        if error is not None:
            raise error

        response = _match(self._responses, request)
        return response if response is not None else self.default_response
