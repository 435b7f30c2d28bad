"""HTTP transport for gstd's HTTP interface.

Maps each command onto a REST call:
- create <path> <name> [description] -> POST <path>?name=...&description=...
- read <path>                        -> GET <path>
- update <path> <value>              -> PUT <path>?name=<value>
- delete <path> <name>               -> DELETE <path>?name=<name>

The daemon answers with the same JSON document as over TCP, including on
4xx responses, so the body is returned regardless of the HTTP status.
"""

from __future__ import annotations

import logging

import httpx

from ..exceptions import SendError, SocketError, TransportTimeoutError, UnreachableError
from ..protocol.commands import Command, Verb
from .base import BaseClientTransport, TransportConfig

logger = logging.getLogger(__name__)

_METHODS: dict[Verb, str] = {
    Verb.CREATE: "POST",
    Verb.READ: "GET",
    Verb.UPDATE: "PUT",
    Verb.DELETE: "DELETE",
}


def command_to_request(request: str) -> tuple[str, str, dict[str, str]]:
    """Translate a command string into (method, path, query params).

    Raises:
        ValueError: If the command cannot be parsed
    """
    command = Command.parse(request)
    params: dict[str, str] = {}
    text = command.args[0] if command.args else ""

    if command.verb == Verb.CREATE and text:
        name, _, description = text.partition(" ")
        params["name"] = name
        if description:
            params["description"] = description
    elif text:
        params["name"] = text

    return _METHODS[command.verb], command.path, params


class HTTPClientTransport(BaseClientTransport):
    """Transport over gstd's HTTP interface.

    ``keep_open`` has no effect: connection reuse is left to the
    ``httpx.Client`` pool, which is also what makes concurrent sends safe.
    """

    def __init__(
        self,
        config: TransportConfig | None = None,
        http_client: httpx.Client | None = None,
    ):
        super().__init__(config or TransportConfig())
        self._http_client = http_client
        self._owns_client = http_client is None

    @property
    def base_url(self) -> str:
        return f"http://{self.config.address}:{self.config.port}"

    def _do_connect(self) -> None:
        if self._http_client is None:
            self._http_client = httpx.Client(
                base_url=self.base_url,
                timeout=httpx.Timeout(self.config.socket_timeout),
            )
            self._owns_client = True

    def _do_close(self) -> None:
        if self._http_client and self._owns_client:
            self._http_client.close()
        self._http_client = None

    def _do_send(self, request: str) -> str:
        if not self._http_client:
            raise SocketError("HTTP client not connected")

        try:
            request.encode("utf-8")
        except UnicodeEncodeError as e:
            raise SendError(f"Request is not valid UTF-8: {e}") from e

        try:
            method, path, params = command_to_request(request)
        except ValueError as e:
            raise SocketError(f"Cannot map command to HTTP: {e}") from e

        try:
            response = self._http_client.request(method, path, params=params or None)
        except httpx.ConnectError as e:
            raise UnreachableError(f"Server not reachable at {self.base_url}: {e}") from e
        except httpx.TimeoutException as e:
            raise TransportTimeoutError(f"Timeout waiting for {method} {path}") from e
        except httpx.HTTPError as e:
            raise SocketError(f"HTTP error: {e}") from e

        if response.is_error:
            logger.debug(f"{method} {path} returned HTTP {response.status_code}")
        return response.text
