"""TCP transport for gstd's native protocol.

Wire format:
- Request: the UTF-8 command string
- Response: a UTF-8 JSON document terminated by a NUL byte (or by the
  daemon closing the connection)
"""

from __future__ import annotations

import logging
import socket
import threading

from ..exceptions import (
    RecvError,
    SendError,
    TransportError,
    TransportTimeoutError,
    UnreachableError,
)
from .base import BaseClientTransport, TransportConfig

logger = logging.getLogger(__name__)

TERMINATOR = b"\x00"
RECV_CHUNK = 4096


class TcpClientTransport(BaseClientTransport):
    """Transport over a TCP socket.

    With ``keep_open`` a single socket is reused and round trips are
    serialized on it, so a pending bus read holds the connection until the
    daemon answers. Without it every request opens its own socket, which
    lets bus waits and other requests run side by side.
    """

    def __init__(self, config: TransportConfig | None = None):
        super().__init__(config or TransportConfig())
        self._sock: socket.socket | None = None
        self._io_lock = threading.Lock()

    def _do_connect(self) -> None:
        """Open the shared socket, or do nothing in per-request mode."""
        if self.config.keep_open:
            self._sock = self._open_socket()

    def _do_close(self) -> None:
        # Not under _io_lock: a pending bus read may hold it indefinitely.
        # Shutting the socket down wakes that read with a RecvError.
        sock, self._sock = self._sock, None
        if sock is not None:
            try:
                sock.shutdown(socket.SHUT_RDWR)
            except OSError:
                pass
            sock.close()

    def _do_send(self, request: str) -> str:
        try:
            payload = request.encode("utf-8")
        except UnicodeEncodeError as e:
            raise SendError(f"Request is not valid UTF-8: {e}") from e

        if not self.config.keep_open:
            sock = self._open_socket()
            try:
                return self._round_trip(sock, payload)
            finally:
                sock.close()

        with self._io_lock:
            if self._sock is None:
                self._sock = self._open_socket()
            try:
                return self._round_trip(self._sock, payload)
            except TransportError:
                # The stream may hold a partial response; start over next time
                self._drop_socket()
                raise

    def _open_socket(self) -> socket.socket:
        address = (self.config.address, self.config.port)
        try:
            sock = socket.create_connection(address, timeout=self.config.socket_timeout)
        except TimeoutError as e:
            raise TransportTimeoutError(f"Timeout connecting to {address}") from e
        except OSError as e:
            raise UnreachableError(f"Cannot connect to daemon at {address}: {e}") from e
        sock.settimeout(self.config.socket_timeout)
        return sock

    def _drop_socket(self) -> None:
        if self._sock is not None:
            try:
                self._sock.close()
            except OSError as e:
                logger.debug(f"Error closing socket: {e}")
            self._sock = None

    def _round_trip(self, sock: socket.socket, payload: bytes) -> str:
        try:
            sock.sendall(payload)
        except TimeoutError as e:
            raise TransportTimeoutError("Timeout sending request") from e
        except OSError as e:
            raise SendError(f"Failed to send request: {e}") from e

        chunks: list[bytes] = []
        while True:
            try:
                chunk = sock.recv(RECV_CHUNK)
            except TimeoutError as e:
                raise TransportTimeoutError(
                    f"Timeout waiting for daemon response ({self.config.timeout}s)"
                ) from e
            except OSError as e:
                raise RecvError(f"Failed to read response: {e}") from e

            if not chunk:
                if not chunks:
                    raise RecvError("Connection closed by daemon")
                break

            if TERMINATOR in chunk:
                chunks.append(chunk[: chunk.index(TERMINATOR)])
                break
            chunks.append(chunk)

        return b"".join(chunks).decode("utf-8", errors="replace")
