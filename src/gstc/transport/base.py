"""Client-side transport abstraction for GstClient.

Enables the client to talk to the daemon over TCP, HTTP, or an in-memory
mock without changing client code.

Architecture:
- ClientTransport is the PROTOCOL (interface) for all transports
- Implementations handle the wire format and connection management
- GstClient accepts any ClientTransport via constructor injection

A transport is a blocking request/response pipe: one request string in,
one response string out. GstClient does not serialize access, so every
implementation must be safe to call from several threads at once.
"""

from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Protocol, runtime_checkable

from ..config import DEFAULT_ADDRESS, DEFAULT_PORT, DEFAULT_TIMEOUT
from ..exceptions import SocketError, TransportError, UnreachableError

logger = logging.getLogger(__name__)


class TransportState(str, Enum):
    """Connection state machine."""

    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    CONNECTED = "connected"
    CLOSED = "closed"


@dataclass
class TransportConfig:
    """Configuration for client transports."""

    address: str = DEFAULT_ADDRESS
    port: int = DEFAULT_PORT

    # Seconds; zero or negative waits forever. Bus reads may legitimately
    # block for a long time, so a finite value also bounds them.
    timeout: float = DEFAULT_TIMEOUT

    # Hold one connection across requests instead of one per request
    keep_open: bool = False

    @property
    def socket_timeout(self) -> float | None:
        return self.timeout if self.timeout > 0 else None


@runtime_checkable
class ClientTransport(Protocol):
    """Protocol for client transports.

    All transports must implement:
    - connect/close: Lifecycle management
    - send: Send a request and return the daemon's response

    The transport handles:
    - Wire format and framing
    - Connection management
    - Thread safety of concurrent sends
    """

    @property
    def state(self) -> TransportState:
        """Current connection state."""
        ...

    @property
    def is_connected(self) -> bool:
        """Check if transport is connected."""
        ...

    def connect(self) -> None:
        """Establish connection to the daemon.

        Raises:
            TransportError: If connection fails
        """
        ...

    def close(self) -> None:
        """Close the connection."""
        ...

    def send(self, request: str) -> str:
        """Send a request and block until the response arrives.

        Args:
            request: Command string

        Returns:
            Raw response string

        Raises:
            TransportError: If the round trip fails
        """
        ...


class BaseClientTransport(ABC):
    """Base class for client transports with common functionality.

    Provides:
    - State management
    - Mapping of unexpected OS errors to TransportError
    - Context manager support
    """

    def __init__(self, config: TransportConfig):
        self.config = config
        self._state = TransportState.DISCONNECTED
        self._lock = threading.Lock()

    @property
    def state(self) -> TransportState:
        """Current connection state."""
        return self._state

    @property
    def is_connected(self) -> bool:
        """Check if transport is connected."""
        return self._state == TransportState.CONNECTED

    def connect(self) -> None:
        """Establish connection."""
        with self._lock:
            if self._state == TransportState.CONNECTED:
                return

            self._state = TransportState.CONNECTING
            try:
                self._do_connect()
            except TransportError:
                self._state = TransportState.DISCONNECTED
                raise
            except OSError as e:
                self._state = TransportState.DISCONNECTED
                raise UnreachableError(f"Failed to connect: {e}") from e

            self._state = TransportState.CONNECTED
            logger.info(
                f"{self.__class__.__name__} connected to {self.config.address}:{self.config.port}"
            )

    def close(self) -> None:
        """Close the connection."""
        with self._lock:
            if self._state in (TransportState.DISCONNECTED, TransportState.CLOSED):
                self._state = TransportState.CLOSED
                return

            self._do_close()
            self._state = TransportState.CLOSED
            logger.info(f"{self.__class__.__name__} closed")

    def send(self, request: str) -> str:
        """Send request and return the response."""
        if not self.is_connected:
            raise SocketError("Transport not connected")

        logger.debug(f"-> {request}")
        try:
            response = self._do_send(request)
        except TransportError:
            raise
        except OSError as e:
            raise SocketError(f"Transport error: {e}") from e
        logger.debug(f"<- {response[:200]}")
        return response

    # Abstract methods for subclasses
    @abstractmethod
    def _do_connect(self) -> None:
        """Implementation-specific connection logic."""
        ...

    @abstractmethod
    def _do_close(self) -> None:
        """Implementation-specific close logic."""
        ...

    @abstractmethod
    def _do_send(self, request: str) -> str:
        """Implementation-specific round trip."""
        ...

    def __enter__(self) -> BaseClientTransport:
        self.connect()
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()
