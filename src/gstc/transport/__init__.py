"""Client transports.

Provides multiple transport modes:
- tcp: gstd's native TCP protocol
- http: gstd's HTTP interface
- mock: for testing without real I/O
"""

from __future__ import annotations

from ..config import PROTOCOL_HTTP, PROTOCOL_TCP, ClientConfig
from .base import BaseClientTransport, ClientTransport, TransportConfig, TransportState
from .http import HTTPClientTransport
from .mock import MockClientTransport
from .tcp import TcpClientTransport


def create_tcp_transport(
    address: str = "localhost",
    port: int = 5000,
    timeout: float = 0.0,
    keep_open: bool = False,
) -> TcpClientTransport:
    """Create a TCP transport.

    Args:
        address: Daemon host
        port: Daemon port
        timeout: Connect/receive timeout in seconds, zero waits forever
        keep_open: Reuse one connection for all requests

    Returns:
        TcpClientTransport (not yet connected)
    """
    config = TransportConfig(address=address, port=port, timeout=timeout, keep_open=keep_open)
    return TcpClientTransport(config)


def create_http_transport(
    address: str = "localhost",
    port: int = 5000,
    timeout: float = 0.0,
) -> HTTPClientTransport:
    """Create an HTTP transport.

    Args:
        address: Daemon host
        port: Daemon HTTP port
        timeout: Request timeout in seconds, zero waits forever

    Returns:
        HTTPClientTransport (not yet connected)
    """
    config = TransportConfig(address=address, port=port, timeout=timeout)
    return HTTPClientTransport(config)


def create_mock_transport() -> MockClientTransport:
    """Create a mock transport for testing."""
    return MockClientTransport()


def create_transport(config: ClientConfig) -> BaseClientTransport:
    """Create the transport selected by config.protocol."""
    if config.protocol == PROTOCOL_HTTP:
        return create_http_transport(config.address, config.port, config.timeout)
    if config.protocol == PROTOCOL_TCP:
        return create_tcp_transport(
            config.address, config.port, config.timeout, config.keep_open
        )
    raise ValueError(f"Unknown protocol: {config.protocol}")


__all__ = [
    "ClientTransport",
    "BaseClientTransport",
    "TransportConfig",
    "TransportState",
    "TcpClientTransport",
    "HTTPClientTransport",
    "MockClientTransport",
    "create_tcp_transport",
    "create_http_transport",
    "create_mock_transport",
    "create_transport",
]
