"""gstc - Python client for the GStreamer Daemon.

Controls pipelines on a running gstd over its CRUD-style command protocol
and waits for bus messages, either blocking or with a callback on a worker
thread.

Usage:
    from gstc import GstClient, GstcStatus

    with GstClient("localhost", 5000) as client:
        if client.pipeline_create("p0", "videotestsrc ! fakesink") == GstcStatus.OK:
            client.pipeline_play("p0")
"""

from .client import GstClient
from .config import ClientConfig
from .exceptions import (
    DecodeError,
    FieldNotFoundError,
    FieldTypeError,
    GstcError,
    MalformedResponseError,
    NullArgumentError,
    RecvError,
    SendError,
    SocketError,
    ThreadError,
    TransportError,
    TransportTimeoutError,
    UnreachableError,
)
from .protocol import Command, PipelineState, Response, Verb
from .status import GstcStatus, is_daemon_error, is_ok, status_name
from .transport import (
    ClientTransport,
    HTTPClientTransport,
    MockClientTransport,
    TcpClientTransport,
    TransportConfig,
    create_http_transport,
    create_mock_transport,
    create_tcp_transport,
)

__version__ = "0.1.0"

__all__ = [
    # Client
    "GstClient",
    "ClientConfig",
    # Status
    "GstcStatus",
    "is_ok",
    "is_daemon_error",
    "status_name",
    # Protocol
    "Command",
    "Verb",
    "PipelineState",
    "Response",
    # Transports
    "ClientTransport",
    "TransportConfig",
    "TcpClientTransport",
    "HTTPClientTransport",
    "MockClientTransport",
    "create_tcp_transport",
    "create_http_transport",
    "create_mock_transport",
    # Exceptions
    "GstcError",
    "NullArgumentError",
    "ThreadError",
    "TransportError",
    "UnreachableError",
    "TransportTimeoutError",
    "SendError",
    "RecvError",
    "SocketError",
    "DecodeError",
    "MalformedResponseError",
    "FieldNotFoundError",
    "FieldTypeError",
]
