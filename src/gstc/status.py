"""Status codes returned by every client operation.

A status is a plain ``int``:
- ``0`` is success
- negative values are library-local failures that never reach the wire
- positive values are failures reported by the daemon, passed through verbatim
"""

from __future__ import annotations

from enum import IntEnum


class GstcStatus(IntEnum):
    """Library-local status codes."""

    OK = 0
    NULL_ARGUMENT = -1
    UNREACHABLE = -2
    TIMEOUT = -3
    OOM = -4
    TYPE_ERROR = -5
    MALFORMED = -6
    NOT_FOUND = -7
    SEND_ERROR = -8
    RECV_ERROR = -9
    SOCKET_ERROR = -10
    THREAD_ERROR = -11


def is_ok(status: int) -> bool:
    """Check if a status means success."""
    return status == GstcStatus.OK


def is_daemon_error(status: int) -> bool:
    """Check if a status was reported by the daemon rather than the library."""
    return status > 0


def status_name(status: int) -> str:
    """Human readable name for a status, used by the CLI and log messages."""
    try:
        return GstcStatus(status).name
    except ValueError:
        return f"DAEMON_ERROR({status})"
