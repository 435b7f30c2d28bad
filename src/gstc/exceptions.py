"""
gstc exceptions

Raised by the command builder, transports and response decoder. The client
catches them and turns them into status codes, so callers of ``GstClient``
operations only ever see ints.
"""

from __future__ import annotations

from .status import GstcStatus


class GstcError(Exception):
    """Base exception for all gstc errors."""

    status: int = GstcStatus.SOCKET_ERROR


class NullArgumentError(GstcError, ValueError):
    """Raised when a required argument is missing or empty."""

    status = GstcStatus.NULL_ARGUMENT

    def __init__(self, argument: str):
        self.argument = argument
        super().__init__(f"Missing required argument: {argument}")


class ThreadError(GstcError):
    """Raised when a bus worker thread cannot be started."""

    status = GstcStatus.THREAD_ERROR


# Transport errors


class TransportError(GstcError):
    """Raised when a round trip to the daemon fails."""

    status = GstcStatus.SOCKET_ERROR


class UnreachableError(TransportError):
    """Raised when the daemon cannot be connected to."""

    status = GstcStatus.UNREACHABLE


class TransportTimeoutError(TransportError):
    """Raised when connecting or waiting for a response times out."""

    status = GstcStatus.TIMEOUT


class SendError(TransportError):
    """Raised when the request cannot be written."""

    status = GstcStatus.SEND_ERROR


class RecvError(TransportError):
    """Raised when the response cannot be read."""

    status = GstcStatus.RECV_ERROR


class SocketError(TransportError):
    """Raised on any other transport level failure."""

    status = GstcStatus.SOCKET_ERROR


# Decode errors


class DecodeError(GstcError):
    """Raised when a response cannot be decoded."""

    status = GstcStatus.MALFORMED


class MalformedResponseError(DecodeError):
    """Raised when a response is not a JSON object."""

    status = GstcStatus.MALFORMED


class FieldNotFoundError(DecodeError):
    """Raised when a response lacks the requested field."""

    status = GstcStatus.NOT_FOUND

    def __init__(self, field_name: str):
        self.field_name = field_name
        super().__init__(f"Field not found in response: {field_name}")


class FieldTypeError(DecodeError):
    """Raised when a response field has the wrong type."""

    status = GstcStatus.TYPE_ERROR

    def __init__(self, field_name: str, value: object):
        self.field_name = field_name
        self.value = value
        super().__init__(f"Field {field_name} is not an integer: {value!r}")
