"""GstClient - controls a GStreamer Daemon over its command protocol.

Every operation is synchronous, returns an ``int`` status and never raises:
``0`` on success, a negative ``GstcStatus`` for local failures, or the
daemon's own non-zero code when it rejected the command.

Usage:
    with GstClient("localhost", 5000) as client:
        client.pipeline_create("p0", "videotestsrc ! autovideosink")
        client.pipeline_play("p0")
        client.pipeline_bus_wait("p0", "eos", -1)
        client.pipeline_delete("p0")
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from .bus import BusWaitCallback, BusWaitTask, SyncBusData, spawn_bus_thread, sync_bus_callback
from .config import PROTOCOL_TCP, ClientConfig
from .exceptions import DecodeError, NullArgumentError, ThreadError, TransportError
from .protocol import resources
from .protocol.commands import Command
from .protocol.resources import PipelineState
from .protocol.responses import Response, get_code
from .status import GstcStatus, is_ok, status_name
from .transport import ClientTransport, create_transport

logger = logging.getLogger(__name__)


def _present(*values: str | None) -> bool:
    """Check that every required string argument was given."""
    return all(value is not None and value != "" for value in values)


class GstClient:
    """Client handle owning exactly one transport.

    Args:
        address: Daemon host
        port: Daemon port
        wait_time: Connect/receive timeout in seconds, zero waits forever
        keep_connection_open: Hold one connection across requests
        transport: Use this transport instead of building one
        protocol: "tcp" or "http" when building the transport

    Raises:
        NullArgumentError: If no address is given
        TransportError: If the transport fails to connect
    """

    def __init__(
        self,
        address: str = "localhost",
        port: int = 5000,
        wait_time: float = 0.0,
        keep_connection_open: bool = False,
        *,
        transport: ClientTransport | None = None,
        protocol: str = PROTOCOL_TCP,
    ):
        if transport is None:
            if not address:
                raise NullArgumentError("address")
            config = ClientConfig(
                address=address,
                port=port,
                timeout=wait_time,
                keep_open=keep_connection_open,
                protocol=protocol,
            )
            transport = create_transport(config)

        transport.connect()
        self._transport: ClientTransport | None = transport
        self._last_response: str | None = None

    @classmethod
    def from_config(cls, config: ClientConfig) -> GstClient:
        """Create a client from a ClientConfig."""
        return cls(
            config.address,
            config.port,
            config.timeout,
            config.keep_open,
            protocol=config.protocol,
        )

    @property
    def closed(self) -> bool:
        return self._transport is None

    @property
    def last_response(self) -> Response | None:
        """The most recent daemon response, or None if there was none.

        Shared by all threads using the client, including bus workers, so it
        is only meaningful for single-threaded use such as the CLI. A
        response that does not parse as a daemon document also gives None.
        """
        raw = self._last_response
        if raw is None:
            return None
        try:
            return Response.from_wire(raw)
        except DecodeError:
            return None

    def close(self) -> None:
        """Release the transport. The client is unusable afterwards."""
        transport, self._transport = self._transport, None
        if transport is not None:
            transport.close()

    def __enter__(self) -> GstClient:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    # =========================================================================
    # Dispatch
    # =========================================================================

    def _send(self, request: str) -> int:
        """Send one request and return the daemon's code."""
        transport = self._transport
        if transport is None or not request:
            return GstcStatus.NULL_ARGUMENT

        self._last_response = None
        try:
            response = transport.send(request)
        except TransportError as e:
            logger.warning(f"Request '{request}' failed: {e}")
            return e.status
        except MemoryError:
            return GstcStatus.OOM

        self._last_response = response
        try:
            code = get_code(response)
        except DecodeError as e:
            logger.warning(f"Bad response to '{request}': {e}")
            return e.status

        logger.debug(f"'{request}' -> {code}")
        return code

    def _dispatch(self, factory: Callable[..., Command], *args: str) -> int:
        try:
            command = factory(*args)
        except NullArgumentError as e:
            return e.status
        return self._send(command.to_wire())

    def create(self, where: str, what: str) -> int:
        """Send ``create <where> <what>``."""
        return self._dispatch(Command.create, where, what)

    def read(self, what: str) -> int:
        """Send ``read <what>``."""
        return self._dispatch(Command.read, what)

    def update(self, what: str, how: str) -> int:
        """Send ``update <what> <how>``."""
        return self._dispatch(Command.update, what, how)

    def delete(self, where: str, what: str) -> int:
        """Send ``delete <where> <what>``."""
        return self._dispatch(Command.delete, where, what)

    # =========================================================================
    # Pipelines
    # =========================================================================

    def ping(self) -> int:
        """Check that the daemon is reachable."""
        return self.read(resources.ROOT)

    def pipeline_create(self, pipeline_name: str, pipeline_desc: str) -> int:
        """Create a pipeline from a gst-launch style description."""
        if not _present(pipeline_name, pipeline_desc):
            return GstcStatus.NULL_ARGUMENT
        return self.create(resources.PIPELINES, f"{pipeline_name} {pipeline_desc}")

    def pipeline_delete(self, pipeline_name: str) -> int:
        if not _present(pipeline_name):
            return GstcStatus.NULL_ARGUMENT
        return self.delete(resources.PIPELINES, pipeline_name)

    def pipeline_set_state(self, pipeline_name: str, state: PipelineState | str) -> int:
        """Request a state change. The daemon decides whether it is valid."""
        if not _present(pipeline_name) or state is None:
            return GstcStatus.NULL_ARGUMENT
        try:
            state = PipelineState(state)
        except ValueError:
            return GstcStatus.TYPE_ERROR
        return self.update(resources.pipeline_state(pipeline_name), state.value)

    def pipeline_play(self, pipeline_name: str) -> int:
        return self.pipeline_set_state(pipeline_name, PipelineState.PLAYING)

    def pipeline_pause(self, pipeline_name: str) -> int:
        return self.pipeline_set_state(pipeline_name, PipelineState.PAUSED)

    def pipeline_stop(self, pipeline_name: str) -> int:
        return self.pipeline_set_state(pipeline_name, PipelineState.NULL)

    def pipeline_inject_eos(self, pipeline_name: str) -> int:
        """Send an end-of-stream event into the pipeline."""
        if not _present(pipeline_name):
            return GstcStatus.NULL_ARGUMENT
        return self.create(resources.pipeline_event(pipeline_name), resources.EOS_EVENT)

    def element_set(
        self,
        pipeline_name: str,
        element: str,
        parameter: str,
        value: str,
        *args: Any,
    ) -> int:
        """Set an element property.

        ``value`` is sent as-is; when ``args`` are given it is used as a
        %-format string, e.g. ``element_set("p0", "src", "pattern", "%d", 18)``.

        Returns OK once the update was sent, even if the daemon rejected it.
        """
        if not _present(pipeline_name, element, parameter) or value is None:
            return GstcStatus.NULL_ARGUMENT
        try:
            how = value % args if args else str(value)
        except (TypeError, ValueError):
            return GstcStatus.TYPE_ERROR
        if not how:
            return GstcStatus.NULL_ARGUMENT
        # The update result is discarded below, so a closed client must fail here
        if self.closed:
            return GstcStatus.NULL_ARGUMENT

        ret = self.update(resources.element_property(pipeline_name, element, parameter), how)
        if not is_ok(ret):
            logger.debug(f"Setting {element}.{parameter} on {pipeline_name}: {status_name(ret)}")
        return GstcStatus.OK

    # =========================================================================
    # Bus
    # =========================================================================

    def pipeline_bus_wait_async(
        self,
        pipeline_name: str,
        message_name: str,
        timeout: int,
        callback: BusWaitCallback,
        user_data: Any = None,
    ) -> int:
        """Wait for a bus message in the background.

        Configures the bus filter and timeout, then starts a thread that
        blocks reading the bus and calls
        ``callback(client, pipeline_name, message_name, timeout, user_data)``
        on that thread when the read returns. This call returns as soon as
        the thread has been started.

        Args:
            pipeline_name: Pipeline whose bus to watch
            message_name: Message type filter, e.g. "eos" or "error"
            timeout: Passed to the daemon verbatim; negative waits forever,
                zero polls
            callback: Invoked exactly once, on the worker thread
            user_data: Handed back to callback untouched

        Returns:
            Status of the setup only. The results of configuring the filter
            and timeout, and of the bus read itself, are not reported.
        """
        if not _present(pipeline_name, message_name) or timeout is None:
            return GstcStatus.NULL_ARGUMENT
        if not callable(callback) or self.closed:
            return GstcStatus.NULL_ARGUMENT
        if isinstance(timeout, bool) or not isinstance(timeout, int):
            return GstcStatus.TYPE_ERROR

        # Two independent updates; a failure of the second leaves the first applied
        ret = self.update(resources.bus_types(pipeline_name), message_name)
        if not is_ok(ret):
            logger.debug(f"Setting bus filter on {pipeline_name}: {status_name(ret)}")
        ret = self.update(resources.bus_timeout(pipeline_name), str(timeout))
        if not is_ok(ret):
            logger.debug(f"Setting bus timeout on {pipeline_name}: {status_name(ret)}")

        task = BusWaitTask(
            client=self,
            pipeline_name=pipeline_name,
            message_name=message_name,
            timeout=timeout,
            callback=callback,
            user_data=user_data,
        )
        try:
            spawn_bus_thread(task)
        except ThreadError as e:
            logger.error(str(e))
            return e.status

        return GstcStatus.OK

    def pipeline_bus_wait(self, pipeline_name: str, message_name: str, timeout: int) -> int:
        """Block until a bus message arrives or the daemon's bus timeout expires.

        Returns:
            Status of the setup, as for pipeline_bus_wait_async
        """
        data = SyncBusData()
        ret = self.pipeline_bus_wait_async(
            pipeline_name, message_name, timeout, sync_bus_callback, data
        )
        if not is_ok(ret):
            # No worker was started, nothing will wake us
            return ret

        data.wait()
        return ret
