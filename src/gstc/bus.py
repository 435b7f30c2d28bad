"""Bus wait workers.

An asynchronous bus wait is handed to one dedicated thread. The thread
issues a blocking ``read`` on the pipeline's bus message resource and, once
the daemon answers (a filtered message arrived or the bus timeout expired),
invokes the caller's callback on that same thread.

Threads are never pooled or reused and there is no way to cancel a wait
once its thread is running.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from .exceptions import ThreadError
from .protocol import resources
from .status import GstcStatus, status_name

if TYPE_CHECKING:
    from .client import GstClient

logger = logging.getLogger(__name__)

# callback(client, pipeline_name, message_name, timeout, user_data)
BusWaitCallback = Callable[["GstClient", str, str, int, Any], Any]


@dataclass
class BusWaitTask:
    """Everything one worker needs for a single asynchronous wait."""

    client: GstClient
    pipeline_name: str
    message_name: str
    timeout: int
    callback: BusWaitCallback
    user_data: Any = None


@dataclass
class SyncBusData:
    """Coordination state for one synchronous wait."""

    cond: threading.Condition = field(default_factory=threading.Condition)
    waiting: bool = True

    def signal(self) -> None:
        with self.cond:
            self.waiting = False
            self.cond.notify()

    def wait(self) -> None:
        with self.cond:
            while self.waiting:
                self.cond.wait()


def bus_thread(task: BusWaitTask) -> None:
    """Worker body: block on the bus read, then deliver the callback."""
    # The read outcome is not reported to the callback, which runs regardless
    try:
        ret = task.client.read(resources.bus_message(task.pipeline_name))
    except Exception:
        logger.exception(f"Bus read on {task.pipeline_name} failed")
    else:
        logger.debug(
            f"Bus wait on {task.pipeline_name} for '{task.message_name}' finished: "
            f"{status_name(ret)}"
        )

    try:
        task.callback(
            task.client,
            task.pipeline_name,
            task.message_name,
            task.timeout,
            task.user_data,
        )
    except Exception:
        logger.exception(f"Bus wait callback for {task.pipeline_name} failed")


def spawn_bus_thread(task: BusWaitTask) -> threading.Thread:
    """Start a worker for task and return without waiting for it to run.

    Raises:
        ThreadError: If the thread cannot be started
    """
    thread = threading.Thread(
        target=bus_thread,
        args=(task,),
        name=f"gstc-bus-{task.pipeline_name}",
        daemon=True,
    )
    try:
        thread.start()
    except RuntimeError as e:
        raise ThreadError(f"Cannot start bus thread: {e}") from e
    return thread


def sync_bus_callback(
    client: GstClient,
    pipeline_name: str,
    message_name: str,
    timeout: int,
    user_data: SyncBusData,
) -> int:
    """Internal callback used by the synchronous wait to wake its caller."""
    user_data.signal()
    return GstcStatus.OK
