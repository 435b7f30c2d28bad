"""Resource paths understood by the daemon."""

from __future__ import annotations

from enum import Enum

ROOT = "/"
PIPELINES = "/pipelines"

EOS_EVENT = "eos"


class PipelineState(str, Enum):
    """Pipeline states a client may request."""

    PLAYING = "playing"
    PAUSED = "paused"
    NULL = "null"


def pipeline_state(pipeline_name: str) -> str:
    return f"{PIPELINES}/{pipeline_name}/state"


def pipeline_event(pipeline_name: str) -> str:
    return f"{PIPELINES}/{pipeline_name}/event"


def element_property(pipeline_name: str, element: str, parameter: str) -> str:
    return f"{PIPELINES}/{pipeline_name}/elements/{element}/properties/{parameter}"


def bus_types(pipeline_name: str) -> str:
    """Bus message filter of a pipeline."""
    return f"{PIPELINES}/{pipeline_name}/bus/types"


def bus_timeout(pipeline_name: str) -> str:
    """Bus read timeout of a pipeline."""
    return f"{PIPELINES}/{pipeline_name}/bus/timeout"


def bus_message(pipeline_name: str) -> str:
    """Reading this blocks until a filtered message arrives or the timeout expires."""
    return f"{PIPELINES}/{pipeline_name}/bus/message"
