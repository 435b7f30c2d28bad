"""gstd text protocol.

Builds command strings sent to the daemon and decodes the JSON responses
it sends back. No I/O happens here.
"""

from .commands import Command, Verb
from .resources import PipelineState
from .responses import Response, get_code, get_int_field

__all__ = [
    "Command",
    "Verb",
    "PipelineState",
    "Response",
    "get_code",
    "get_int_field",
]
