"""Command definitions for the gstd wire protocol.

Commands are verb-first, space-delimited strings:

    create <path> <args...>
    read <path>
    update <path> <value>
    delete <path> <name>

Tokens are joined verbatim. There is no quoting, so a name or payload that
contains protocol-significant whitespace cannot be expressed.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field

from ..exceptions import NullArgumentError


class Verb(str, Enum):
    """All supported command verbs."""

    CREATE = "create"
    READ = "read"
    UPDATE = "update"
    DELETE = "delete"


def require(value: str | None, argument: str) -> str:
    """Return value, or raise NullArgumentError if it is missing or empty."""
    if value is None or value == "":
        raise NullArgumentError(argument)
    return value


class Command(BaseModel):
    """A command from client to daemon.

    Example:
        >>> Command.create("/pipelines", "p0 fakesrc ! fakesink").to_wire()
        'create /pipelines p0 fakesrc ! fakesink'
    """

    verb: Verb
    path: str
    args: list[str] = Field(default_factory=list)

    def to_wire(self) -> str:
        """Render the command as the string sent to the daemon."""
        return " ".join([self.verb.value, self.path, *self.args])

    def __str__(self) -> str:
        return self.to_wire()

    @classmethod
    def create(cls, where: str, what: str) -> Command:
        """Create a ``create`` command."""
        return cls(
            verb=Verb.CREATE,
            path=require(where, "where"),
            args=[require(what, "what")],
        )

    @classmethod
    def read(cls, what: str) -> Command:
        """Create a ``read`` command."""
        return cls(verb=Verb.READ, path=require(what, "what"))

    @classmethod
    def update(cls, what: str, how: str) -> Command:
        """Create an ``update`` command."""
        return cls(
            verb=Verb.UPDATE,
            path=require(what, "what"),
            args=[require(how, "how")],
        )

    @classmethod
    def delete(cls, where: str, what: str) -> Command:
        """Create a ``delete`` command."""
        return cls(
            verb=Verb.DELETE,
            path=require(where, "where"),
            args=[require(what, "what")],
        )

    @classmethod
    def parse(cls, request: str) -> Command:
        """Split a wire string back into verb, path and remaining text.

        Used by transports that do not speak the text protocol natively.
        Everything after the path is kept as a single argument.

        Raises:
            NullArgumentError: If the request is empty
            ValueError: If the verb is unknown or the path is missing
        """
        parts = require(request, "request").split(" ", 2)
        if len(parts) < 2 or not parts[1]:
            raise ValueError(f"Malformed command: {request!r}")
        verb = Verb(parts[0])
        args = [parts[2]] if len(parts) == 3 and parts[2] else []
        return cls(verb=verb, path=parts[1], args=args)
