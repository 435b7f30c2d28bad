"""Response decoding.

The daemon answers every command with a JSON document such as:

    {
        "code": 0,
        "description": "Success",
        "response": null
    }

The client only relies on the integer ``code`` field.
"""

from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError

from ..exceptions import FieldNotFoundError, FieldTypeError, MalformedResponseError

CODE_FIELD = "code"


def _load_object(response: str) -> dict[str, Any]:
    # Oversized integer literals raise a plain ValueError, deep nesting a RecursionError
    try:
        data = json.loads(response)
    except (ValueError, RecursionError, TypeError) as e:
        raise MalformedResponseError(f"Invalid response from daemon: {e}") from e
    if not isinstance(data, dict):
        raise MalformedResponseError(f"Response is not a JSON object: {response[:50]!r}")
    return data


def get_int_field(response: str, field_name: str) -> int:
    """Extract an integer field from a response.

    Args:
        response: Raw response string from the daemon
        field_name: Top level field to read

    Returns:
        The field value

    Raises:
        MalformedResponseError: If the response is not a JSON object
        FieldNotFoundError: If the field is absent
        FieldTypeError: If the field is not an integer
    """
    data = _load_object(response)
    if field_name not in data:
        raise FieldNotFoundError(field_name)
    value = data[field_name]
    # bool is an int subclass but never a valid code
    if isinstance(value, bool) or not isinstance(value, int):
        raise FieldTypeError(field_name, value)
    return value


def get_code(response: str) -> int:
    """Extract the status code from a response."""
    return get_int_field(response, CODE_FIELD)


class Response(BaseModel):
    """A full daemon response."""

    model_config = ConfigDict(extra="allow")

    code: int
    description: str | None = None
    response: Any = None

    @property
    def ok(self) -> bool:
        return self.code == 0

    @classmethod
    def from_wire(cls, response: str) -> Response:
        """Parse a raw response string.

        Raises:
            MalformedResponseError: If the response does not match the schema
        """
        data = _load_object(response)
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise MalformedResponseError(f"Invalid response from daemon: {e}") from e
