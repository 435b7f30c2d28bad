"""Unit tests for response decoding."""

import json

import pytest

from gstc.exceptions import FieldNotFoundError, FieldTypeError, MalformedResponseError
from gstc.protocol.responses import Response, get_code, get_int_field
from gstc.status import GstcStatus


class TestGetIntField:
    """Tests for get_int_field."""

    def test_reads_code(self):
        """Integer field is returned."""
        response = json.dumps({"code": 0, "description": "Success", "response": None})

        assert get_int_field(response, "code") == 0

    def test_reads_daemon_error_code(self):
        """Non-zero codes are returned untouched."""
        response = json.dumps({"code": 3, "description": "Existing resource"})

        assert get_code(response) == 3

    def test_missing_field(self):
        """Absent field raises FieldNotFoundError."""
        with pytest.raises(FieldNotFoundError) as exc_info:
            get_code(json.dumps({"description": "Success"}))

        assert exc_info.value.status == GstcStatus.NOT_FOUND
        assert exc_info.value.field_name == "code"

    @pytest.mark.parametrize("value", ["0", 1.5, None, True, [0]])
    def test_non_integer_field(self, value):
        """Field of the wrong type raises FieldTypeError."""
        with pytest.raises(FieldTypeError) as exc_info:
            get_code(json.dumps({"code": value}))

        assert exc_info.value.status == GstcStatus.TYPE_ERROR

    @pytest.mark.parametrize("response", ["", "not json", "[1, 2]", "42", '{"code": 0'])
    def test_malformed_response(self, response):
        """Anything but a JSON object raises MalformedResponseError."""
        with pytest.raises(MalformedResponseError) as exc_info:
            get_code(response)

        assert exc_info.value.status == GstcStatus.MALFORMED

    def test_oversized_integer(self):
        """An integer literal too long to convert is malformed."""
        with pytest.raises(MalformedResponseError) as exc_info:
            get_code('{"code": 1' + "0" * 5000 + "}")

        assert exc_info.value.status == GstcStatus.MALFORMED

    def test_deeply_nested(self):
        """Nesting beyond the parser's recursion limit is malformed."""
        with pytest.raises(MalformedResponseError):
            get_code("[" * 200000)


class TestResponseModel:
    """Tests for the Response model."""

    def test_from_wire(self):
        """Full response parses into the model."""
        response = Response.from_wire(
            json.dumps(
                {
                    "code": 0,
                    "description": "Success",
                    "response": {"name": "p0", "value": "playing"},
                }
            )
        )

        assert response.ok
        assert response.description == "Success"
        assert response.response == {"name": "p0", "value": "playing"}

    def test_from_wire_keeps_extra_fields(self):
        """Unknown fields are preserved."""
        response = Response.from_wire(json.dumps({"code": 2, "extra": "x"}))

        assert not response.ok
        assert response.model_extra == {"extra": "x"}

    def test_from_wire_without_code(self):
        """A response with no code is malformed."""
        with pytest.raises(MalformedResponseError):
            Response.from_wire(json.dumps({"description": "Success"}))
