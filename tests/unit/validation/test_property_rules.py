"""Unit tests for attachment property rules."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import pytest

from core.errors import StowageValidationError
from validation.property_rules import (
    ComputedMessage,
    PropertyRule,
    StaticMessage,
    expected_values_string,
    validate_properties,
)


@dataclass
class _Attachment:
    width: int | None = 100
    mime_type: str | None = "image/png"


@dataclass
class _Record:
    preview: Any = None
    other: Any = None


def test_expected_values_string_variants() -> None:
    """Allowed values should render as range, list or single value."""
    assert expected_values_string(range(2, 6)) == "between 2 and 5"
    assert expected_values_string(["png", "gif"]) == "one of 'png', 'gif'"
    assert expected_values_string(["png"]) == "'png'"


def test_validate_properties_reports_mismatch() -> None:
    """A disallowed value should produce a humanized message."""
    record = _Record(preview=_Attachment(mime_type="image/bmp"))
    rule = PropertyRule("mime_type", of="preview", allowed_in=["image/png", "image/gif"])

    errors = validate_properties(record, [rule])

    assert errors == {
        "preview": [
            "mime type is incorrect. It needs to be one of 'image/png', 'image/gif', "
            "but was 'image/bmp'"
        ]
    }


def test_validate_properties_omits_missing_value() -> None:
    """A None property should not be echoed in the message."""
    record = _Record(preview=_Attachment(width=None))
    rule = PropertyRule("width", of="preview", allowed_in=range(10, 201))

    errors = validate_properties(record, [rule])

    assert errors["preview"] == ["width is incorrect. It needs to be between 10 and 200"]


def test_validate_properties_skips_empty_attachments() -> None:
    """Attributes without an attachment should pass."""
    record = _Record(preview=_Attachment(width=50))
    rule = PropertyRule("width", of=["preview", "other"], allowed_as=50)

    assert validate_properties(record, [rule]) == {}


def test_custom_messages_render_static_and_computed() -> None:
    """Static and computed messages should replace the generated one."""
    record = _Record(preview=_Attachment(width=5), other=_Attachment(mime_type="text/plain"))
    rules = [
        PropertyRule("width", of="preview", allowed_as=100, message=StaticMessage("too narrow")),
        PropertyRule(
            "mime_type",
            of="other",
            allowed_as="image/png",
            message=ComputedMessage(lambda value: f"{value} is not an image"),
        ),
    ]

    errors = validate_properties(record, rules)

    assert errors == {"preview": ["too narrow"], "other": ["text/plain is not an image"]}


@pytest.mark.parametrize(
    "kwargs",
    [{"allowed_as": 1}, {"of": "preview"}],
)
def test_property_rule_rejects_incomplete_declarations(kwargs: dict[str, Any]) -> None:
    """Rules need both an attribute and allowed values."""
    with pytest.raises(StowageValidationError):
        PropertyRule("width", **kwargs)


def test_validate_properties_omits_false_value() -> None:
    """A False property should not be echoed in the message."""
    record = _Record(preview=_Attachment(width=False))
    rule = PropertyRule("width", of="preview", allowed_as=100)

    errors = validate_properties(record, [rule])

    assert errors["preview"] == ["width is incorrect. It needs to be '100'"]
