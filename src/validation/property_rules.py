"""Property rules for attachment-bearing records.

A record exposes attachments as attributes; each attachment exposes
read-only properties such as ``width`` or ``format``. A rule checks one
property against an allow-list and reports a message per failing attribute.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Iterable, Sequence, Union

from core.errors import StowageValidationError


@dataclass(frozen=True)
class StaticMessage:
    """Fixed error message."""

    text: str

    def render(self, value: Any) -> str:
        return self.text


@dataclass(frozen=True)
class ComputedMessage:
    """Error message built from the offending property value."""

    build: Callable[[Any], str]

    def render(self, value: Any) -> str:
        return self.build(value)


Message = Union[StaticMessage, ComputedMessage]


@dataclass(frozen=True)
class PropertyRule:
    """Allowed values for one property of one or more attachments.

    Attributes:
        property_name: Attachment property to check, e.g. ``"format"``.
        of: Attribute name(s) holding the attachment on the record.
        allowed_in: Allowed values; a ``range`` or any container.
        allowed_as: Single allowed value, used when ``allowed_in`` is absent.
        message: Optional replacement for the generated message.
    """

    property_name: str
    of: str | Sequence[str] | None = None
    allowed_in: Any = None
    allowed_as: Any = None
    message: Message | None = None

    def __post_init__(self) -> None:
        if not self.of:
            raise StowageValidationError(
                "You need to provide the attribute which has the property, using of=<attribute_name>."
            )
        if self.allowed_in is None and self.allowed_as is None:
            raise StowageValidationError(
                "You must provide either allowed_in=[<value1>, <value2>..] or allowed_as=<value>."
            )

    @property
    def attributes(self) -> tuple[str, ...]:
        if isinstance(self.of, str):
            return (self.of,)
        return tuple(self.of or ())

    @property
    def allowed_values(self) -> Any:
        if self.allowed_in is not None:
            return self.allowed_in
        return [self.allowed_as]


def expected_values_string(allowed_values: Any) -> str:
    """Describe allowed values for an error message.

    Args:
        allowed_values: A ``range`` or a sequence of values.

    Returns:
        ``between X and Y`` for ranges, ``one of 'a', 'b'`` for several
        values, ``'a'`` for one.
    """
    if isinstance(allowed_values, range):
        last = allowed_values[-1] if len(allowed_values) else allowed_values.stop
        return f"between {allowed_values.start} and {last}"
    values = list(allowed_values)
    if len(values) > 1:
        return "one of '" + "', '".join(str(value) for value in values) + "'"
    return f"'{values[0]}'"


def validate_properties(record: Any, rules: Iterable[PropertyRule]) -> dict[str, list[str]]:
    """Check every rule against a record.

    Args:
        record: Object exposing attachments as attributes.
        rules: Property rules to apply.

    Returns:
        Error messages keyed by attribute name; empty when valid.
    """
    errors: dict[str, list[str]] = {}
    for rule in rules:
        for attribute in rule.attributes:
            attachment = getattr(record, attribute, None)
            if attachment is None:
                continue
            value = getattr(attachment, rule.property_name)
            if value in rule.allowed_values:
                continue
            errors.setdefault(attribute, []).append(_render_message(rule, value))
    return errors


def _render_message(rule: PropertyRule, value: Any) -> str:
    if rule.message is not None:
        return rule.message.render(value)
    message = (
        f"{_humanize(rule.property_name)} is incorrect. "
        f"It needs to be {expected_values_string(rule.allowed_values)}"
    )
    if value is not None and value is not False:
        message += f", but was '{value}'"
    return message


def _humanize(name: str) -> str:
    return name.replace("_", " ").strip().lower()
