"""Declarative business-field rules and the validator the lifecycle service applies.

Rules are data, so every entity type declares its own set and the same
validator enforces them on create and on update.
"""

from dataclasses import dataclass
from typing import Any, Mapping

from app.domain.exceptions import FieldError, ValidationError


@dataclass(frozen=True)
class FieldRule:
    """Constraints for one business field."""

    name: str
    kind: type = str
    required: bool = False
    max_length: int | None = None
    min_value: int | None = None
    max_value: int | None = None
    filterable: bool = False


CLIENT_FIELD_RULES: tuple[FieldRule, ...] = (
    FieldRule("name", str, required=True, max_length=200, filterable=True),
    FieldRule("address", str, max_length=200, filterable=True),
    FieldRule("age", int, min_value=0, max_value=150),
    FieldRule("phone", str, max_length=30, filterable=True),
)


def filterable_columns(rules: tuple[FieldRule, ...]) -> frozenset[str]:
    return frozenset(rule.name for rule in rules if rule.filterable)


def validate_fields(
    values: Mapping[str, Any], rules: tuple[FieldRule, ...]
) -> dict[str, Any]:
    """Return cleaned values for every declared field or raise ValidationError.

    Strings are trimmed and blank optional strings become None. Keys that are
    not declared (ids, audit fields, the deletion flag) are dropped.
    """
    cleaned: dict[str, Any] = {}
    errors: list[FieldError] = []

    for rule in rules:
        value = values.get(rule.name)

        if isinstance(value, str):
            value = value.strip() or None

        if value is None:
            if rule.required:
                errors.append(FieldError(rule.name, f"{rule.name} is required"))
            cleaned[rule.name] = None
            continue

        # bool is an int subclass; reject it for numeric fields
        if not isinstance(value, rule.kind) or (rule.kind is int and isinstance(value, bool)):
            errors.append(
                FieldError(rule.name, f"{rule.name} must be of type {rule.kind.__name__}")
            )
            continue

        if rule.max_length is not None and len(value) > rule.max_length:
            errors.append(
                FieldError(
                    rule.name,
                    f"{rule.name} must be at most {rule.max_length} characters",
                )
            )
            continue

        too_low = rule.min_value is not None and value < rule.min_value
        too_high = rule.max_value is not None and value > rule.max_value
        if too_low or too_high:
            if rule.min_value is not None and rule.max_value is not None:
                bound = f"between {rule.min_value} and {rule.max_value}"
            elif too_low:
                bound = f"at least {rule.min_value}"
            else:
                bound = f"at most {rule.max_value}"
            errors.append(FieldError(rule.name, f"{rule.name} must be {bound}"))
            continue

        cleaned[rule.name] = value

    if errors:
        raise ValidationError(errors)
    return cleaned
