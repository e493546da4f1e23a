# bsg_helpdesk/forms/validation.py
"""Per-field validation rules. Pure functions, no cross-field checks."""
from __future__ import annotations

import math
import re
from typing import Any

from bsg_helpdesk.forms.field_types import FieldKind, behavior_for, is_text_like, kind_for
from bsg_helpdesk.forms.models import TemplateField

MAX_CURRENCY_AMOUNT = 999_999_999_999


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value.strip() == "")


def _check_currency(field: TemplateField, value: Any) -> str | None:
    raw = behavior_for(field).unformat(field, value)
    if raw in ("", "-"):
        return f"{field.field_label} must be a valid amount"
    amount = int(raw)
    if amount <= 0:
        return f"{field.field_label} must be a positive amount"
    if amount > MAX_CURRENCY_AMOUNT:
        return f"{field.field_label} is too large"
    return None


def _check_number(field: TemplateField, value: Any) -> str | None:
    try:
        number = float(str(value).strip())
    except ValueError:
        return f"{field.field_label} must be a number"
    if not math.isfinite(number):
        return f"{field.field_label} must be a number"
    return None


def _check_range(field: TemplateField, number: float) -> str | None:
    rules = field.validation_rules or {}
    if "min" in rules and number < float(rules["min"]):
        return f"{field.field_label} must be at least {rules['min']}"
    if "max" in rules and number > float(rules["max"]):
        return f"{field.field_label} must be at most {rules['max']}"
    return None


def _check_rules(field: TemplateField, value: Any) -> str | None:
    rules = field.validation_rules or {}
    text = str(value)
    min_length = rules.get("min_length") or rules.get("minLength")
    if min_length and len(text) < int(min_length):
        return f"{field.field_label} must be at least {min_length} characters"
    pattern = rules.get("pattern")
    if pattern and not re.fullmatch(pattern, text):
        return rules.get("message") or f"{field.field_label} has an invalid format"
    if kind_for(field.field_type) is FieldKind.NUMBER:
        return _check_range(field, float(text))
    return None


def validate_field(field: TemplateField, value: Any) -> str | None:
    """Return the first failing rule's message for ``value``, or None."""
    if _is_blank(value):
        if field.is_required:
            return f"{field.field_label} is required"
        return None

    kind = kind_for(field.field_type)
    if kind is FieldKind.CURRENCY:
        error = _check_currency(field, value)
        if error:
            return error
        # range rules apply to the amount, not the formatted text
        return _check_range(field, int(behavior_for(field).unformat(field, value)))
    if kind is FieldKind.NUMBER:
        error = _check_number(field, value)
        if error:
            return error

    if field.max_length and is_text_like(field):
        stored = behavior_for(field).unformat(field, value)
        if len(stored) > field.max_length:
            return f"{field.field_label} must be at most {field.max_length} characters"

    return _check_rules(field, value)


def validate_form(fields: list[TemplateField], values: dict[str, Any]) -> dict[str, str]:
    errors: dict[str, str] = {}
    for field in fields:
        error = validate_field(field, values.get(field.field_name))
        if error:
            errors[field.field_name] = error
    return errors
