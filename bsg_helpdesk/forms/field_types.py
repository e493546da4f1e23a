# bsg_helpdesk/forms/field_types.py
"""
Field type registry.

Template authors store a free-form type tag on every field (``text_short``,
``dropdown_branch``, ``currency``...). The registry turns that tag into a
``FieldKind`` and a ``FieldBehavior`` that knows the input widget, whether the
options come from master data, the default value and the display formatting.
Unknown tags behave as plain text.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Callable

from bsg_helpdesk.forms.models import TemplateField


class FieldKind(str, Enum):
    TEXT = "text"
    TEXTAREA = "textarea"
    NUMBER = "number"
    CURRENCY = "currency"
    DATE = "date"
    DATETIME = "datetime"
    DROPDOWN = "dropdown"
    SEARCHABLE_DROPDOWN = "searchable_dropdown"


CURRENCY_PREFIX = "Rp "

_TAG_ALIASES: dict[str, FieldKind] = {
    "text": FieldKind.TEXT,
    "text_short": FieldKind.TEXT,
    "textarea": FieldKind.TEXTAREA,
    "number": FieldKind.NUMBER,
    "currency": FieldKind.CURRENCY,
    "date": FieldKind.DATE,
    "datetime": FieldKind.DATETIME,
    "dropdown": FieldKind.DROPDOWN,
    "searchable_dropdown": FieldKind.SEARCHABLE_DROPDOWN,
    "autocomplete": FieldKind.SEARCHABLE_DROPDOWN,
}


def kind_for(type_tag: str | None) -> FieldKind:
    tag = (type_tag or "").strip().lower()
    if tag in _TAG_ALIASES:
        return _TAG_ALIASES[tag]
    if tag.startswith("dropdown_"):
        return FieldKind.DROPDOWN
    return FieldKind.TEXT


def is_card_number_field(field: TemplateField) -> bool:
    """Card numbers only; account numbers stay unformatted."""
    name = field.field_name.lower()
    label = field.field_label.lower()
    for text in (name, label):
        if "kartu" in text and "nomor" in text:
            return True
        if "card" in text and "number" in text:
            return True
    return name in ("cardnumber", "nomorkartu")


def format_card_number(value: str) -> str:
    digits = re.sub(r"\D", "", value)
    return re.sub(r"(\d{4})(?=\d)", r"\1-", digits)


def unformat_currency(value: str) -> str:
    text = str(value).strip()
    if text.startswith(CURRENCY_PREFIX.strip()):
        text = text[len(CURRENCY_PREFIX.strip()):].strip()
    negative = text.startswith("-")
    digits = re.sub(r"\D", "", text)
    if not digits:
        return ""
    return f"-{digits}" if negative else digits


def format_currency(value: str | int) -> str:
    raw = unformat_currency(str(value))
    if not raw:
        return ""
    sign = "-" if raw.startswith("-") else ""
    grouped = f"{int(raw.lstrip('-')):,}".replace(",", ".")
    return f"{sign}{CURRENCY_PREFIX}{grouped}"


def _today() -> str:
    return datetime.now().strftime("%Y-%m-%d")


def _now_minutes() -> str:
    return datetime.now().strftime("%Y-%m-%dT%H:%M")


@dataclass(frozen=True)
class FieldBehavior:
    kind: FieldKind
    input_type: str
    uses_master_data: bool = False
    default_factory: Callable[[], str] | None = None

    def default_value(self) -> str:
        return self.default_factory() if self.default_factory else ""

    def format_display(self, field: TemplateField, value) -> str:
        """Value as shown in the input; never what gets submitted."""
        if value is None or value == "":
            return ""
        if self.kind is FieldKind.CURRENCY:
            return format_currency(value)
        if self.kind is FieldKind.TEXT and is_card_number_field(field):
            return format_card_number(str(value))
        return str(value)

    def unformat(self, field: TemplateField, value) -> str:
        """Value stored for submission."""
        if value is None:
            return ""
        if self.kind is FieldKind.CURRENCY:
            return unformat_currency(str(value))
        if self.kind is FieldKind.TEXT and is_card_number_field(field):
            return re.sub(r"\D", "", str(value))
        return str(value)


REGISTRY: dict[FieldKind, FieldBehavior] = {
    FieldKind.TEXT: FieldBehavior(FieldKind.TEXT, "text"),
    FieldKind.TEXTAREA: FieldBehavior(FieldKind.TEXTAREA, "textarea"),
    FieldKind.NUMBER: FieldBehavior(FieldKind.NUMBER, "number"),
    FieldKind.CURRENCY: FieldBehavior(FieldKind.CURRENCY, "text"),
    FieldKind.DATE: FieldBehavior(FieldKind.DATE, "date", default_factory=_today),
    FieldKind.DATETIME: FieldBehavior(
        FieldKind.DATETIME, "datetime-local", default_factory=_now_minutes
    ),
    FieldKind.DROPDOWN: FieldBehavior(FieldKind.DROPDOWN, "select", uses_master_data=True),
    FieldKind.SEARCHABLE_DROPDOWN: FieldBehavior(
        FieldKind.SEARCHABLE_DROPDOWN, "text", uses_master_data=True
    ),
}


def resolve(type_tag: str | None) -> FieldBehavior:
    return REGISTRY[kind_for(type_tag)]


def behavior_for(field: TemplateField) -> FieldBehavior:
    return resolve(field.field_type)


def is_text_like(field: TemplateField) -> bool:
    return kind_for(field.field_type) in (FieldKind.TEXT, FieldKind.TEXTAREA)
