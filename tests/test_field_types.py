# tests/test_field_types.py
import re

import pytest

from bsg_helpdesk.forms.field_types import (
    FieldKind,
    format_currency,
    is_card_number_field,
    kind_for,
    resolve,
    unformat_currency,
)
from bsg_helpdesk.forms.models import TemplateField


def make_field(**kw) -> TemplateField:
    kw.setdefault("field_name", "f")
    kw.setdefault("field_label", "F")
    return TemplateField(**kw)


@pytest.mark.parametrize(
    "tag,kind",
    [
        ("text", FieldKind.TEXT),
        ("text_short", FieldKind.TEXT),
        ("textarea", FieldKind.TEXTAREA),
        ("number", FieldKind.NUMBER),
        ("currency", FieldKind.CURRENCY),
        ("date", FieldKind.DATE),
        ("datetime", FieldKind.DATETIME),
        ("dropdown", FieldKind.DROPDOWN),
        ("dropdown_branch", FieldKind.DROPDOWN),
        ("dropdown_olibs_menu", FieldKind.DROPDOWN),
        ("searchable_dropdown", FieldKind.SEARCHABLE_DROPDOWN),
        ("autocomplete", FieldKind.SEARCHABLE_DROPDOWN),
    ],
)
def test_known_tags(tag, kind):
    assert kind_for(tag) is kind


def test_unknown_tag_falls_back_to_text():
    behavior = resolve("signature_pad")
    assert behavior.kind is FieldKind.TEXT
    assert behavior.input_type == "text"
    assert resolve(None).kind is FieldKind.TEXT


def test_dropdowns_use_master_data():
    assert resolve("dropdown_branch").uses_master_data
    assert resolve("autocomplete").uses_master_data
    assert not resolve("text").uses_master_data


def test_date_defaults():
    assert re.fullmatch(r"\d{4}-\d{2}-\d{2}", resolve("date").default_value())
    assert re.fullmatch(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}", resolve("datetime").default_value())
    assert resolve("text").default_value() == ""


def test_currency_display_and_storage():
    field = make_field(field_type="currency")
    behavior = resolve("currency")
    assert behavior.format_display(field, "1500000") == "Rp 1.500.000"
    assert behavior.unformat(field, "Rp 1.500.000") == "1500000"
    assert behavior.unformat(field, "-1000") == "-1000"
    assert format_currency(250) == "Rp 250"
    assert format_currency("") == ""
    assert unformat_currency("Rp") == ""


def test_card_number_grouping():
    field = make_field(field_name="nomor_kartu", field_label="Nomor Kartu")
    behavior = resolve("text")
    assert is_card_number_field(field)
    assert behavior.format_display(field, "1234567812345678") == "1234-5678-1234-5678"
    assert behavior.unformat(field, "1234-5678-12") == "1234567812"


def test_account_numbers_are_not_card_numbers():
    field = make_field(field_name="nomor_rekening", field_label="Nomor Rekening")
    assert not is_card_number_field(field)
    assert resolve("text").format_display(field, "123456789") == "123456789"
