# bsg_helpdesk/forms/categories.py
"""Grouping of template fields into display sections."""
from dataclasses import dataclass, field as dc_field

from bsg_helpdesk.forms.models import TemplateField

DEFAULT_CATEGORY = "other"

CATEGORY_DISPLAY_NAMES: dict[str, str] = {
    "location": "Informasi Lokasi",
    "user_identity": "Identitas User",
    "timing": "Waktu dan Tanggal",
    "transaction": "Informasi Transaksi",
    "reference": "Nomor Referensi",
    "customer": "Data Nasabah",
    "transfer": "Mutasi/Transfer",
    "permissions": "Hak Akses",
    "other": "Lainnya",
}


def display_name(category: str) -> str:
    return CATEGORY_DISPLAY_NAMES.get(category, category)


@dataclass
class FieldSection:
    category: str
    title: str
    fields: list[TemplateField] = dc_field(default_factory=list)

    @property
    def required_count(self) -> int:
        return sum(1 for f in self.fields if f.is_required)


def group_fields(fields: list[TemplateField]) -> dict[str, list[TemplateField]]:
    """
    Group fields by category, keeping first-seen category order.

    Fields without a category land in ``other``; each group is sorted by
    ``sort_order`` (stable, so equal orders keep their input order).
    """
    grouped: dict[str, list[TemplateField]] = {}
    for f in fields:
        grouped.setdefault(f.category or DEFAULT_CATEGORY, []).append(f)
    for items in grouped.values():
        items.sort(key=lambda f: f.sort_order)
    return grouped


def build_sections(fields: list[TemplateField], show_categories: bool = True) -> list[FieldSection]:
    if not show_categories:
        ordered = sorted(fields, key=lambda f: f.sort_order)
        return [FieldSection(DEFAULT_CATEGORY, "Template Fields", ordered)]
    return [
        FieldSection(category, display_name(category), items)
        for category, items in group_fields(fields).items()
    ]
