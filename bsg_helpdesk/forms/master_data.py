# bsg_helpdesk/forms/master_data.py
"""Loading of dropdown options from the master data endpoint."""
from __future__ import annotations

import asyncio
import re

from bsg_helpdesk.core.errors import ApiError
from bsg_helpdesk.core.logging import get_logger
from bsg_helpdesk.forms.client import BsgApiClient
from bsg_helpdesk.forms.field_types import FieldKind, kind_for
from bsg_helpdesk.forms.models import FieldOption, TemplateField

logger = get_logger(__name__)

# (keywords that must all appear in the label, data type, also match the field name)
_DROPDOWN_KEYWORDS: list[tuple[tuple[str, ...], str, bool]] = [
    (("olib",), "olibs", True),
    (("program", "fasilitas"), "olibs", False),
    (("government",), "government_entity", True),
    (("pemerintah",), "government_entity", False),
    (("access", "level"), "access_level", False),
    (("request", "type"), "request_type", False),
    (("menu",), "olibs", True),
    (("authority",), "authority_level", False),
    (("wewenang",), "authority_level", False),
    (("treasury",), "treasury_account", False),
    (("kas",), "treasury_account", False),
    (("budget",), "budget_code", False),
    (("anggaran",), "budget_code", False),
]


def _name_key(field: TemplateField) -> str:
    return re.sub(r"[^a-z]", "", field.field_name.lower()) or "generic"


def resolve_data_type(field: TemplateField) -> str | None:
    """
    Master data type to fetch for ``field``, or ``None`` when no fetch is needed.

    ``dropdown_<type>`` names the type directly. Searchable dropdowns that hold a
    branch unit (unit/cabang/capem) use ``unit``. A plain ``dropdown`` with
    bundled options needs nothing; without options the type is guessed from
    keywords in the label (a few also in the name).
    """
    tag = field.field_type.strip().lower()
    kind = kind_for(tag)
    name = field.field_name.lower()
    label = field.field_label.lower()

    if tag.startswith("dropdown_"):
        return tag[len("dropdown_"):] or "generic"

    if kind is FieldKind.SEARCHABLE_DROPDOWN:
        if label == "unit" or any(k in name or k in label for k in ("unit", "cabang", "capem")):
            return "unit"
        return _name_key(field)

    if kind is FieldKind.DROPDOWN:
        if field.options:
            return None
        for keywords, data_type, check_name in _DROPDOWN_KEYWORDS:
            if all(k in label for k in keywords):
                return data_type
            if check_name and all(k in name for k in keywords):
                return data_type
        return _name_key(field)

    return None


class MasterDataLoader:
    """Fetches option lists for every dropdown of a form in parallel."""

    def __init__(self, client: BsgApiClient) -> None:
        self.client = client

    async def load_options(self, field: TemplateField, data_type: str) -> list[FieldOption]:
        try:
            items = await self.client.get_master_data(data_type)
        except ApiError as exc:
            if exc.status_code == 404:
                logger.warning(
                    "Master data endpoint not found for type '%s' (field %s)",
                    data_type, field.field_label,
                )
            elif exc.status_code == 403:
                logger.warning(
                    "Access denied to master data for type '%s' (field %s)",
                    data_type, field.field_label,
                )
            else:
                logger.warning(
                    "Failed to load master data for type '%s' (field %s): %s",
                    data_type, field.field_label, exc,
                )
            return []

        options = [item.to_option() for item in items]
        logger.debug("Loaded %d options for %s", len(options), field.field_label)
        return options

    async def load(self, fields: list[TemplateField]) -> dict[str, list[FieldOption]]:
        """
        Resolve options for all dropdown fields; settles once every fetch has.

        Fields whose fetch failed map to an empty list.
        """
        targets = [(f, resolve_data_type(f)) for f in fields]
        targets = [(f, data_type) for f, data_type in targets if data_type]
        if not targets:
            return {}

        results = await asyncio.gather(
            *(self.load_options(f, data_type) for f, data_type in targets)
        )
        master_data = {f.field_name: options for (f, _), options in zip(targets, results)}
        logger.info(
            "Master data loaded for %d dropdown fields (%d empty)",
            len(master_data),
            sum(1 for options in master_data.values() if not options),
        )
        return master_data
