# bsg_helpdesk/forms/session.py
"""One in-progress ticket form built from a template's fields."""
from __future__ import annotations

from typing import Any

from bsg_helpdesk.core.config import get_settings
from bsg_helpdesk.core.errors import FormValidationError
from bsg_helpdesk.core.logging import get_logger
from bsg_helpdesk.forms.categories import FieldSection, build_sections
from bsg_helpdesk.forms.field_types import behavior_for, is_text_like
from bsg_helpdesk.forms.master_data import MasterDataLoader, resolve_data_type
from bsg_helpdesk.forms.models import FieldOption, TemplateField
from bsg_helpdesk.forms.validation import validate_field, validate_form
from bsg_helpdesk.forms.value_store import FieldValueStore

logger = get_logger(__name__)


class FormSession:
    """
    Ties the engine together for a single form.

    Values flow user -> ``input()`` -> value store -> (debounced commit) ->
    per-field revalidation. ``submit()`` flushes pending input, validates
    everything and returns the unformatted payload.
    """

    def __init__(
        self,
        fields: list[TemplateField],
        loader: MasterDataLoader | None = None,
        debounce: float | None = None,
    ) -> None:
        if debounce is None:
            debounce = get_settings().FIELD_DEBOUNCE_MS / 1000
        self.fields = sorted(fields, key=lambda f: f.sort_order)
        self._by_name = {f.field_name: f for f in self.fields}
        self.loader = loader
        self.master_data: dict[str, list[FieldOption]] = {}
        self.errors: dict[str, str] = {}
        self.store = FieldValueStore(on_commit=self._on_commit, debounce=debounce)
        self._needs_master_data = any(resolve_data_type(f) for f in self.fields)
        self.loading = loader is not None and self._needs_master_data
        self._load_generation = 0

    def field(self, name: str) -> TemplateField:
        try:
            return self._by_name[name]
        except KeyError:
            raise KeyError(f"Unknown field: {name}") from None

    async def load(self) -> None:
        """
        Fetch master data for dropdowns and fill date defaults.

        Safe to call again: every call refetches, so dropdowns left empty by a
        failed fetch can be retried.
        """
        self._load_generation += 1
        generation = self._load_generation
        for f in self.fields:
            default = behavior_for(f).default_value()
            if default and not self.store.committed(f.field_name):
                self.store.set(f.field_name, default)

        if self.loader is None or not self._needs_master_data:
            self.loading = False
            return

        self.loading = True
        master_data = await self.loader.load(self.fields)
        if generation != self._load_generation:
            logger.debug("Discarding master data from a superseded load")
            return
        self.master_data = master_data
        self.loading = False
        for name, options in master_data.items():
            if not options:
                logger.warning("Dropdown field %s has no options", name)

    def options_for(self, name: str) -> list[FieldOption]:
        f = self.field(name)
        if f.options:
            return sorted(f.options, key=lambda o: o.sort_order)
        return self.master_data.get(name, [])

    def sections(self, show_categories: bool = True) -> list[FieldSection]:
        return build_sections(self.fields, show_categories)

    def input(self, name: str, value: Any) -> None:
        f = self.field(name)
        behavior = behavior_for(f)
        stored = behavior.unformat(f, value)
        if f.max_length and is_text_like(f):
            stored = stored[: f.max_length]
        self.store.input(name, stored)

    def blur(self, name: str) -> None:
        self.store.blur(name)

    def set_value(self, name: str, value: Any) -> None:
        self.field(name)
        self.store.set(name, value)

    def display_value(self, name: str) -> str:
        f = self.field(name)
        return behavior_for(f).format_display(f, self.store.displayed(name))

    def values(self) -> dict[str, Any]:
        return self.store.values()

    def _on_commit(self, name: str, value: Any) -> None:
        f = self._by_name.get(name)
        if f is None:
            return
        error = validate_field(f, value)
        if error:
            self.errors[name] = error
        else:
            self.errors.pop(name, None)

    def validate(self) -> dict[str, str]:
        self.store.flush()
        self.errors = validate_form(self.fields, self.store.values())
        return self.errors

    @property
    def can_submit(self) -> bool:
        if self.loading:
            return False
        return not validate_form(self.fields, self.store.values())

    def submit(self) -> dict[str, Any]:
        if self.loading:
            raise FormValidationError({}, "Field options are still loading")
        errors = self.validate()
        if errors:
            raise FormValidationError(errors)
        values = self.store.values()
        return {f.field_name: values[f.field_name] for f in self.fields if f.field_name in values}

    def close(self) -> None:
        self.store.close()
