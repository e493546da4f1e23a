# bsg_helpdesk/forms/selector.py
"""
Two-level template browser: categories, then templates, then the fields of
the chosen template.

Each selection fetches fresh data. A response that arrives after the user has
moved on (a newer selection or ``back()``) is dropped instead of overwriting
the newer state.
"""
from __future__ import annotations

from enum import Enum

from bsg_helpdesk.core.errors import ApiError
from bsg_helpdesk.core.logging import get_logger
from bsg_helpdesk.forms.client import BsgApiClient
from bsg_helpdesk.forms.models import CatalogCategory, CatalogTemplate, TemplateField

logger = get_logger(__name__)


class SelectorView(str, Enum):
    CATEGORIES = "categories"
    TEMPLATES = "templates"
    FIELDS = "fields"


def _matches(item: CatalogCategory | CatalogTemplate, query: str) -> bool:
    haystack = " ".join(
        part for part in (item.name, item.display_name, item.description) if part
    ).lower()
    return query in haystack


class TemplateSelector:
    def __init__(self, client: BsgApiClient) -> None:
        self.client = client
        self.view = SelectorView.CATEGORIES
        self.categories: list[CatalogCategory] = []
        self.templates: list[CatalogTemplate] = []
        self.fields: list[TemplateField] = []
        self.selected_category: CatalogCategory | None = None
        self.selected_template: CatalogTemplate | None = None
        self.search_query = ""
        self.loading = False
        self.error = ""
        self._generation = 0

    @property
    def visible_items(self) -> list[CatalogCategory] | list[CatalogTemplate]:
        """Items of the current level filtered by the search query."""
        if self.view is SelectorView.CATEGORIES:
            items = self.categories
        elif self.view is SelectorView.TEMPLATES:
            items = self.templates
        else:
            return []
        query = self.search_query.strip().lower()
        if not query:
            return list(items)
        return [item for item in items if _matches(item, query)]

    def search(self, query: str) -> None:
        self.search_query = query or ""

    def _begin(self) -> int:
        self._generation += 1
        self.loading = True
        self.error = ""
        return self._generation

    def _is_current(self, generation: int) -> bool:
        if generation != self._generation:
            logger.debug("Dropping stale selector response (generation %d)", generation)
            return False
        return True

    async def load_categories(self) -> None:
        generation = self._begin()
        try:
            categories = await self.client.get_categories()
        except ApiError as exc:
            if self._is_current(generation):
                logger.error("Error loading template categories: %s", exc)
                self.error = "Failed to load template categories"
                self.loading = False
            return
        if self._is_current(generation):
            self.categories = categories
            self.loading = False

    async def select_category(self, category: CatalogCategory) -> None:
        self.selected_category = category
        self.selected_template = None
        self.templates = []
        self.fields = []
        self.search_query = ""
        self.view = SelectorView.TEMPLATES

        generation = self._begin()
        try:
            templates = await self.client.get_templates(category.id)
        except ApiError as exc:
            if self._is_current(generation):
                logger.error("Error loading templates for category %s: %s", category.id, exc)
                self.error = "Failed to load templates"
                self.loading = False
            return
        if self._is_current(generation):
            self.templates = templates
            self.loading = False

    async def select_template(self, template: CatalogTemplate) -> None:
        self.selected_template = template
        self.fields = []
        self.search_query = ""
        self.view = SelectorView.FIELDS

        generation = self._begin()
        try:
            fields = await self.client.get_template_fields(template.id)
        except ApiError as exc:
            if self._is_current(generation):
                logger.error("Error loading fields for template %s: %s", template.id, exc)
                self.error = "Failed to load template fields"
                self.loading = False
            return
        if self._is_current(generation):
            self.fields = fields
            self.loading = False

    def back(self) -> None:
        """Step one level up, resetting everything below it."""
        self._generation += 1
        self.loading = False
        self.error = ""
        self.search_query = ""
        if self.view is SelectorView.FIELDS:
            self.selected_template = None
            self.fields = []
            self.view = SelectorView.TEMPLATES
        elif self.view is SelectorView.TEMPLATES:
            self.selected_category = None
            self.selected_template = None
            self.templates = []
            self.view = SelectorView.CATEGORIES

    async def retry(self) -> None:
        """Repeat the load for the current level."""
        if self.view is SelectorView.FIELDS and self.selected_template is not None:
            await self.select_template(self.selected_template)
        elif self.view is SelectorView.TEMPLATES and self.selected_category is not None:
            await self.select_category(self.selected_category)
        else:
            await self.load_categories()
