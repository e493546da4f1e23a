# bsg_helpdesk/forms/models.py
"""Value types shared by the form engine components."""
from typing import Any

from pydantic import BaseModel, Field


class FieldOption(BaseModel):
    value: str
    label: str
    is_default: bool = False
    sort_order: int = 0


class TemplateField(BaseModel):
    id: int | None = None
    field_name: str = Field(..., min_length=1)
    field_label: str = Field(..., min_length=1)
    field_type: str = "text"
    is_required: bool = False
    category: str | None = None
    sort_order: int = 0
    max_length: int | None = Field(default=None, ge=1)
    placeholder_text: str | None = None
    help_text: str | None = None
    options: list[FieldOption] = Field(default_factory=list)
    validation_rules: dict[str, Any] | None = None

    model_config = {"from_attributes": True}


class CatalogCategory(BaseModel):
    id: int
    name: str
    display_name: str | None = None
    description: str | None = None
    icon: str | None = None
    template_count: int = 0


class CatalogTemplate(BaseModel):
    id: int
    name: str
    template_number: int | None = None
    display_name: str | None = None
    description: str | None = None
    popularity_score: int = 0
    usage_count: int = 0
    category_name: str | None = None
    category_display_name: str | None = None


class MasterDataItem(BaseModel):
    id: int | None = None
    code: str
    name: str
    display_name: str | None = None
    sort_order: int = 0

    def to_option(self) -> FieldOption:
        return FieldOption(
            value=self.code,
            label=self.display_name or self.name,
            sort_order=self.sort_order,
        )
