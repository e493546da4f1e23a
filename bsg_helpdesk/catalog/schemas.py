# bsg_helpdesk/catalog/schemas.py
from typing import Any

from pydantic import BaseModel, Field, field_validator

from bsg_helpdesk.forms.models import FieldOption

_strip = {"str_strip_whitespace": True}


def _reject_null(value):
    if value is None:
        raise ValueError("may not be null")
    return value


class CatalogCreate(BaseModel):
    name: str = Field(..., min_length=1)
    description: str | None = None
    department_id: int | None = None
    is_active: bool = True

    model_config = _strip


class CatalogUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1)
    description: str | None = None
    department_id: int | None = None
    is_active: bool | None = None

    model_config = _strip

    @field_validator("name")
    @classmethod
    def not_null(cls, value):
        return _reject_null(value)


class CatalogStatistics(BaseModel):
    service_item_count: int
    template_count: int
    custom_field_count: int
    templates_with_fields: int


class CatalogOut(BaseModel):
    id: int
    name: str
    description: str | None = None
    department_id: int | None = None
    is_active: bool
    statistics: CatalogStatistics | None = None

    model_config = {"from_attributes": True}


class ItemCreate(BaseModel):
    name: str = Field(..., min_length=1)
    description: str | None = None
    sort_order: int = 0
    is_active: bool = True

    model_config = _strip


class ItemUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1)
    description: str | None = None
    sort_order: int | None = None
    is_active: bool | None = None

    model_config = _strip

    @field_validator("name")
    @classmethod
    def not_null(cls, value):
        return _reject_null(value)


class ItemStatistics(BaseModel):
    custom_field_count: int
    has_custom_fields: bool
    template_count: int


class ItemOut(BaseModel):
    id: int
    catalog_id: int
    name: str
    description: str | None = None
    sort_order: int
    is_active: bool
    statistics: ItemStatistics | None = None

    model_config = {"from_attributes": True}


class ServiceTemplateCreate(BaseModel):
    name: str = Field(..., min_length=1)
    description: str | None = None
    is_visible: bool = True
    sort_order: int = 0

    model_config = _strip


class ServiceTemplateUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1)
    description: str | None = None
    is_visible: bool | None = None
    sort_order: int | None = None

    model_config = _strip

    @field_validator("name")
    @classmethod
    def not_null(cls, value):
        return _reject_null(value)


class ServiceTemplateOut(BaseModel):
    id: int
    item_id: int
    name: str
    description: str | None = None
    is_visible: bool
    sort_order: int
    field_count: int = 0

    model_config = {"from_attributes": True}


class FieldDefinitionCreate(BaseModel):
    field_name: str = Field(..., min_length=1)
    field_label: str = Field(..., min_length=1)
    field_type: str = Field(..., min_length=1)
    is_required: bool = False
    is_visible: bool = True
    sort_order: int = 0
    category: str | None = None
    max_length: int | None = Field(default=None, ge=1)
    placeholder: str | None = None
    default_value: str | None = None
    options: list[FieldOption] | None = None
    validation_rules: dict[str, Any] | None = None

    model_config = _strip


class FieldDefinitionUpdate(BaseModel):
    field_name: str | None = Field(default=None, min_length=1)
    field_label: str | None = Field(default=None, min_length=1)
    field_type: str | None = Field(default=None, min_length=1)
    is_required: bool | None = None
    is_visible: bool | None = None
    sort_order: int | None = None
    category: str | None = None
    max_length: int | None = Field(default=None, ge=1)
    placeholder: str | None = None
    default_value: str | None = None
    options: list[FieldOption] | None = None
    validation_rules: dict[str, Any] | None = None

    model_config = _strip

    @field_validator("field_name", "field_label", "field_type")
    @classmethod
    def not_null(cls, value):
        return _reject_null(value)


class FieldDefinitionOut(FieldDefinitionCreate):
    id: int
    item_id: int | None = None
    template_id: int | None = None

    model_config = {"from_attributes": True}


class Overview(BaseModel):
    total_catalogs: int
    total_service_items: int
    total_templates: int
    visible_templates: int
    total_fields: int
