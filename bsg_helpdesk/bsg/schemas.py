# bsg_helpdesk/bsg/schemas.py
from typing import Any, Literal

from pydantic import BaseModel, Field

from bsg_helpdesk.forms.models import FieldOption, TemplateField


class CategoryCreate(BaseModel):
    name: str = Field(..., min_length=1)
    display_name: str = Field(..., min_length=1)
    description: str | None = None
    icon: str | None = None
    sort_order: int = 0


class CategoryOut(BaseModel):
    id: int
    name: str
    display_name: str
    description: str | None = None
    icon: str | None = None
    template_count: int = 0


class TemplateFieldCreate(BaseModel):
    field_name: str = Field(..., min_length=1)
    field_label: str = Field(..., min_length=1)
    field_type: str = "text"
    is_required: bool = False
    category: str | None = None
    sort_order: int = 0
    max_length: int | None = Field(default=None, ge=1)
    placeholder_text: str | None = None
    help_text: str | None = None
    validation_rules: dict[str, Any] | None = None
    options: list[FieldOption] = Field(default_factory=list)


class TemplateCreate(BaseModel):
    category_id: int
    template_number: int
    name: str = Field(..., min_length=1)
    display_name: str | None = None
    description: str | None = None
    fields: list[TemplateFieldCreate] = Field(default_factory=list)


class TemplateOut(BaseModel):
    id: int
    template_number: int
    name: str
    display_name: str
    description: str | None = None
    popularity_score: int
    usage_count: int
    category_name: str
    category_display_name: str


# Fields are served in the exact shape the form engine consumes
TemplateFieldOut = TemplateField


class MasterDataCreate(BaseModel):
    code: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    display_name: str | None = None
    parent_id: int | None = None
    metadata: dict[str, Any] | None = None
    sort_order: int = 0


class MasterDataOut(BaseModel):
    id: int
    data_type: str
    code: str
    name: str
    display_name: str | None = None
    parent_id: int | None = None
    metadata: dict[str, Any] | None = Field(default=None, validation_alias="extra")
    sort_order: int

    model_config = {"from_attributes": True}


class UsageCreate(BaseModel):
    action_type: Literal["view", "start", "completed", "abandon"]
    session_id: str | None = None
    completion_time_ms: int | None = Field(default=None, ge=0)


class UsageOut(BaseModel):
    success: bool = True
    message: str = "Usage logged successfully"
    usage_count: int


class FieldUsage(BaseModel):
    field_name: str
    field_type: str
    usage_count: int
    templates: list[str]


class TemplateAnalytics(BaseModel):
    total_templates: int
    total_fields: int
    distinct_fields: int
    common_fields: list[FieldUsage]
    unique_field_count: int
    reused_field_instances: int
    reuse_ratio: float
    top_templates: list[TemplateOut]
    usage_by_action: dict[str, int]
