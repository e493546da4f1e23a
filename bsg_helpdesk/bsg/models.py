# bsg_helpdesk/bsg/models.py
from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, JSON, String, Text, func
from sqlalchemy.orm import relationship
from bsg_helpdesk.core.database import Base


class TemplateCategory(Base):
    __tablename__ = "bsg_template_categories"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, unique=True, nullable=False)
    display_name = Column(String, nullable=False)
    description = Column(Text)
    icon = Column(String)
    sort_order = Column(Integer, default=0)
    is_active = Column(Boolean, default=True, index=True)

    templates = relationship("BsgTemplate", back_populates="category", cascade="all, delete-orphan")


class BsgTemplate(Base):
    __tablename__ = "bsg_templates"

    id = Column(Integer, primary_key=True, index=True)
    category_id = Column(Integer, ForeignKey("bsg_template_categories.id", ondelete="CASCADE"), nullable=False)
    template_number = Column(Integer, nullable=False)
    name = Column(String, index=True, nullable=False)
    display_name = Column(String, nullable=False)
    description = Column(Text)
    popularity_score = Column(Integer, default=0)
    usage_count = Column(Integer, default=0)
    is_active = Column(Boolean, default=True, index=True)

    category = relationship("TemplateCategory", back_populates="templates")
    fields = relationship(
        "BsgTemplateField",
        back_populates="template",
        cascade="all, delete-orphan",
        order_by="BsgTemplateField.sort_order",
    )


class BsgTemplateField(Base):
    __tablename__ = "bsg_template_fields"

    id = Column(Integer, primary_key=True, index=True)
    template_id = Column(Integer, ForeignKey("bsg_templates.id", ondelete="CASCADE"), nullable=False)
    field_name = Column(String, index=True, nullable=False)
    field_label = Column(String, nullable=False)
    field_type = Column(String, nullable=False, default="text")
    is_required = Column(Boolean, default=False)
    category = Column(String)
    sort_order = Column(Integer, default=0)
    max_length = Column(Integer)
    placeholder_text = Column(String)
    help_text = Column(String)
    validation_rules = Column(JSON)

    template = relationship("BsgTemplate", back_populates="fields")
    options = relationship(
        "BsgFieldOption",
        back_populates="field",
        cascade="all, delete-orphan",
        order_by="BsgFieldOption.sort_order",
    )


class BsgFieldOption(Base):
    __tablename__ = "bsg_field_options"

    id = Column(Integer, primary_key=True, index=True)
    field_id = Column(Integer, ForeignKey("bsg_template_fields.id", ondelete="CASCADE"), nullable=False)
    option_value = Column(String, nullable=False)
    option_label = Column(String, nullable=False)
    is_default = Column(Boolean, default=False)
    sort_order = Column(Integer, default=0)

    field = relationship("BsgTemplateField", back_populates="options")


class MasterDataEntity(Base):
    __tablename__ = "bsg_master_data"

    id = Column(Integer, primary_key=True, index=True)
    data_type = Column(String, index=True, nullable=False)
    code = Column(String, nullable=False)
    name = Column(String, nullable=False)
    display_name = Column(String)
    parent_id = Column(Integer, ForeignKey("bsg_master_data.id"))
    # "metadata" is reserved on declarative classes
    extra = Column("metadata", JSON)
    sort_order = Column(Integer, default=0)
    is_active = Column(Boolean, default=True, index=True)


class TemplateUsageLog(Base):
    __tablename__ = "bsg_template_usage_logs"

    id = Column(Integer, primary_key=True, index=True)
    template_id = Column(Integer, ForeignKey("bsg_templates.id", ondelete="CASCADE"), nullable=False)
    action_type = Column(String, nullable=False)
    session_id = Column(String)
    completion_time_ms = Column(Integer)
    created_at = Column(DateTime, server_default=func.now())
