# bsg_helpdesk/catalog/models.py
from sqlalchemy import Boolean, Column, ForeignKey, Integer, JSON, String, Text
from sqlalchemy.orm import relationship
from bsg_helpdesk.core.database import Base


class ServiceCatalog(Base):
    __tablename__ = "service_catalogs"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, index=True, nullable=False)
    description = Column(Text)
    department_id = Column(Integer)
    is_active = Column(Boolean, default=True, index=True)

    items = relationship("ServiceItem", back_populates="catalog", cascade="all, delete-orphan")


class ServiceItem(Base):
    __tablename__ = "service_items"

    id = Column(Integer, primary_key=True, index=True)
    catalog_id = Column(Integer, ForeignKey("service_catalogs.id", ondelete="CASCADE"), nullable=False)
    name = Column(String, index=True, nullable=False)
    description = Column(Text)
    sort_order = Column(Integer, default=0)
    is_active = Column(Boolean, default=True)

    catalog = relationship("ServiceCatalog", back_populates="items")
    templates = relationship("ServiceTemplate", back_populates="item", cascade="all, delete-orphan")
    custom_fields = relationship(
        "ServiceFieldDefinition",
        back_populates="item",
        cascade="all, delete-orphan",
        foreign_keys="ServiceFieldDefinition.item_id",
    )


class ServiceTemplate(Base):
    __tablename__ = "service_templates"

    id = Column(Integer, primary_key=True, index=True)
    item_id = Column(Integer, ForeignKey("service_items.id", ondelete="CASCADE"), nullable=False)
    name = Column(String, nullable=False)
    description = Column(Text)
    is_visible = Column(Boolean, default=True)
    sort_order = Column(Integer, default=0)

    item = relationship("ServiceItem", back_populates="templates")
    fields = relationship(
        "ServiceFieldDefinition",
        back_populates="template",
        cascade="all, delete-orphan",
        foreign_keys="ServiceFieldDefinition.template_id",
    )


class ServiceFieldDefinition(Base):
    """Custom field owned by either a service item or a service template."""

    __tablename__ = "service_field_definitions"

    id = Column(Integer, primary_key=True, index=True)
    item_id = Column(Integer, ForeignKey("service_items.id", ondelete="CASCADE"))
    template_id = Column(Integer, ForeignKey("service_templates.id", ondelete="CASCADE"))
    field_name = Column(String, nullable=False)
    field_label = Column(String, nullable=False)
    field_type = Column(String, nullable=False)
    is_required = Column(Boolean, default=False)
    is_visible = Column(Boolean, default=True)
    sort_order = Column(Integer, default=0)
    category = Column(String)
    max_length = Column(Integer)
    placeholder = Column(String)
    default_value = Column(String)
    options = Column(JSON)
    validation_rules = Column(JSON)

    item = relationship("ServiceItem", back_populates="custom_fields", foreign_keys=[item_id])
    template = relationship("ServiceTemplate", back_populates="fields", foreign_keys=[template_id])
