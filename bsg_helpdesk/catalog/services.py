# bsg_helpdesk/catalog/services.py
from sqlalchemy.orm import Session

from bsg_helpdesk.catalog.models import ServiceCatalog, ServiceFieldDefinition, ServiceItem, ServiceTemplate
from bsg_helpdesk.catalog.schemas import (
    CatalogCreate,
    CatalogOut,
    CatalogStatistics,
    CatalogUpdate,
    FieldDefinitionCreate,
    FieldDefinitionUpdate,
    ItemCreate,
    ItemOut,
    ItemStatistics,
    ItemUpdate,
    Overview,
    ServiceTemplateCreate,
    ServiceTemplateOut,
    ServiceTemplateUpdate,
)
from bsg_helpdesk.core.errors import ConflictError
from bsg_helpdesk.core.logging import get_logger

logger = get_logger(__name__)


def _apply(db: Session, row, payload):
    for field, value in payload.model_dump(exclude_unset=True).items():
        setattr(row, field, value)
    db.commit()
    db.refresh(row)
    return row


def _delete(db: Session, row):
    db.delete(row)
    db.commit()
    return row


# ----- catalogs -----

def catalog_out(catalog: ServiceCatalog) -> CatalogOut:
    templates = [t for item in catalog.items for t in item.templates]
    out = CatalogOut.model_validate(catalog)
    out.statistics = CatalogStatistics(
        service_item_count=len(catalog.items),
        template_count=len(templates),
        custom_field_count=sum(len(t.fields) for t in templates),
        templates_with_fields=sum(1 for t in templates if t.fields),
    )
    return out


def get_all_catalogs(db: Session) -> list[CatalogOut]:
    catalogs = db.query(ServiceCatalog).order_by(ServiceCatalog.name.asc()).all()
    return [catalog_out(c) for c in catalogs]


def get_catalog(db: Session, catalog_id: int) -> ServiceCatalog | None:
    return db.query(ServiceCatalog).filter(ServiceCatalog.id == catalog_id).first()


def create_catalog(db: Session, payload: CatalogCreate) -> ServiceCatalog:
    catalog = ServiceCatalog(**payload.model_dump())
    db.add(catalog)
    db.commit()
    db.refresh(catalog)
    logger.info("Created service catalog %s (%s)", catalog.id, catalog.name)
    return catalog


def update_catalog(db: Session, catalog_id: int, payload: CatalogUpdate) -> ServiceCatalog | None:
    catalog = get_catalog(db, catalog_id)
    if not catalog:
        return None
    return _apply(db, catalog, payload)


def delete_catalog(db: Session, catalog_id: int) -> ServiceCatalog | None:
    catalog = get_catalog(db, catalog_id)
    if not catalog:
        return None
    logger.info("Deleting service catalog %s with %d items", catalog_id, len(catalog.items))
    return _delete(db, catalog)


# ----- service items -----

def item_out(item: ServiceItem) -> ItemOut:
    out = ItemOut.model_validate(item)
    out.statistics = ItemStatistics(
        custom_field_count=len(item.custom_fields),
        has_custom_fields=bool(item.custom_fields),
        template_count=len(item.templates),
    )
    return out


def get_items(db: Session, catalog_id: int) -> list[ItemOut]:
    items = (
        db.query(ServiceItem)
        .filter(ServiceItem.catalog_id == catalog_id)
        .order_by(ServiceItem.sort_order.asc(), ServiceItem.name.asc())
        .all()
    )
    return [item_out(i) for i in items]


def get_item(db: Session, item_id: int) -> ServiceItem | None:
    return db.query(ServiceItem).filter(ServiceItem.id == item_id).first()


def create_item(db: Session, catalog_id: int, payload: ItemCreate) -> ServiceItem:
    item = ServiceItem(catalog_id=catalog_id, **payload.model_dump())
    db.add(item)
    db.commit()
    db.refresh(item)
    return item


def update_item(db: Session, item_id: int, payload: ItemUpdate) -> ServiceItem | None:
    item = get_item(db, item_id)
    if not item:
        return None
    return _apply(db, item, payload)


def delete_item(db: Session, item_id: int) -> ServiceItem | None:
    item = get_item(db, item_id)
    if not item:
        return None
    return _delete(db, item)


# ----- service templates -----

def template_out(template: ServiceTemplate) -> ServiceTemplateOut:
    out = ServiceTemplateOut.model_validate(template)
    out.field_count = len(template.fields)
    return out


def get_templates(db: Session, item_id: int) -> list[ServiceTemplateOut]:
    templates = (
        db.query(ServiceTemplate)
        .filter(ServiceTemplate.item_id == item_id)
        .order_by(ServiceTemplate.sort_order.asc(), ServiceTemplate.name.asc())
        .all()
    )
    return [template_out(t) for t in templates]


def get_template(db: Session, template_id: int) -> ServiceTemplate | None:
    return db.query(ServiceTemplate).filter(ServiceTemplate.id == template_id).first()


def create_template(db: Session, item_id: int, payload: ServiceTemplateCreate) -> ServiceTemplate:
    template = ServiceTemplate(item_id=item_id, **payload.model_dump())
    db.add(template)
    db.commit()
    db.refresh(template)
    return template


def update_template(db: Session, template_id: int, payload: ServiceTemplateUpdate) -> ServiceTemplate | None:
    template = get_template(db, template_id)
    if not template:
        return None
    return _apply(db, template, payload)


def delete_template(db: Session, template_id: int) -> ServiceTemplate | None:
    template = get_template(db, template_id)
    if not template:
        return None
    return _delete(db, template)


# ----- field definitions (item custom fields and template fields) -----

def _ensure_unique_name(db: Session, name: str, *, item_id=None, template_id=None, exclude_id=None):
    query = db.query(ServiceFieldDefinition).filter(ServiceFieldDefinition.field_name == name)
    if item_id is not None:
        query = query.filter(ServiceFieldDefinition.item_id == item_id)
    else:
        query = query.filter(ServiceFieldDefinition.template_id == template_id)
    if exclude_id is not None:
        query = query.filter(ServiceFieldDefinition.id != exclude_id)
    if query.first():
        owner = "service item" if item_id is not None else "template"
        raise ConflictError(f"A field with this name already exists for this {owner}")


def get_fields(db: Session, *, item_id: int | None = None, template_id: int | None = None) -> list[ServiceFieldDefinition]:
    query = db.query(ServiceFieldDefinition)
    if item_id is not None:
        query = query.filter(ServiceFieldDefinition.item_id == item_id)
    else:
        query = query.filter(ServiceFieldDefinition.template_id == template_id)
    return query.order_by(
        ServiceFieldDefinition.sort_order.asc(), ServiceFieldDefinition.field_name.asc()
    ).all()


def get_field(db: Session, field_id: int, *, item_owned: bool | None = None) -> ServiceFieldDefinition | None:
    query = db.query(ServiceFieldDefinition).filter(ServiceFieldDefinition.id == field_id)
    if item_owned is True:
        query = query.filter(ServiceFieldDefinition.item_id.is_not(None))
    elif item_owned is False:
        query = query.filter(ServiceFieldDefinition.template_id.is_not(None))
    return query.first()


def create_field(
    db: Session,
    payload: FieldDefinitionCreate,
    *,
    item_id: int | None = None,
    template_id: int | None = None,
) -> ServiceFieldDefinition:
    _ensure_unique_name(db, payload.field_name, item_id=item_id, template_id=template_id)
    field = ServiceFieldDefinition(item_id=item_id, template_id=template_id, **payload.model_dump())
    db.add(field)
    db.commit()
    db.refresh(field)
    return field


def update_field(
    db: Session, field_id: int, payload: FieldDefinitionUpdate, *, item_owned: bool | None = None
) -> ServiceFieldDefinition | None:
    field = get_field(db, field_id, item_owned=item_owned)
    if not field:
        return None
    if payload.field_name and payload.field_name != field.field_name:
        _ensure_unique_name(
            db, payload.field_name,
            item_id=field.item_id, template_id=field.template_id, exclude_id=field.id,
        )
    return _apply(db, field, payload)


def delete_field(db: Session, field_id: int, *, item_owned: bool | None = None) -> ServiceFieldDefinition | None:
    field = get_field(db, field_id, item_owned=item_owned)
    if not field:
        return None
    return _delete(db, field)


def get_overview(db: Session) -> Overview:
    return Overview(
        total_catalogs=db.query(ServiceCatalog).filter(ServiceCatalog.is_active.is_(True)).count(),
        total_service_items=db.query(ServiceItem).filter(ServiceItem.is_active.is_(True)).count(),
        total_templates=db.query(ServiceTemplate).count(),
        visible_templates=db.query(ServiceTemplate).filter(ServiceTemplate.is_visible.is_(True)).count(),
        total_fields=db.query(ServiceFieldDefinition).count(),
    )
