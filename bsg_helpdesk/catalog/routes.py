# bsg_helpdesk/catalog/routes.py
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from bsg_helpdesk.core.database import get_db
from bsg_helpdesk.core.errors import ConflictError
from bsg_helpdesk.catalog.schemas import (
    CatalogCreate,
    CatalogOut,
    CatalogUpdate,
    FieldDefinitionCreate,
    FieldDefinitionOut,
    FieldDefinitionUpdate,
    ItemCreate,
    ItemOut,
    ItemUpdate,
    Overview,
    ServiceTemplateCreate,
    ServiceTemplateOut,
    ServiceTemplateUpdate,
)
from bsg_helpdesk.catalog import services as catalog_service
router = APIRouter(prefix="/service-catalog-admin", tags=["Service Catalog Admin"])


def _not_found(what: str) -> HTTPException:
    return HTTPException(status_code=404, detail=f"{what} not found")


# ----- catalogs -----

@router.get("/catalogs", response_model=list[CatalogOut])
def list_catalogs(db: Session = Depends(get_db)):
    return catalog_service.get_all_catalogs(db)


@router.post("/catalogs", response_model=CatalogOut, status_code=201)
def create_catalog(payload: CatalogCreate, db: Session = Depends(get_db)):
    return catalog_service.catalog_out(catalog_service.create_catalog(db, payload))


@router.put("/catalogs/{catalog_id}", response_model=CatalogOut)
def update_catalog(catalog_id: int, payload: CatalogUpdate, db: Session = Depends(get_db)):
    catalog = catalog_service.update_catalog(db, catalog_id, payload)
    if not catalog:
        raise _not_found("Service catalog")
    return catalog_service.catalog_out(catalog)


@router.delete("/catalogs/{catalog_id}", response_model=CatalogOut)
def delete_catalog(catalog_id: int, db: Session = Depends(get_db)):
    deleted = catalog_service.delete_catalog(db, catalog_id)
    if not deleted:
        raise _not_found("Service catalog")
    return deleted


# ----- service items -----

@router.get("/catalogs/{catalog_id}/items", response_model=list[ItemOut])
def list_items(catalog_id: int, db: Session = Depends(get_db)):
    if not catalog_service.get_catalog(db, catalog_id):
        raise _not_found("Service catalog")
    return catalog_service.get_items(db, catalog_id)


@router.post("/catalogs/{catalog_id}/items", response_model=ItemOut, status_code=201)
def create_item(catalog_id: int, payload: ItemCreate, db: Session = Depends(get_db)):
    if not catalog_service.get_catalog(db, catalog_id):
        raise _not_found("Service catalog")
    return catalog_service.item_out(catalog_service.create_item(db, catalog_id, payload))


@router.put("/items/{item_id}", response_model=ItemOut)
def update_item(item_id: int, payload: ItemUpdate, db: Session = Depends(get_db)):
    item = catalog_service.update_item(db, item_id, payload)
    if not item:
        raise _not_found("Service item")
    return catalog_service.item_out(item)


@router.delete("/items/{item_id}", response_model=ItemOut)
def delete_item(item_id: int, db: Session = Depends(get_db)):
    deleted = catalog_service.delete_item(db, item_id)
    if not deleted:
        raise _not_found("Service item")
    return deleted


# ----- service templates -----

@router.get("/items/{item_id}/templates", response_model=list[ServiceTemplateOut])
def list_templates(item_id: int, db: Session = Depends(get_db)):
    if not catalog_service.get_item(db, item_id):
        raise _not_found("Service item")
    return catalog_service.get_templates(db, item_id)


@router.post("/items/{item_id}/templates", response_model=ServiceTemplateOut, status_code=201)
def create_template(item_id: int, payload: ServiceTemplateCreate, db: Session = Depends(get_db)):
    if not catalog_service.get_item(db, item_id):
        raise _not_found("Service item")
    return catalog_service.template_out(catalog_service.create_template(db, item_id, payload))


@router.put("/templates/{template_id}", response_model=ServiceTemplateOut)
def update_template(template_id: int, payload: ServiceTemplateUpdate, db: Session = Depends(get_db)):
    template = catalog_service.update_template(db, template_id, payload)
    if not template:
        raise _not_found("Service template")
    return catalog_service.template_out(template)


@router.delete("/templates/{template_id}", response_model=ServiceTemplateOut)
def delete_template(template_id: int, db: Session = Depends(get_db)):
    deleted = catalog_service.delete_template(db, template_id)
    if not deleted:
        raise _not_found("Service template")
    return deleted


# ----- template fields -----

@router.get("/templates/{template_id}/fields", response_model=list[FieldDefinitionOut])
def list_template_fields(template_id: int, db: Session = Depends(get_db)):
    if not catalog_service.get_template(db, template_id):
        raise _not_found("Service template")
    return catalog_service.get_fields(db, template_id=template_id)


@router.post("/templates/{template_id}/fields", response_model=FieldDefinitionOut, status_code=201)
def create_template_field(template_id: int, payload: FieldDefinitionCreate, db: Session = Depends(get_db)):
    if not catalog_service.get_template(db, template_id):
        raise _not_found("Service template")
    try:
        return catalog_service.create_field(db, payload, template_id=template_id)
    except ConflictError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@router.put("/fields/{field_id}", response_model=FieldDefinitionOut)
def update_template_field(field_id: int, payload: FieldDefinitionUpdate, db: Session = Depends(get_db)):
    try:
        field = catalog_service.update_field(db, field_id, payload, item_owned=False)
    except ConflictError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    if not field:
        raise _not_found("Field")
    return field


@router.delete("/fields/{field_id}", response_model=FieldDefinitionOut)
def delete_template_field(field_id: int, db: Session = Depends(get_db)):
    deleted = catalog_service.delete_field(db, field_id, item_owned=False)
    if not deleted:
        raise _not_found("Field")
    return deleted


# ----- service item custom fields -----

@router.get("/items/{item_id}/custom-fields", response_model=list[FieldDefinitionOut])
def list_custom_fields(item_id: int, db: Session = Depends(get_db)):
    if not catalog_service.get_item(db, item_id):
        raise _not_found("Service item")
    return catalog_service.get_fields(db, item_id=item_id)


@router.post("/items/{item_id}/custom-fields", response_model=FieldDefinitionOut, status_code=201)
def create_custom_field(item_id: int, payload: FieldDefinitionCreate, db: Session = Depends(get_db)):
    if not catalog_service.get_item(db, item_id):
        raise _not_found("Service item")
    try:
        return catalog_service.create_field(db, payload, item_id=item_id)
    except ConflictError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@router.put("/items/custom-fields/{field_id}", response_model=FieldDefinitionOut)
def update_custom_field(field_id: int, payload: FieldDefinitionUpdate, db: Session = Depends(get_db)):
    try:
        field = catalog_service.update_field(db, field_id, payload, item_owned=True)
    except ConflictError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    if not field:
        raise _not_found("Custom field")
    return field


@router.delete("/items/custom-fields/{field_id}", response_model=FieldDefinitionOut)
def delete_custom_field(field_id: int, db: Session = Depends(get_db)):
    deleted = catalog_service.delete_field(db, field_id, item_owned=True)
    if not deleted:
        raise _not_found("Custom field")
    return deleted


@router.get("/overview", response_model=Overview)
def overview(db: Session = Depends(get_db)):
    return catalog_service.get_overview(db)
