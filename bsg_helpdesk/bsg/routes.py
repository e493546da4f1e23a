# bsg_helpdesk/bsg/routes.py
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from bsg_helpdesk.core.database import get_db
from bsg_helpdesk.bsg.schemas import (
    CategoryOut,
    MasterDataOut,
    TemplateAnalytics,
    TemplateFieldOut,
    TemplateOut,
    UsageCreate,
    UsageOut,
)
from bsg_helpdesk.bsg import services as bsg_service
router = APIRouter(prefix="/bsg-templates", tags=["BSG Templates"])


@router.get("/categories", response_model=list[CategoryOut])
def list_categories(db: Session = Depends(get_db)):
    return bsg_service.get_categories(db)


@router.get("/templates", response_model=list[TemplateOut])
def list_templates(
    category_id: int | None = Query(default=None, alias="categoryId"),
    search: str | None = Query(default=None, description="Match on name or description"),
    limit: int = Query(default=20, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
    db: Session = Depends(get_db),
):
    return bsg_service.search_templates(db, category_id, search, limit, offset)


@router.get("/templates/{template_id}/fields", response_model=list[TemplateFieldOut])
def template_fields(template_id: int, db: Session = Depends(get_db)):
    fields = bsg_service.get_template_fields(db, template_id)
    if fields is None:
        raise HTTPException(status_code=404, detail="Template not found")
    return fields


@router.post("/templates/{template_id}/usage", response_model=UsageOut)
def log_usage(template_id: int, payload: UsageCreate, db: Session = Depends(get_db)):
    template = bsg_service.log_usage(db, template_id, payload)
    if not template:
        raise HTTPException(status_code=404, detail="Template not found")
    return UsageOut(usage_count=template.usage_count)


@router.get("/master-data/{data_type}", response_model=list[MasterDataOut])
def master_data(
    data_type: str,
    search: str | None = Query(default=None),
    db: Session = Depends(get_db),
):
    return bsg_service.get_master_data(db, data_type, search)


@router.get("/analytics", response_model=TemplateAnalytics)
def analytics(top: int = Query(default=5, ge=1, le=50), db: Session = Depends(get_db)):
    return bsg_service.get_analytics(db, top)
