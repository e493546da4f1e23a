# bsg_helpdesk/bsg/services.py
from collections import defaultdict

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from bsg_helpdesk.bsg.models import (
    BsgFieldOption,
    BsgTemplate,
    BsgTemplateField,
    MasterDataEntity,
    TemplateCategory,
    TemplateUsageLog,
)
from bsg_helpdesk.bsg.schemas import (
    CategoryCreate,
    CategoryOut,
    FieldUsage,
    MasterDataCreate,
    TemplateAnalytics,
    TemplateCreate,
    TemplateOut,
    UsageCreate,
)
from bsg_helpdesk.core.logging import get_logger
from bsg_helpdesk.forms.models import FieldOption, TemplateField

logger = get_logger(__name__)


# ----- categories -----

def get_categories(db: Session) -> list[CategoryOut]:
    rows = (
        db.query(TemplateCategory, func.count(BsgTemplate.id))
        .outerjoin(
            BsgTemplate,
            (BsgTemplate.category_id == TemplateCategory.id) & (BsgTemplate.is_active.is_(True)),
        )
        .filter(TemplateCategory.is_active.is_(True))
        .group_by(TemplateCategory.id)
        .order_by(TemplateCategory.sort_order.asc(), TemplateCategory.name.asc())
        .all()
    )
    return [
        CategoryOut(
            id=c.id,
            name=c.name,
            display_name=c.display_name,
            description=c.description,
            icon=c.icon,
            template_count=count,
        )
        for c, count in rows
    ]


def get_category_by_name(db: Session, name: str) -> TemplateCategory | None:
    return db.query(TemplateCategory).filter(TemplateCategory.name == name).first()


def create_category(db: Session, payload: CategoryCreate) -> TemplateCategory:
    category = TemplateCategory(**payload.model_dump())
    db.add(category)
    db.commit()
    db.refresh(category)
    return category


# ----- templates -----

def _template_out(t: BsgTemplate) -> TemplateOut:
    return TemplateOut(
        id=t.id,
        template_number=t.template_number,
        name=t.name,
        display_name=t.display_name,
        description=t.description,
        popularity_score=t.popularity_score or 0,
        usage_count=t.usage_count or 0,
        category_name=t.category.name,
        category_display_name=t.category.display_name,
    )


def search_templates(
    db: Session,
    category_id: int | None = None,
    search: str | None = None,
    limit: int = 20,
    offset: int = 0,
) -> list[TemplateOut]:
    query = db.query(BsgTemplate).join(TemplateCategory).filter(BsgTemplate.is_active.is_(True))
    if category_id is not None:
        query = query.filter(BsgTemplate.category_id == category_id)
    if search:
        pattern = f"%{search}%"
        query = query.filter(
            or_(BsgTemplate.name.ilike(pattern), BsgTemplate.description.ilike(pattern))
        )
    templates = (
        query.order_by(
            BsgTemplate.popularity_score.desc(),
            BsgTemplate.usage_count.desc(),
            BsgTemplate.template_number.asc(),
        )
        .limit(limit)
        .offset(offset)
        .all()
    )
    return [_template_out(t) for t in templates]


def get_template(db: Session, template_id: int) -> BsgTemplate | None:
    return db.query(BsgTemplate).filter(BsgTemplate.id == template_id).first()


def create_template(db: Session, payload: TemplateCreate) -> BsgTemplate:
    data = payload.model_dump(exclude={"fields"})
    data["display_name"] = data["display_name"] or data["name"]
    template = BsgTemplate(**data)
    for f in payload.fields:
        field = BsgTemplateField(**f.model_dump(exclude={"options"}))
        field.options = [
            BsgFieldOption(
                option_value=o.value,
                option_label=o.label,
                is_default=o.is_default,
                sort_order=o.sort_order,
            )
            for o in f.options
        ]
        template.fields.append(field)
    db.add(template)
    db.commit()
    db.refresh(template)
    return template


def to_template_field(f: BsgTemplateField) -> TemplateField:
    return TemplateField(
        id=f.id,
        field_name=f.field_name,
        field_label=f.field_label,
        field_type=f.field_type,
        is_required=bool(f.is_required),
        category=f.category,
        sort_order=f.sort_order or 0,
        max_length=f.max_length,
        placeholder_text=f.placeholder_text,
        help_text=f.help_text,
        validation_rules=f.validation_rules,
        options=[
            FieldOption(
                value=o.option_value,
                label=o.option_label,
                is_default=bool(o.is_default),
                sort_order=o.sort_order or 0,
            )
            for o in f.options
        ],
    )


def get_template_fields(db: Session, template_id: int) -> list[TemplateField] | None:
    template = get_template(db, template_id)
    if not template:
        return None
    fields = sorted(template.fields, key=lambda f: (f.sort_order or 0, f.id))
    return [to_template_field(f) for f in fields]


# ----- master data -----

def get_master_data(db: Session, data_type: str, search: str | None = None) -> list[MasterDataEntity]:
    query = db.query(MasterDataEntity).filter(
        MasterDataEntity.data_type == data_type,
        MasterDataEntity.is_active.is_(True),
    )
    if search:
        pattern = f"%{search}%"
        query = query.filter(
            or_(
                MasterDataEntity.name.ilike(pattern),
                MasterDataEntity.display_name.ilike(pattern),
                MasterDataEntity.code.ilike(pattern),
            )
        )
    return query.order_by(MasterDataEntity.sort_order.asc(), MasterDataEntity.name.asc()).all()


def create_master_data(db: Session, data_type: str, payload: MasterDataCreate) -> MasterDataEntity:
    data = payload.model_dump(exclude={"metadata"})
    entity = MasterDataEntity(data_type=data_type, extra=payload.metadata, **data)
    db.add(entity)
    db.commit()
    db.refresh(entity)
    return entity


# ----- usage & analytics -----

def log_usage(db: Session, template_id: int, payload: UsageCreate) -> BsgTemplate | None:
    template = get_template(db, template_id)
    if not template:
        return None
    db.add(TemplateUsageLog(template_id=template_id, **payload.model_dump()))
    if payload.action_type == "completed":
        template.usage_count = (template.usage_count or 0) + 1
        template.popularity_score = (template.popularity_score or 0) + 1
    db.commit()
    db.refresh(template)
    logger.info("Template %s usage: %s", template_id, payload.action_type)
    return template


def get_analytics(db: Session, top: int = 5) -> TemplateAnalytics:
    """
    Field optimization report.

    A field definition (name + type) used by more than one template is
    "common"; the reuse ratio is the share of field instances that belong to
    common definitions.
    """
    rows = (
        db.query(BsgTemplateField.field_name, BsgTemplateField.field_type, BsgTemplate.name)
        .join(BsgTemplate, BsgTemplateField.template_id == BsgTemplate.id)
        .all()
    )
    templates_by_field: dict[tuple[str, str], list[str]] = defaultdict(list)
    for field_name, field_type, template_name in rows:
        templates_by_field[(field_name, field_type)].append(template_name)

    common = [
        FieldUsage(
            field_name=name,
            field_type=ftype,
            usage_count=len(names),
            templates=sorted(set(names)),
        )
        for (name, ftype), names in templates_by_field.items()
        if len(names) > 1
    ]
    common.sort(key=lambda u: (-u.usage_count, u.field_name))
    reused = sum(u.usage_count for u in common)
    total_fields = len(rows)

    top_templates = (
        db.query(BsgTemplate)
        .filter(BsgTemplate.is_active.is_(True))
        .order_by(BsgTemplate.usage_count.desc(), BsgTemplate.popularity_score.desc(), BsgTemplate.id.asc())
        .limit(top)
        .all()
    )
    actions = (
        db.query(TemplateUsageLog.action_type, func.count(TemplateUsageLog.id))
        .group_by(TemplateUsageLog.action_type)
        .all()
    )

    return TemplateAnalytics(
        total_templates=db.query(BsgTemplate).count(),
        total_fields=total_fields,
        distinct_fields=len(templates_by_field),
        common_fields=common,
        unique_field_count=len(templates_by_field) - len(common),
        reused_field_instances=reused,
        reuse_ratio=round(reused / total_fields, 4) if total_fields else 0.0,
        top_templates=[_template_out(t) for t in top_templates],
        usage_by_action=dict(actions),
    )
