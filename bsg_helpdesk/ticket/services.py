# bsg_helpdesk/ticket/services.py
from typing import Any

from sqlalchemy.orm import Session
from bsg_helpdesk.bsg import services as bsg_service
from bsg_helpdesk.bsg.schemas import UsageCreate
from bsg_helpdesk.core.errors import FormValidationError, NotFoundError
from bsg_helpdesk.core.logging import get_logger
from bsg_helpdesk.forms.field_types import behavior_for
from bsg_helpdesk.forms.models import TemplateField
from bsg_helpdesk.forms.validation import validate_form
from bsg_helpdesk.ticket.models import Ticket
from bsg_helpdesk.ticket.schemas import TicketCreate, TicketUpdate

logger = get_logger(__name__)

def get_all_tickets(db: Session, status: str | None = None) -> list[Ticket]:
    query = db.query(Ticket)
    if status:
        query = query.filter(Ticket.status == status)
    return query.order_by(Ticket.id.asc()).all()

def get_ticket(db: Session, ticket_id: int) -> Ticket | None:
    return db.query(Ticket).filter(Ticket.id == ticket_id).first()

def clean_custom_fields(fields: list[TemplateField], values: dict[str, Any]) -> dict[str, Any]:
    """Validate template values; returns them unformatted, unknown keys dropped."""
    errors = validate_form(fields, values)
    if errors:
        raise FormValidationError(errors)
    cleaned = {}
    for field in fields:
        value = values.get(field.field_name)
        if value is None or value == "":
            continue
        cleaned[field.field_name] = behavior_for(field).unformat(field, value)
    return cleaned

def create_ticket(db: Session, payload: TicketCreate) -> Ticket:
    data = payload.model_dump()
    if payload.template_id is not None:
        fields = bsg_service.get_template_fields(db, payload.template_id)
        if fields is None:
            raise NotFoundError("Template not found")
        data["custom_fields"] = clean_custom_fields(fields, payload.custom_fields)
    else:
        data["custom_fields"] = {}

    db_ticket = Ticket(**data)
    db.add(db_ticket)
    db.commit()
    db.refresh(db_ticket)

    if payload.template_id is not None:
        bsg_service.log_usage(db, payload.template_id, UsageCreate(action_type="completed"))
        db.refresh(db_ticket)
    logger.info("Created ticket %s (template %s)", db_ticket.id, payload.template_id)
    return db_ticket

def update_ticket(db: Session, ticket_id: int, payload: TicketUpdate) -> Ticket | None:
    db_ticket = get_ticket(db, ticket_id)
    if not db_ticket:
        return None
    for field, value in payload.model_dump(exclude_unset=True).items():
        setattr(db_ticket, field, value)
    db.commit()
    db.refresh(db_ticket)
    return db_ticket

def delete_ticket(db: Session, ticket_id: int) -> Ticket | None:
    db_ticket = get_ticket(db, ticket_id)
    if not db_ticket:
        return None
    db.delete(db_ticket)
    db.commit()
    return db_ticket
