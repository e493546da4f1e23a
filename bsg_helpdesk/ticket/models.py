# bsg_helpdesk/ticket/models.py
from sqlalchemy import Column, DateTime, ForeignKey, Integer, JSON, String, func
from bsg_helpdesk.core.database import Base

class Ticket(Base):
    __tablename__ = "tickets"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, index=True, nullable=False)
    description = Column(String, nullable=False)
    status = Column(String, default="open", index=True)
    template_id = Column(Integer, ForeignKey("bsg_templates.id", ondelete="SET NULL"), index=True)
    # unformatted values keyed by template field name
    custom_fields = Column(JSON, default=dict)
    created_at = Column(DateTime, server_default=func.now())
