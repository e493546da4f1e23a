# bsg_helpdesk/core/database.py
from sqlalchemy import create_engine, event
from sqlalchemy.orm import declarative_base, sessionmaker
from bsg_helpdesk.core.config import get_settings

settings = get_settings()

is_sqlite = settings.DATABASE_URL.startswith("sqlite")
connect_args = {"check_same_thread": False} if is_sqlite else {}
engine = create_engine(settings.DATABASE_URL, connect_args=connect_args)

if is_sqlite:
    @event.listens_for(engine, "connect")
    def _enable_sqlite_fk(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def init_db() -> None:
    """Create every table known to the domain modules."""
    # imported for their side effect of registering tables on Base.metadata
    from bsg_helpdesk.bsg import models as _bsg_models  # noqa: F401
    from bsg_helpdesk.catalog import models as _catalog_models  # noqa: F401
    from bsg_helpdesk.ticket import models as _ticket_models  # noqa: F401

    Base.metadata.create_all(bind=engine)


# Common DB dependency
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
