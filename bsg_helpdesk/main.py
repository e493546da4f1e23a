# bsg_helpdesk/main.py
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from bsg_helpdesk.core.config import get_settings
from bsg_helpdesk.core.database import SessionLocal, init_db
from bsg_helpdesk.core.logging import get_logger, setup_logging
from bsg_helpdesk.bsg.routes import router as bsg_router
from bsg_helpdesk.bsg.seed import seed_demo_data
from bsg_helpdesk.catalog.routes import router as catalog_router
from bsg_helpdesk.ticket.routes import router as ticket_router

setup_logging()
logger = get_logger(__name__)

init_db()

settings = get_settings()
if settings.SEED_DEMO_DATA:
    with SessionLocal() as db:
        seed_demo_data(db)

app = FastAPI(
    title=settings.APP_NAME,
    description=settings.APP_DESC,
    version=settings.APP_VERSION,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routers
app.include_router(catalog_router, prefix="/api")
app.include_router(bsg_router, prefix="/api")
app.include_router(ticket_router, prefix="/api")

logger.info("%s %s ready", settings.APP_NAME, settings.APP_VERSION)

@app.get("/health", tags=["Health"])
def health():
    return {"status": "ok"}
