from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging
import os

from .config import settings
from .database import engine, Base
from .routers import analytics, clients, costing, invoices, pdf, pricing

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("invoicer")

# Create tables (handles new tables but won't add columns to existing ones)
Base.metadata.create_all(bind=engine)

BASE_REVISION = "a1f3c9e20b71"


def _run_migrations():
    """Run pending Alembic migrations on startup.

    Databases created by Base.metadata.create_all() before Alembic ran have
    no alembic_version table; those are stamped at the base migration first.
    """
    try:
        from alembic.config import Config
        from alembic import command
        from sqlalchemy import inspect

        alembic_ini = os.path.join(os.path.dirname(__file__), "..", "alembic.ini")
        if not os.path.exists(alembic_ini):
            logger.info("alembic.ini not found, skipping migrations")
            return

        alembic_cfg = Config(alembic_ini)
        alembic_cfg.set_main_option("sqlalchemy.url", settings.DATABASE_URL)

        insp = inspect(engine)
        has_alembic = "alembic_version" in insp.get_table_names()
        has_invoices = "invoices" in insp.get_table_names()

        if not has_alembic and has_invoices:
            logger.info("Stamping base migration %s (tables already exist)", BASE_REVISION)
            command.stamp(alembic_cfg, BASE_REVISION)

        logger.info("Running pending Alembic migrations...")
        command.upgrade(alembic_cfg, "head")
        logger.info("Migrations complete")

    except Exception as e:
        # Never let migration errors prevent app startup
        logger.warning(f"Alembic migration warning: {e}")


app = FastAPI(
    title="Furniture Invoicer",
    description="Furniture costing, invoicing and sales analytics",
    version="1.0.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# API routes
app.include_router(pricing.router, prefix="/api")
app.include_router(costing.router, prefix="/api")
app.include_router(clients.router, prefix="/api")
app.include_router(invoices.router, prefix="/api")
app.include_router(pdf.router, prefix="/api")
app.include_router(analytics.router, prefix="/api")


@app.get("/health")
def health():
    return {"status": "ok", "app": "furniture-invoicer"}


@app.on_event("startup")
def auto_migrate():
    """Run pending Alembic migrations on startup."""
    _run_migrations()


@app.on_event("startup")
def auto_seed():
    """Store the default rate table on first run."""
    from .database import SessionLocal
    db = SessionLocal()
    try:
        pricing.seed_pricing(db)
    finally:
        db.close()
