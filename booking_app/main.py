import logging
import os
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from booking_app.core.config import (
    BOOTSTRAP_ADMIN_EMAIL,
    BOOTSTRAP_ADMIN_NAME,
    BOOTSTRAP_ADMIN_PASSWORD,
    CORS_ORIGINS,
    DATABASE_URL,
)
from booking_app.core.database import Base, SessionLocal, engine
from booking_app.core.error_handlers import register_exception_handlers
from booking_app.core.logging_setup import configure_logging
from booking_app.core.startup_checks import ensure_migrations_applied, validate_database_environment
from booking_app.middleware.observability import ObservabilityMiddleware
from booking_app.middleware.session import SessionMiddleware
import booking_app.models  # garante que os models são importados antes do create_all

from booking_app.services.admin_bootstrap import BOOTSTRAP_PREFIX, bootstrap_initial_admin
from booking_app.routers.auth import router as auth_router
from booking_app.routers.register import router as register_router
from booking_app.routers.users import router as users_router
from booking_app.routers.barbers import router as barbers_router
from booking_app.routers.barbershops import router as barbershops_router
from booking_app.routers.admin_barbershops import router as admin_barbershops_router
from booking_app.routers.admin_bookings import router as admin_bookings_router
from booking_app.routers.admin_logs import router as admin_logs_router

configure_logging()

logger = logging.getLogger(__name__)
REPO_ROOT = Path(__file__).resolve().parents[1]
ALEMBIC_CONFIG_PATH = Path(
    os.getenv("ALEMBIC_CONFIG", str(REPO_ROOT / "alembic.ini"))
)


@asynccontextmanager
async def lifespan(_: FastAPI):
    _startup_tasks()
    yield


app = FastAPI(
    title="Barbershop Booking API",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(ObservabilityMiddleware)
app.add_middleware(SessionMiddleware)
register_exception_handlers(app)


def _bootstrap_initial_admin() -> None:
    db = SessionLocal()
    try:
        bootstrap_initial_admin(
            db,
            email=BOOTSTRAP_ADMIN_EMAIL,
            name=BOOTSTRAP_ADMIN_NAME,
            password=BOOTSTRAP_ADMIN_PASSWORD,
        )
    except Exception:
        logger.exception("%s ERROR bootstrap failed", BOOTSTRAP_PREFIX)
        raise
    finally:
        db.close()


def _startup_tasks() -> None:
    try:
        validate_database_environment()
        # Em produção o schema vem das migrations.
        if DATABASE_URL.startswith("sqlite"):
            Base.metadata.create_all(bind=engine)
        ensure_migrations_applied(engine=engine, alembic_config_path=ALEMBIC_CONFIG_PATH)
        _bootstrap_initial_admin()
    except Exception:
        logger.exception("%s ERROR startup failed", BOOTSTRAP_PREFIX)
        raise


# Routers
app.include_router(auth_router)
app.include_router(register_router)
app.include_router(users_router)
app.include_router(barbers_router)
app.include_router(barbershops_router)
app.include_router(admin_barbershops_router)
app.include_router(admin_bookings_router)
app.include_router(admin_logs_router)


@app.get("/")
def root():
    return {"status": "ok"}


@app.get("/health")
def health():
    return {"status": "healthy"}
