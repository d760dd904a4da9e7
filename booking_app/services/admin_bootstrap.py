from __future__ import annotations

import logging

from sqlalchemy import func, inspect
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from booking_app.models.user import User, UserRole
from booking_app.services.passwords import hash_password, password_looks_hashed

logger = logging.getLogger(__name__)
BOOTSTRAP_PREFIX = "[ADMIN_BOOTSTRAP]"


def ensure_users_table(engine: Engine) -> None:
    inspector = inspect(engine)
    if not inspector.has_table("users"):
        raise RuntimeError("Tabela users não encontrada. Rode `alembic upgrade head` primeiro.")


def resolve_password_hash(password: str) -> str:
    if password_looks_hashed(password):
        logger.info("%s password already hashed; storing as-is", BOOTSTRAP_PREFIX)
        return password
    return hash_password(password)


def upsert_admin_user(
    db: Session,
    *,
    email: str,
    name: str,
    password: str | None,
) -> tuple[User, bool]:
    """Cria ou promove o usuário para ADMIN. Retorna ``(user, created)``."""
    email = email.strip().lower()
    existing = db.query(User).filter(func.lower(User.email) == email).first()
    if existing:
        existing.name = name or existing.name
        existing.role = UserRole.ADMIN
        if password:
            existing.password_hash = resolve_password_hash(password)
        db.commit()
        db.refresh(existing)
        return existing, False

    if not password:
        raise ValueError("Senha é obrigatória para criar um novo admin.")

    admin = User(
        email=email,
        name=name,
        password_hash=resolve_password_hash(password),
        role=UserRole.ADMIN,
    )
    db.add(admin)
    db.commit()
    db.refresh(admin)
    return admin, True


def bootstrap_initial_admin(db: Session, *, email: str, name: str, password: str) -> User | None:
    """Garante um ADMIN inicial quando nenhum existe; não altera contas existentes."""
    if not email or not password:
        logger.warning("%s skipped: configure BOOTSTRAP_ADMIN_EMAIL/BOOTSTRAP_ADMIN_PASSWORD.", BOOTSTRAP_PREFIX)
        return None

    admin_count = db.query(User).filter(User.role == UserRole.ADMIN).count()
    logger.info("%s found_admin_count=%s", BOOTSTRAP_PREFIX, admin_count)
    if admin_count:
        return None

    existing = db.query(User).filter(func.lower(User.email) == email.lower()).first()
    if existing:
        logger.info("%s exists id=%s email=%s", BOOTSTRAP_PREFIX, existing.id, existing.email)
        return None

    admin, _ = upsert_admin_user(db, email=email, name=name, password=password)
    logger.info("%s created success id=%s email=%s", BOOTSTRAP_PREFIX, admin.id, admin.email)
    return admin
