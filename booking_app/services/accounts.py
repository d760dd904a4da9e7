from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from booking_app.models.user import User, UserRole
from booking_app.services.authorization_service import ADMIN_ONLY, AuthorizationService
from booking_app.services.errors import BadRequest, Conflict, Forbidden, NotFound
from booking_app.services.identity import Identity
from booking_app.services.passwords import MIN_PASSWORD_LENGTH, hash_password

logger = logging.getLogger(__name__)

ASSIGNABLE_ROLES = frozenset({UserRole.BARBER, UserRole.USER})


@dataclass
class AccountInput:
    name: Optional[str]
    email: Optional[str]
    password: Optional[str]
    phone_number: Optional[str] = None
    image: Optional[str] = None


@dataclass
class UserPatch:
    name: Optional[str] = None
    email: Optional[str] = None
    phone_number: Optional[str] = None
    role: Optional[str] = None


def safe_user(user: User, *, with_role: bool = False) -> Dict[str, Any]:
    """Projeção de usuário sem o hash de senha."""
    data: Dict[str, Any] = {
        "id": user.id,
        "name": user.name,
        "email": user.email,
        "phone_number": user.phone_number,
        "image": user.image,
    }
    if with_role:
        data["role"] = UserRole(user.role).value
        data["created_at"] = user.created_at
    return data


def normalize_email(email: Optional[str]) -> str:
    return (email or "").strip().lower()


def _clean_optional(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


def _validate_email(email: str) -> None:
    if not email or "@" not in email:
        raise BadRequest("Email inválido")


def _email_taken(db: Session, email: str, *, exclude_user_id: Optional[str] = None) -> bool:
    query = db.query(User.id).filter(func.lower(User.email) == email)
    if exclude_user_id is not None:
        query = query.filter(User.id != exclude_user_id)
    return query.first() is not None


def _create_account(db: Session, payload: AccountInput, *, role: UserRole) -> User:
    name = (payload.name or "").strip()
    if not name:
        raise BadRequest("Nome é obrigatório")

    email = normalize_email(payload.email)
    _validate_email(email)

    if not payload.password or len(payload.password) < MIN_PASSWORD_LENGTH:
        raise BadRequest(f"Senha deve ter no mínimo {MIN_PASSWORD_LENGTH} caracteres")

    # Checagem prévia; a constraint unique do banco cobre a corrida entre requisições.
    if _email_taken(db, email):
        raise Conflict("Email já cadastrado")

    user = User(
        name=name,
        email=email,
        password_hash=hash_password(payload.password),
        phone_number=_clean_optional(payload.phone_number),
        image=_clean_optional(payload.image),
        role=role,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        logger.warning("Duplicate email on insert email=%s", email)
        raise Conflict("Email já cadastrado") from exc
    db.refresh(user)
    logger.info("Account created user_id=%s role=%s", user.id, role.value)
    return user


def register_user(db: Session, payload: AccountInput) -> Dict[str, Any]:
    user = _create_account(db, payload, role=UserRole.USER)
    return {"id": user.id, "name": user.name, "email": user.email}


def create_barber(db: Session, identity: Identity, payload: AccountInput) -> Dict[str, Any]:
    AuthorizationService.ensure_role(identity, ADMIN_ONLY)
    barber = _create_account(db, payload, role=UserRole.BARBER)
    return safe_user(barber)


def list_barbers(db: Session) -> List[Dict[str, Any]]:
    barbers = (
        db.query(User)
        .filter(User.role == UserRole.BARBER)
        .order_by(User.name.asc())
        .all()
    )
    return [safe_user(barber) for barber in barbers]


def list_customers(db: Session, identity: Identity) -> List[Dict[str, Any]]:
    AuthorizationService.ensure_role(identity, ADMIN_ONLY)
    users = (
        db.query(User)
        .filter(User.role == UserRole.USER)
        .order_by(User.created_at.desc())
        .all()
    )
    return [safe_user(user, with_role=True) for user in users]


def update_user(db: Session, identity: Identity, target_id: str, patch: UserPatch) -> Dict[str, Any]:
    AuthorizationService.ensure_role(identity, ADMIN_ONLY)

    target = db.query(User).filter(User.id == target_id).first()
    if target is None:
        raise NotFound("Usuário não encontrado")

    if UserRole(target.role) == UserRole.ADMIN:
        raise Forbidden("Não é possível alterar um administrador")

    if patch.role is not None:
        try:
            new_role = UserRole(patch.role)
        except ValueError:
            new_role = None
        if new_role not in ASSIGNABLE_ROLES:
            raise BadRequest("Alteração de cargo não permitida")
        target.role = new_role

    if patch.name is not None:
        name = patch.name.strip()
        if not name:
            raise BadRequest("Nome é obrigatório")
        target.name = name

    if patch.email is not None:
        email = normalize_email(patch.email)
        _validate_email(email)
        if _email_taken(db, email, exclude_user_id=target.id):
            raise Conflict("Email já cadastrado")
        target.email = email

    if patch.phone_number is not None:
        target.phone_number = _clean_optional(patch.phone_number)

    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise Conflict("Email já cadastrado") from exc
    db.refresh(target)
    logger.info(
        "User updated target_id=%s by=%s role=%s",
        target.id,
        identity.user_id,
        UserRole(target.role).value,
    )
    return safe_user(target, with_role=True)
