# booking_app/deps.py
from __future__ import annotations

from typing import Iterable, Type, TypeVar

from fastapi import Depends, Request
from pydantic import BaseModel, ValidationError
from sqlalchemy.orm import Session

from booking_app.core.database import get_db
from booking_app.core.request_context import set_request_context
from booking_app.models.user import UserRole
from booking_app.services.authorization_service import AuthorizationService
from booking_app.services.errors import BadRequest
from booking_app.services.identity import Identity, resolve_identity
from booking_app.services.sessions import SESSION_COOKIE

ModelT = TypeVar("ModelT", bound=BaseModel)


def get_identity(
    request: Request,
    db: Session = Depends(get_db),
) -> Identity:
    """Resolve o chamador a partir do cookie de sessão (401 se não houver)."""
    token = getattr(request.state, "session_token", None) or request.cookies.get(SESSION_COOKIE)
    identity = resolve_identity(db, token)
    request.state.identity = identity
    set_request_context(user_id=identity.user_id)
    return identity


def require_role(roles: Iterable[UserRole]):
    allowed = frozenset(UserRole(role) for role in roles)

    def _dependency(
        request: Request,
        identity: Identity = Depends(get_identity),
    ) -> Identity:
        return AuthorizationService.ensure_role(identity, allowed, request=request)

    return _dependency


def authenticated_body(model: Type[ModelT]):
    """Lê o corpo JSON só depois de resolver a sessão (401 antes de 400)."""

    async def _dependency(
        request: Request,
        _: Identity = Depends(get_identity),
    ) -> ModelT:
        raw = await request.body()
        try:
            return model.model_validate_json(raw or b"{}")
        except ValidationError as exc:
            errors = exc.errors()
            message = errors[0].get("msg", "Dados inválidos") if errors else "Dados inválidos"
            raise BadRequest(message) from exc

    return _dependency
