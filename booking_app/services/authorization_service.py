from __future__ import annotations

import logging
from typing import Iterable, Optional

from fastapi import Request

from booking_app.models.user import UserRole
from booking_app.services.errors import BadRequest, Forbidden
from booking_app.services.identity import Identity

logger = logging.getLogger(__name__)

STAFF_ROLES = frozenset({UserRole.ADMIN, UserRole.BARBER})
ADMIN_ONLY = frozenset({UserRole.ADMIN})


class AuthorizationService:
    """Centraliza as checagens de cargo e de escopo por barbearia."""

    @staticmethod
    def log_access_denied(
        *,
        reason: str,
        identity: Identity,
        request: Optional[Request] = None,
        detail: Optional[str] = None,
    ) -> None:
        endpoint = f"{request.method} {request.url.path}" if request is not None else None
        logger.warning(
            "Access denied (%s): user_id=%s user_role=%s endpoint=%s detail=%s",
            reason,
            identity.user_id,
            identity.role.value,
            endpoint,
            detail,
        )

    @classmethod
    def ensure_role(
        cls,
        identity: Identity,
        roles: Iterable[UserRole],
        *,
        request: Optional[Request] = None,
        message: str = "Não autorizado",
    ) -> Identity:
        allowed = {UserRole(role) for role in roles}
        if identity.role not in allowed:
            cls.log_access_denied(
                reason="role_denied",
                identity=identity,
                request=request,
                detail=",".join(sorted(role.value for role in allowed)),
            )
            raise Forbidden(message)
        return identity

    @classmethod
    def ensure_shop_scope(
        cls,
        identity: Identity,
        *,
        resource_barbershop_id: str,
        caller_barbershop_id: Optional[str],
    ) -> None:
        """BARBER só atua na barbearia informada; ADMIN não tem escopo."""
        if identity.role == UserRole.ADMIN:
            return

        if not caller_barbershop_id:
            raise BadRequest("ID da barbearia não fornecido")

        if caller_barbershop_id != resource_barbershop_id:
            cls.log_access_denied(
                reason="shop_mismatch",
                identity=identity,
                detail=f"caller={caller_barbershop_id} resource={resource_barbershop_id}",
            )
            raise Forbidden("Você não tem permissão para cancelar agendamentos desta barbearia")
