from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from sqlalchemy.orm import Session

from booking_app.models.user import User, UserRole
from booking_app.services.errors import Unauthenticated
from booking_app.services.sessions import decode_session


@dataclass(frozen=True)
class Identity:
    """Quem está chamando, resolvido uma vez na borda HTTP e passado adiante."""

    user_id: str
    name: str
    email: str
    role: UserRole

    @classmethod
    def from_user(cls, user: User) -> "Identity":
        return cls(user_id=user.id, name=user.name, email=user.email, role=UserRole(user.role))

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN


def resolve_identity(db: Session, token: Optional[str]) -> Identity:
    if not token:
        raise Unauthenticated("Não autorizado")

    payload = decode_session(token)
    if not payload:
        raise Unauthenticated("Sessão expirada")

    user_id = payload.get("user_id")
    if not user_id:
        raise Unauthenticated("Sessão inválida")

    user = db.query(User).filter(User.id == str(user_id)).first()
    if user is None:
        raise Unauthenticated("Usuário não encontrado")

    return Identity.from_user(user)
