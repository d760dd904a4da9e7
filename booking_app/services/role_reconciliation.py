from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, List

from sqlalchemy import func
from sqlalchemy.orm import Session

from booking_app.models.user import User, UserRole

logger = logging.getLogger(__name__)


@dataclass
class ReconciliationResult:
    promoted: List[str] = field(default_factory=list)
    demoted: List[str] = field(default_factory=list)
    missing: List[str] = field(default_factory=list)


def reconcile_admin_roles(db: Session, admin_emails: Iterable[str]) -> ReconciliationResult:
    """Deixa como ADMIN exatamente os emails da lista; outros ADMIN viram USER.

    Tudo em um único commit. Emails sem conta são apenas reportados.
    """
    allowed = sorted({email.strip().lower() for email in admin_emails if email and email.strip()})
    if not allowed:
        raise ValueError("Lista de administradores vazia")

    result = ReconciliationResult()

    for email in allowed:
        user = db.query(User).filter(func.lower(User.email) == email).first()
        if user is None:
            result.missing.append(email)
            continue
        if UserRole(user.role) != UserRole.ADMIN:
            user.role = UserRole.ADMIN
            result.promoted.append(user.email)

    stale_admins = (
        db.query(User)
        .filter(User.role == UserRole.ADMIN, func.lower(User.email).notin_(allowed))
        .all()
    )
    for user in stale_admins:
        user.role = UserRole.USER
        result.demoted.append(user.email)

    db.commit()
    logger.info(
        "Admin roles reconciled promoted=%s demoted=%s missing=%s",
        len(result.promoted),
        len(result.demoted),
        len(result.missing),
    )
    return result
