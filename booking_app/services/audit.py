from __future__ import annotations

from typing import Any, Dict, List

from sqlalchemy.orm import Session, joinedload

from booking_app.models.booking import Booking
from booking_app.models.log import CANCEL_BOOKING, Log
from booking_app.services.formatting import format_day_month_time
from booking_app.services.identity import Identity


def record_action(db: Session, identity: Identity, *, action: str, details: str) -> Log:
    """Adiciona a entrada de auditoria sem commit; quem chama controla a transação."""
    entry = Log(action=action, details=details, user_id=identity.user_id)
    db.add(entry)
    return entry


def describe_cancellation(identity: Identity, booking: Booking) -> str:
    service = booking.service
    return (
        f"Agendamento cancelado por {identity.name} ({identity.role.value}): "
        f"{service.name} na barbearia {service.barbershop.name} "
        f"para o cliente {booking.user.name} - Data: {format_day_month_time(booking.date)}"
    )


def list_logs(db: Session, *, action: str = CANCEL_BOOKING) -> List[Dict[str, Any]]:
    entries = (
        db.query(Log)
        .options(joinedload(Log.user))
        .filter(Log.action == action)
        .order_by(Log.created_at.desc(), Log.id.desc())
        .all()
    )
    return [
        {
            "id": entry.id,
            "action": entry.action,
            "details": entry.details,
            "user_id": entry.user_id,
            "created_at": entry.created_at,
            "user": {
                "name": entry.user.name if entry.user else None,
                "email": entry.user.email if entry.user else None,
            },
        }
        for entry in entries
    ]
