from __future__ import annotations

import logging
from datetime import date, datetime, time
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from booking_app.models.barbershop import BarbershopService
from booking_app.models.booking import Booking
from booking_app.models.log import CANCEL_BOOKING
from booking_app.services.accounts import safe_user
from booking_app.services.audit import describe_cancellation, record_action
from booking_app.services.authorization_service import STAFF_ROLES, AuthorizationService
from booking_app.services.errors import BadRequest, Internal, NotFound
from booking_app.services.identity import Identity

logger = logging.getLogger(__name__)


def parse_day(value: Optional[str]) -> Optional[date]:
    """Aceita `YYYY-MM-DD` ou um datetime ISO; vazio significa sem filtro."""
    if not value:
        return None
    try:
        return datetime.fromisoformat(value).date()
    except ValueError:
        try:
            return date.fromisoformat(value)
        except ValueError as exc:
            raise BadRequest("Data inválida") from exc


def day_bounds(day: date) -> Tuple[datetime, datetime]:
    """Janela inclusiva ``[00:00:00, 23:59:59.999999]`` do dia."""
    return datetime.combine(day, time.min), datetime.combine(day, time.max)


def _bookings_query(db: Session):
    return db.query(Booking).options(
        joinedload(Booking.service).joinedload(BarbershopService.barbershop),
        joinedload(Booking.user),
    )


def find_bookings(
    db: Session,
    *,
    barbershop_id: Optional[str] = None,
    day: Optional[date] = None,
    newest_first: bool = True,
) -> List[Booking]:
    query = _bookings_query(db)

    if barbershop_id:
        query = query.join(BarbershopService, Booking.service_id == BarbershopService.id).filter(
            BarbershopService.barbershop_id == barbershop_id
        )

    if day is not None:
        start, end = day_bounds(day)
        query = query.filter(Booking.date >= start, Booking.date <= end)

    if newest_first:
        query = query.order_by(Booking.date.desc(), Booking.id.desc())
    else:
        query = query.order_by(Booking.created_at.asc(), Booking.id.asc())

    return query.all()


def serialize_booking(booking: Booking) -> Dict[str, Any]:
    service = booking.service
    barbershop = service.barbershop
    return {
        "id": booking.id,
        "date": booking.date,
        "user_id": booking.user_id,
        "service_id": booking.service_id,
        "service": {
            "id": service.id,
            "name": service.name,
            "price": service.price,
            "barbershop_id": service.barbershop_id,
            "barbershop": {
                "id": barbershop.id,
                "name": barbershop.name,
                "image_url": barbershop.image_url,
            },
        },
        "user": safe_user(booking.user),
    }


def list_bookings(
    db: Session,
    *,
    barbershop_id: Optional[str] = None,
    day: Optional[date] = None,
    newest_first: bool = True,
) -> List[Dict[str, Any]]:
    bookings = find_bookings(db, barbershop_id=barbershop_id, day=day, newest_first=newest_first)
    return [serialize_booking(booking) for booking in bookings]


def list_taken_slots(db: Session, *, barbershop_id: str, day: date) -> List[Dict[str, Any]]:
    """Horários já reservados no dia, sem dados do cliente."""
    bookings = find_bookings(db, barbershop_id=barbershop_id, day=day, newest_first=False)
    return [
        {"id": booking.id, "service_id": booking.service_id, "date": booking.date}
        for booking in bookings
    ]


def cancel_booking(
    db: Session,
    identity: Identity,
    booking_id: str,
    *,
    caller_barbershop_id: Optional[str] = None,
) -> None:
    booking = _bookings_query(db).filter(Booking.id == booking_id).first()
    if booking is None:
        raise NotFound("Agendamento não encontrado")

    AuthorizationService.ensure_role(identity, STAFF_ROLES)
    AuthorizationService.ensure_shop_scope(
        identity,
        resource_barbershop_id=booking.service.barbershop_id,
        caller_barbershop_id=caller_barbershop_id,
    )

    details = describe_cancellation(identity, booking)

    # Log e remoção no mesmo commit: ou os dois persistem, ou nenhum.
    try:
        deleted = (
            db.query(Booking)
            .filter(Booking.id == booking_id)
            .delete(synchronize_session=False)
        )
        if deleted == 0:
            # outro cancelamento venceu entre a leitura e a remoção
            db.rollback()
            logger.info("Booking already cancelled booking_id=%s", booking_id)
            raise NotFound("Agendamento não encontrado")
        record_action(db, identity, action=CANCEL_BOOKING, details=details)
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Booking cancellation failed booking_id=%s", booking_id)
        raise Internal("Erro ao cancelar agendamento") from exc

    logger.info(
        "Booking cancelled booking_id=%s by=%s role=%s",
        booking_id,
        identity.user_id,
        identity.role.value,
    )
