from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from booking_app.core.database import get_db
from booking_app.deps import require_role
from booking_app.services.authorization_service import STAFF_ROLES
from booking_app.services.bookings import cancel_booking, list_bookings, parse_day
from booking_app.services.identity import Identity

router = APIRouter(prefix="/api/admin/bookings", tags=["admin-bookings"])


@router.get("")
def admin_list_bookings(
    barbershop_id: Optional[str] = Query(None, alias="barbershopId"),
    day: Optional[str] = Query(None, alias="date"),
    _: Identity = Depends(require_role(STAFF_ROLES)),
    db: Session = Depends(get_db),
):
    return list_bookings(db, barbershop_id=barbershop_id, day=parse_day(day), newest_first=True)


@router.delete("/{booking_id}")
def admin_cancel_booking(
    booking_id: str,
    barbershop_id: Optional[str] = Query(None, alias="barbershopId"),
    identity: Identity = Depends(require_role(STAFF_ROLES)),
    db: Session = Depends(get_db),
):
    cancel_booking(db, identity, booking_id, caller_barbershop_id=barbershop_id)
    return {"message": "Agendamento cancelado com sucesso"}
