from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from booking_app.core.database import get_db
from booking_app.services.barbershops import get_barbershop
from booking_app.services.bookings import list_taken_slots, parse_day
from booking_app.services.errors import BadRequest

router = APIRouter(prefix="/api/barbershops", tags=["barbershops"])


@router.get("/{barbershop_id}")
def get_public_barbershop(barbershop_id: str, db: Session = Depends(get_db)):
    return get_barbershop(db, barbershop_id)


@router.get("/{barbershop_id}/bookings")
def get_taken_slots(
    barbershop_id: str,
    day: Optional[str] = Query(None, alias="date"),
    db: Session = Depends(get_db),
):
    parsed = parse_day(day)
    if parsed is None:
        raise BadRequest("Data é obrigatória")
    # garante 404 para barbearia inexistente
    get_barbershop(db, barbershop_id)
    return list_taken_slots(db, barbershop_id=barbershop_id, day=parsed)
