from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel
from sqlalchemy.orm import Session

from booking_app.core.database import get_db
from booking_app.deps import authenticated_body, get_identity
from booking_app.services.accounts import AccountInput, create_barber, list_barbers
from booking_app.services.identity import Identity

router = APIRouter(prefix="/api/barbers", tags=["barbers"])


class BarberCreate(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    phone_number: Optional[str] = None
    image: Optional[str] = None


@router.get("")
def get_barbers(db: Session = Depends(get_db)):
    return {"barbers": list_barbers(db)}


@router.post("", status_code=status.HTTP_201_CREATED)
def post_barber(
    identity: Identity = Depends(get_identity),
    payload: BarberCreate = Depends(authenticated_body(BarberCreate)),
    db: Session = Depends(get_db),
):
    # 403 para não-admin mesmo autenticado; 401 vem de get_identity
    barber = create_barber(db, identity, AccountInput(**payload.model_dump()))
    return {"message": "Barbeiro criado com sucesso", "barber": barber}
