from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel
from sqlalchemy.orm import Session

from booking_app.core.database import get_db
from booking_app.services.accounts import AccountInput, register_user

router = APIRouter(prefix="/api/register", tags=["register"])


class RegisterPayload(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    phone_number: Optional[str] = None


@router.post("", status_code=status.HTTP_201_CREATED)
def register(payload: RegisterPayload, db: Session = Depends(get_db)):
    user = register_user(db, AccountInput(**payload.model_dump()))
    return {"message": "Usuário criado com sucesso", "user": user}
