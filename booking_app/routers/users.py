from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.orm import Session

from booking_app.core.database import get_db
from booking_app.deps import authenticated_body, get_identity
from booking_app.services.accounts import UserPatch, list_customers, update_user
from booking_app.services.identity import Identity

router = APIRouter(prefix="/api", tags=["users"])


class UserUpdate(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    phone_number: Optional[str] = None
    role: Optional[str] = None


@router.get("/user/role")
def get_own_role(identity: Identity = Depends(get_identity)):
    return {"role": identity.role.value}


@router.get("/users")
def get_users(
    identity: Identity = Depends(get_identity),
    db: Session = Depends(get_db),
):
    return list_customers(db, identity)


@router.patch("/users/{user_id}")
def patch_user(
    user_id: str,
    identity: Identity = Depends(get_identity),
    payload: UserUpdate = Depends(authenticated_body(UserUpdate)),
    db: Session = Depends(get_db),
):
    patch = UserPatch(**payload.model_dump(exclude_unset=True))
    return update_user(db, identity, user_id, patch)
