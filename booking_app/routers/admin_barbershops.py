from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from booking_app.core.database import get_db
from booking_app.deps import require_role
from booking_app.services.authorization_service import STAFF_ROLES
from booking_app.services.barbershops import list_barbershops
from booking_app.services.identity import Identity

router = APIRouter(prefix="/api/admin/barbershops", tags=["admin-barbershops"])


@router.get("")
def admin_list_barbershops(
    _: Identity = Depends(require_role(STAFF_ROLES)),
    db: Session = Depends(get_db),
):
    return list_barbershops(db)
