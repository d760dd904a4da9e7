from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from booking_app.core.database import get_db
from booking_app.deps import require_role
from booking_app.models.log import CANCEL_BOOKING
from booking_app.services.audit import list_logs
from booking_app.services.authorization_service import ADMIN_ONLY
from booking_app.services.identity import Identity

router = APIRouter(prefix="/api/admin/logs", tags=["admin-logs"])


@router.get("")
def admin_list_logs(
    _: Identity = Depends(require_role(ADMIN_ONLY)),
    db: Session = Depends(get_db),
):
    return list_logs(db, action=CANCEL_BOOKING)
