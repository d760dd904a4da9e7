from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request, Response
from pydantic import BaseModel, EmailStr, Field
from sqlalchemy import func
from sqlalchemy.orm import Session

from booking_app.core.database import get_db
from booking_app.deps import get_identity
from booking_app.models.user import User
from booking_app.services.accounts import normalize_email, safe_user
from booking_app.services.errors import NotFound, TooManyAttempts, Unauthenticated
from booking_app.services.identity import Identity
from booking_app.services.login_attempts import (
    check_login_lock,
    clear_login_attempts,
    register_failed_login,
)
from booking_app.services.passwords import verify_password
from booking_app.services.sessions import (
    build_session_cookie_options,
    clear_session_cookie,
    create_session,
    set_session_cookie,
)

router = APIRouter(prefix="/api/auth", tags=["auth"])
logger = logging.getLogger(__name__)


class LoginPayload(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


@router.post("/login")
def login(
    payload: LoginPayload,
    response: Response,
    request: Request,
    db: Session = Depends(get_db),
):
    email = normalize_email(payload.email)

    locked, locked_until = check_login_lock(db, email)
    if locked:
        logger.warning("Login blocked email=%s locked_until=%s", email, locked_until)
        raise TooManyAttempts()

    user = db.query(User).filter(func.lower(User.email) == email).first()
    if user is None or not verify_password(payload.password, user.password_hash):
        _, locked_after = register_failed_login(db, email)
        db.commit()
        logger.info("Login failed email=%s locked=%s", email, locked_after)
        if locked_after:
            raise TooManyAttempts()
        raise Unauthenticated("Credenciais inválidas")

    token = create_session(user.id)
    cookie_options = build_session_cookie_options(request)
    logger.info(
        "[AUTH_COOKIE] setting session user_id=%s samesite=%s secure=%s",
        user.id,
        cookie_options["samesite"],
        cookie_options["secure"],
    )
    set_session_cookie(response, token, request)

    clear_login_attempts(db, email)
    db.commit()

    return safe_user(user, with_role=True)


@router.post("/logout")
def logout(response: Response, request: Request):
    clear_session_cookie(response, request)
    return {"ok": True}


@router.get("/me")
def me(
    identity: Identity = Depends(get_identity),
    db: Session = Depends(get_db),
):
    user = db.query(User).filter(User.id == identity.user_id).first()
    if user is None:
        raise NotFound("Usuário não encontrado")
    return safe_user(user, with_role=True)
