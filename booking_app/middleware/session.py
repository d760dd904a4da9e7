from __future__ import annotations

from starlette.middleware.base import BaseHTTPMiddleware

from booking_app.services.sessions import SESSION_COOKIE, decode_session


class SessionMiddleware(BaseHTTPMiddleware):
    """Decodifica o cookie de sessão das rotas /api para o request.state.

    Só valida assinatura/expiração; a identidade é carregada do banco em
    ``deps.get_identity``.
    """

    async def dispatch(self, request, call_next):
        request.state.session_token = None
        request.state.session_user_id = None

        if request.url.path.startswith("/api"):
            token = request.cookies.get(SESSION_COOKIE)
            if token:
                payload = decode_session(token)
                if payload:
                    request.state.session_token = token
                    request.state.session_user_id = payload.get("user_id")

        return await call_next(request)
