from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from booking_app.services.sessions import SESSION_COOKIE

logger = logging.getLogger(__name__)


class ApiError(RuntimeError):
    def __init__(self, status_code: int, message: str):
        super().__init__(f"Erro API {status_code}: {message}")
        self.status_code = status_code
        self.message = message


def _error_message(response: httpx.Response) -> str:
    try:
        data = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(data, dict):
        return str(data.get("error") or data.get("message") or data.get("detail") or "")
    return response.text


class AdminApiClient:
    """Cliente assíncrono das rotas administrativas, autenticado pelo cookie de sessão."""

    def __init__(
        self,
        base_url: str,
        session_cookie: Optional[str] = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float = 20.0,
    ):
        cookies = {SESSION_COOKIE: session_cookie} if session_cookie else None
        self._client = httpx.AsyncClient(
            base_url=base_url,
            cookies=cookies,
            transport=transport,
            timeout=timeout,
        )

    async def __aenter__(self) -> "AdminApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, url: str, **kwargs) -> Any:
        response = await self._client.request(method, url, **kwargs)
        if not response.is_success:
            message = _error_message(response)
            logger.warning(
                "API request failed method=%s url=%s status=%s error=%s",
                method,
                url,
                response.status_code,
                message,
            )
            raise ApiError(response.status_code, message)
        if not response.content:
            return None
        return response.json()

    async def login(self, email: str, password: str) -> dict:
        return await self._request("POST", "/api/auth/login", json={"email": email, "password": password})

    async def get_role(self) -> str:
        data = await self._request("GET", "/api/user/role")
        return data["role"]

    async def list_barbershops(self) -> list[dict]:
        return await self._request("GET", "/api/admin/barbershops")

    async def list_bookings(self, barbershop_id: str | None = None, day: str | None = None) -> list[dict]:
        params = {}
        if barbershop_id:
            params["barbershopId"] = barbershop_id
        if day:
            params["date"] = day
        return await self._request("GET", "/api/admin/bookings", params=params)

    async def cancel_booking(self, booking_id: str, barbershop_id: str | None = None) -> dict:
        params = {"barbershopId": barbershop_id} if barbershop_id else None
        return await self._request("DELETE", f"/api/admin/bookings/{booking_id}", params=params)

    async def list_users(self) -> list[dict]:
        return await self._request("GET", "/api/users")

    async def update_user(self, user_id: str, **fields) -> dict:
        return await self._request("PATCH", f"/api/users/{user_id}", json=fields)

    async def list_barbers(self) -> list[dict]:
        data = await self._request("GET", "/api/barbers")
        return data["barbers"]

    async def create_barber(self, **fields) -> dict:
        data = await self._request("POST", "/api/barbers", json=fields)
        return data["barber"]

    async def list_logs(self) -> list[dict]:
        return await self._request("GET", "/api/admin/logs")
