from __future__ import annotations

import asyncio
import logging
import re
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Callable, Dict, List, Optional
from urllib.parse import quote

from booking_app.client.api import AdminApiClient
from booking_app.client.poller import Poller
from booking_app.core.config import DASHBOARD_POLL_INTERVAL_SECONDS
from booking_app.services.formatting import format_brl, format_date, format_time

logger = logging.getLogger(__name__)

STAFF_ROLE_NAMES = {"ADMIN", "BARBER"}
COUNTRY_CODE = "55"


def parse_booking_date(value: str | datetime) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def whatsapp_link(booking: Dict[str, Any]) -> str:
    """Link ``wa.me`` com a mensagem de confirmação; vazio se o cliente não tem telefone."""
    user = booking.get("user") or {}
    phone = user.get("phone_number")
    if not phone:
        return ""

    digits = re.sub(r"\D", "", phone)
    number = digits if digits.startswith(COUNTRY_CODE) else f"{COUNTRY_CODE}{digits}"

    service = booking["service"]
    when = parse_booking_date(booking["date"])
    message = (
        f"Olá, {user.get('name')}! Somos da barbearia {service['barbershop']['name']}, "
        f"o seu serviço {service['name']} na data {format_date(when)} e horário {format_time(when)} "
        f"foi confirmado no valor de {format_brl(service['price'])}."
    )
    return f"https://wa.me/{number}?text={quote(message, safe='')}"


@dataclass
class DashboardSnapshot:
    bookings: List[Dict[str, Any]] = field(default_factory=list)
    total: int = 0
    today: int = 0
    user_count: Optional[int] = None


class AdminDashboard:
    def __init__(
        self,
        api: AdminApiClient,
        *,
        interval: float = DASHBOARD_POLL_INTERVAL_SECONDS,
        on_update: Optional[Callable[[DashboardSnapshot], None]] = None,
        on_error: Optional[Callable[[Exception], None]] = None,
        today: Callable[[], date] = date.today,
    ):
        self.api = api
        self.is_admin = False
        self.barbershops: List[Dict[str, Any]] = []
        self.selected_barbershop_id: Optional[str] = None
        self.snapshot = DashboardSnapshot()
        self._today = today
        self._on_update = on_update
        self._poller = Poller(self.refresh, interval=interval, on_error=on_error)

    async def open(self) -> None:
        """Confere o cargo e carrega as barbearias; ``PermissionError`` para quem não é staff."""
        role = await self.api.get_role()
        if role not in STAFF_ROLE_NAMES:
            raise PermissionError("Acesso não autorizado")
        self.is_admin = role == "ADMIN"
        self.barbershops = await self.api.list_barbershops()

    def select(self, barbershop_id: Optional[str]) -> None:
        self.selected_barbershop_id = barbershop_id

    def _build_snapshot(self, bookings: List[Dict[str, Any]], user_count: Optional[int]) -> DashboardSnapshot:
        today = self._today()
        today_count = sum(1 for booking in bookings if parse_booking_date(booking["date"]).date() == today)
        return DashboardSnapshot(
            bookings=bookings,
            total=len(bookings),
            today=today_count,
            user_count=user_count,
        )

    async def refresh(self) -> DashboardSnapshot:
        if not self.selected_barbershop_id:
            snapshot = DashboardSnapshot(user_count=self.snapshot.user_count)
        elif self.is_admin:
            bookings, users = await asyncio.gather(
                self.api.list_bookings(self.selected_barbershop_id),
                self.api.list_users(),
            )
            snapshot = self._build_snapshot(bookings, len(users))
        else:
            bookings = await self.api.list_bookings(self.selected_barbershop_id)
            snapshot = self._build_snapshot(bookings, None)

        self.snapshot = snapshot
        if self._on_update is not None:
            self._on_update(snapshot)
        return snapshot

    async def cancel(self, booking: Dict[str, Any]) -> None:
        barbershop_id = (booking.get("service") or {}).get("barbershop_id") or self.selected_barbershop_id
        if not barbershop_id:
            raise ValueError("Selecione uma barbearia primeiro")

        await self.api.cancel_booking(booking["id"], barbershop_id)
        remaining = [item for item in self.snapshot.bookings if item["id"] != booking["id"]]
        self.snapshot = self._build_snapshot(remaining, self.snapshot.user_count)
        logger.info("Booking removed from dashboard booking_id=%s", booking["id"])
        if self._on_update is not None:
            self._on_update(self.snapshot)

    def start(self) -> None:
        self._poller.start()

    async def stop(self) -> None:
        await self._poller.stop()

    async def __aenter__(self) -> "AdminDashboard":
        await self.open()
        self.start()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.stop()
