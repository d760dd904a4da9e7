from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional

from booking_app.client.api import AdminApiClient
from booking_app.client.poller import Poller
from booking_app.core.config import DASHBOARD_POLL_INTERVAL_SECONDS


class AuditLogViewer:
    """Lista de cancelamentos (somente ADMIN), atualizada no mesmo intervalo do painel."""

    def __init__(
        self,
        api: AdminApiClient,
        *,
        interval: float = DASHBOARD_POLL_INTERVAL_SECONDS,
        on_update: Optional[Callable[[List[Dict[str, Any]]], None]] = None,
        on_error: Optional[Callable[[Exception], None]] = None,
    ):
        self.api = api
        self.logs: List[Dict[str, Any]] = []
        self._on_update = on_update
        self._poller = Poller(self.refresh, interval=interval, on_error=on_error)

    async def refresh(self) -> List[Dict[str, Any]]:
        self.logs = await self.api.list_logs()
        if self._on_update is not None:
            self._on_update(self.logs)
        return self.logs

    def start(self) -> None:
        self._poller.start()

    async def stop(self) -> None:
        await self._poller.stop()

    async def __aenter__(self) -> "AuditLogViewer":
        self.start()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.stop()
