from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Optional

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL_SECONDS = 30.0


class Poller:
    """Busca periódica em uma task asyncio, viva enquanto a tela estiver aberta.

    Intervalo fixo; um tick com erro chama ``on_error`` e o próximo tenta de novo.
    """

    def __init__(
        self,
        fetch: Callable[[], Awaitable[Any]],
        interval: float = DEFAULT_INTERVAL_SECONDS,
        on_update: Optional[Callable[[Any], None]] = None,
        on_error: Optional[Callable[[Exception], None]] = None,
    ):
        if interval <= 0:
            raise ValueError("Intervalo deve ser positivo")
        self._fetch = fetch
        self.interval = interval
        self._on_update = on_update
        self._on_error = on_error
        self._task: asyncio.Task | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def tick(self) -> Any:
        try:
            result = await self._fetch()
        except Exception as exc:
            logger.warning("Polling tick failed error=%s", exc)
            if self._on_error is not None:
                self._on_error(exc)
            return None
        if self._on_update is not None:
            self._on_update(result)
        return result

    async def _run(self) -> None:
        while True:
            await self.tick()
            await asyncio.sleep(self.interval)

    def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.create_task(self._run())

    async def stop(self) -> None:
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass

    async def __aenter__(self) -> "Poller":
        self.start()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.stop()
