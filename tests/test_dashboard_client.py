import asyncio
from datetime import date
from urllib.parse import unquote

import httpx
import pytest

from booking_app.client import AdminApiClient, AdminDashboard, ApiError, AuditLogViewer, Poller, whatsapp_link

BOOKING = {
    "id": "b1",
    "date": "2026-01-05T14:30:00",
    "user_id": "u-customer",
    "service_id": "svc-a",
    "service": {
        "id": "svc-a",
        "name": "Corte de Cabelo",
        "price": 60.0,
        "barbershop_id": "shop-a",
        "barbershop": {"id": "shop-a", "name": "Barbearia Vintage", "image_url": ""},
    },
    "user": {"id": "u-customer", "name": "Carlos", "email": "carlos@example.com", "phone_number": "(11) 98765-4321"},
}
OTHER_DAY_BOOKING = dict(BOOKING, id="b2", date="2026-01-07T10:00:00")


class FakeBackend:
    def __init__(self, role="ADMIN"):
        self.role = role
        self.bookings = [BOOKING, OTHER_DAY_BOOKING]
        self.requests = []
        self.fail_bookings = False

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append((request.method, request.url.path, dict(request.url.params)))
        path = request.url.path
        if path == "/api/user/role":
            return httpx.Response(200, json={"role": self.role})
        if path == "/api/admin/barbershops":
            return httpx.Response(200, json=[{"id": "shop-a", "name": "Barbearia Vintage", "image_url": ""}])
        if path == "/api/admin/bookings":
            if self.fail_bookings:
                return httpx.Response(500, json={"error": "Erro interno do servidor"})
            return httpx.Response(200, json=self.bookings)
        if path == "/api/users":
            return httpx.Response(200, json=[{"id": "u1"}, {"id": "u2"}, {"id": "u3"}])
        if path.startswith("/api/admin/bookings/") and request.method == "DELETE":
            booking_id = path.rsplit("/", 1)[-1]
            self.bookings = [item for item in self.bookings if item["id"] != booking_id]
            return httpx.Response(200, json={"message": "Agendamento cancelado com sucesso"})
        if path == "/api/admin/logs":
            return httpx.Response(200, json=[{"id": 1, "details": "Agendamento cancelado por Ana"}])
        return httpx.Response(404, json={"error": "Not Found"})


def _api(backend):
    return AdminApiClient("http://testserver", "token", transport=httpx.MockTransport(backend))


def test_dashboard_snapshot_counts_total_today_and_users():
    backend = FakeBackend(role="ADMIN")

    async def scenario():
        async with _api(backend) as api:
            dashboard = AdminDashboard(api, today=lambda: date(2026, 1, 5))
            await dashboard.open()
            dashboard.select("shop-a")
            return dashboard, await dashboard.refresh()

    dashboard, snapshot = asyncio.run(scenario())

    assert dashboard.is_admin is True
    assert dashboard.barbershops[0]["id"] == "shop-a"
    assert (snapshot.total, snapshot.today, snapshot.user_count) == (2, 1, 3)
    assert ("GET", "/api/admin/bookings", {"barbershopId": "shop-a"}) in backend.requests


def test_barber_dashboard_does_not_fetch_users():
    backend = FakeBackend(role="BARBER")

    async def scenario():
        async with _api(backend) as api:
            dashboard = AdminDashboard(api, today=lambda: date(2026, 1, 5))
            await dashboard.open()
            dashboard.select("shop-a")
            return await dashboard.refresh()

    snapshot = asyncio.run(scenario())

    assert snapshot.user_count is None
    assert all(path != "/api/users" for _, path, _ in backend.requests)


def test_dashboard_rejects_customer():
    async def scenario():
        async with _api(FakeBackend(role="USER")) as api:
            await AdminDashboard(api).open()

    with pytest.raises(PermissionError):
        asyncio.run(scenario())


def test_dashboard_without_selected_shop_is_empty():
    backend = FakeBackend()

    async def scenario():
        async with _api(backend) as api:
            dashboard = AdminDashboard(api)
            await dashboard.open()
            return await dashboard.refresh()

    snapshot = asyncio.run(scenario())

    assert snapshot.bookings == []
    assert all(path != "/api/admin/bookings" for _, path, _ in backend.requests)


def test_cancel_removes_booking_from_local_view():
    backend = FakeBackend()

    async def scenario():
        async with _api(backend) as api:
            dashboard = AdminDashboard(api, today=lambda: date(2026, 1, 5))
            await dashboard.open()
            dashboard.select("shop-a")
            await dashboard.refresh()
            await dashboard.cancel(BOOKING)
            return dashboard.snapshot

    snapshot = asyncio.run(scenario())

    assert [item["id"] for item in snapshot.bookings] == ["b2"]
    assert (snapshot.total, snapshot.today) == (1, 0)
    assert ("DELETE", "/api/admin/bookings/b1", {"barbershopId": "shop-a"}) in backend.requests


def test_api_error_carries_server_message():
    backend = FakeBackend()
    backend.fail_bookings = True

    async def scenario():
        async with _api(backend) as api:
            await api.list_bookings("shop-a")

    with pytest.raises(ApiError) as exc:
        asyncio.run(scenario())

    assert exc.value.status_code == 500
    assert exc.value.message == "Erro interno do servidor"


def test_poller_keeps_running_after_failed_tick_and_stops_cleanly():
    calls = {"count": 0}
    updates = []
    errors = []

    async def fetch():
        calls["count"] += 1
        if calls["count"] == 1:
            raise RuntimeError("falha temporária")
        return calls["count"]

    async def scenario():
        poller = Poller(fetch, interval=0.01, on_update=updates.append, on_error=errors.append)
        async with poller:
            while len(updates) < 2:
                await asyncio.sleep(0.01)
        return poller

    poller = asyncio.run(asyncio.wait_for(scenario(), timeout=5))

    assert len(errors) == 1
    assert updates[:2] == [2, 3]
    assert poller.running is False


def test_poller_rejects_non_positive_interval():
    async def fetch():
        return None

    with pytest.raises(ValueError, match="Intervalo deve ser positivo"):
        Poller(fetch, interval=0)


def test_audit_log_viewer_refreshes_logs():
    seen = []

    async def scenario():
        async with _api(FakeBackend()) as api:
            viewer = AuditLogViewer(api, on_update=seen.append)
            return await viewer.refresh()

    logs = asyncio.run(scenario())

    assert logs[0]["details"].startswith("Agendamento cancelado")
    assert seen == [logs]


def test_whatsapp_link_builds_confirmation_message():
    link = whatsapp_link(BOOKING)

    assert link.startswith("https://wa.me/5511987654321?text=")
    message = unquote(link.split("text=", 1)[1])
    assert message == (
        "Olá, Carlos! Somos da barbearia Barbearia Vintage, o seu serviço Corte de Cabelo "
        "na data 05/01/2026 e horário 14:30 foi confirmado no valor de R$ 60,00."
    )


def test_whatsapp_link_keeps_existing_country_code_and_skips_missing_phone():
    with_country = dict(BOOKING, user=dict(BOOKING["user"], phone_number="+55 11 98765-4321"))
    without_phone = dict(BOOKING, user=dict(BOOKING["user"], phone_number=None))

    assert whatsapp_link(with_country).startswith("https://wa.me/5511987654321?")
    assert whatsapp_link(without_phone) == ""
