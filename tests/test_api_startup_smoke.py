from fastapi.testclient import TestClient


REQUIRED_ROUTES = {
    "/api/auth/login",
    "/api/auth/logout",
    "/api/auth/me",
    "/api/register",
    "/api/user/role",
    "/api/users",
    "/api/users/{user_id}",
    "/api/barbers",
    "/api/barbershops/{barbershop_id}",
    "/api/barbershops/{barbershop_id}/bookings",
    "/api/admin/barbershops",
    "/api/admin/bookings",
    "/api/admin/bookings/{booking_id}",
    "/api/admin/logs",
}


def test_api_startup_and_router_registration(monkeypatch):
    from booking_app import main

    monkeypatch.setattr(main, "_startup_tasks", lambda: None)

    with TestClient(main.app) as client:
        response = client.get("/")
        health_response = client.get("/health")
        openapi_response = client.get("/openapi.json")
        unauthenticated = client.get("/api/admin/bookings")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
    assert health_response.json() == {"status": "healthy"}
    assert openapi_response.status_code == 200
    assert unauthenticated.status_code == 401
    assert unauthenticated.headers.get("X-Request-ID")

    paths = {route.path for route in main.app.routes}
    assert REQUIRED_ROUTES.issubset(paths)
    assert not any("fix-roles" in path for path in paths)


def test_unknown_route_uses_error_envelope(monkeypatch):
    from booking_app import main

    monkeypatch.setattr(main, "_startup_tasks", lambda: None)

    with TestClient(main.app) as client:
        response = client.get("/api/nao-existe")

    assert response.status_code == 404
    assert response.json() == {"error": "Not Found"}
