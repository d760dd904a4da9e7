from booking_app.core import config
from booking_app.models.login_attempt import LoginAttempt
from booking_app.routers.auth import router as auth_router
from booking_app.routers.users import router as users_router
from booking_app.services.login_attempts import MAX_FAILED_ATTEMPTS
from booking_app.services.sessions import SESSION_COOKIE, create_session, decode_session
from tests.fixtures_data import ADMIN, BARBER, DEFAULT_PASSWORD, build_client


def test_login_sets_http_only_session_cookie(db):
    client = build_client(db, auth_router)

    response = client.post(
        "/api/auth/login",
        json={"email": "ADMIN@barbearia.com", "password": DEFAULT_PASSWORD},
    )

    assert response.status_code == 200
    assert response.json()["role"] == "ADMIN"
    assert "password_hash" not in response.json()
    set_cookie = response.headers.get("set-cookie", "")
    assert f"{SESSION_COOKIE}=" in set_cookie
    assert "HttpOnly" in set_cookie
    assert "Path=/" in set_cookie
    assert "SameSite=lax" in set_cookie


def test_login_forces_secure_cookie_on_public_host(db):
    client = build_client(db, auth_router)

    response = client.post(
        "/api/auth/login",
        json={"email": ADMIN["email"], "password": DEFAULT_PASSWORD},
        headers={"host": "admin.barbearia.com.br"},
    )

    assert response.status_code == 200
    assert "Secure" in response.headers.get("set-cookie", "")


def test_login_with_wrong_password_is_401(db):
    client = build_client(db, auth_router)

    response = client.post("/api/auth/login", json={"email": ADMIN["email"], "password": "errada"})

    assert response.status_code == 401
    assert response.json() == {"error": "Credenciais inválidas"}
    assert db.query(LoginAttempt).filter(LoginAttempt.email == ADMIN["email"]).one().failed_count == 1


def test_login_locks_after_repeated_failures(db):
    client = build_client(db, auth_router)

    statuses = [
        client.post("/api/auth/login", json={"email": BARBER["email"], "password": "errada"}).status_code
        for _ in range(MAX_FAILED_ATTEMPTS)
    ]
    locked = client.post("/api/auth/login", json={"email": BARBER["email"], "password": DEFAULT_PASSWORD})

    assert statuses[:-1] == [401] * (MAX_FAILED_ATTEMPTS - 1)
    assert statuses[-1] == 429
    assert locked.status_code == 429


def test_me_and_role_read_identity_from_cookie(db):
    client = build_client(db, auth_router, users_router)
    client.cookies.set(SESSION_COOKIE, create_session(BARBER["id"]))

    me = client.get("/api/auth/me")
    role = client.get("/api/user/role")

    assert me.status_code == 200
    assert me.json()["email"] == BARBER["email"]
    assert role.json() == {"role": "BARBER"}


def test_logout_clears_cookie(db):
    client = build_client(db, auth_router)

    response = client.post("/api/auth/logout")

    assert response.status_code == 200
    assert f'{SESSION_COOKIE}=""' in response.headers.get("set-cookie", "")


def test_session_signed_with_other_secret_is_rejected(monkeypatch):
    token = create_session("u-admin")
    monkeypatch.setattr(config, "SESSION_SECRET", "outro-segredo")

    assert decode_session(token) is None


def test_expired_session_is_rejected(monkeypatch):
    monkeypatch.setattr(config, "SESSION_MAX_AGE_SECONDS", -1)

    assert decode_session(create_session("u-admin")) is None
