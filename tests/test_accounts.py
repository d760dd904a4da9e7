from booking_app.models.user import User, UserRole
from booking_app.routers.barbers import router as barbers_router
from booking_app.routers.register import router as register_router
from booking_app.routers.users import router as users_router
from booking_app.services.passwords import verify_password
from tests.fixtures_data import ADMIN, BARBER, CUSTOMER, DEFAULT_PASSWORD, build_client, login_as


def _client(db, user=None):
    client = build_client(db, register_router, barbers_router, users_router)
    if user is not None:
        login_as(client, user)
    return client


def test_register_creates_user_with_hashed_password(db):
    response = _client(db).post(
        "/api/register",
        json={"name": "Diego", "email": "Diego@Example.com", "password": "segredo1"},
    )

    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "Usuário criado com sucesso"
    assert body["user"]["email"] == "diego@example.com"
    assert "password_hash" not in body["user"]

    stored = db.query(User).filter(User.email == "diego@example.com").one()
    assert stored.role == UserRole.USER
    assert stored.password_hash != "segredo1"
    assert verify_password("segredo1", stored.password_hash)


def test_register_duplicate_email_is_case_insensitive_conflict(db):
    original_hash = db.get(User, CUSTOMER["id"]).password_hash

    response = _client(db).post(
        "/api/register",
        json={"name": "Outro", "email": "CARLOS@example.com", "password": "segredo1"},
    )

    assert response.status_code == 409
    assert response.json() == {"error": "Email já cadastrado"}

    db.expire_all()
    stored = db.get(User, CUSTOMER["id"])
    assert stored.name == CUSTOMER["name"]
    assert stored.email == CUSTOMER["email"]
    assert stored.role == UserRole.USER
    assert stored.password_hash == original_hash
    assert verify_password(DEFAULT_PASSWORD, stored.password_hash)
    assert db.query(User).filter(User.email == "carlos@example.com").count() == 1

def test_register_validates_fields(db):
    client = _client(db)

    missing_name = client.post("/api/register", json={"email": "x@example.com", "password": "segredo1"})
    bad_email = client.post("/api/register", json={"name": "X", "email": "sem-arroba", "password": "segredo1"})
    short_password = client.post("/api/register", json={"name": "X", "email": "x@example.com", "password": "123"})

    assert missing_name.status_code == 400
    assert bad_email.json() == {"error": "Email inválido"}
    assert short_password.status_code == 400


def test_list_barbers_is_public_and_safe(db):
    response = _client(db).get("/api/barbers")

    assert response.status_code == 200
    barbers = response.json()["barbers"]
    assert [barber["id"] for barber in barbers] == [BARBER["id"]]
    assert "password_hash" not in barbers[0]


def test_create_barber_requires_admin(db):
    payload = {"name": "Novo", "email": "novo@barbearia.com", "password": "segredo1"}

    anonymous = _client(db).post("/api/barbers", json=payload)
    as_barber = _client(db, BARBER).post("/api/barbers", json=payload)

    assert anonymous.status_code == 401
    assert as_barber.status_code == 403
    assert db.query(User).filter(User.email == "novo@barbearia.com").first() is None


def test_admin_creates_barber(db):
    response = _client(db, ADMIN).post(
        "/api/barbers",
        json={"name": "Novo", "email": "novo@barbearia.com", "password": "segredo1", "phone_number": "11 9999"},
    )

    assert response.status_code == 201
    assert response.json()["message"] == "Barbeiro criado com sucesso"
    created = db.query(User).filter(User.email == "novo@barbearia.com").one()
    assert created.role == UserRole.BARBER


def test_list_users_admin_only(db):
    as_admin = _client(db, ADMIN).get("/api/users")
    as_barber = _client(db, BARBER).get("/api/users")

    assert [user["id"] for user in as_admin.json()] == [CUSTOMER["id"]]
    assert as_barber.status_code == 403


def test_admin_promotes_customer_to_barber(db):
    response = _client(db, ADMIN).patch(f"/api/users/{CUSTOMER['id']}", json={"role": "BARBER"})

    assert response.status_code == 200
    assert response.json()["role"] == "BARBER"
    assert db.get(User, CUSTOMER["id"]).role == UserRole.BARBER


def test_update_user_rejects_admin_role(db):
    response = _client(db, ADMIN).patch(f"/api/users/{CUSTOMER['id']}", json={"role": "ADMIN"})

    assert response.status_code == 400
    assert response.json() == {"error": "Alteração de cargo não permitida"}
    assert db.get(User, CUSTOMER["id"]).role == UserRole.USER


def test_update_user_cannot_touch_admin_accounts(db):
    response = _client(db, ADMIN).patch(f"/api/users/{ADMIN['id']}", json={"name": "Outro nome"})

    assert response.status_code == 403


def test_update_user_missing_target_is_404(db):
    response = _client(db, ADMIN).patch("/api/users/nao-existe", json={"name": "X"})

    assert response.status_code == 404


def test_update_user_requires_admin(db):
    response = _client(db, BARBER).patch(f"/api/users/{CUSTOMER['id']}", json={"name": "X"})

    assert response.status_code == 403


def test_malformed_body_without_session_is_401(db):
    client = _client(db)
    headers = {"content-type": "application/json"}

    patch_user = client.patch(f"/api/users/{CUSTOMER['id']}", content=b"{nao e json", headers=headers)
    post_barber = client.post("/api/barbers", content=b"{nao e json", headers=headers)

    assert patch_user.status_code == 401
    assert patch_user.json() == {"error": "Não autorizado"}
    assert post_barber.status_code == 401
    assert post_barber.json() == {"error": "Não autorizado"}


def test_malformed_body_with_admin_session_is_400(db):
    client = _client(db, ADMIN)
    headers = {"content-type": "application/json"}

    patch_user = client.patch(f"/api/users/{CUSTOMER['id']}", content=b"{nao e json", headers=headers)
    post_barber = client.post("/api/barbers", content=b"{nao e json", headers=headers)

    assert patch_user.status_code == 400
    assert "error" in patch_user.json()
    assert post_barber.status_code == 400
    assert db.get(User, CUSTOMER["id"]).name == CUSTOMER["name"]


def test_update_user_email_conflict(db):
    response = _client(db, ADMIN).patch(f"/api/users/{CUSTOMER['id']}", json={"email": BARBER["email"].upper()})

    assert response.status_code == 409
