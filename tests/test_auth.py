from app.core.auth.service import AuthService


def test_password_hash_roundtrip():
    hashed = AuthService.get_password_hash("secreto123")

    assert hashed != "secreto123"
    assert AuthService.verify_password("secreto123", hashed)
    assert not AuthService.verify_password("otra-clave", hashed)


def test_login_json(client, regular_user):
    response = client.post("/api/v1/auth/login-json", json={"email": "usuario@test.com", "password": "secreto123"})

    assert response.status_code == 200
    body = response.json()
    assert body["token_type"] == "bearer"
    assert body["user"]["email"] == "usuario@test.com"
    assert AuthService.verify_token(body["access_token"])["user_id"] == regular_user.id


def test_login_form(client, admin_user):
    response = client.post("/api/v1/auth/login", data={"username": "admin@test.com", "password": "secreto123"})

    assert response.status_code == 200
    assert response.json()["user"]["role"]["name"] == "ADMIN"


def test_login_wrong_password(client, regular_user):
    response = client.post("/api/v1/auth/login-json", json={"email": "usuario@test.com", "password": "incorrecta"})

    assert response.status_code == 401


def test_inactive_user_cannot_login(client, db, regular_user):
    regular_user.is_active = False
    db.commit()

    response = client.post("/api/v1/auth/login-json", json={"email": "usuario@test.com", "password": "secreto123"})

    assert response.status_code == 403


def test_me(client, user_headers):
    response = client.get("/api/v1/auth/me", headers=user_headers)

    assert response.status_code == 200
    assert response.json()["email"] == "usuario@test.com"


def test_me_rejects_bad_token(client, regular_user):
    assert client.get("/api/v1/auth/me").status_code == 401
    assert client.get("/api/v1/auth/me", headers={"Authorization": "Bearer basura"}).status_code == 401


def test_user_token_carries_identity_and_role(admin_user):
    payload = AuthService.verify_token(AuthService.create_user_token(admin_user))

    assert payload["user_id"] == admin_user.id
    assert payload["email"] == "admin@test.com"
    assert payload["role"] == "ADMIN"
    assert "exp" in payload


def test_login_token_carries_role(client, regular_user):
    response = client.post("/api/v1/auth/login-json", json={"email": "usuario@test.com", "password": "secreto123"})

    assert AuthService.verify_token(response.json()["access_token"])["role"] == "USER"
