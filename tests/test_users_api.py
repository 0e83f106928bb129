def _user_payload(roles, **overrides):
    payload = {
        "name": "María",
        "lastname": "Pérez",
        "email": "Maria@Test.com",
        "password": "clave123",
        "role_id": roles["USER"].id,
    }
    payload.update(overrides)
    return payload


def test_create_user(client, admin_headers, roles):
    response = client.post("/api/v1/users/", json=_user_payload(roles), headers=admin_headers)

    assert response.status_code == 200
    user = response.json()["user"]
    assert user["email"] == "maria@test.com"
    assert user["role"]["name"] == "USER"
    assert "password" not in user
    assert "password_hash" not in user


def test_create_user_duplicate_email(client, admin_headers, roles, regular_user):
    response = client.post("/api/v1/users/", json=_user_payload(roles, email=regular_user.email), headers=admin_headers)

    assert response.status_code == 409


def test_create_user_unknown_role(client, admin_headers, roles):
    response = client.post("/api/v1/users/", json=_user_payload(roles, role_id=999), headers=admin_headers)

    assert response.status_code == 404


def test_users_require_admin(client, user_headers):
    assert client.get("/api/v1/users/", headers=user_headers).status_code == 403
    assert client.get("/api/v1/users/roles", headers=user_headers).status_code == 403


def test_list_users_and_roles(client, admin_headers, regular_user):
    users = client.get("/api/v1/users/", headers=admin_headers).json()["users"]
    roles = client.get("/api/v1/users/roles", headers=admin_headers).json()["roles"]

    assert sorted(u["email"] for u in users) == ["admin@test.com", "usuario@test.com"]
    assert [r["name"] for r in roles] == ["ADMIN", "USER"]


def test_update_user_keeps_email(client, admin_headers, regular_user):
    response = client.put(f"/api/v1/users/{regular_user.id}", json={
        "name": "Renombrado",
        "email": "otro@test.com"
    }, headers=admin_headers)

    assert response.status_code == 200
    user = response.json()["user"]
    assert user["name"] == "Renombrado"
    assert user["email"] == "usuario@test.com"


def test_reset_password_allows_login(client, admin_headers, regular_user):
    response = client.put(f"/api/v1/users/{regular_user.id}/password", json={"password": "nueva123"}, headers=admin_headers)
    assert response.status_code == 200

    old = client.post("/api/v1/auth/login-json", json={"email": "usuario@test.com", "password": "secreto123"})
    new = client.post("/api/v1/auth/login-json", json={"email": "usuario@test.com", "password": "nueva123"})

    assert old.status_code == 401
    assert new.status_code == 200


def test_delete_user(client, admin_headers, regular_user):
    assert client.delete(f"/api/v1/users/{regular_user.id}", headers=admin_headers).status_code == 200
    assert client.get(f"/api/v1/users/{regular_user.id}", headers=admin_headers).status_code == 404


def test_admin_cannot_delete_self(client, admin_headers, admin_user):
    response = client.delete(f"/api/v1/users/{admin_user.id}", headers=admin_headers)

    assert response.status_code == 400
