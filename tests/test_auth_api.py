"""Tests for sign-up, login and logout endpoints."""


def test_signup_returns_token_and_identity(signup):
    body = signup(email="New.User@Example.com", name="  Kim  ")
    assert body["token_type"] == "bearer"
    assert body["access_token"]
    assert body["user"]["email"] == "new.user@example.com"
    assert body["user"]["display_name"] == "Kim"


def test_signup_rejects_short_password(client):
    response = client.post(
        "/auth/signup",
        json={"email": "a@example.com", "password": "12345", "display_name": "A"},
    )
    assert response.status_code == 422
    assert response.json()["code"] == "weak-password"


def test_signup_rejects_duplicate_email(client, signup):
    signup(email="dup@example.com")
    response = client.post(
        "/auth/signup",
        json={"email": "DUP@example.com", "password": "secret123", "display_name": "B"},
    )
    assert response.status_code == 409
    assert response.json()["code"] == "email-in-use"


def test_signup_rejects_blank_name(client):
    response = client.post(
        "/auth/signup",
        json={"email": "c@example.com", "password": "secret123", "display_name": "   "},
    )
    assert response.status_code == 422


def test_login_with_valid_credentials(client, signup):
    signup(email="login@example.com")
    response = client.post(
        "/auth/login", json={"email": "login@example.com", "password": "secret123"}
    )
    assert response.status_code == 200
    assert response.json()["user"]["email"] == "login@example.com"


def test_login_wrong_password_and_unknown_email_look_the_same(client, signup):
    signup(email="login@example.com")
    wrong = client.post(
        "/auth/login", json={"email": "login@example.com", "password": "nope-nope"}
    )
    unknown = client.post(
        "/auth/login", json={"email": "ghost@example.com", "password": "secret123"}
    )
    assert wrong.status_code == unknown.status_code == 401
    assert wrong.json() == unknown.json()
    assert wrong.json()["code"] == "invalid-credential"


def test_me_requires_a_valid_token(client, auth_headers):
    assert client.get("/auth/me", headers=auth_headers).status_code == 200
    assert client.get("/auth/me").status_code in (401, 403)
    bad = client.get("/auth/me", headers={"Authorization": "Bearer not-a-token"})
    assert bad.status_code == 401


def test_logout_discards_the_editing_session(client, auth_headers):
    client.post("/body-map/toggle", json={"region_id": "knee", "side": "left"}, headers=auth_headers)
    assert len(client.get("/body-map/selection", headers=auth_headers).json()) == 1

    response = client.post("/auth/logout", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["success"] is True

    assert client.get("/body-map/selection", headers=auth_headers).json() == []


def test_health_and_root(client):
    assert client.get("/health").json() == {"status": "healthy"}
    assert "endpoints" in client.get("/").json()
