from farmfresh.config import settings
from farmfresh.models.log import Log


def _register(client, **overrides):
    payload = {
        "username": "bob",
        "email": "Bob@Example.com",
        "password": "hunter22",
        "name": "Bob Baker",
    }
    payload.update(overrides)
    return client.post("/api/auth/register", json=payload)


def test_register_starts_session(client):
    res = _register(client)
    assert res.status_code == 201
    body = res.json()
    assert body["email"] == "bob@example.com"
    assert body["role"] == "customer"
    assert "password" not in body and "passwordHash" not in body
    assert settings.COOKIE_NAME in res.cookies

    me = client.get("/api/auth/me")
    assert me.status_code == 200
    assert me.json()["username"] == "bob"


def test_register_farmer_with_profile(client):
    res = _register(client, role="farmer", bio="Berries", profileImage="/img/bob.png")
    assert res.status_code == 201
    assert res.json()["role"] == "farmer"
    assert res.json()["profileImage"] == "/img/bob.png"


def test_register_duplicate_email_is_rejected(client, db):
    assert _register(client).status_code == 201
    res = _register(client, username="bobby", email="BOB@example.com")
    assert res.status_code == 400
    assert res.json()["detail"] == "Email already registered"

    failed = db.query(Log).filter(Log.action == "REGISTER", Log.status == "FAIL").all()
    assert len(failed) == 1


def test_register_duplicate_username_is_rejected(client):
    assert _register(client).status_code == 201
    res = _register(client, email="other@example.com", username="BOB")
    assert res.status_code == 400
    assert res.json()["detail"] == "Username already taken"


def test_login_with_bad_password(client, customer):
    res = client.post("/api/auth/login", json={"email": customer.email, "password": "nope"})
    assert res.status_code == 401
    assert client.get("/api/auth/me").status_code == 401


def test_login_returns_user_and_token(client, customer):
    res = client.post("/api/auth/login", json={"email": customer.email.upper(), "password": "secret123"})
    assert res.status_code == 200
    body = res.json()
    assert body["id"] == customer.id
    assert body["tokenType"] == "bearer"

    # The token also works as a bearer header, without the cookie
    client.cookies.clear()
    me = client.get("/api/auth/me", headers={"Authorization": f"Bearer {body['accessToken']}"})
    assert me.status_code == 200
    assert me.json()["email"] == customer.email


def test_logout_clears_session(login, customer):
    c = login(customer)
    assert c.get("/api/auth/me").status_code == 200

    res = c.post("/api/auth/logout")
    assert res.status_code == 204
    assert c.get("/api/auth/me").status_code == 401


def test_garbage_token_is_unauthorized(client):
    res = client.get("/api/auth/me", headers={"Authorization": "Bearer not-a-jwt"})
    assert res.status_code == 401
