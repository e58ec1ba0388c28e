def test_register_returns_token_and_user(test_client):
    response = test_client.post(
        "/api/auth/register",
        json={"email": "New.User@Example.com", "name": "New User", "password": "secret123"},
    )
    assert response.status_code == 201

    data = response.json()
    assert data["token"]
    assert data["user"]["email"] == "new.user@example.com"
    assert data["user"]["role"] == "user"
    assert data["user"]["plan"] == "free"


def test_register_rejects_short_password(test_client):
    response = test_client.post(
        "/api/auth/register", json={"email": "a@example.com", "name": "A", "password": "123"}
    )
    assert response.status_code == 400


def test_register_duplicate_email_conflicts(test_client, register):
    register(email="dup@example.com")
    response = test_client.post(
        "/api/auth/register", json={"email": "dup@example.com", "name": "Again", "password": "secret123"}
    )
    assert response.status_code == 409
    assert response.json()["error"] == "User already exists"


def test_login(test_client, register):
    register(email="login@example.com", password="secret123")

    ok = test_client.post("/api/auth/login", json={"email": "login@example.com", "password": "secret123"})
    assert ok.status_code == 200
    assert ok.json()["user"]["email"] == "login@example.com"

    bad = test_client.post("/api/auth/login", json={"email": "login@example.com", "password": "wrong-pass"})
    assert bad.status_code == 401
    assert bad.json() == {"error": "Invalid credentials"}


def test_verify_and_me(test_client, auth):
    for path in ("/api/auth/verify", "/api/auth/me"):
        response = test_client.get(path, headers=auth["headers"])
        assert response.status_code == 200
        assert response.json()["id"] == auth["id"]


def test_verify_for_deleted_user_is_404(test_client, auth, db_session):
    from autotest.models.database import UserModel

    db_session.query(UserModel).filter(UserModel.id == auth["id"]).delete()
    db_session.commit()

    response = test_client.get("/api/auth/verify", headers=auth["headers"])
    assert response.status_code == 404
