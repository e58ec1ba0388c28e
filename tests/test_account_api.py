from urllib.parse import unquote


def test_free_plan_billing(test_client, auth):
    response = test_client.get("/api/billing", headers=auth["headers"])
    assert response.status_code == 200

    billing = response.json()["billing"]
    assert billing["current_plan"] == "free"
    assert billing["amount"] == 0
    assert billing["payment_method"] is None
    assert billing["invoices"] == []
    assert billing["usage"]["tests_limit"] == 100
    assert billing["usage"]["team_members"] == 1
    assert billing["usage"]["team_limit"] == 1


def test_upgrade_to_paid_plan(test_client, auth):
    response = test_client.post("/api/billing/upgrade", json={"plan": "pro"}, headers=auth["headers"])
    assert response.status_code == 200
    data = response.json()
    assert data["plan"] == "pro"
    assert data["amount"] == 99
    assert data["checkout_url"].startswith("https://checkout.stripe.com/")

    billing = test_client.get("/api/billing", headers=auth["headers"]).json()["billing"]
    assert billing["current_plan"] == "pro"
    assert billing["usage"]["tests_limit"] == 5000
    assert billing["payment_method"]["last_four"] == "4242"
    assert len(billing["invoices"]) == 3

    # Mock invoices are only created once
    again = test_client.get("/api/billing", headers=auth["headers"]).json()["billing"]
    assert len(again["invoices"]) == 3

    stats = test_client.get("/api/dashboard/stats", headers=auth["headers"]).json()["stats"]
    assert stats["monthlyQuota"] == 5000


def test_upgrade_raises_generation_limit(test_client, auth, db_session):
    from autotest.models.database import TestCaseModel

    db_session.add_all(
        [TestCaseModel(name=f"t{i}", type="unit", content="x", created_by=auth["id"]) for i in range(100)]
    )
    db_session.commit()
    payload = {"inputData": "Checkout with a saved card", "testTypes": ["unit"]}

    assert test_client.post("/api/generate-tests", json=payload, headers=auth["headers"]).status_code == 429
    test_client.post("/api/billing/upgrade", json={"plan": "basic"}, headers=auth["headers"])
    response = test_client.post("/api/generate-tests", json=payload, headers=auth["headers"])
    assert response.status_code == 200
    assert response.json()["usage"]["limit"] == 1000


def test_upgrade_invalid_plan(test_client, auth):
    response = test_client.post("/api/billing/upgrade", json={"plan": "platinum"}, headers=auth["headers"])
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid plan"}


def test_invoice_download(test_client, auth, register):
    test_client.post("/api/billing/upgrade", json={"plan": "basic"}, headers=auth["headers"])
    invoice = test_client.get("/api/billing", headers=auth["headers"]).json()["billing"]["invoices"][0]
    assert invoice["download_url"] == f"/api/billing/invoices/{invoice['id']}"

    pdf = test_client.get(invoice["download_url"], headers=auth["headers"])
    assert pdf.status_code == 200
    assert pdf.headers["content-type"] == "application/pdf"
    assert b"INVOICE" in pdf.content

    other = register(email="other@example.com")
    assert test_client.get(invoice["download_url"], headers=other["headers"]).status_code == 404


def test_settings_defaults_and_update(test_client, auth):
    settings = test_client.get("/api/settings", headers=auth["headers"]).json()["settings"]
    assert settings["profile"]["email"] == "owner@example.com"
    assert settings["security"]["two_factor_enabled"] is False
    assert settings["preferences"]["default_environment"] == "development"

    response = test_client.put(
        "/api/settings",
        json={"profile": {**settings["profile"], "name": "Renamed"}, "preferences": {"dark_mode": True}},
        headers=auth["headers"],
    )
    assert response.status_code == 200
    updated = response.json()["settings"]
    assert updated["profile"]["name"] == "Renamed"
    assert updated["preferences"] == {"dark_mode": True}
    assert updated["notifications"] == settings["notifications"]

    me = test_client.get("/api/auth/me", headers=auth["headers"]).json()
    assert me["name"] == "Renamed"


def test_settings_email_conflict(test_client, auth, register):
    register(email="taken@example.com")
    response = test_client.put(
        "/api/settings", json={"profile": {"email": "taken@example.com"}}, headers=auth["headers"]
    )
    assert response.status_code == 409


def test_change_password(test_client, auth):
    wrong = test_client.put(
        "/api/settings/password",
        json={"currentPassword": "nope-nope", "newPassword": "another1"},
        headers=auth["headers"],
    )
    assert wrong.status_code == 400

    short = test_client.put(
        "/api/settings/password",
        json={"currentPassword": "secret123", "newPassword": "123"},
        headers=auth["headers"],
    )
    assert short.status_code == 400

    ok = test_client.put(
        "/api/settings/password",
        json={"currentPassword": "secret123", "newPassword": "another1"},
        headers=auth["headers"],
    )
    assert ok.status_code == 200

    login = test_client.post("/api/auth/login", json={"email": "owner@example.com", "password": "another1"})
    assert login.status_code == 200


def test_enable_two_factor(test_client, auth):
    response = test_client.post("/api/settings/2fa/enable", headers=auth["headers"])
    assert response.status_code == 200

    data = response.json()
    assert len(data["backupCodes"]) == 10
    assert len(set(data["backupCodes"])) == 10
    assert len(data["secret"]) == 32
    assert set(data["secret"]) <= set("ABCDEFGHIJKLMNOPQRSTUVWXYZ234567")
    assert f"secret={data['secret']}" in unquote(data["qrCodeUrl"])
    assert "otpauth://totp/AutoTestAI:" in unquote(data["qrCodeUrl"])

    # Re-enabling replaces the secret
    second = test_client.post("/api/settings/2fa/enable", headers=auth["headers"]).json()
    assert second["secret"] != data["secret"]


def test_team_invite_flow(test_client, auth, register):
    existing = register(email="dev@example.com", name="Dev")

    listed = test_client.get("/api/team", headers=auth["headers"]).json()["members"]
    assert [m["role"] for m in listed] == ["owner"]

    joined = test_client.post(
        "/api/team/invite", json={"email": "dev@example.com", "role": "user"}, headers=auth["headers"]
    )
    assert joined.status_code == 201
    assert joined.json()["member"] == {"id": existing["id"], "email": "dev@example.com", "role": "user", "status": "active"}

    pending = test_client.post(
        "/api/team/invite",
        json={"email": "newcomer@example.com", "role": "viewer", "message": "Welcome"},
        headers=auth["headers"],
    )
    assert pending.status_code == 201
    assert pending.json()["member"]["status"] == "pending"

    duplicate = test_client.post(
        "/api/team/invite", json={"email": "dev@example.com", "role": "user"}, headers=auth["headers"]
    )
    assert duplicate.status_code == 409

    members = test_client.get("/api/team", headers=auth["headers"]).json()["members"]
    assert [m["email"] for m in members] == ["owner@example.com", "dev@example.com", "newcomer@example.com"]

    billing = test_client.get("/api/billing", headers=auth["headers"]).json()["billing"]
    assert billing["usage"]["team_members"] == 3


def test_team_invite_validation(test_client, auth):
    assert test_client.post("/api/team/invite", json={"email": "x@example.com"}, headers=auth["headers"]).status_code == 400
    self_invite = test_client.post(
        "/api/team/invite", json={"email": "owner@example.com", "role": "admin"}, headers=auth["headers"]
    )
    assert self_invite.status_code == 409


def test_team_role_update_and_removal(test_client, auth, register):
    member = register(email="dev@example.com")
    test_client.post("/api/team/invite", json={"email": "dev@example.com", "role": "user"}, headers=auth["headers"])

    updated = test_client.patch(f"/api/team/{member['id']}", json={"role": "admin"}, headers=auth["headers"])
    assert updated.status_code == 200
    me = test_client.get("/api/auth/me", headers=member["headers"]).json()
    assert me["role"] == "admin"

    bad_role = test_client.patch(f"/api/team/{member['id']}", json={"role": "owner"}, headers=auth["headers"])
    assert bad_role.status_code == 400

    removed = test_client.delete(f"/api/team/{member['id']}", headers=auth["headers"])
    assert removed.status_code == 200
    assert test_client.delete(f"/api/team/{member['id']}", headers=auth["headers"]).status_code == 404
    assert test_client.patch(f"/api/team/{member['id']}", json={"role": "user"}, headers=auth["headers"]).status_code == 404
