def test_health_check(test_client):
    """Test health check endpoint"""
    response = test_client.get("/api/health")
    assert response.status_code == 200

    data = response.json()
    assert data["status"] == "healthy"
    assert "timestamp" in data
    assert "version" in data
    assert data["environment"] == "test"


def test_readiness_check(test_client):
    """Test readiness check endpoint"""
    response = test_client.get("/api/health/readiness")
    assert response.status_code == 200

    data = response.json()
    assert data["status"] == "ready"
    assert data["checks"]["database"] == "ok"
    assert data["checks"]["ai_model"] == "ok"
    assert "timestamp" in data


def test_readiness_reports_unconfigured_model(test_client, fake_ai):
    fake_ai.configured = False
    response = test_client.get("/api/health/readiness")

    data = response.json()
    assert data["status"] == "ready"
    assert data["checks"]["ai_model"] == "not_configured"


def test_protected_route_requires_token(test_client):
    response = test_client.get("/api/projects")
    assert response.status_code == 401
    assert response.json() == {"error": "No token provided"}


def test_invalid_token_rejected(test_client):
    response = test_client.get("/api/projects", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == 401
    assert response.json()["error"] == "Invalid token"


def test_malformed_body_is_400(test_client, auth):
    response = test_client.post("/api/executions", json={"testCaseIds": "abc"}, headers=auth["headers"])
    assert response.status_code == 400
    assert "error" in response.json()
