import json

from handlers import health_check


def test_health_check_returns_ok():
    resp = health_check.lambda_handler({}, None)
    assert resp["statusCode"] == 200
    body = json.loads(resp["body"])
    assert body["success"] is True
    assert body["data"]["status"] == "healthy"
    assert body["data"]["version"] == health_check.SERVICE_VERSION


def test_health_check_reports_backend(monkeypatch):
    monkeypatch.setenv("STORAGE_BACKEND", "memory")
    monkeypatch.setenv("ENVIRONMENT", "staging")
    body = json.loads(health_check.lambda_handler({}, None)["body"])
    assert body["data"]["storage_backend"] == "memory"
    assert body["data"]["environment"] == "staging"
