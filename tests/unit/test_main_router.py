import json

from handlers import main


def _event(method, path, **extra):
    return {"requestContext": {"http": {"method": method, "path": path}}, **extra}


def test_main_routes_health(monkeypatch):
    monkeypatch.setattr(main.health_check, "lambda_handler", lambda e, c: {"status": "ok"})
    resp = main.lambda_handler(_event("GET", "/health"), None)
    assert resp["status"] == "ok"


def test_main_routes_ticket_creation(monkeypatch):
    marker = {}

    def fake_handler(event, context):
        marker["called"] = True
        return {"statusCode": 201}

    monkeypatch.setattr(main.tickets, "create_ticket", fake_handler)
    resp = main.lambda_handler(_event("POST", "/tickets"), None)
    assert resp["statusCode"] == 201
    assert marker["called"] is True


def test_main_routes_listing_separately_from_creation(monkeypatch):
    monkeypatch.setattr(main.tickets, "list_tickets", lambda e, c: {"list": True})
    resp = main.lambda_handler(_event("GET", "/tickets/"), None)
    assert resp["list"] is True


def test_main_fills_path_parameters(monkeypatch):
    seen = {}

    def fake_handler(event, context):
        seen.update(event["pathParameters"])
        return {"status": True}

    monkeypatch.setattr(main.tickets, "update_status", fake_handler)
    main.lambda_handler(_event("PUT", "/tickets/abc-123/status"), None)
    assert seen == {"id": "abc-123"}


def test_main_keeps_gateway_path_parameters(monkeypatch):
    monkeypatch.setattr(main.tickets, "get_ticket", lambda e, c: e["pathParameters"])
    event = _event("GET", "/tickets/from-path", pathParameters={"id": "from-gateway"})
    assert main.lambda_handler(event, None) == {"id": "from-gateway"}


def test_main_routes_sub_resources(monkeypatch):
    monkeypatch.setattr(main.tickets, "assign_ticket", lambda e, c: {"assign": True})
    monkeypatch.setattr(main.tickets, "get_history", lambda e, c: {"history": True})
    monkeypatch.setattr(main.tickets, "add_comment", lambda e, c: {"comment": True})
    monkeypatch.setattr(main.tickets, "customer_tickets", lambda e, c: {"customer": True})
    monkeypatch.setattr(main.tickets, "agent_tickets", lambda e, c: {"agent": True})

    assert main.lambda_handler(_event("PUT", "/tickets/1/assign"), None)["assign"]
    assert main.lambda_handler(_event("GET", "/tickets/1/history"), None)["history"]
    assert main.lambda_handler(_event("POST", "/tickets/1/comments"), None)["comment"]
    assert main.lambda_handler(_event("GET", "/customers/c-1/tickets"), None)["customer"]
    assert main.lambda_handler(_event("GET", "/agents/a-1/tickets"), None)["agent"]


def test_main_falls_back_to_raw_path(monkeypatch):
    monkeypatch.setattr(main.health_check, "lambda_handler", lambda e, c: {"status": "ok"})
    event = {"rawPath": "/health", "requestContext": {"http": {"method": "GET"}}}
    assert main.lambda_handler(event, None)["status"] == "ok"


def test_main_unknown_route():
    resp = main.lambda_handler(_event("GET", "/unknown"), None)
    assert resp["statusCode"] == 404
    body = json.loads(resp["body"])
    assert body["success"] is False
    assert body["error"] == "Route not found"
    assert body["details"] == {"route": "GET /unknown"}


def test_main_wrong_method_is_not_found():
    resp = main.lambda_handler(_event("DELETE", "/tickets/1"), None)
    assert resp["statusCode"] == 404
