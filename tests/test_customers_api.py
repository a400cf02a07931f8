"""HTTP contract of /api/customers (handler hosted by the Flask blueprint)."""
import pytest

from app.registry import create_app


@pytest.fixture()
def client(tmp_path, monkeypatch):
    monkeypatch.setenv("SECRET_KEY", "test-secret")
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path/'test.db'}")
    monkeypatch.setenv("ENV", "test")
    monkeypatch.delenv("CUSTOMERS_API_URL", raising=False)

    app = create_app()
    return app.test_client()


@pytest.fixture()
def unconfigured_client(monkeypatch):
    monkeypatch.setenv("SECRET_KEY", "test-secret")
    monkeypatch.setenv("ENV", "test")
    monkeypatch.delenv("DATABASE_URL", raising=False)

    app = create_app()
    return app.test_client()


def test_create_customer(client):
    r = client.post("/api/customers", json={"name": "Ana", "phone": "111"})
    assert r.status_code == 201
    assert r.headers["Content-Type"] == "application/json"
    assert r.json == {"id": 1, "name": "Ana", "phone": "111"}


def test_list_after_create(client):
    client.post("/api/customers", json={"name": "Ana", "phone": "111"})
    r = client.get("/api/customers")
    assert r.status_code == 200
    assert r.json == [{"id": 1, "name": "Ana", "phone": "111"}]


def test_list_empty(client):
    r = client.get("/api/customers")
    assert r.status_code == 200
    assert r.json == []


def test_list_is_newest_first(client):
    for name in ("Ana", "Bruno", "Carla"):
        client.post("/api/customers", json={"name": name, "phone": "1"})
    r = client.get("/api/customers")
    assert [c["name"] for c in r.json] == ["Carla", "Bruno", "Ana"]
    ids = [c["id"] for c in r.json]
    assert ids == sorted(ids, reverse=True)


def test_create_keeps_values_as_submitted(client):
    r = client.post("/api/customers", json={"name": " Ana Maria ", "phone": "+55 (11) 9999-8888"})
    assert r.status_code == 201
    assert r.json["name"] == " Ana Maria "
    assert r.json["phone"] == "+55 (11) 9999-8888"


def test_create_requires_fields(client):
    r = client.post("/api/customers", json={"name": "", "phone": "222"})
    assert r.status_code == 400
    assert r.json["error"] == "name and phone required"
    assert r.json["code"] == "validation_error"
    assert client.get("/api/customers").json == []


@pytest.mark.parametrize(
    "payload",
    [
        {"phone": "222"},
        {"name": "Ana"},
        {"name": "   ", "phone": "222"},
        {"name": "Ana", "phone": 222},
        ["Ana", "222"],
    ],
)
def test_create_rejects_incomplete_payloads(client, payload):
    r = client.post("/api/customers", json=payload)
    assert r.status_code == 400
    assert r.json["code"] == "validation_error"


def test_create_missing_body(client):
    r = client.post("/api/customers")
    assert r.status_code == 400
    assert r.json == {"error": "missing body", "code": "missing_body"}


def test_create_invalid_json_is_server_error(client):
    r = client.post("/api/customers", data="{not json", content_type="application/json")
    assert r.status_code == 500
    assert r.json["code"] == "internal_error"
    assert r.json["error"]


def test_delete_customer(client):
    client.post("/api/customers", json={"name": "Ana", "phone": "111"})
    r = client.delete("/api/customers", json={"id": 1})
    assert r.status_code == 200
    assert r.json["id"] == 1
    assert r.json["message"]
    assert client.get("/api/customers").json == []


def test_delete_accepts_numeric_string_id(client):
    client.post("/api/customers", json={"name": "Ana", "phone": "111"})
    r = client.delete("/api/customers", json={"id": "1"})
    assert r.status_code == 200
    assert r.json["id"] == 1


def test_delete_not_found(client):
    r = client.delete("/api/customers", json={"id": 999})
    assert r.status_code == 404
    assert r.json == {"error": "not found", "code": "not_found"}


@pytest.mark.parametrize("customer_id", [2**63, 2**63 - 1, str(2**70)])
def test_delete_out_of_range_id_is_not_found(client, customer_id):
    client.post("/api/customers", json={"name": "Ana", "phone": "111"})
    r = client.delete("/api/customers", json={"id": customer_id})
    assert r.status_code == 404
    assert r.json["code"] == "not_found"
    assert len(client.get("/api/customers").json) == 1


def test_delete_twice_is_not_found(client):
    client.post("/api/customers", json={"name": "Ana", "phone": "111"})
    client.post("/api/customers", json={"name": "Bia", "phone": "222"})
    assert client.delete("/api/customers", json={"id": 1}).status_code == 200
    r = client.delete("/api/customers", json={"id": 1})
    assert r.status_code == 404
    assert client.get("/api/customers").json == [{"id": 2, "name": "Bia", "phone": "222"}]


def test_delete_missing_body_or_id(client):
    r = client.delete("/api/customers")
    assert r.status_code == 400
    assert r.json["code"] == "missing_body"

    for payload in ({}, {"id": None}, {"id": 0}, {"id": "abc"}, {"id": True}, {"id": "\u00b2"}, {"id": "\u0663"}):
        r = client.delete("/api/customers", json=payload)
        assert r.status_code == 400, payload
        assert r.json == {"error": "id required", "code": "validation_error"}


def test_ids_are_not_reused_after_delete(client):
    client.post("/api/customers", json={"name": "Ana", "phone": "111"})
    r = client.post("/api/customers", json={"name": "Bia", "phone": "222"})
    assert r.json["id"] == 2
    client.delete("/api/customers", json={"id": 2})
    r = client.post("/api/customers", json={"name": "Caio", "phone": "333"})
    assert r.json["id"] == 3


@pytest.mark.parametrize("method", ["put", "patch"])
def test_other_methods_not_allowed(client, method):
    r = getattr(client, method)("/api/customers", json={"id": 1})
    assert r.status_code == 405
    assert r.json["code"] == "method_not_allowed"


def test_missing_database_url_is_config_error(unconfigured_client):
    r = unconfigured_client.get("/api/customers")
    assert r.status_code == 500
    assert r.json["code"] == "config_missing"
    assert "DATABASE_URL" in r.json["error"]


def test_missing_database_url_checked_before_validation(unconfigured_client):
    r = unconfigured_client.post("/api/customers", json={"name": "", "phone": ""})
    assert r.status_code == 500
    assert r.json["code"] == "config_missing"


def test_api_does_not_require_csrf(client):
    # JSON clients never see the HTML form token.
    r = client.post("/api/customers", json={"name": "Ana", "phone": "111"})
    assert r.status_code == 201


def test_handler_called_directly(tmp_path, monkeypatch):
    from app.registry.modules.customers.api import dispatch
    from app.registry.modules.customers.handler import HandlerEvent

    monkeypatch.setenv("SECRET_KEY", "test-secret")
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path/'test.db'}")
    monkeypatch.setenv("ENV", "test")
    app = create_app()
    with app.app_context():
        created = dispatch(HandlerEvent(method="POST", body='{"name": "Ana", "phone": "111"}'))
        assert created.status_code == 201
        assert created.headers == {"Content-Type": "application/json"}
        listed = dispatch(HandlerEvent(method="get"))
        assert listed.json() == [{"id": 1, "name": "Ana", "phone": "111"}]
        assert dispatch(HandlerEvent(method="DELETE")).json()["code"] == "missing_body"
