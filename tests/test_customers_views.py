"""Tests for the customers HTML pages (form, list, delete, setup instructions)."""
import pytest

from app.registry import create_app


def _make_client(monkeypatch, database_url):
    monkeypatch.setenv("SECRET_KEY", "test-secret")
    monkeypatch.setenv("ENV", "test")
    monkeypatch.delenv("CUSTOMERS_API_URL", raising=False)
    if database_url:
        monkeypatch.setenv("DATABASE_URL", database_url)
    else:
        monkeypatch.delenv("DATABASE_URL", raising=False)
    return create_app().test_client()


@pytest.fixture()
def client(tmp_path, monkeypatch):
    return _make_client(monkeypatch, f"sqlite:///{tmp_path/'test.db'}")


@pytest.fixture()
def unconfigured_client(monkeypatch):
    return _make_client(monkeypatch, None)


def _csrf(client):
    client.get("/")
    with client.session_transaction() as sess:
        return sess["csrf_token"]


def test_index_lists_customers_newest_first(client):
    client.post("/api/customers", json={"name": "Ana", "phone": "111"})
    client.post("/api/customers", json={"name": "Bia", "phone": "222"})
    r = client.get("/")
    assert r.status_code == 200
    assert r.data.index(b"Bia") < r.data.index(b"Ana")
    assert b"No customers registered yet." not in r.data


def test_create_via_form(client):
    token = _csrf(client)
    r = client.post("/customers", data={"name": "Ana", "phone": "111", "csrf_token": token})
    assert r.status_code == 302
    r = client.get("/")
    assert b"Ana" in r.data
    assert client.get("/api/customers").json == [{"id": 1, "name": "Ana", "phone": "111"}]


def test_form_requires_both_fields(client):
    token = _csrf(client)
    r = client.post("/customers", data={"name": "   ", "phone": "222", "csrf_token": token})
    assert r.status_code == 400
    assert b"Name and phone are required." in r.data
    # The phone the user typed is kept in the form.
    assert b'value="222"' in r.data
    assert client.get("/api/customers").json == []


def test_form_rejects_missing_csrf(client):
    r = client.post("/customers", data={"name": "Ana", "phone": "111"})
    assert r.status_code == 400
    assert b"CSRF token missing or invalid." in r.data
    assert client.get("/api/customers").json == []


def test_delete_via_form(client):
    client.post("/api/customers", json={"name": "Ana", "phone": "111"})
    token = _csrf(client)
    r = client.post("/customers/1/delete", data={"csrf_token": token})
    assert r.status_code == 302
    assert client.get("/api/customers").json == []


def test_delete_unknown_flashes_alert(client):
    token = _csrf(client)
    r = client.post("/customers/42/delete", data={"csrf_token": token}, follow_redirects=True)
    assert r.status_code == 200
    assert b"Error removing customer. Please try again." in r.data


def test_setup_instructions_when_database_missing(unconfigured_client):
    r = unconfigured_client.get("/")
    assert r.status_code == 200
    assert b"Database connection" in r.data
    assert b"DATABASE_URL" in r.data


def test_create_failure_alerts_and_keeps_inputs(unconfigured_client):
    token = _csrf(unconfigured_client)
    r = unconfigured_client.post("/customers", data={"name": "Ana", "phone": "111", "csrf_token": token})
    assert r.status_code == 200
    assert b"Error adding customer. Please try again." in r.data
    assert b'value="Ana"' in r.data
    assert b'value="111"' in r.data


def test_page_disables_controls_on_submit(client):
    client.post("/api/customers", json={"name": "Ana", "phone": "111"})
    client.post("/api/customers", json={"name": "Bia", "phone": "222"})
    r = client.get("/")
    html = r.data.decode("utf-8")
    assert "data-add-form" in html
    assert 'data-busy-label="Adding..."' in html
    # Every row's delete button is covered by the page-wide single-delete script.
    assert html.count("data-delete-form") == 3  # two forms + the script selector
    assert html.count("data-delete-button") == 3
    assert 'document.body.setAttribute("data-deleting"' in html
    # Nothing is rendered disabled up front; the script disables on submit.
    assert " disabled" not in html
