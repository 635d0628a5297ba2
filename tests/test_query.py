from unittest.mock import MagicMock

from app.api import invoices as invoices_api
from app.db.placeholder_data import PlaceholderData
from app.db.seed import seed_database
from app.models.customers import CustomerRecord
from app.models.invoices import InvoiceRecord

ACME_ID = "5f0c3a52-2b43-4b0e-9d0e-0f1a2b3c4d5e"
GLOBEX_ID = "6a1d4b63-3c54-4c1f-8e1f-1a2b3c4d5e6f"


def _acme_data() -> PlaceholderData:
    return PlaceholderData(
        customers=[
            CustomerRecord(id=ACME_ID, name="Acme", email="billing@acme.com", image_url="/customers/acme.png"),
            CustomerRecord(id=GLOBEX_ID, name="Globex", email="ap@globex.com", image_url="/customers/globex.png"),
        ],
        invoices=[
            InvoiceRecord(customer_id=ACME_ID, amount=666, status="pending", date="2023-06-27"),
            InvoiceRecord(customer_id=ACME_ID, amount=1000, status="paid", date="2023-06-01"),
            InvoiceRecord(customer_id=GLOBEX_ID, amount=500, status="paid", date="2023-08-19"),
        ],
    )


def test_query_returns_matching_invoice(client, engine):
    seed_database(engine, _acme_data())

    r = client.get("/query")

    assert r.status_code == 200
    assert r.headers["content-type"] == "application/json"
    assert r.json() == [{"amount": 666, "name": "Acme"}]


def test_query_on_placeholder_data(client):
    assert client.get("/seed").status_code == 200

    r = client.get("/query")

    assert r.status_code == 200
    assert r.json() == [{"amount": 666, "name": "Evil Rabbit"}]


def test_query_empty_result(client, engine):
    data = _acme_data()
    seed_database(engine, PlaceholderData(customers=data.customers, invoices=data.invoices[1:]))

    r = client.get("/query")

    assert r.status_code == 200
    assert r.json() == []


def test_query_without_tables_fails_generically(client):
    r = client.get("/query")

    assert r.status_code == 500
    assert r.json() == {"error": "Failed to fetch invoices"}


def test_query_connect_failure(client, monkeypatch):
    engine = MagicMock()
    engine.connect.side_effect = RuntimeError("could not connect")
    monkeypatch.setattr(invoices_api, "get_engine", lambda: engine)

    r = client.get("/query")

    assert r.status_code == 500
    assert r.json() == {"error": "Failed to fetch invoices"}
    assert "could not connect" not in r.text
    engine.connect.assert_called_once()


def test_query_releases_connection_on_error(client, monkeypatch):
    engine = MagicMock()
    scope = engine.connect.return_value
    conn = scope.__enter__.return_value
    conn.execute.side_effect = RuntimeError("bad query")
    scope.__exit__.return_value = False
    monkeypatch.setattr(invoices_api, "get_engine", lambda: engine)

    r = client.get("/query")

    assert r.status_code == 500
    scope.__exit__.assert_called_once()


def test_query_releases_connection_on_success(client, monkeypatch):
    engine = MagicMock()
    scope = engine.connect.return_value
    conn = scope.__enter__.return_value
    conn.execute.return_value.mappings.return_value.all.return_value = [{"amount": 666, "name": "Acme"}]
    scope.__exit__.return_value = False
    monkeypatch.setattr(invoices_api, "get_engine", lambda: engine)

    r = client.get("/query")

    assert r.status_code == 200
    assert r.json() == [{"amount": 666, "name": "Acme"}]
    scope.__exit__.assert_called_once()


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}
