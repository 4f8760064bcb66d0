# tests/test_cascade.py
import pytest

from billing_admin.domain.services.cascade import (
    DEPENDENT_TABLES,
    CascadeDeleteOrchestrator,
    GatewayClient,
)


class InMemoryClient:
    """Table client over plain lists, with optional failing deletes."""

    def __init__(self, rows, fail_on=()):
        self.rows = {table: list(items) for table, items in rows.items()}
        self.fail_on = set(fail_on)
        self.calls = []

    def list_rows(self, table):
        self.calls.append(("list", table))
        return sorted(self.rows.get(table, []), key=lambda r: -r["id"])

    def delete_row(self, table, row_id):
        self.calls.append(("delete", table, row_id))
        if (table, row_id) in self.fail_on:
            raise RuntimeError(f"cannot delete {table} {row_id}")
        self.rows[table] = [r for r in self.rows.get(table, []) if r["id"] != row_id]


def _fixture_rows():
    return {
        "customers": [{"id": 7}, {"id": 8}],
        "transactions": [
            {"id": 1, "customer_id": 7},
            {"id": 2, "customer_id": 7},
            {"id": 3, "customer_id": 8},
        ],
        "card_details": [{"id": 10, "customer_id": 7}],
    }


def _owned(client, customer_id):
    return {
        table: [r for r in client.rows.get(table, []) if r.get("customer_id") == customer_id]
        for table in DEPENDENT_TABLES
    }


def test_cascade_removes_every_dependent_row():
    client = InMemoryClient(_fixture_rows())
    report = CascadeDeleteOrchestrator(client).delete_customer(7)

    assert report.complete
    assert report.deleted == {"transactions": 2, "card_details": 1}
    assert all(rows == [] for rows in _owned(client, 7).values())
    assert client.rows["customers"] == [{"id": 8}]
    # Other customers keep their rows
    assert client.rows["transactions"] == [{"id": 3, "customer_id": 8}]


def test_cascade_walks_tables_in_order_and_customer_last():
    client = InMemoryClient(_fixture_rows())
    CascadeDeleteOrchestrator(client).delete_customer("7")

    listed = [c[1] for c in client.calls if c[0] == "list"]
    assert tuple(listed) == DEPENDENT_TABLES
    assert client.calls[-1] == ("delete", "customers", 7)


def test_cascade_keeps_going_after_a_failed_delete():
    client = InMemoryClient(_fixture_rows(), fail_on={("transactions", 2)})
    report = CascadeDeleteOrchestrator(client).delete_customer(7)

    assert report.customer_deleted
    assert not report.complete
    assert report.failed == {"transactions": [2]}
    assert report.deleted == {"transactions": 1, "card_details": 1}
    assert [r["id"] for r in _owned(client, 7)["transactions"]] == [2]
    assert _owned(client, 7)["card_details"] == []
    assert {"id": 7} not in client.rows["customers"]


def test_cascade_skips_a_table_it_cannot_list():
    class BrokenListing(InMemoryClient):
        def list_rows(self, table):
            if table == "transactions":
                raise RuntimeError("listing failed")
            return super().list_rows(table)

    client = BrokenListing(_fixture_rows())
    report = CascadeDeleteOrchestrator(client).delete_customer(7)

    assert "transactions" in report.failed
    assert report.deleted == {"card_details": 1}
    assert report.customer_deleted


def test_customer_delete_failure_is_raised():
    client = InMemoryClient(_fixture_rows(), fail_on={("customers", 7)})
    with pytest.raises(RuntimeError):
        CascadeDeleteOrchestrator(client).delete_customer(7)


class _TestClientSession:
    """Lets GatewayClient talk to the in-process app."""

    def __init__(self, client):
        self.client = client

    def get(self, url, headers=None, timeout=None):
        return self.client.get(url, headers=headers)

    def delete(self, url, headers=None, timeout=None):
        return self.client.delete(url, headers=headers)


def _seed(client):
    customer = client.post("/api/customers", json={"full_name": "Dev Patel"}).json()
    other = client.post("/api/customers", json={"full_name": "Other"}).json()
    account = client.post("/api/accounts", json={"customer_id": customer["id"]}).json()
    for amount in (100, 200):
        client.post(
            "/api/transactions",
            json={
                "customer_id": customer["id"],
                "account_id": account["id"],
                "transaction_type": "credit",
                "amount": amount,
            },
        )
    client.post(
        "/api/card_details",
        json={
            "customer_id": customer["id"],
            "bank_name": "ICICI Bank",
            "card_type": "Credit Card",
            "card_name": "ICICI Coral Credit Card",
            "card_number": "5500 0000 0000 0004",
        },
    )
    client.post("/api/customers", json={"full_name": "Spare"})
    client.post("/api/card_details", json={
        "customer_id": other["id"],
        "bank_name": "ICICI Bank",
        "card_type": "Debit Card",
        "card_name": "ICICI Coral Debit Card",
        "card_number": "4000 0000 0000 0002",
    })
    return customer, other


def test_gateway_client_cascade_over_http(client):
    customer, other = _seed(client)
    gateway = GatewayClient(base_url="http://testserver", session=_TestClientSession(client))

    report = CascadeDeleteOrchestrator(gateway).delete_customer(customer["id"])

    assert report.complete
    assert report.deleted == {"transactions": 2, "card_details": 1, "accounts": 1}
    for table in DEPENDENT_TABLES:
        rows = client.get(f"/api/{table}").json()
        assert [r for r in rows if r["customer_id"] == customer["id"]] == []
    assert client.get(f"/api/customers/{customer['id']}").status_code == 404
    assert len(client.get(f"/api/customer-cards/{other['id']}").json()) == 1


def test_atomic_cascade_endpoint(client):
    customer, other = _seed(client)

    resp = client.delete(f"/api/customers/{customer['id']}/cascade")
    assert resp.status_code == 200
    body = resp.json()
    assert body["customer_id"] == customer["id"]
    assert body["deleted"]["transactions"] == 2
    assert body["deleted"]["card_details"] == 1
    assert body["deleted"]["accounts"] == 1
    assert body["deleted"]["customers"] == 1

    assert client.get(f"/api/customers/{customer['id']}").status_code == 404
    assert client.get(f"/api/customers/{other['id']}").status_code == 200
    assert client.get("/api/transactions").json() == []


def test_atomic_cascade_unknown_customer(client):
    resp = client.delete("/api/customers/9999/cascade")
    assert resp.status_code == 404
    assert client.delete("/api/customers/abc/cascade").status_code == 400
