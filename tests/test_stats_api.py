# tests/test_stats_api.py


def _txn(client, customer_id, account_id, kind, amount, when):
    resp = client.post(
        "/api/transactions",
        json={
            "customer_id": customer_id,
            "account_id": account_id,
            "transaction_type": kind,
            "amount": amount,
            "transaction_date": when,
        },
    )
    assert resp.status_code == 201
    return resp.json()


def test_empty_stats_default_to_zero(client):
    body = client.get("/api/stats").json()
    assert body == {
        "stats": {"customers": 0, "accounts": 0, "transactions": 0, "pending": 0, "revenue": 0},
        "recent": [],
    }


def test_stats_totals_and_recent(client, customer, account):
    for i in range(6):
        _txn(client, customer["id"], account["id"], "credit", 100, f"2024-01-0{i + 1}T10:00:00Z")
    _txn(client, customer["id"], account["id"], "debit", 250, "2023-12-31T10:00:00Z")

    body = client.get("/api/stats").json()
    assert body["stats"] == {
        "customers": 1,
        "accounts": 1,
        "transactions": 7,
        "pending": 250.5,
        "revenue": 350.0,
    }
    recent = body["recent"]
    assert len(recent) == 5
    assert recent[0]["transaction_date"].startswith("2024-01-06")
    assert all(r["customer_name"] == "Asha Rao" for r in recent)


def test_customer_summary(client, customer):
    resp = client.get(f"/api/customers/{customer['id']}")
    assert resp.json() == {"id": customer["id"], "full_name": "Asha Rao"}
    assert client.get("/api/customers/9999").status_code == 404


def test_customer_cards_are_annotated(client, customer):
    other = client.post("/api/customers", json={"full_name": "Other"}).json()
    for owner in (customer["id"], customer["id"], other["id"]):
        client.post(
            "/api/card_details",
            json={
                "customer_id": owner,
                "bank_name": "HDFC Bank",
                "card_type": "Debit Card",
                "card_name": "HDFC Premium Debit Card",
                "card_number": "4000 0000 0000 0002",
            },
        )
    cards = client.get(f"/api/customer-cards/{customer['id']}").json()
    assert len(cards) == 2
    assert cards[0]["id"] > cards[1]["id"]
    assert {c["customer_name"] for c in cards} == {"Asha Rao"}
    assert client.get("/api/customer-cards/9999").json() == []


def test_health(client):
    body = client.get("/api/health").json()
    assert body["status"]["indicator"] == "operational"
    assert body["components"]["database"]["status"] == "operational"
    assert body["time"].endswith("Z") and "+00:00" not in body["time"]
