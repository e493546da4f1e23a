# tests/test_tickets.py
from fastapi.testclient import TestClient
from bsg_helpdesk.main import app

client = TestClient(app)


def _template_id(name: str) -> int:
    r = client.get("/api/bsg-templates/templates", params={"search": name})
    assert r.status_code == 200
    return r.json()[0]["id"]


def test_health():
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"


def test_create_and_get_ticket():
    r = client.post("/api/tickets/", json={"title": "T1", "description": "D1"})
    assert r.status_code == 201
    tid = r.json()["id"]

    r2 = client.get(f"/api/tickets/{tid}")
    assert r2.status_code == 200
    data = r2.json()
    assert data["title"] == "T1"
    assert data["description"] == "D1"
    assert data["status"] == "open"
    assert data["template_id"] is None
    assert data["custom_fields"] == {}


def test_list_returns_array():
    r = client.get("/api/tickets/")
    assert r.status_code == 200
    assert isinstance(r.json(), list)


def test_update_ticket_title_and_status():
    r = client.post("/api/tickets/", json={"title": "To Update", "description": "Body"})
    assert r.status_code == 201
    tid = r.json()["id"]

    r2 = client.put(f"/api/tickets/{tid}", json={"title": "Updated", "status": "closed"})
    assert r2.status_code == 200
    data = r2.json()
    assert data["id"] == tid
    assert data["title"] == "Updated"
    assert data["status"] == "closed"

    r3 = client.get(f"/api/tickets/{tid}")
    assert r3.status_code == 200
    assert r3.json()["status"] == "closed"


def test_update_rejects_unknown_status():
    tid = client.post("/api/tickets/", json={"title": "S", "description": "S"}).json()["id"]
    r = client.put(f"/api/tickets/{tid}", json={"status": "pending"})
    assert r.status_code == 422


def test_delete_ticket_then_404():
    r = client.post("/api/tickets/", json={"title": "To Delete", "description": "D"})
    assert r.status_code == 201
    tid = r.json()["id"]

    r2 = client.delete(f"/api/tickets/{tid}")
    assert r2.status_code == 200
    assert r2.json()["id"] == tid

    r3 = client.get(f"/api/tickets/{tid}")
    assert r3.status_code == 404
    assert r3.json()["detail"] == "Ticket not found"


def test_get_not_found_returns_404():
    r = client.get("/api/tickets/9999999")
    assert r.status_code == 404
    assert r.json()["detail"] == "Ticket not found"


def test_create_validation_errors():
    r1 = client.post("/api/tickets/", json={"description": "no title"})
    assert r1.status_code == 422

    r2 = client.post("/api/tickets/", json={"title": "no description"})
    assert r2.status_code == 422

    r3 = client.post("/api/tickets/", json={"title": "", "description": ""})
    assert r3.status_code == 422


def test_filter_by_status_open_only():
    a = client.post("/api/tickets/", json={"title": "A", "description": "A"}).json()
    b = client.post("/api/tickets/", json={"title": "B", "description": "B"}).json()

    client.put(f"/api/tickets/{b['id']}", json={"status": "closed"})

    r = client.get("/api/tickets/?status=open")
    assert r.status_code == 200
    ids = {t["id"] for t in r.json()}
    assert a["id"] in ids
    assert b["id"] not in ids


def test_template_ticket_blocked_while_required_fields_empty():
    tid = _template_id("Klaim ATM")
    r = client.post(
        "/api/tickets/",
        json={"title": "Klaim", "description": "ATM", "template_id": tid, "custom_fields": {}},
    )
    assert r.status_code == 422
    errors = r.json()["detail"]["errors"]
    assert errors["Nama Nasabah"] == "Nama Nasabah is required"
    assert "Nominal Transaksi" in errors


def test_template_ticket_rejects_negative_amount():
    tid = _template_id("Klaim ATM")
    r = client.post(
        "/api/tickets/",
        json={
            "title": "Klaim",
            "description": "ATM",
            "template_id": tid,
            "custom_fields": {
                "Cabang/Capem": "002",
                "Nama Nasabah": "Budi",
                "Nomor Rekening": "1234567890",
                "Nominal Transaksi": "-1000",
                "Nomor Arsip": "ARS-1",
            },
        },
    )
    assert r.status_code == 422
    assert "positive" in r.json()["detail"]["errors"]["Nominal Transaksi"]


def test_template_ticket_stores_unformatted_values_and_counts_usage():
    tid = _template_id("Klaim ATM")
    before = client.get("/api/bsg-templates/templates", params={"search": "Klaim ATM"}).json()[0]

    r = client.post(
        "/api/tickets/",
        json={
            "title": "Klaim",
            "description": "ATM tidak mengeluarkan uang",
            "template_id": tid,
            "custom_fields": {
                "Cabang/Capem": "002",
                "Nama Nasabah": "Budi",
                "Nomor Rekening": "1234567890",
                "Nominal Transaksi": "Rp 1.500.000",
                "Nomor Arsip": "ARS-2",
                "Not A Field": "dropped",
            },
        },
    )
    assert r.status_code == 201
    data = r.json()
    assert data["template_id"] == tid
    assert data["custom_fields"]["Nominal Transaksi"] == "1500000"
    assert "Not A Field" not in data["custom_fields"]

    after = client.get("/api/bsg-templates/templates", params={"search": "Klaim ATM"}).json()[0]
    assert after["usage_count"] == before["usage_count"] + 1


def test_template_ticket_unknown_template_404():
    r = client.post(
        "/api/tickets/",
        json={"title": "X", "description": "X", "template_id": 987654, "custom_fields": {}},
    )
    assert r.status_code == 404
    assert r.json()["detail"] == "Template not found"


def test_update_rejects_explicit_null():
    tid = client.post("/api/tickets/", json={"title": "N", "description": "N"}).json()["id"]
    for body in ({"title": None}, {"description": None}, {"status": None}):
        r = client.put(f"/api/tickets/{tid}", json=body)
        assert r.status_code == 422

    r = client.get(f"/api/tickets/{tid}")
    assert r.json()["title"] == "N"
    assert r.json()["status"] == "open"
