"""API tests through FastAPI's TestClient."""

from decimal import Decimal


def money(value):
    return Decimal(str(value)).quantize(Decimal("0.01"))


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


def test_price_line_prorated(client):
    response = client.post("/api/pricing/line", json={
        "rate": 3000,
        "quantity": 1,
        "vat_percent": 5,
        "from_date": "2024-01-01",
        "to_date": "2024-01-15"
    })

    assert response.status_code == 200
    body = response.json()
    assert body["prorated"] is True
    assert body["days_count"] == 15
    assert body["days_in_month"] == 31
    assert money(body["total"]) == Decimal("1524.19")


def test_price_line_with_bad_dates_is_flat(client):
    response = client.post("/api/pricing/line", json={
        "rate": 3000,
        "quantity": 2,
        "from_date": "2024-02-10",
        "to_date": "2024-02-01"
    })

    assert response.status_code == 200
    assert response.json()["prorated"] is False
    assert money(response.json()["amount"]) == Decimal("6000.00")


def test_price_invoice(client):
    response = client.post("/api/pricing/invoice", json={
        "lines": [
            {"rate": 1000, "quantity": 2, "vat_percent": 0},
            {"rate": 500, "quantity": 1, "vat_percent": 10}
        ],
        "discount": 100,
        "paid_amount": 1000
    })

    assert response.status_code == 200
    body = response.json()
    assert money(body["subtotal"]) == Decimal("2500.00")
    assert money(body["vat_amount"]) == Decimal("50.00")
    assert money(body["total_amount"]) == Decimal("2450.00")
    assert money(body["due_amount"]) == Decimal("1450.00")
    assert body["payment_status"] == "partial"
    assert len(body["lines"]) == 2


def test_negative_quantity_is_rejected(client):
    response = client.post("/api/pricing/line", json={"rate": 100, "quantity": -1})

    assert response.status_code == 422


def test_vat_above_hundred_is_rejected(client):
    response = client.post("/api/pricing/line", json={"rate": 100, "vat_percent": 150})

    assert response.status_code == 422


def test_negative_discount_is_rejected(client):
    response = client.post("/api/pricing/invoice", json={"lines": [], "discount": -5})

    assert response.status_code == 422


def test_tenant_header_is_required(client):
    response = client.get("/api/providers", headers={"X-Tenant-ID": ""})

    assert response.status_code == 400
    assert "X-Tenant-ID" in response.json()["detail"]


def test_catalog_item_lifecycle(client):
    created = client.post("/api/items", json={"name": "BDIX Peering", "unit_price": 60})
    assert created.status_code == 201
    item_id = created.json()["id"]

    updated = client.patch(f"/api/items/{item_id}", json={"unit_price": 65})
    assert money(updated.json()["unit_price"]) == Decimal("65.00")

    assert client.delete(f"/api/items/{item_id}").status_code == 200
    assert client.get("/api/items").json() == []
    assert len(client.get("/api/items", params={"include_inactive": True}).json()) == 1


def test_purchase_bill_endpoints(client):
    provider = client.post("/api/providers", json={"name": "Summit Communications"}).json()

    created = client.post("/api/purchase-bills", json={
        "provider_id": provider["id"],
        "billing_date": "2024-01-31",
        "items": [{"item_name": "IIG", "rate": 3000, "vat_percent": 5,
                   "from_date": "2024-01-01", "to_date": "2024-01-15"}],
        "paid_amount": 500
    })

    assert created.status_code == 201
    bill = created.json()
    assert bill["invoice_number"].startswith("PB-")
    assert bill["provider_name"] == "Summit Communications"
    assert money(bill["total_amount"]) == Decimal("1524.19")
    assert money(bill["due_amount"]) == Decimal("1024.19")
    assert bill["payment_status"] == "partial"

    fetched = client.get(f"/api/purchase-bills/{bill['id']}")
    assert fetched.status_code == 200
    assert len(fetched.json()["items"]) == 1

    provider_after = client.get(f"/api/providers/{provider['id']}").json()
    assert money(provider_after["total_due"]) == Decimal("1024.19")

    listed = client.get("/api/purchase-bills", params={"payment_status": "partial"})
    assert [b["id"] for b in listed.json()] == [bill["id"]]

    assert client.delete(f"/api/purchase-bills/{bill['id']}").status_code == 200
    assert client.get(f"/api/purchase-bills/{bill['id']}").status_code == 404


def test_bill_requires_at_least_one_line(client):
    response = client.post("/api/purchase-bills", json={"billing_date": "2024-01-31", "items": []})

    assert response.status_code == 422


def test_line_without_rate_is_bad_request(client):
    response = client.post("/api/sales-invoices/preview", json={
        "billing_date": "2024-01-31",
        "items": [{"item_name": "Unknown"}]
    })

    assert response.status_code == 400


def test_other_tenant_cannot_see_invoice(client):
    created = client.post("/api/sales-invoices", json={
        "billing_date": "2024-01-31",
        "items": [{"rate": 100}]
    }).json()

    response = client.get(f"/api/sales-invoices/{created['id']}", headers={"X-Tenant-ID": "tenant-b"})

    assert response.status_code == 404


def test_collection_flow(client):
    bandwidth_client = client.post("/api/clients", json={"name": "Dhaka Net", "vlan_name": "VLAN220"}).json()
    invoice = client.post("/api/sales-invoices", json={
        "client_id": bandwidth_client["id"],
        "billing_date": "2024-01-31",
        "due_date": "2024-02-15",
        "items": [{"rate": 1000, "quantity": 1}]
    }).json()
    assert invoice["payment_status"] == "due"
    assert invoice["client_name"] == "Dhaka Net"

    collection = client.post("/api/collections", json={
        "invoice_id": invoice["id"],
        "collection_date": "2024-02-01",
        "amount": 1000
    })
    assert collection.status_code == 201
    assert collection.json()["client_id"] == bandwidth_client["id"]

    paid = client.get(f"/api/sales-invoices/{invoice['id']}").json()
    assert paid["payment_status"] == "paid"

    collection_id = collection.json()["id"]
    patched = client.patch(f"/api/collections/{collection_id}", json={"amount": 400})
    assert money(patched.json()["amount"]) == Decimal("400.00")
    assert client.get(f"/api/sales-invoices/{invoice['id']}").json()["payment_status"] == "partial"

    deleted = client.delete(f"/api/collections/{collection_id}", params={"user_identifier": "cashier"})
    assert deleted.status_code == 200
    assert client.get(f"/api/sales-invoices/{invoice['id']}").json()["payment_status"] == "due"

    summary = client.get("/api/reports/summary").json()
    assert money(summary["total_receivable"]) == Decimal("1000.00")
    assert summary["sales_invoices_by_status"]["due"] == 1


def test_zero_amount_collection_is_rejected(client):
    response = client.post("/api/collections", json={"collection_date": "2024-02-01", "amount": 0})

    assert response.status_code == 422


def test_provider_payment_not_found(client):
    response = client.delete("/api/provider-payments/999")

    assert response.status_code == 404


def test_category_lifecycle(client):
    created = client.post("/api/categories", json={"name": "IP Transit", "description": "Upstream internet"})
    assert created.status_code == 201
    category_id = created.json()["id"]

    item = client.post("/api/items", json={"name": "IIG", "unit_price": 500, "category_id": category_id})
    assert item.status_code == 201
    assert item.json()["category_id"] == category_id
    assert [i["id"] for i in client.get("/api/items", params={"category_id": category_id}).json()] == [item.json()["id"]]

    renamed = client.patch(f"/api/categories/{category_id}", json={"name": "Transit"})
    assert renamed.json()["name"] == "Transit"

    deleted = client.delete(f"/api/categories/{category_id}")
    assert deleted.json() == {"message": "Category deleted", "category_id": category_id}
    assert client.get("/api/categories").json() == []
    assert client.get("/api/items").json()[0]["category_id"] is None


def test_item_with_another_tenants_category_is_rejected(client):
    category = client.post("/api/categories", json={"name": "CDN"}, headers={"X-Tenant-ID": "tenant-b"}).json()

    response = client.post("/api/items", json={"name": "GGC", "unit_price": 40, "category_id": category["id"]})

    assert response.status_code == 404
    assert client.patch(f"/api/categories/{category['id']}", json={"name": "x"}).status_code == 404


def test_inactive_categories_are_hidden(client):
    category = client.post("/api/categories", json={"name": "BDIX", "is_active": False}).json()

    assert client.get("/api/categories").json() == []
    listed = client.get("/api/categories", params={"include_inactive": True}).json()
    assert [c["id"] for c in listed] == [category["id"]]


def test_delete_unused_provider_and_client(client):
    provider = client.post("/api/providers", json={"name": "Fiber@Home"}).json()
    bandwidth_client = client.post("/api/clients", json={"name": "Uttara Link"}).json()

    assert client.delete(f"/api/providers/{provider['id']}").json()["provider_id"] == provider["id"]
    assert client.delete(f"/api/clients/{bandwidth_client['id']}").json()["client_id"] == bandwidth_client["id"]
    assert client.get(f"/api/providers/{provider['id']}").status_code == 404
    assert client.delete(f"/api/clients/{bandwidth_client['id']}").status_code == 404


def test_client_with_invoices_cannot_be_deleted(client):
    bandwidth_client = client.post("/api/clients", json={"name": "Dhaka Net"}).json()
    client.post("/api/sales-invoices", json={
        "client_id": bandwidth_client["id"],
        "billing_date": "2024-01-31",
        "items": [{"rate": 100}]
    })

    response = client.delete(f"/api/clients/{bandwidth_client['id']}")

    assert response.status_code == 400
    assert "deactivate" in response.json()["detail"]
    assert client.get(f"/api/clients/{bandwidth_client['id']}").status_code == 200


def test_patch_invoice_header(client):
    invoice = client.post("/api/sales-invoices", json={
        "billing_date": "2024-01-31",
        "items": [{"rate": 1000, "vat_percent": 5}]
    }).json()

    patched = client.patch(f"/api/sales-invoices/{invoice['id']}", json={
        "due_date": "2024-02-20",
        "remarks": "Second reminder",
        "total_amount": 1
    })

    assert patched.status_code == 200
    body = patched.json()
    assert body["due_date"] == "2024-02-20"
    assert body["remarks"] == "Second reminder"
    assert money(body["total_amount"]) == Decimal("1050.00")
    assert body["invoice_number"] == invoice["invoice_number"]


def test_patch_purchase_bill_header(client):
    bill = client.post("/api/purchase-bills", json={
        "billing_date": "2024-01-31",
        "items": [{"rate": 800}]
    }).json()

    patched = client.patch(f"/api/purchase-bills/{bill['id']}", json={"billing_date": "2024-02-01", "received_by": "NOC"})

    assert patched.status_code == 200
    assert patched.json()["billing_date"] == "2024-02-01"
    assert money(patched.json()["due_amount"]) == Decimal("800.00")
    assert client.patch("/api/purchase-bills/999", json={"remarks": "x"}).status_code == 404
