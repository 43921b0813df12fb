"""
Tests for customer and invoice endpoints (/api/v1/customers, /api/v1/invoices)
"""
import pytest
from datetime import datetime
from decimal import Decimal

from tests.factories import create_test_assembly, create_test_invoice

CUSTOMERS = "/api/v1/customers"
INVOICES = "/api/v1/invoices"


def _invoice_payload(customer, assembly, quantity=3, price="1250.50", **extra):
    payload = {
        "customer_id": customer.id,
        "products": [{
            "product_id": assembly.id,
            "product_name": assembly.name,
            "quantity": quantity,
            "amount_per_unit": price,
        }],
    }
    payload.update(extra)
    return payload


class TestCustomers:

    @pytest.mark.api
    def test_create_requires_name_and_address(self, client):
        assert client.post(CUSTOMERS, json={"name": "Acme"}).status_code == 422
        assert client.post(CUSTOMERS, json={"name": "", "address": "x"}).status_code == 422

        response = client.post(CUSTOMERS, json={"name": "Acme", "address": "1 Road"})
        assert response.status_code == 201
        assert response.json()["invoice_count"] == 0

    @pytest.mark.api
    def test_update_logs_under_billing(self, client, sample_customer):
        response = client.put(f"{CUSTOMERS}/{sample_customer.id}", json={
            "name": "John Smith Jr",
            "address": "123 Main St, New York, NY 10001",
            "phone_number": "(555) 123-4567",
            "gst_no": "GST123456789",
        })
        assert response.status_code == 200

        log = client.get("/api/v1/activity-logs", params={"module": "billing"}).json()[0]
        assert log["action"] == "UPDATE"
        assert log["details"] == "Name: John Smith → John Smith Jr"

    @pytest.mark.api
    def test_delete_with_invoices_is_409(self, client, db_session, sample_customer):
        create_test_invoice(db_session, sample_customer)
        db_session.commit()

        response = client.delete(f"{CUSTOMERS}/{sample_customer.id}")

        assert response.status_code == 409
        assert client.get(f"{CUSTOMERS}/{sample_customer.id}").status_code == 200

    @pytest.mark.api
    def test_delete(self, client, sample_customer):
        assert client.delete(f"{CUSTOMERS}/{sample_customer.id}").status_code == 200
        assert client.get(f"{CUSTOMERS}/{sample_customer.id}").status_code == 404


class TestCreateInvoice:

    @pytest.mark.api
    def test_success(self, client, db_session, sample_customer, assembly_stock):
        response = client.post(
            INVOICES,
            json=_invoice_payload(sample_customer, assembly_stock, invoice_no="INV-100"),
        )

        assert response.status_code == 201
        body = response.json()
        assert body["invoice"]["invoice_no"] == "INV-100"
        assert body["invoice"]["status"] == "draft"
        assert Decimal(body["invoice"]["total_amount"]) == Decimal("3751.50")
        assert len(body["invoice"]["items"]) == 1
        assert body["inventory_deductions"] == [{
            "product_id": assembly_stock.id,
            "product_name": "Yamaha YZF-R15 Conrod",
            "quantity_deducted": 3,
            "remaining_quantity": 9,
        }]

        db_session.refresh(assembly_stock)
        assert assembly_stock.quantity == 9

    @pytest.mark.api
    def test_generated_number(self, client, sample_customer, assembly_stock):
        body = client.post(INVOICES, json=_invoice_payload(sample_customer, assembly_stock)).json()
        assert body["invoice"]["invoice_no"] == f"INV-{datetime.utcnow().year}-0001"

    @pytest.mark.api
    def test_insufficient_stock_is_422(self, client, db_session, sample_customer, assembly_stock):
        response = client.post(
            INVOICES, json=_invoice_payload(sample_customer, assembly_stock, quantity=13)
        )

        assert response.status_code == 422
        assert response.json()["error"] == "INSUFFICIENT_INVENTORY"
        db_session.refresh(assembly_stock)
        assert assembly_stock.quantity == 12
        assert client.get(INVOICES).json() == []

    @pytest.mark.api
    def test_duplicate_number_is_409(self, client, sample_customer, assembly_stock):
        payload = _invoice_payload(sample_customer, assembly_stock, quantity=1, invoice_no="INV-D")
        assert client.post(INVOICES, json=payload).status_code == 201

        response = client.post(INVOICES, json=payload)

        assert response.status_code == 409

    @pytest.mark.api
    def test_unknown_product_is_404(self, client, sample_customer, assembly_stock):
        payload = _invoice_payload(sample_customer, assembly_stock)
        payload["products"][0]["product_id"] = 9999

        assert client.post(INVOICES, json=payload).status_code == 404

    @pytest.mark.api
    def test_empty_products_rejected(self, client, sample_customer):
        response = client.post(INVOICES, json={"customer_id": sample_customer.id, "products": []})
        assert response.status_code == 422

    @pytest.mark.api
    def test_negative_price_rejected(self, client, sample_customer, assembly_stock):
        response = client.post(
            INVOICES, json=_invoice_payload(sample_customer, assembly_stock, price="-1")
        )
        assert response.status_code == 422


class TestInvoiceLifecycle:

    @pytest.mark.api
    def test_list_detail_status_delete(self, client, db_session, sample_customer):
        a = create_test_assembly(db_session, name="Conrod A", quantity=5)
        db_session.commit()
        created = client.post(
            INVOICES, json=_invoice_payload(sample_customer, a, quantity=2, price="100")
        ).json()["invoice"]

        listing = client.get(INVOICES).json()
        assert listing[0]["customer_name"] == "John Smith"
        assert listing[0]["items"][0]["quantity"] == 2

        detail = client.get(f"{INVOICES}/{created['id']}").json()
        assert detail["items"][0]["product_name"] == "Conrod A"

        paid = client.put(f"{INVOICES}/{created['id']}", json={"status": "paid"})
        assert paid.status_code == 200
        assert paid.json()["status"] == "paid"

        assert client.put(f"{INVOICES}/{created['id']}", json={"status": "void"}).status_code == 422

        assert client.delete(f"{INVOICES}/{created['id']}").status_code == 200
        assert client.get(f"{INVOICES}/{created['id']}").status_code == 404

        # Stock stays deducted after delete
        db_session.refresh(a)
        assert a.quantity == 3

        billing = client.get("/api/v1/activity-logs", params={"module": "billing"}).json()
        assert [log["action"] for log in billing] == ["DELETE", "UPDATE", "DEDUCT", "CREATE"]
        assert billing[0]["details"] == "Total Amount: ₹200.00, Status: paid"

    @pytest.mark.api
    def test_customer_stats_follow_invoices(self, client, sample_customer, assembly_stock):
        client.post(INVOICES, json=_invoice_payload(sample_customer, assembly_stock, quantity=2,
                                                     price="10"))

        customer = client.get(f"{CUSTOMERS}/{sample_customer.id}").json()
        assert customer["invoice_count"] == 1
        assert Decimal(customer["total_billed"]) == Decimal("20")
