from decimal import Decimal

from dashboard import db
from dashboard.data import (
    fetch_customers,
    fetch_filtered_invoices,
    fetch_invoice_by_id,
    fetch_invoices_pages,
)
from dashboard.models import Customer, Invoice


def _seed():
    amy = Customer(name="Amy Burns", email="amy@burns.com", image_url="/amy.png")
    lee = Customer(name="Lee Robinson", email="lee@robinson.com")
    db.session.add_all([amy, lee])
    db.session.flush()
    db.session.add_all(
        [
            Invoice(customer_id=amy.id, amount=3040, status="paid", date="2022-10-29"),
            Invoice(customer_id=lee.id, amount=54246, status="pending", date="2023-07-16"),
        ]
    )
    db.session.commit()
    return amy, lee


def test_fetch_customers_sorted_by_name(app):
    _seed()
    assert [c["name"] for c in fetch_customers()] == ["Amy Burns", "Lee Robinson"]
    assert set(fetch_customers()[0]) == {"id", "name"}


def test_fetch_filtered_invoices_newest_first(app):
    _seed()
    rows = fetch_filtered_invoices()
    assert [row["name"] for row in rows] == ["Lee Robinson", "Amy Burns"]
    assert rows[1]["image_url"] == "/amy.png"
    assert rows[1]["amount"] == 3040


def test_fetch_filtered_invoices_matches_any_column(app):
    _seed()
    assert [r["status"] for r in fetch_filtered_invoices("PAID")] == ["paid"]
    assert [r["name"] for r in fetch_filtered_invoices("54246")] == ["Lee Robinson"]
    assert [r["date"] for r in fetch_filtered_invoices("2022-10")] == ["2022-10-29"]
    assert fetch_filtered_invoices("burns.com")[0]["email"] == "amy@burns.com"
    assert fetch_filtered_invoices("nothing-matches") == []


def test_fetch_invoices_pages(app):
    assert fetch_invoices_pages() == 0
    _seed()
    assert fetch_invoices_pages() == 1
    assert fetch_invoices_pages("nothing-matches") == 0


def test_fetch_invoice_by_id(app, invoice, customer):
    found = fetch_invoice_by_id(invoice)
    assert found == {
        "id": invoice,
        "customer_id": customer,
        "amount": Decimal("12.34"),
        "status": "pending",
        "date": "2024-01-05",
    }
    assert fetch_invoice_by_id("missing") is None


def test_search_wildcards_match_literally(app):
    _seed()
    assert fetch_filtered_invoices("%") == []
    assert fetch_filtered_invoices("_") == []
    assert fetch_invoices_pages("%") == 0

    db.session.add(Customer(name="100% Rabbit", email="x_y@rabbit.com"))
    db.session.flush()
    rabbit = Customer.query.filter_by(name="100% Rabbit").one()
    db.session.add(Invoice(customer_id=rabbit.id, amount=100, status="paid", date="2024-02-01"))
    db.session.commit()
    assert [r["name"] for r in fetch_filtered_invoices("0%")] == ["100% Rabbit"]
    assert [r["email"] for r in fetch_filtered_invoices("x_y")] == ["x_y@rabbit.com"]
