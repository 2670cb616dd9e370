"""Read-side queries used to render the invoice list and forms."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from sqlalchemy import String, cast, func, or_, select

from dashboard import db
from dashboard.models import Customer, Invoice
from dashboard.utils.numeric import from_minor_units
from dashboard.utils.pagination import ITEMS_PER_PAGE, count_pages


def _matches(query: str):
    # Search text is literal; "%" and "_" must not act as wildcards.
    escaped = query.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    pattern = f"%{escaped}%"
    return or_(
        Customer.name.ilike(pattern, escape="\\"),
        Customer.email.ilike(pattern, escape="\\"),
        cast(Invoice.amount, String).ilike(pattern, escape="\\"),
        Invoice.date.ilike(pattern, escape="\\"),
        Invoice.status.ilike(pattern, escape="\\"),
    )


def fetch_filtered_invoices(query: str = "", current_page: int = 1) -> List[Dict[str, Any]]:
    """Return one page of invoices joined with their customer, newest first."""
    offset = (max(current_page, 1) - 1) * ITEMS_PER_PAGE
    stmt = (
        select(
            Invoice.id,
            Invoice.amount,
            Invoice.date,
            Invoice.status,
            Customer.name,
            Customer.email,
            Customer.image_url,
        )
        .join(Customer, Invoice.customer_id == Customer.id)
        .where(_matches(query))
        .order_by(Invoice.date.desc(), Invoice.id)
        .limit(ITEMS_PER_PAGE)
        .offset(offset)
    )
    return [dict(row) for row in db.session.execute(stmt).mappings()]


def fetch_invoices_pages(query: str = "") -> int:
    """Return the number of list pages for ``query``."""
    stmt = (
        select(func.count())
        .select_from(Invoice)
        .join(Customer, Invoice.customer_id == Customer.id)
        .where(_matches(query))
    )
    return count_pages(db.session.execute(stmt).scalar_one())


def fetch_invoice_by_id(invoice_id: str) -> Optional[Dict[str, Any]]:
    """Return the editable fields of an invoice, amount in dollars."""
    invoice = db.session.get(Invoice, invoice_id)
    if invoice is None:
        return None
    return {
        "id": invoice.id,
        "customer_id": invoice.customer_id,
        "amount": from_minor_units(invoice.amount),
        "status": invoice.status,
        "date": invoice.date,
    }


def fetch_customers() -> List[Dict[str, Any]]:
    stmt = select(Customer.id, Customer.name).order_by(Customer.name)
    return [dict(row) for row in db.session.execute(stmt).mappings()]
