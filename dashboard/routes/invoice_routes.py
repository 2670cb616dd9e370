from flask import (
    Blueprint,
    abort,
    flash,
    redirect,
    render_template,
    request,
    url_for,
)
from flask_login import login_required

from dashboard import INVOICES_PATH, actions
from dashboard.cache import get_path_cache
from dashboard.data import (
    fetch_customers,
    fetch_filtered_invoices,
    fetch_invoice_by_id,
    fetch_invoices_pages,
)
from dashboard.models import INVOICE_STATUSES
from dashboard.state import ActionState, Redirect
from dashboard.utils.numeric import format_currency
from dashboard.utils.pagination import (
    build_pagination_args,
    generate_pagination,
    get_page,
)

invoice = Blueprint("invoice", __name__)


@invoice.app_template_filter("currency")
def currency_filter(cents):
    return format_currency(cents)


def _breadcrumbs(label, href):
    return [
        {"label": "Invoices", "href": INVOICES_PATH, "active": False},
        {"label": label, "href": href, "active": True},
    ]


def _render_form(template, state, values, **context):
    return render_template(
        template,
        state=state,
        values=values,
        customers=fetch_customers(),
        statuses=INVOICE_STATUSES,
        **context,
    )


@invoice.route(INVOICES_PATH)
@login_required
def view_invoices():
    """List invoices matching the search query, one page at a time."""
    query = request.args.get("query", "").strip()
    page = get_page()

    def load():
        return fetch_filtered_invoices(query, page), fetch_invoices_pages(query)

    invoices, total_pages = get_path_cache().get_or_set(
        INVOICES_PATH, (query, page), load
    )
    return render_template(
        "invoices/view_invoices.html",
        invoices=invoices,
        query=query,
        page=page,
        total_pages=total_pages,
        pages=generate_pagination(page, total_pages),
        pagination_args=build_pagination_args(),
    )


@invoice.route(f"{INVOICES_PATH}/create", methods=["GET", "POST"])
@login_required
def create_invoice():
    """Show the create form and run the create action on submit."""
    state = ActionState()
    values = {}
    if request.method == "POST":
        result = actions.create_invoice(state, request.form)
        if isinstance(result, Redirect):
            flash("Invoice created successfully!", "success")
            return redirect(result.location)
        state = result
        values = request.form
    return _render_form(
        "invoices/create_invoice.html",
        state,
        values,
        breadcrumbs=_breadcrumbs("Create Invoice", f"{INVOICES_PATH}/create"),
    )


@invoice.route(f"{INVOICES_PATH}/<invoice_id>/edit", methods=["GET", "POST"])
@login_required
def edit_invoice(invoice_id):
    """Show an invoice for editing and run the update action on submit."""
    existing = fetch_invoice_by_id(invoice_id)
    if existing is None:
        abort(404)

    state = ActionState()
    values = existing
    if request.method == "POST":
        result = actions.update_invoice(invoice_id, request.form, state)
        if isinstance(result, Redirect):
            flash("Invoice updated successfully!", "success")
            return redirect(result.location)
        state = result
        values = request.form
    return _render_form(
        "invoices/edit_invoice.html",
        state,
        values,
        invoice=existing,
        breadcrumbs=_breadcrumbs(
            "Edit Invoice", f"{INVOICES_PATH}/{invoice_id}/edit"
        ),
    )


@invoice.route(f"{INVOICES_PATH}/<invoice_id>/delete", methods=["POST"])
@login_required
def delete_invoice(invoice_id):
    """Delete an invoice from the list view."""
    state = actions.delete_invoice(invoice_id)
    category = "success" if state.message == actions.DELETED else "danger"
    flash(state.message, category)
    return redirect(url_for("invoice.view_invoices"))
