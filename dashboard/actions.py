"""Form actions that validate, persist and invalidate invoice data.

Each mutation handler runs at most one SQL statement.  Validation and
database failures come back as an :class:`ActionState`; a finished create
or update comes back as a :class:`Redirect` to the invoice list.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from flask import current_app
from sqlalchemy import delete, insert, update
from sqlalchemy.exc import SQLAlchemyError

from dashboard import INVOICES_PATH, db
from dashboard.auth import sign_in
from dashboard.cache import revalidate_path
from dashboard.errors import AuthError, PersistenceError
from dashboard.models import Invoice
from dashboard.schemas import CreateInvoice, UpdateInvoice, ValidationIssue, safe_parse
from dashboard.state import ActionResult, ActionState, Redirect
from dashboard.utils.activity import log_activity
from dashboard.utils.numeric import to_minor_units

INVOICE_FIELDS = ("customer_id", "amount", "status")

CREATE_FAILED = "Database Error: Failed to Create Invoice."
UPDATE_FAILED = "Database Error: Failed to Update Invoice."
DELETE_FAILED = "Database Error: Failed to Delete Invoice."
DELETED = "Deleted Invoice."

invoices = Invoice.__table__


def transform_errors(issues: Iterable[ValidationIssue]) -> Dict[str, List[str]]:
    """Group issue messages by the field they belong to."""
    errors: Dict[str, List[str]] = {}
    for issue in issues:
        field = issue.path[0] if issue.path else None
        if field and isinstance(field, str):
            errors.setdefault(field, []).append(issue.message)
    return errors


def _extract(form_data: Mapping[str, Any]) -> Dict[str, Any]:
    return {name: form_data.get(name) for name in INVOICE_FIELDS}


def _today() -> str:
    return datetime.now(timezone.utc).date().isoformat()


def _execute(build_statement, failure_message: str, invoice_id: Optional[str] = None):
    """Build and run one statement in its own transaction.

    ``build_statement`` is called inside the guarded block so that values
    the database cannot bind fail the same way as a rejected statement.
    Raises :class:`PersistenceError` in both cases.
    """
    try:
        result = db.session.execute(build_statement())
        db.session.commit()
    except (SQLAlchemyError, ArithmeticError) as exc:
        db.session.rollback()
        error = PersistenceError.from_exception(exc, failure_message)
        current_app.logger.warning(
            "Invoice statement failed (kind=%s, invoice=%s)",
            error.kind,
            invoice_id,
            exc_info=True,
        )
        raise error from exc
    return result


def create_invoice(state: ActionState, form_data: Mapping[str, Any]) -> ActionResult:
    state = state or ActionState()
    validated = safe_parse(CreateInvoice, _extract(form_data))
    if not validated.success:
        return state.update(errors=transform_errors(validated.issues))

    data = validated.data

    def statement():
        return insert(invoices).values(
            customer_id=data["customer_id"],
            amount=to_minor_units(data["amount"]),
            status=data["status"],
            date=_today(),
        )

    try:
        _execute(statement, CREATE_FAILED)
    except PersistenceError as exc:
        return state.update(message=exc.message)

    revalidate_path(INVOICES_PATH)
    log_activity(f"Created invoice for customer {data['customer_id']}")
    return Redirect(INVOICES_PATH)


def update_invoice(
    invoice_id: str,
    form_data: Mapping[str, Any],
    state: Optional[ActionState] = None,
) -> ActionResult:
    state = state or ActionState()
    validated = safe_parse(UpdateInvoice, _extract(form_data))
    if not validated.success:
        return state.update(errors=transform_errors(validated.issues))

    data = validated.data

    def statement():
        return (
            update(invoices)
            .where(invoices.c.id == invoice_id)
            .values(
                customer_id=data["customer_id"],
                amount=to_minor_units(data["amount"]),
                status=data["status"],
            )
        )

    try:
        _execute(statement, UPDATE_FAILED, invoice_id)
    except PersistenceError as exc:
        return state.update(message=exc.message)

    revalidate_path(INVOICES_PATH)
    log_activity(f"Updated invoice {invoice_id}")
    return Redirect(INVOICES_PATH)


def delete_invoice(invoice_id: str) -> ActionState:
    try:
        _execute(
            lambda: delete(invoices).where(invoices.c.id == invoice_id),
            DELETE_FAILED,
            invoice_id,
        )
    except PersistenceError as exc:
        return ActionState(message=exc.message)

    revalidate_path(INVOICES_PATH)
    log_activity(f"Deleted invoice {invoice_id}")
    return ActionState(message=DELETED)


def authenticate(
    prev_state: Optional[str], form_data: Mapping[str, Any]
) -> Union[str, Redirect]:
    """Sign in with submitted credentials.

    Returns a message for classified sign-in failures; anything else the
    provider raises propagates.
    """
    try:
        return sign_in("credentials", form_data)
    except AuthError as error:
        if error.type == "CredentialsSignin":
            return "Invalid credentials."
        return "Something went wrong."
