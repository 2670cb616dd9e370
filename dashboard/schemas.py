"""Declarative validation rules for submitted invoice fields.

The rule sets are plain :class:`wtforms.Form` classes so they can validate
any mapping of raw strings, inside or outside a request.  ``CreateInvoice``
and ``UpdateInvoice`` drop the ``id`` and ``date`` fields of
:class:`InvoiceSchema`.  :class:`LoginSchema` checks the shape of sign-in
credentials.
"""

from __future__ import annotations

from dataclasses import dataclass, field as dataclass_field
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Mapping, Optional, Tuple, Type

from werkzeug.datastructures import MultiDict
from wtforms import DecimalField, Form, PasswordField, SelectField, StringField
from wtforms.validators import AnyOf, DataRequired, Email, Length, StopValidation

from dashboard.errors import InvoiceValidationError
from dashboard.models import INVOICE_STATUSES
from dashboard.utils.numeric import MAX_AMOUNT, to_minor_units

CUSTOMER_MESSAGE = "Please select a customer."
AMOUNT_MESSAGE = "Please enter an amount greater than $0."
STATUS_MESSAGE = "Please select an invoice status."


class CoercedDecimalField(DecimalField):
    """Decimal field that leaves unparseable input as ``None``.

    WTForms' own field records a separate "Not a valid decimal value" error;
    here the validators decide which single message the user sees.
    """

    def process_formdata(self, valuelist):
        if not valuelist:
            return
        raw_value = valuelist[0]
        try:
            self.data = Decimal(str(raw_value).strip())
        except (InvalidOperation, ValueError, TypeError):
            self.data = None


class GreaterThan:
    """Require a finite number strictly greater than ``minimum``."""

    def __init__(self, minimum, message=None):
        self.minimum = minimum
        self.message = message

    def __call__(self, form, field):
        data = field.data
        if (
            data is None
            or not isinstance(data, Decimal)
            or not data.is_finite()
            or data <= self.minimum
        ):
            message = self.message or field.gettext(
                "Number must be greater than %(min)s."
            ) % {"min": self.minimum}
            raise StopValidation(message)


class StorableAmount:
    """Require an amount that rounds to between one cent and ``MAX_AMOUNT``."""

    def __init__(self, message=None):
        self.message = message

    def __call__(self, form, field):
        data = field.data
        if data > MAX_AMOUNT or to_minor_units(data) < 1:
            message = self.message or field.gettext("Amount is out of range.")
            raise StopValidation(message)


class InvoiceSchema(Form):
    id = StringField("Id", validators=[DataRequired()])
    customer_id = StringField(
        "Customer", validators=[DataRequired(message=CUSTOMER_MESSAGE)]
    )
    amount = CoercedDecimalField(
        "Amount",
        validators=[
            GreaterThan(0, message=AMOUNT_MESSAGE),
            StorableAmount(message=AMOUNT_MESSAGE),
        ],
    )
    status = SelectField(
        "Status",
        choices=[(status, status.title()) for status in INVOICE_STATUSES],
        validate_choice=False,
        validators=[AnyOf(INVOICE_STATUSES, message=STATUS_MESSAGE)],
    )
    date = StringField("Date", validators=[DataRequired()])


class CreateInvoice(InvoiceSchema):
    id = None
    date = None


class UpdateInvoice(InvoiceSchema):
    id = None
    date = None


class LoginSchema(Form):
    email = StringField("Email", validators=[DataRequired(), Email()])
    password = PasswordField("Password", validators=[DataRequired(), Length(min=6)])


@dataclass(frozen=True)
class ValidationIssue:
    path: Tuple[Any, ...]
    message: str


@dataclass(frozen=True)
class ParseResult:
    success: bool
    data: Optional[Dict[str, Any]] = None
    issues: List[ValidationIssue] = dataclass_field(default_factory=list)


def _as_formdata(data: Mapping[str, Any]) -> MultiDict:
    if isinstance(data, MultiDict):
        return data
    return MultiDict({key: value for key, value in data.items() if value is not None})


def safe_parse(schema: Type[Form], data: Mapping[str, Any]) -> ParseResult:
    """Validate ``data`` against ``schema`` without raising.

    Issues are listed in field declaration order, each field's messages in
    the order its validators produced them.
    """
    form = schema(formdata=_as_formdata(data))
    if form.validate():
        return ParseResult(
            success=True, data={field.name: field.data for field in form}
        )
    issues = [
        ValidationIssue(path=(field.name,), message=message)
        for field in form
        for message in field.errors
    ]
    return ParseResult(success=False, issues=issues)


def parse(schema: Type[Form], data: Mapping[str, Any]) -> Dict[str, Any]:
    """Validate ``data`` and return the typed fields.

    Raises :class:`InvoiceValidationError` when any field is invalid.
    """
    result = safe_parse(schema, data)
    if not result.success:
        raise InvoiceValidationError(result.issues)
    return result.data
