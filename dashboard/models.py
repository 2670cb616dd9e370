import uuid
from datetime import datetime

from flask_login import UserMixin
from sqlalchemy.orm import relationship

from dashboard import db

INVOICE_STATUSES = ("pending", "paid")


def _new_uuid() -> str:
    return str(uuid.uuid4())


class User(UserMixin, db.Model):
    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False, default="")
    email = db.Column(db.String(120), unique=True, nullable=False)
    password = db.Column(db.String(255), nullable=False)
    is_admin = db.Column(db.Boolean, default=False, nullable=False)
    active = db.Column(db.Boolean, default=False, nullable=False)


class Customer(db.Model):
    __tablename__ = "customers"

    id = db.Column(db.String(36), primary_key=True, default=_new_uuid)
    name = db.Column(db.String(255), nullable=False)
    email = db.Column(db.String(255), nullable=False)
    image_url = db.Column(db.String(255), nullable=False, default="")

    invoices = db.relationship("Invoice", backref="customer", lazy=True)

    __table_args__ = (db.Index("ix_customers_name", "name"),)


class Invoice(db.Model):
    """A customer invoice.

    ``amount`` is stored in minor units (cents) and ``date`` as an ISO
    ``YYYY-MM-DD`` string.
    """

    __tablename__ = "invoices"

    id = db.Column(db.String(36), primary_key=True, default=_new_uuid)
    customer_id = db.Column(
        db.String(36), db.ForeignKey("customers.id"), nullable=False, index=True
    )
    amount = db.Column(db.Integer, nullable=False)
    status = db.Column(db.String(16), nullable=False)
    date = db.Column(db.String(10), nullable=False, index=True)

    __table_args__ = (
        db.CheckConstraint("amount > 0", name="ck_invoices_amount_positive"),
        db.CheckConstraint(
            "status IN ('pending', 'paid')", name="ck_invoices_status"
        ),
        db.CheckConstraint("customer_id <> ''", name="ck_invoices_customer"),
    )


class ActivityLog(db.Model):
    __tablename__ = "activity_log"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=True)
    activity = db.Column(db.String(255), nullable=False)
    timestamp = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    user = relationship("User", backref="activity_logs")
