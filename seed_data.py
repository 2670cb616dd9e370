import os

from werkzeug.security import generate_password_hash

from dashboard import create_admin_user, create_app, db
from dashboard.models import Customer, Invoice, User

DEMO_USER = {
    "name": "User",
    "email": "user@nextmail.com",
    "password": "123456",
}

CUSTOMERS = [
    ("Evil Rabbit", "evil@rabbit.com", "/customers/evil-rabbit.png"),
    ("Delba de Oliveira", "delba@oliveira.com", "/customers/delba-de-oliveira.png"),
    ("Lee Robinson", "lee@robinson.com", "/customers/lee-robinson.png"),
    ("Michael Novotny", "michael@novotny.com", "/customers/michael-novotny.png"),
    ("Amy Burns", "amy@burns.com", "/customers/amy-burns.png"),
    ("Balazs Orban", "balazs@orban.com", "/customers/balazs-orban.png"),
]

# (customer email, amount in cents, status, date)
INVOICES = [
    ("evil@rabbit.com", 15795, "pending", "2022-12-06"),
    ("delba@oliveira.com", 20348, "pending", "2022-11-14"),
    ("amy@burns.com", 3040, "paid", "2022-10-29"),
    ("michael@novotny.com", 44800, "paid", "2023-09-10"),
    ("balazs@orban.com", 34577, "pending", "2023-08-05"),
    ("lee@robinson.com", 54246, "pending", "2023-07-16"),
    ("evil@rabbit.com", 666, "pending", "2023-06-27"),
    ("michael@novotny.com", 32545, "paid", "2023-06-09"),
    ("amy@burns.com", 1250, "paid", "2023-06-17"),
    ("balazs@orban.com", 8546, "paid", "2023-06-07"),
    ("delba@oliveira.com", 500, "paid", "2023-08-19"),
    ("balazs@orban.com", 8945, "paid", "2023-06-03"),
    ("lee@robinson.com", 1000, "paid", "2022-06-05"),
]


def seed_initial_data() -> None:
    """Seed the admin and demo users, customers and invoices once."""
    app = create_app([])
    with app.app_context():
        create_admin_user()

        if User.query.filter_by(email=DEMO_USER["email"]).first() is None:
            db.session.add(
                User(
                    name=DEMO_USER["name"],
                    email=DEMO_USER["email"],
                    password=generate_password_hash(
                        os.getenv("DEMO_PASS", DEMO_USER["password"])
                    ),
                    active=True,
                )
            )

        customers = {}
        for name, email, image_url in CUSTOMERS:
            customer = Customer.query.filter_by(email=email).first()
            if customer is None:
                customer = Customer(name=name, email=email, image_url=image_url)
                db.session.add(customer)
            customers[email] = customer
        db.session.flush()

        if Invoice.query.count() == 0:
            db.session.add_all(
                Invoice(
                    customer_id=customers[email].id,
                    amount=amount,
                    status=status,
                    date=date,
                )
                for email, amount, status, date in INVOICES
            )

        db.session.commit()
        print("Demo users, customers and invoices created.")


if __name__ == "__main__":
    seed_initial_data()
