from __future__ import annotations

import argparse
from decimal import Decimal

from services.api.app.db.database import db_session
from services.api.app.db.init_db import init_db
from services.api.app.db.models import MenuItem, User

_DEFAULT_MENU = (
    ("Masala Dosa", "Breakfast", Decimal("50.00")),
    ("Idli Sambar", "Breakfast", Decimal("40.00")),
    ("Veg Thali", "Lunch", Decimal("120.00")),
    ("Paneer Wrap", "Snacks", Decimal("70.00")),
    ("Filter Coffee", "Beverages", Decimal("20.00")),
)


def main() -> int:
    parser = argparse.ArgumentParser(description="Seed minimal canteen data")
    parser.add_argument("--admin-email", default="admin@canteen.local")
    parser.add_argument("--admin-name", default="Canteen Admin")
    parser.add_argument("--customer-email", default="student@canteen.local")
    parser.add_argument("--customer-name", default="Student One")
    args = parser.parse_args()

    init_db()

    db = db_session()
    try:
        for email, name, role in (
            (args.admin_email, args.admin_name, "admin"),
            (args.customer_email, args.customer_name, "customer"),
        ):
            if db.query(User).filter(User.email == email).first() is None:
                db.add(User(name=name, email=email, role=role))

        existing_menu = db.query(MenuItem).limit(1).count()
        if existing_menu == 0:
            for name, category, price in _DEFAULT_MENU:
                db.add(MenuItem(name=name, category=category, price=price, available=True))

        db.commit()
        print("Seeded canteen users and menu")
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    raise SystemExit(main())
