from __future__ import annotations

import argparse
from uuid import uuid4

from services.pos.app.db.database import db_session
from services.pos.app.db.init_db import init_db
from services.pos.app.db.models import Category, MenuItem
from services.pos.app.services.shop_settings import get_or_create_settings

_SAMPLE_MENU: dict[str, list[tuple[str, str, float]]] = {
    "Fresh Juices": [
        ("Orange Juice", "Fresh and tangy orange juice", 50),
        ("Mango Juice", "Sweet and delicious mango juice", 60),
        ("Watermelon Juice", "Refreshing watermelon juice", 55),
        ("Mosambi Juice", "Sweet lime juice", 50),
        ("Pomegranate Juice", "Fresh pomegranate juice", 70),
        ("Mixed Fruit Juice", "Seasonal fruit blend", 65),
    ],
    "Milkshakes": [
        ("Mango Milkshake", "Thick mango shake", 80),
        ("Chocolate Milkshake", "Rich chocolate shake", 85),
        ("Vanilla Milkshake", "Classic vanilla shake", 75),
        ("Butterscotch Milkshake", "Butterscotch with caramel bits", 90),
        ("Badam Milkshake", "Almond milk shake", 95),
    ],
}

_PLACEHOLDER_IMAGE = "https://placehold.co/400x300?text=Menu"


def main() -> int:
    parser = argparse.ArgumentParser(description="Seed categories and a sample menu")
    parser.add_argument("--shop-name", default=None, help="Also set the shop name")
    parser.add_argument("--upi-id", default=None, help="Also set the UPI id used on bills")
    args = parser.parse_args()

    init_db()

    db = db_session()
    try:
        for order, (category_name, items) in enumerate(_SAMPLE_MENU.items()):
            if db.query(Category).filter(Category.name == category_name).first() is None:
                db.add(Category(id=uuid4().hex, name=category_name, display_order=order))

            existing = db.query(MenuItem).filter(MenuItem.category == category_name).limit(1).count()
            if existing:
                continue

            for name, description, price in items:
                db.add(
                    MenuItem(
                        id=uuid4().hex,
                        name=name,
                        category=category_name,
                        description=description,
                        price=price,
                        image=_PLACEHOLDER_IMAGE,
                    )
                )

        settings = get_or_create_settings(db)
        if args.shop_name:
            settings.shop_name = args.shop_name.strip()
        if args.upi_id is not None:
            settings.upi_id = args.upi_id.strip()

        db.commit()
        print(f"Seeded menu for shop={settings.shop_name!r}")
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    raise SystemExit(main())
