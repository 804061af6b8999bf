from __future__ import annotations

import argparse

from services.pos.app.db.database import db_session
from services.pos.app.db.init_db import init_db
from services.pos.app.services.shop_settings import get_or_create_settings


def main() -> int:
    parser = argparse.ArgumentParser(description="Update the shop name shown on bills")
    parser.add_argument("shop_name", nargs="?", default="My Restaurant")
    args = parser.parse_args()

    new_name = args.shop_name.strip()
    if not new_name:
        parser.error("shop name must not be blank")

    init_db()

    db = db_session()
    try:
        settings = get_or_create_settings(db)
        old_name = settings.shop_name or "Not set"
        settings.shop_name = new_name
        db.commit()
        print(f"Updated shop name from {old_name!r} to {new_name!r}")
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    raise SystemExit(main())
