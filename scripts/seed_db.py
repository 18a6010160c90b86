#!/usr/bin/env python
"""
Database seeding script
Loads the default platform and plan catalogs, plus an admin account for development
"""
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from film_distribution.auth import get_password_hash
from film_distribution.config import config
from film_distribution.db import SessionLocal
from film_distribution.schemas import UserCreate
from film_distribution.storage import DatabaseStorage, seed_catalogs

DEV_ADMIN_USERNAME = "admin"
DEV_ADMIN_PASSWORD = "adminpassword123"


def seed_database():
    """Seed catalogs; in dev also create the admin account if missing"""
    db = SessionLocal()

    try:
        seeded = seed_catalogs(db)
        print(f"✓ Seeded {seeded['platforms']} platform(s) and {seeded['plans']} plan(s)")
        if not seeded["platforms"] and not seeded["plans"]:
            print("  Catalogs already populated, nothing to do")

        if config.is_dev:
            storage = DatabaseStorage(db)
            if storage.users.get_by_username(DEV_ADMIN_USERNAME).unwrap() is None:
                admin = storage.users.create(UserCreate(
                    username=DEV_ADMIN_USERNAME,
                    password=get_password_hash(DEV_ADMIN_PASSWORD),
                    email="admin@example.com",
                    name="Administrator",
                    is_admin=True,
                ))
                print(f"  Created admin user {admin.id}: {DEV_ADMIN_USERNAME} / {DEV_ADMIN_PASSWORD}")

    except Exception as e:
        print(f"❌ Error seeding database: {e}", file=sys.stderr)
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    seed_database()
