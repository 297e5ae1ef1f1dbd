"""
Admin Record Provisioning Script

Creates the administrator singleton that holds the promoted-restaurant
list. The API never creates it on demand, so run this once per
environment before using /update-promote-list.

Run from project root: python scripts/seed_admin.py [--promote ID ...]
"""

import argparse
import asyncio
import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
# Windows event loop fix
if sys.platform == "win32":
    asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())

from app.core.config import get_settings, setup_logging
from app.database import async_session_maker, engine, init_db
from app.services.admin import AdminRecordStore


async def seed_admin(promoted: list[str]) -> bool:
    """Ensure tables exist and the admin record is present."""
    print("=" * 60)
    print("ADMIN RECORD PROVISIONING")
    print("=" * 60)

    try:
        await init_db()
        async with async_session_maker() as session:
            admin = await AdminRecordStore(session).provision(promoted)
            print(f"\nAdmin record: {admin.id}")
            print(f"Promoted restaurants: {admin.promoted_restaurants}")
    except Exception as e:
        print(f"\nProvisioning failed: {e}")
        return False
    finally:
        await engine.dispose()

    print("\n" + "=" * 60)
    return True


if __name__ == "__main__":
    setup_logging()
    parser = argparse.ArgumentParser(description="Provision the admin record")
    parser.add_argument(
        "--promote",
        nargs="*",
        default=None,
        help="Initial promoted restaurant ids (defaults to ADMIN_PROMOTED_RESTAURANTS)",
    )
    args = parser.parse_args()

    promoted = args.promote
    if promoted is None:
        promoted = get_settings().admin_promoted_restaurants_list

    ok = asyncio.run(seed_admin(promoted))
    sys.exit(0 if ok else 1)
