"""Seed the default tags (and optionally demo users) for local development.

Seeded tags ship with the app and are marked ``seeded=True``; tags created
while adding spots are not.

Run this after creating the database schema with Alembic.

Usage:
    python scripts/seed_tags.py
    python scripts/seed_tags.py --demo-users
"""

import argparse
import asyncio
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from sqlalchemy import select

from spotmap.database import async_session_maker
from spotmap.exceptions import NotFoundError
from spotmap.models import User
from spotmap.services.tag import TagService
from spotmap.services.user import UserService


DEFAULT_TAGS = [
    "Study",
    "Food",
    "Coffee",
    "Outdoors",
    "Restroom",
    "Water Fountain",
    "Printer",
    "Gym",
]

# (username, reputation)
DEMO_USERS = [
    ("alice", 12),
    ("bob", 3),
    ("carol", 0),
]


async def seed_tags(tags: TagService) -> None:
    print("\n🏷️  Seeding tags")
    for label in DEFAULT_TAGS:
        try:
            existing = await tags.get_by_label(label)
        except NotFoundError:
            tag = await tags.create(label, seeded=True)
            print(f"  ✅ Created tag: {tag.label} (ID: {tag.id})")
        else:
            print(f"  ⏭️  Tag already exists: {existing.label}")


async def seed_users(users: UserService) -> None:
    print("\n👤 Seeding demo users")
    for username, reputation in DEMO_USERS:
        result = await users.db.execute(select(User).where(User.username == username))
        existing = result.scalar_one_or_none()
        if existing:
            print(f"  ⏭️  User already exists: {existing.username} (ID: {existing.id})")
            continue
        user = await users.create(username, reputation=reputation)
        print(f"  ✅ Created user: {user.username} (ID: {user.id}, reputation {reputation})")


async def seed_data(demo_users: bool) -> None:
    async with async_session_maker() as db:
        print("🌱 Starting seeding...")
        print("=" * 80)

        await seed_tags(TagService(db))
        if demo_users:
            await seed_users(UserService(db))

        print("\n" + "=" * 80)
        print("✅ Seeding complete")


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed default spotmap data")
    parser.add_argument(
        "--demo-users",
        action="store_true",
        help="Also create a few demo users with preset reputation",
    )
    args = parser.parse_args()
    asyncio.run(seed_data(args.demo_users))


if __name__ == "__main__":
    main()
