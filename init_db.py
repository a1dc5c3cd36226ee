"""
Create the database tables and, optionally, demo accounts.

    python init_db.py            # create missing tables
    python init_db.py --reset    # drop and recreate (DEV ONLY)
    python init_db.py --seed     # also add free/premium/admin demo users
"""
import argparse
import asyncio
import logging
import os

from backend.app.core.logging import setup_logging
from backend.app.db.base import AsyncSessionLocal
from backend.app.db.init_db import init_models
from backend.app.models import User, UserRole
from backend.app.repositories.users import UserRepository
from backend.app.security.hashing import get_password_hash

logger = logging.getLogger("init_db")

DEMO_USERS = [
    ("free@bankr.example.com", "Free", UserRole.FREE),
    ("premium@bankr.example.com", "Premium", UserRole.PREMIUM),
    ("admin@bankr.example.com", "Admin", UserRole.ADMIN),
]


async def seed_demo_users(password: str) -> None:
    async with AsyncSessionLocal() as db:
        users = UserRepository(db)
        for email, first_name, role in DEMO_USERS:
            if await users.get_by_email(email) is not None:
                logger.info("Demo user %s already exists", email)
                continue
            await users.create(
                User(
                    email=email,
                    password_hash=get_password_hash(password),
                    first_name=first_name,
                    last_name="User",
                    role=role.value,
                    email_verified=True,
                )
            )
            logger.info("Created demo user %s (%s)", email, role.value)


async def main(reset: bool, seed: bool) -> None:
    await init_models(drop=reset)
    if seed:
        await seed_demo_users(os.environ.get("DEMO_PASSWORD", "Password123"))


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("--reset", action="store_true", help="drop existing tables first")
    parser.add_argument("--seed", action="store_true", help="create demo accounts")
    args = parser.parse_args()

    setup_logging()
    asyncio.run(main(args.reset, args.seed))
