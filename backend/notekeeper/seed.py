"""
NoteKeeper Backend - Administrative User Seeding
==================================================

What:  Guarantees that at least one user with the admin role exists.
How:   If no admin user is found, creates exactly one from the SEED_ADMIN_*
       settings (password stored as a passlib hash); otherwise does nothing.
When:  Run out-of-band before the service is used:

    notekeeper-seed
    python -m notekeeper.seed

Running it repeatedly leaves exactly one seeded admin.
"""

import asyncio
import logging
import sys
from typing import Optional

from sqlalchemy import select

from notekeeper.config import Settings, settings as default_settings
from notekeeper.database import Database
from notekeeper.logging_config import setup_logging
from notekeeper.models.user import ROLE_ADMIN, User
from notekeeper.services.passwords import hash_password

logger = logging.getLogger(__name__)


async def seed_admin(database: Database, settings: Settings) -> bool:
    """
    Create the administrative user if none exists.

    Returns:
        True if a user was created, False if an admin already existed.
    """
    async with database.session() as session:
        result = await session.execute(
            select(User.id).where(User.role == ROLE_ADMIN).limit(1)
        )
        if result.scalar_one_or_none() is not None:
            logger.info("Admin already exists; nothing to seed")
            return False

        session.add(
            User(
                email=settings.seed_admin_email,
                name=settings.seed_admin_name,
                role=ROLE_ADMIN,
                password_hash=hash_password(settings.seed_admin_password),
            )
        )

    logger.info("Created admin user %s", settings.seed_admin_email)
    return True


async def run(settings: Settings) -> bool:
    database = Database.from_settings(settings)
    try:
        if settings.db_create_tables:
            await database.create_all()
        return await seed_admin(database, settings)
    finally:
        await database.dispose()


def main(settings: Optional[Settings] = None) -> None:
    """Console entry point; exits with status 1 on failure."""
    settings = settings or default_settings
    setup_logging(settings)
    try:
        asyncio.run(run(settings))
    except Exception:
        logger.exception("Seed error")
        sys.exit(1)


if __name__ == "__main__":
    main()
