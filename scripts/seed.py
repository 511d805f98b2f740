"""Seed the database with demo users and posts.

Usage:
    DATABASE_URL=postgresql+asyncpg://... python -m scripts.seed
"""

import asyncio
import logging

from pressroom.config import get_settings
from pressroom.db.session import create_session_factory
from pressroom.infrastructure.observability import setup_logging
from pressroom.services.seed import seed_demo_content

logger = logging.getLogger("pressroom.seed")


async def main() -> None:
    settings = get_settings()
    setup_logging(settings.log_level, "text")
    session_factory = create_session_factory(settings.database_url)
    try:
        async with session_factory() as db:
            users, posts = await seed_demo_content(db)
        logger.info(f"Seeding finished: {users} new users, {posts} posts")
    finally:
        await session_factory.kw["bind"].dispose()


if __name__ == "__main__":
    asyncio.run(main())
