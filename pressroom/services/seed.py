"""Demo Seed — idempotent demo users and posts for local development.

Invariants:
    - Users upserted by email (existing users left untouched)
    - Each seeded slug is deleted before it is re-created
    - Every seeded post is published
"""

import logging
from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from pressroom.infrastructure.passwords import hash_password
from pressroom.infrastructure.post_repository import PostRepository
from pressroom.models.user import User

logger = logging.getLogger(__name__)

DEMO_PASSWORD = "password123"


@dataclass(frozen=True)
class SeedPost:
    title: str
    slug: str
    excerpt: str
    content: str
    author_index: int


DEMO_USERS = [
    ("Sarah Engineer", "sarah@example.com"),
    ("Mike Design", "mike@example.com"),
    ("Alex Systems", "alex@example.com"),
    ("Admin User", "admin@example.com"),
]

DEMO_POSTS = [
    SeedPost(
        title="The Future of Server Components",
        slug="future-of-server-components",
        excerpt="How rendering on the server changes data fetching, caching and bundle size.",
        content=(
            "## The Paradigm Shift\n\n"
            "Server-rendered components move data fetching next to the data.\n\n"
            "### Key Benefits\n\n"
            "1. **Zero bundle size** for server-only code.\n"
            "2. **Direct backend access** from the render path.\n"
        ),
        author_index=0,
    ),
    SeedPost(
        title="Why Types Matter at Scale",
        slug="why-types-matter-at-scale",
        excerpt="As codebases grow, a type system becomes the guardrail for large teams.",
        content=(
            "## Safety at Scale\n\n"
            "Renaming a core field is a compiler-guided change, not a grep.\n\n"
            "> Strict null checks catch more bugs than any linter rule.\n"
        ),
        author_index=2,
    ),
    SeedPost(
        title="The Joy of Golden Retrievers",
        slug="joy-of-golden-retrievers",
        excerpt="Loyal companions that bring endless joy to a family.",
        content=(
            "## A Heart of Gold\n\n"
            "- **Temperament**: gentle, affectionate, intelligent.\n"
            "- **Trainability**: eager to please.\n"
        ),
        author_index=1,
    ),
    SeedPost(
        title="Puppy Training 101: The Basics",
        slug="puppy-training-basics",
        excerpt="Obedience, socialization and building a strong bond.",
        content=(
            "## Set Them Up for Success\n\n"
            "1. **Sit**: the foundation of impulse control.\n"
            "2. **Stay**: essential for safety.\n"
            "3. **Recall**: coming when called.\n"
        ),
        author_index=3,
    ),
]


async def seed_demo_content(
    db: AsyncSession, password_rounds: int = 12,
) -> tuple[int, int]:
    """Insert demo users and posts. Returns (users_created, posts_created)."""
    password_hash = hash_password(DEMO_PASSWORD, rounds=password_rounds)
    users: list[User] = []
    users_created = 0
    for name, email in DEMO_USERS:
        result = await db.execute(select(User).where(User.email == email))
        user = result.scalar_one_or_none()
        if user is None:
            user = User(
                name=name, email=email, password_hash=password_hash,
                image=f"https://api.dicebear.com/7.x/avataaars/svg?seed={name.split()[0]}",
            )
            db.add(user)
            await db.flush()
            users_created += 1
            logger.info(f"Created user: {name}")
        users.append(user)

    repo = PostRepository(db)
    for p in DEMO_POSTS:
        author = users[p.author_index] if p.author_index < len(users) else users[0]
        await repo.delete_many_by_slug(p.slug)
        await repo.create(
            title=p.title, slug=p.slug, excerpt=p.excerpt, content=p.content,
            published=True, author_id=author.id,
        )
        logger.info(f"Created post: {p.title}")

    await db.commit()
    return users_created, len(DEMO_POSTS)
