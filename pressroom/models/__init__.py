"""ORM Models — SQLAlchemy declarative models for users and posts.

Invariants:
    - All models inherit from Base (db/base.py)
    - All models imported here so string-based relationship() references resolve
"""

from pressroom.models.user import User  # noqa: F401
from pressroom.models.post import Post  # noqa: F401
