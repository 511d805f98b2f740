"""Database Infrastructure — session factory and SQLAlchemy Base.

Invariants:
    - Single async engine per process (built by the composition root)
    - All sessions are async (AsyncSession)
"""
