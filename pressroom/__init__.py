"""Pressroom — server-rendered blog with incremental page revalidation.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
