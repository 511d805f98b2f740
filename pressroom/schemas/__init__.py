"""Pydantic Schemas — request validation, cached read models and page documents.

Invariants:
    - Request schemas validate at the system boundary
    - Cached models are frozen: a value served from cache can never be mutated in place
"""
