"""Infrastructure Layer — store, cache, identity, CDN and logging adapters.

Invariants:
    - Infrastructure never imports from services/ or api/
    - All external failures mapped to the core error hierarchy
"""
