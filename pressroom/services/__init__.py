"""Services Layer — cached reads, page rendering, write actions and revalidation.

Invariants:
    - Services orchestrate IO around pure core functions
    - Cache instances are injected, never imported as globals
"""
