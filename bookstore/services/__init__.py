"""Services Layer — business rules for authors, books, stores and seeding.

Invariants:
    - Services are the only writers of entities and join rows
    - Expected business failures are returned as Result.fail, never raised
    - Cache eviction runs after commit, before the service returns
"""
