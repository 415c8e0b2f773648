"""Infrastructure Layer — database sessions, transactions, cache and logging.

Invariants:
    - Infrastructure never imports from services/ or api/
"""
