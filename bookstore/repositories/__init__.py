"""Repositories — persistence gateway over the SQLAlchemy async session.

Invariants:
    - Every write goes through a repository method that records an audit entry
    - Repositories never commit; the UnitOfWork owns transaction boundaries
"""
