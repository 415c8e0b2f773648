"""Core Layer — pure domain types, errors and cache keys. No IO, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, repositories/ or db/
"""
