"""Pydantic Schemas — request/response contracts for the HTTP surface.

Invariants:
    - Schemas validate at the system boundary (user input, API responses)
    - JSON field names are camelCase; Python attributes are snake_case

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
