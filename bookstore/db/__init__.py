"""Database Base — SQLAlchemy declarative base and shared column mixins."""
