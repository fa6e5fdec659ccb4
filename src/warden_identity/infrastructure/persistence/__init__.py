"""Persistence implementations for warden_identity.

Structure:
    persistence/
    └── sqlalchemy/     # SQLAlchemy (async) implementation
"""
