"""Shared data layer: order storage in PostgreSQL, carts and notifications in Redis."""
