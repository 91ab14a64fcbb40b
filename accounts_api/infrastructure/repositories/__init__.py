"""Adapters de persistencia (Postgres e in-memory)."""
