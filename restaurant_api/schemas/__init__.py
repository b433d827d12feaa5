"""Pydantic models describing the HTTP contract."""
