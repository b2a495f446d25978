"""Pydantic Schemas - response shapes published by each API version."""
