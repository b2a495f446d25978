"""Versioned Users API - sample service with API versioning and generated docs.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
