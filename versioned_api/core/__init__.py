"""Core Layer - pure logic, no IO, no framework types.

Invariants:
    - No module in core/ imports from services/, api/ or infrastructure/
    - All functions are pure and deterministic
"""
