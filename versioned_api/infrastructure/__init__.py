"""Infrastructure Layer - plugins wiring cross-cutting concerns into the app.

Invariants:
    - Each plugin is registered through infrastructure/plugins.py
    - Middleware adapts ASGI scopes to pure functions in core/
"""
