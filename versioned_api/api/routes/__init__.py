"""Route Modules - one file per resource version.

Invariants:
    - Each module defines its own APIRouter with prefix and tags
    - Routes tagged "api" are the documented surface
    - Routes never contain data (delegate to services/)
"""
