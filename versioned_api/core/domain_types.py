"""Domain Types - rich types that replace bare primitives across the codebase.

Invariants:
    - ApiVersion wraps int - the numeric part of a "v<N>" label
    - All valid states encoded as Enums - no raw string matching
"""

from enum import Enum
from typing import NewType


# ─── Value Types ─────────────────────────────────────────────────

ApiVersion = NewType("ApiVersion", int)


# ─── Enums ───────────────────────────────────────────────────────

class DocsGrouping(str, Enum):
    """How documented operations are grouped into tags."""
    PATH = "path"
    TAGS = "tags"


class ReplaceIn(str, Enum):
    """Where a documentation path replacement is applied."""
    GROUPS = "groups"
    ENDPOINTS = "endpoints"
    ALL = "all"


class MonitorEvent(str, Enum):
    """Event names emitted by the logging/monitoring layer."""
    LOG = "log"
    REQUEST = "request"
    RESPONSE = "response"
    OPS = "ops"
    ERROR = "error"


# Tag marking a route for inclusion in the generated documentation
DOCUMENTED_TAG = "api"
