"""OpenAPI Transform - pure reshaping of a generated OpenAPI document.

Invariants:
    - group_name_by_path uses only non-empty segments, at most prefix_size of them
    - Path replacements apply in declaration order
    - dereference() never mutates its input and terminates on recursive schemas
"""

import copy
import re
from dataclasses import dataclass
from typing import Any, Iterable

from versioned_api.core.domain_types import ReplaceIn

SCHEMA_REF_PREFIX = "#/components/schemas/"


@dataclass(frozen=True)
class PathReplacement:
    """Regex replacement applied to documented paths and/or group names.

    replacement uses Python re syntax (\\1, \\g<name>).
    """
    replace_in: ReplaceIn
    pattern: str
    replacement: str


def replace_in_path(
    path: str, target: ReplaceIn, replacements: Iterable[PathReplacement],
) -> str:
    """Apply every replacement targeting `target` (or ALL) to path."""
    for rep in replacements:
        if rep.replace_in in (target, ReplaceIn.ALL):
            path = re.sub(rep.pattern, rep.replacement, path)
    return path


def group_name_by_path(
    path: str,
    prefix_size: int,
    replacements: Iterable[PathReplacement] = (),
) -> str:
    """Name the group of a path: the last of its first prefix_size segments.

    '/api/v1/users' with prefix_size 3 -> 'users'; '/version' -> 'version'.
    """
    path = replace_in_path(path, ReplaceIn.GROUPS, replacements)
    head = [part for part in path.split("/") if part][:prefix_size]
    return head[-1] if head else ""


def strip_base_path(path: str, base_path: str) -> str:
    """Make path relative to base_path, keeping a leading '/'."""
    if base_path in ("", "/") or not path.startswith(base_path):
        return path
    return "/" + path[len(base_path):]


def dereference(document: dict[str, Any]) -> dict[str, Any]:
    """Return a copy of document with component schema $refs inlined.

    A schema that refers back to itself along the current branch keeps its
    $ref so the result stays finite. Fully inlined documents drop
    components.schemas.
    """
    doc = copy.deepcopy(document)
    schemas = doc.get("components", {}).get("schemas", {})

    def resolve(node: Any, stack: tuple[str, ...]) -> tuple[Any, bool]:
        if isinstance(node, dict):
            ref = node.get("$ref")
            if isinstance(ref, str) and ref.startswith(SCHEMA_REF_PREFIX):
                name = ref[len(SCHEMA_REF_PREFIX):]
                if name in stack or name not in schemas:
                    return node, False
                return resolve(copy.deepcopy(schemas[name]), stack + (name,))
            complete = True
            out = {}
            for key, value in node.items():
                out[key], ok = resolve(value, stack)
                complete = complete and ok
            return out, complete
        if isinstance(node, list):
            complete = True
            items = []
            for value in node:
                item, ok = resolve(value, stack)
                items.append(item)
                complete = complete and ok
            return items, complete
        return node, True

    components = doc.pop("components", None)
    resolved, complete = resolve(doc, ())
    if components is not None:
        if not complete:
            resolved["components"] = components
        else:
            remaining = {k: v for k, v in components.items() if k != "schemas"}
            if remaining:
                resolved["components"] = remaining
    return resolved
