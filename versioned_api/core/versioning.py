"""Version Resolution - pure functions deciding which API version serves a request.

Invariants:
    - A requested version must be an integer in valid_versions, else InvalidApiVersionError
    - The api-version header takes precedence over the vendor media type in Accept
    - A valid version already present in the path wins over any header; an
      unknown one is ignored and the path is left alone
    - Versions are plain ASCII digit strings ("+1", "1_0" and non-ASCII digits are malformed)
    - Paths outside base_path are never rewritten

Design Decisions:
    - No IO and no framework types: the middleware in infrastructure/ adapts
      ASGI scopes to these functions and performs the route match itself
"""

import re
from dataclasses import dataclass
from typing import Mapping

from versioned_api.core.domain_types import ApiVersion
from versioned_api.core.errors import InvalidApiVersionError

API_VERSION_HEADER = "api-version"


@dataclass(frozen=True)
class VersionOptions:
    """Versioning configuration shared by resolution and the middleware."""
    base_path: str
    valid_versions: tuple[int, ...]
    default_version: int
    vendor_name: str


@dataclass(frozen=True)
class VersionResolution:
    """Outcome of resolving a request path.

    candidate_path is set when the path is unversioned and lives under the
    base path; the caller rewrites to it only if a route matches.
    """
    version: ApiVersion
    candidate_path: str | None = None


def _accept_pattern(vendor_name: str) -> re.Pattern:
    return re.compile(
        rf"application/vnd\.{re.escape(vendor_name)}\.v([0-9]+)\+json",
        re.IGNORECASE,
    )


def extract_requested_version(
    headers: Mapping[str, str], vendor_name: str,
) -> int | str | None:
    """Return the version named by the request headers.

    Returns an int when a well-formed version (ASCII digits only) is found,
    the raw header value when the api-version header is anything else (the
    caller rejects it), or None when the request does not name a version.
    """
    raw = headers.get(API_VERSION_HEADER)
    if raw is not None:
        raw = raw.strip()
        if raw.isascii() and raw.isdigit():
            return int(raw)
        return raw

    accept = headers.get("accept")
    if accept:
        match = _accept_pattern(vendor_name).search(accept)
        if match:
            return int(match.group(1))
    return None


def validate_requested_version(
    requested: int | str | None, options: VersionOptions,
) -> ApiVersion | None:
    """Reject malformed or unknown versions; pass None through."""
    if requested is None:
        return None
    if not isinstance(requested, int) or requested not in options.valid_versions:
        raise InvalidApiVersionError(requested, list(options.valid_versions))
    return ApiVersion(requested)


def version_in_path(path: str, base_path: str) -> ApiVersion | None:
    """Return N when path looks like <base_path>v<N>/... (or ends at v<N>)."""
    match = re.match(rf"^{re.escape(base_path)}v([0-9]+)(?:/|$)", path)
    if match:
        return ApiVersion(int(match.group(1)))
    return None


def resolve_version(
    path: str, requested: int | str | None, options: VersionOptions,
) -> VersionResolution:
    """Resolve the effective version and the unversioned-path rewrite candidate."""
    validated = validate_requested_version(requested, options)

    version = validated or ApiVersion(options.default_version)
    path_version = version_in_path(path, options.base_path)
    if path_version in options.valid_versions:
        return VersionResolution(version=path_version)
    if path_version is not None:
        # unknown version segment: nothing to rewrite, routing answers 404
        return VersionResolution(version=version)

    if not path.startswith(options.base_path):
        return VersionResolution(version=version)

    rest = path[len(options.base_path):]
    candidate = f"{options.base_path}v{version}/{rest}" if rest else f"{options.base_path}v{version}"
    return VersionResolution(version=version, candidate_path=candidate)
