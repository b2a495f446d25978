"""Version Probe - echoes the API version resolved for the request.

Invariants:
    - Lives outside the base path, so it is never rewritten and never documented
    - Reports the default version unless the request names one
"""

from fastapi import APIRouter, Request

from versioned_api.schemas.version import VersionResponse

router = APIRouter(tags=["version"])


@router.get("/version", response_model=VersionResponse)
async def get_version(request: Request):
    """Return the api-version which was requested."""
    return VersionResponse(version=request.state.api_version)
