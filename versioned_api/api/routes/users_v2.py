"""Users v2 - users with separate first and last names.

Invariants:
    - The collection route is documented as requiring the jwt security scheme
    - `id` must be an integer; anything else is a 400 validation error
"""

from fastapi import APIRouter, Header, Path

from versioned_api.schemas.user import UserV2, UsersV2
from versioned_api.services.user_fixtures import get_user_v2, list_users_v2

router = APIRouter(prefix="/api/v2/users", tags=["api", "users v2"])


@router.get(
    "", response_model=UsersV2,
    responses={200: {"description": "Success"}},
    openapi_extra={"security": [{"jwt": []}]},
)
async def list_users(accept: str | None = Header(None)):
    """List users (v2)."""
    return list_users_v2()


@router.get(
    "/{id}", response_model=UserV2,
    responses={200: {"description": "Success"}},
)
async def get_user(
    id: int = Path(..., description="id of user"),
    accept: str | None = Header(None),
):
    """Get a single user (v2)."""
    return get_user_v2(id)
