"""Users v1 - the original single-name representation of users."""

from fastapi import APIRouter, Header

from versioned_api.schemas.user import UsersV1
from versioned_api.services.user_fixtures import list_users_v1

router = APIRouter(prefix="/api/v1/users", tags=["api", "users v1"])


@router.get(
    "", response_model=UsersV1,
    responses={200: {"description": "Success"}},
)
async def list_users(accept: str | None = Header(None)):
    """List users (v1)."""
    return list_users_v1()
