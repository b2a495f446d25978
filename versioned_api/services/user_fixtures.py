"""User Fixtures - static in-memory sample records served by the users routes.

Invariants:
    - Records are module constants; accessors return fresh model instances
    - The v2 detail route serves the first v2 record whatever id is requested
"""

from versioned_api.schemas.user import UserV2, UsersV1, UsersV2

USERS_V1: tuple[dict[str, str], ...] = (
    {"name": "Peter Miller"},
)

USERS_V2: tuple[dict[str, str], ...] = (
    {"firstname": "Peter", "lastname": "Miller"},
)


def list_users_v1() -> UsersV1:
    return UsersV1.model_validate(list(USERS_V1))


def list_users_v2() -> UsersV2:
    return UsersV2.model_validate(list(USERS_V2))


def get_user_v2(user_id: int) -> UserV2:
    # Sample data has one record; every id resolves to it
    return UserV2.model_validate(USERS_V2[0])
