"""User Schemas - the two published shapes of the User resource.

Invariants:
    - v1 exposes a single `name`; v2 splits it into `firstname` / `lastname`
    - Titles ("User v1", "Users v2", ...) are the labels shown in the docs
"""

from pydantic import BaseModel, ConfigDict, Field, RootModel


class UserV1(BaseModel):
    """User as published by API v1."""
    model_config = ConfigDict(title="User v1")

    name: str = Field(title="name")


class UsersV1(RootModel[list[UserV1]]):
    model_config = ConfigDict(title="Users v1")


class UserV2(BaseModel):
    """User as published by API v2."""
    model_config = ConfigDict(title="User v2")

    firstname: str = Field(title="firstname")
    lastname: str = Field(title="lastname")


class UsersV2(RootModel[list[UserV2]]):
    model_config = ConfigDict(title="Users v2")
