"""User Schemas + fixtures - labelled shapes and the static sample records."""

import pytest
from pydantic import ValidationError

from versioned_api.schemas.user import UserV1, UserV2, UsersV1, UsersV2
from versioned_api.services.user_fixtures import (
    get_user_v2, list_users_v1, list_users_v2,
)


def test_schema_titles_are_doc_labels():
    assert UserV1.model_json_schema()["title"] == "User v1"
    assert UsersV1.model_json_schema()["title"] == "Users v1"
    assert UserV2.model_json_schema()["title"] == "User v2"
    assert UsersV2.model_json_schema()["title"] == "Users v2"


def test_v2_requires_both_name_parts():
    with pytest.raises(ValidationError):
        UserV2(firstname="Peter")


def test_v1_fixture():
    assert list_users_v1().model_dump() == [{"name": "Peter Miller"}]


def test_v2_fixture():
    assert list_users_v2().model_dump() == [{"firstname": "Peter", "lastname": "Miller"}]


@pytest.mark.parametrize("user_id", [1, 42, -7])
def test_any_id_resolves_to_first_v2_user(user_id):
    assert get_user_v2(user_id) == UserV2(firstname="Peter", lastname="Miller")
