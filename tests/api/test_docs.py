"""API Documentation - generated OpenAPI document and Swagger UI.

Invariants:
    - Only "api"-tagged routes documented, relative to base_path
    - Path grouping yields a single "users" tag; tag grouping yields "users v1"/"users v2"
    - jwt security scheme declared; only the v2 collection route requires it
"""

import pytest
from httpx import ASGITransport, AsyncClient

from versioned_api.config import Settings
from versioned_api.main import create_app


async def _fetch_docs(settings: Settings) -> dict:
    app = create_app(settings)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        res = await c.get(settings.docs_json_path)
    assert res.status_code == 200
    return res.json()


def _response_schema(doc: dict, path: str) -> dict:
    return doc["paths"][path]["get"]["responses"]["200"]["content"]["application/json"]["schema"]


def _component(doc: dict, ref: str) -> dict:
    return doc["components"]["schemas"][ref.rsplit("/", 1)[-1]]


@pytest.fixture
async def doc(client, settings):
    res = await client.get(settings.docs_json_path)
    assert res.status_code == 200
    return res.json()


async def test_info_comes_from_settings(doc):
    assert doc["info"]["title"] == "Test API Documentation"
    assert doc["info"]["description"] == "This is a sample example of API documentation."


async def test_only_api_routes_documented_relative_to_base_path(doc):
    assert set(doc["paths"]) == {"/v1/users", "/v2/users", "/v2/users/{id}"}
    assert doc["servers"] == [{"url": "/api"}]


async def test_path_grouping_tags(doc):
    for path in doc["paths"]:
        assert doc["paths"][path]["get"]["tags"] == ["users"]
    assert doc["tags"] == [{"name": "users"}]


async def test_security_definitions_and_route_security(doc):
    assert doc["components"]["securitySchemes"]["jwt"] == {
        "type": "apiKey", "name": "Authorization", "in": "header",
    }
    assert doc["paths"]["/v2/users"]["get"]["security"] == [{"jwt": []}]
    assert "security" not in doc["paths"]["/v1/users"]["get"]
    assert "security" not in doc["paths"]["/v2/users/{id}"]["get"]


async def test_responses_are_labelled_success_with_titled_schemas(doc):
    v1 = doc["paths"]["/v1/users"]["get"]["responses"]["200"]
    assert v1["description"] == "Success"
    users_v1 = _component(doc, _response_schema(doc, "/v1/users")["$ref"])
    assert users_v1["title"] == "Users v1"
    assert users_v1["type"] == "array"
    user_v1 = _component(doc, users_v1["items"]["$ref"])
    assert user_v1["title"] == "User v1"
    assert set(user_v1["properties"]) == {"name"}

    user_v2 = _component(doc, _response_schema(doc, "/v2/users/{id}")["$ref"])
    assert user_v2["title"] == "User v2"
    assert set(user_v2["properties"]) == {"firstname", "lastname"}


async def test_id_parameter_is_documented(doc):
    params = doc["paths"]["/v2/users/{id}"]["get"]["parameters"]
    id_param = next(p for p in params if p["name"] == "id")
    assert id_param["in"] == "path"
    assert id_param["required"] is True
    assert id_param["description"] == "id of user"
    assert id_param["schema"]["type"] == "integer"


async def test_accept_header_is_documented(doc):
    params = doc["paths"]["/v1/users"]["get"]["parameters"]
    assert any(p["name"] == "accept" and p["in"] == "header" for p in params)


async def test_document_is_cached(app):
    assert app.openapi() is app.openapi()


async def test_swagger_ui_served(client, settings):
    res = await client.get(settings.docs_ui_path)
    assert res.status_code == 200
    assert "swagger-ui" in res.text
    assert settings.docs_json_path in res.text


async def test_tag_grouping_uses_route_tags():
    doc = await _fetch_docs(Settings(docs_grouping="tags"))
    assert doc["paths"]["/v1/users"]["get"]["tags"] == ["users v1"]
    assert doc["paths"]["/v2/users"]["get"]["tags"] == ["users v2"]
    assert doc["tags"] == [{"name": "users v1"}, {"name": "users v2"}]


async def test_path_replacements_rewrite_paths_and_groups():
    doc = await _fetch_docs(Settings(docs_path_replacements=[
        {"replace_in": "all", "pattern": r"(v[0-9]+)/(\w+)", "replacement": r"\2 - \1"},
    ]))
    assert "/users - v1" in doc["paths"]
    assert doc["paths"]["/users - v1"]["get"]["tags"] == ["users - v1"]


async def test_dereferenced_document_has_no_schema_refs():
    doc = await _fetch_docs(Settings(docs_dereference=True))
    schema = _response_schema(doc, "/v1/users")
    assert "$ref" not in schema
    assert schema["items"]["properties"]["name"]["type"] == "string"
    assert "schemas" not in doc["components"]
    assert "securitySchemes" in doc["components"]


async def test_root_base_path_documents_full_paths():
    doc = await _fetch_docs(Settings(base_path="/"))
    assert "/api/v1/users" in doc["paths"]
    assert "servers" not in doc
