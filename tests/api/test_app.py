"""Tests for the HTTP surface."""

import httpx
import pytest
from conftest import FakeConductor

from rea_graphql.api.app import create_app
from rea_graphql.capabilities import parse_capabilities
from rea_graphql.deployment import DeploymentConfig
from rea_graphql.middleware import operation_name_from_document


@pytest.fixture
def app(conductor: FakeConductor):
    deployment = DeploymentConfig(
        capabilities=parse_capabilities(["observation", "specification"]),
        conductor_uri="http://conductor.test",
    )
    return create_app(deployment, conductor)


@pytest.fixture
def client(app):
    return httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://test")


class TestHttpSurface:
    @pytest.mark.asyncio
    async def test_health_lists_modules(self, client):
        async with client:
            response = await client.get("/health")

        assert response.status_code == 200
        assert response.json()["modules"] == ["knowledge", "observation"]

    @pytest.mark.asyncio
    async def test_post_graphql(self, client, conductor):
        spec = conductor.add("resource_specification", name="Apples")

        async with client:
            response = await client.post(
                "/graphql",
                json={
                    "query": "query Spec($id: ID!) { resourceSpecification(id: $id) { name } }",
                    "variables": {"id": spec["id"]},
                    "operationName": "Spec",
                },
            )

        assert response.status_code == 200
        assert response.json() == {"data": {"resourceSpecification": {"name": "Apples"}}}

    @pytest.mark.asyncio
    async def test_get_graphql(self, client, conductor):
        conductor.add("process", name="Bake")

        async with client:
            response = await client.get(
                "/graphql", params={"query": "{ processes { edges { node { name } } } }"}
            )

        assert response.json() == {"data": {"processes": {"edges": [{"node": {"name": "Bake"}}]}}}

    @pytest.mark.asyncio
    async def test_request_id_is_echoed(self, client):
        async with client:
            given = await client.get("/health", headers={"x-request-id": "req-42"})
            generated = await client.get("/health")

        assert given.headers["x-request-id"] == "req-42"
        assert generated.headers["x-request-id"]

    @pytest.mark.asyncio
    async def test_get_with_invalid_variables(self, client):
        async with client:
            response = await client.get("/graphql", params={"query": "{ units }", "variables": "{"})

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_disabled_module_field_is_a_validation_error(self, client, conductor):
        async with client:
            response = await client.post("/graphql", json={"query": "{ agreements { edges { cursor } } }"})

        body = response.json()
        assert body["data"] is None
        assert "Cannot query field 'agreements'" in body["errors"][0]["message"]
        assert conductor.calls == []


class TestOperationName:
    def test_explicit_name_wins(self):
        assert operation_name_from_document("Spec", "query Other { x }") == "Spec"

    def test_named_mutation(self):
        assert operation_name_from_document(None, "mutation Create { x }") == "mutation:Create"

    def test_introspection(self):
        assert operation_name_from_document(None, "{ __schema { types { name } } }") == "__introspection"

    def test_anonymous(self):
        assert operation_name_from_document(None, "{ processes { edges { cursor } } }") == "unnamed_operation"

    def test_no_query(self):
        assert operation_name_from_document(None, None) is None
