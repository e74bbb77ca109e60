"""Tests for query root entry points through the built schema."""

import pytest
from conftest import execute

from rea_graphql.errors import RemoteCallError
from rea_graphql.graphql.queries.root import build_query_resolvers


class TestQueryResolvers:
    def test_entry_points_follow_modules(self, make_binder):
        binder = make_binder("measurement", "agent")

        assert set(build_query_resolvers(binder.capabilities, binder)) == {
            "unit",
            "units",
            "agent",
            "agents",
        }

    @pytest.mark.asyncio
    async def test_list_reads_all_with_given_page_arguments(self, make_binder, conductor):
        binder = make_binder("planning")
        resolvers = build_query_resolvers(binder.capabilities, binder)

        await resolvers["commitments"](None, first=10, after=None)

        assert conductor.calls == [
            ("planning", "commitment_index", "get_all_commitments", {"first": 10})
        ]

    @pytest.mark.asyncio
    async def test_unpaged_list_reads_all_without_payload(self, make_binder, conductor):
        binder = make_binder("observation")
        resolvers = build_query_resolvers(binder.capabilities, binder)

        await resolvers["processes"](None)

        assert conductor.calls == [("observation", "process_index", "read_all_processes", None)]

    @pytest.mark.asyncio
    async def test_list_rejects_malformed_connection(self, make_binder, conductor):
        conductor.respond("commitment_index", "get_all_commitments", {"pageInfo": {}})
        binder = make_binder("planning")
        resolvers = build_query_resolvers(binder.capabilities, binder)

        with pytest.raises(RemoteCallError, match="malformed connection"):
            await resolvers["commitments"](None)


class TestQueryExecution:
    @pytest.mark.asyncio
    async def test_read_one_unwraps_record(self, make_schema, conductor):
        process = conductor.add("process", name="Bake bread")

        result = await execute(
            make_schema("observation"),
            "query ($id: ID!) { process(id: $id) { id name } }",
            {"id": process["id"]},
        )

        assert result.errors is None
        assert result.data == {"process": {"id": process["id"], "name": "Bake bread"}}

    @pytest.mark.asyncio
    async def test_read_one_not_found_is_a_field_error(self, make_schema):
        result = await execute(make_schema("observation"), '{ process(id: "process:404") { id } }')

        assert result.data == {"process": None}
        assert "No Process with id process:404" in result.errors[0].message

    @pytest.mark.asyncio
    async def test_list_keeps_pagination_envelope(self, make_schema, conductor):
        conductor.add("process", name="first")
        conductor.add("process", name="second")

        result = await execute(
            make_schema("observation"),
            "{ processes { pageInfo { hasNextPage totalCount } edges { cursor node { name } } } }",
        )

        assert result.errors is None
        assert result.data["processes"]["pageInfo"] == {"hasNextPage": False, "totalCount": 2}
        assert [edge["node"]["name"] for edge in result.data["processes"]["edges"]] == [
            "second",
            "first",
        ]

    @pytest.mark.asyncio
    async def test_page_arguments_do_not_filter_records(self, make_schema, conductor):
        conductor.add("process", name="first")
        conductor.add("process", name="second")
        schema = make_schema("observation")

        unpaged = await execute(schema, "{ processes { edges { node { name } } } }")
        paged = await execute(schema, "{ processes(first: 5) { edges { node { name } } } }")

        assert paged.errors is None
        assert paged.data == unpaged.data
        assert len(paged.data["processes"]["edges"]) == 2
        assert conductor.calls[-1] == (
            "observation",
            "process_index",
            "read_all_processes",
            {"first": 5},
        )

    @pytest.mark.asyncio
    async def test_agents_resolve_concrete_types(self, make_schema, conductor):
        conductor.add("agent", name="Alice", agentType="Person")
        conductor.add("agent", name="Co-op", agentType="Organization", classifiedAs=["coop"])

        result = await execute(
            make_schema("agent"),
            """
            {
              agents {
                edges {
                  node {
                    __typename
                    name
                    ... on Organization { classifiedAs }
                  }
                }
              }
            }
            """,
        )

        assert result.errors is None
        assert [edge["node"] for edge in result.data["agents"]["edges"]] == [
            {"__typename": "Organization", "name": "Co-op", "classifiedAs": ["coop"]},
            {"__typename": "Person", "name": "Alice"},
        ]

    @pytest.mark.asyncio
    async def test_agent_by_id(self, make_schema, conductor):
        person = conductor.add("agent", name="Alice", agentType="Person")

        result = await execute(
            make_schema("agent"),
            "query ($id: ID!) { agent(id: $id) { __typename id } }",
            {"id": person["id"]},
        )

        assert result.data == {"agent": {"__typename": "Person", "id": person["id"]}}

    @pytest.mark.asyncio
    async def test_actions_are_a_plain_list(self, make_schema, conductor):
        conductor.respond(
            "action",
            "get_all_actions",
            [
                {"id": "produce", "label": "produce", "resourceEffect": "increment"},
                {"id": "consume", "label": "consume", "resourceEffect": "decrement"},
            ],
        )

        result = await execute(make_schema("knowledge"), "{ actions { id resourceEffect } }")

        assert result.data == {
            "actions": [
                {"id": "produce", "resourceEffect": "increment"},
                {"id": "consume", "resourceEffect": "decrement"},
            ]
        }
        assert conductor.calls == [("specification", "action", "get_all_actions", None)]
