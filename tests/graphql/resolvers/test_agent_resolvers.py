"""Tests for Agent field resolvers and agent variants."""

import pytest

from rea_graphql.errors import RemoteCallError
from rea_graphql.graphql.resolvers import agent


class TestAgentVariant:
    @pytest.mark.parametrize("agent_type", ["Person", "Organization"])
    def test_known_types(self, agent_type):
        assert agent.agent_variant({"agentType": agent_type}) == agent_type

    def test_unknown_type_is_malformed_backend_data(self):
        with pytest.raises(RemoteCallError, match="unknown agentType"):
            agent.agent_variant({"agentType": "Robot"})

    def test_missing_type_is_malformed_backend_data(self):
        with pytest.raises(RemoteCallError):
            agent.agent_variant({"id": "agent:1"})


class TestAgentFields:
    def test_agent_alone_has_no_relationship_fields(self, make_binder):
        binder = make_binder("agent")

        assert dict(agent.build_resolvers(binder.capabilities, binder)) == {}

    @pytest.mark.asyncio
    async def test_events_as_provider(self, make_binder, conductor):
        older = conductor.add("economic_event", provider="agent:1")
        conductor.add("economic_event", provider="agent:2")
        newer = conductor.add("economic_event", provider="agent:1")
        binder = make_binder("agent", "observation")
        resolvers = agent.build_resolvers(binder.capabilities, binder)

        result = await resolvers["economicEventsAsProvider"]({"id": "agent:1"})

        assert result == [newer, older]
        assert conductor.calls[0][:3] == ("observation", "economic_event_index", "query_economic_events")
