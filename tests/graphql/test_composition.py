"""Tests for capability-conditional resolver composition."""

import pytest

from rea_graphql.capabilities import Capability
from rea_graphql.graphql.composition import compose


async def noop(parent):
    return None


class TestCompose:
    def test_enabled_fragments_are_merged(self):
        result = compose(
            frozenset({Capability.AGENT}),
            {"inputOf": noop},
            [(Capability.AGENT, lambda: {"provider": noop})],
        )

        assert set(result) == {"inputOf", "provider"}

    def test_disabled_fragments_are_never_built(self):
        def explode():
            raise AssertionError("builder for a disabled module was invoked")

        result = compose(frozenset({Capability.AGENT}), {"inputOf": noop}, [(Capability.PLANNING, explode)])

        assert set(result) == {"inputOf"}

    def test_overlapping_fields_are_rejected(self):
        with pytest.raises(ValueError, match="already defined"):
            compose(
                frozenset({Capability.AGENT}),
                {"provider": noop},
                [(Capability.AGENT, lambda: {"provider": noop})],
            )

    def test_result_is_read_only(self):
        result = compose(frozenset({Capability.AGENT}), {"inputOf": noop})

        with pytest.raises(TypeError):
            result["extra"] = noop  # type: ignore[index]

    def test_fragment_order_does_not_change_fields(self):
        capabilities = frozenset({Capability.AGENT, Capability.PLANNING})
        fragments = [
            (Capability.AGENT, lambda: {"provider": noop}),
            (Capability.PLANNING, lambda: {"fulfills": noop}),
        ]

        forward = compose(capabilities, {}, fragments)
        backward = compose(capabilities, {}, list(reversed(fragments)))

        assert set(forward) == set(backward)
