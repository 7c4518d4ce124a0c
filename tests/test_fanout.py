"""Tests for the concurrent fan-out searcher.

These cover completion accounting and single resolution: the search
must not give up while a lookup is in flight, must resolve once, and
must leave no outstanding work behind.
"""

import asyncio

import pytest

from dazzlegraph.aio import (
    NOT_FOUND,
    AsyncFanOutSearcher,
    AsyncMappingGraphAdapter,
    Graph,
    PathExistsStrategy,
    ShortestRouteStrategy,
)
from dazzlegraph.testing import RecordingStrategy, ScriptedLatencyAdapter

from conftest import assert_valid_route


class TestReferenceScenarios:

    @pytest.mark.asyncio
    async def test_a_to_k(self, graph):
        searcher = AsyncFanOutSearcher(AsyncMappingGraphAdapter(graph))
        assert await searcher.search('A', 'K', ShortestRouteStrategy()) == ['A', 'B', 'D', 'I', 'K']

    @pytest.mark.asyncio
    async def test_a_to_h(self, graph):
        searcher = AsyncFanOutSearcher(AsyncMappingGraphAdapter(graph))
        assert await searcher.search('A', 'H', ShortestRouteStrategy()) == ['A', 'B', 'D', 'H']

    @pytest.mark.asyncio
    async def test_b_to_a_not_found(self, graph):
        searcher = AsyncFanOutSearcher(AsyncMappingGraphAdapter(graph))
        assert await searcher.search('B', 'A', PathExistsStrategy()) is NOT_FOUND
        assert searcher.stats['outstanding'] == 0

    @pytest.mark.asyncio
    async def test_a_to_a(self, graph):
        adapter = AsyncMappingGraphAdapter(graph)
        searcher = AsyncFanOutSearcher(adapter)
        assert await searcher.search('A', 'A', PathExistsStrategy()) is True
        assert adapter.lookups == 0


class TestConcurrency:

    @pytest.mark.asyncio
    async def test_frontier_lookups_overlap(self):
        star = Graph({'A': ['B', 'C', 'D', 'E'], 'B': [], 'C': [], 'D': [], 'E': []})
        adapter = ScriptedLatencyAdapter(star, delays={n: 0.01 for n in 'BCDE'})
        searcher = AsyncFanOutSearcher(adapter)

        assert await searcher.search('A', 'Z', PathExistsStrategy()) is NOT_FOUND
        assert adapter.peak_in_flight == 4
        assert searcher.stats['max_in_flight'] == 4

    @pytest.mark.asyncio
    async def test_semaphore_caps_running_lookups(self):
        star = Graph({'A': ['B', 'C', 'D', 'E'], 'B': [], 'C': [], 'D': [], 'E': []})
        adapter = ScriptedLatencyAdapter(star, delays={n: 0.01 for n in 'BCDE'}, max_concurrent=2)
        searcher = AsyncFanOutSearcher(adapter)

        assert await searcher.search('A', 'Z', PathExistsStrategy()) is NOT_FOUND
        assert adapter.peak_in_flight == 2
        # Waiting for a permit still counts as outstanding
        assert searcher.stats['max_in_flight'] == 4

    @pytest.mark.asyncio
    async def test_out_of_order_completion(self, diamond):
        adapter = ScriptedLatencyAdapter(diamond, delays={'B': 0.05})
        strategy = RecordingStrategy(ShortestRouteStrategy())
        searcher = AsyncFanOutSearcher(adapter)

        route = await searcher.search('A', 'X', strategy)

        assert route == ['A', 'C', 'X']
        assert adapter.started[:3] == ['A', 'B', 'C']
        assert adapter.completed == ['A', 'C']

    @pytest.mark.asyncio
    async def test_shortest_route_stays_valid_under_reordering(self, graph):
        delays = {'A': 0.001, 'B': 0.03, 'C': 0.001, 'D': 0.02, 'E': 0.001, 'F': 0.001}
        for goal in graph:
            adapter = ScriptedLatencyAdapter(graph, delays=delays)
            route = await AsyncFanOutSearcher(adapter).search('A', goal, ShortestRouteStrategy())
            assert_valid_route(graph, route, "A", goal, minimal=False)

    @pytest.mark.asyncio
    async def test_waits_for_in_flight_lookup_before_giving_up(self):
        chain = Graph({'A': ['B'], 'B': ['C'], 'C': []})
        adapter = ScriptedLatencyAdapter(chain, delays={'B': 0.05})
        searcher = AsyncFanOutSearcher(adapter)

        # After B is issued the frontier is empty, but B may still add C
        assert await searcher.search('A', 'C', PathExistsStrategy()) is True

    @pytest.mark.asyncio
    async def test_decisions_are_serialized(self, graph):
        delays = {node: 0.001 * (i % 3) for i, node in enumerate(graph)}
        adapter = ScriptedLatencyAdapter(graph, delays=delays)
        strategy = RecordingStrategy(ShortestRouteStrategy())

        await AsyncFanOutSearcher(adapter).search('A', 'K', strategy)

        assert strategy.overlapped is False
        # Each node's edges are evaluated as one contiguous batch, in neighbour order
        batches = {}
        for parent, candidate in strategy.edges[1:]:
            batches.setdefault(parent, []).append(candidate)
        for parent, candidates in batches.items():
            assert tuple(candidates) == graph.neighbors(parent)[:len(candidates)]
        parents = [parent for parent, _ in strategy.edges[1:]]
        seen = []
        for parent in parents:
            if not seen or seen[-1] != parent:
                assert parent not in seen
                seen.append(parent)


class TestSingleResolution:

    @pytest.mark.asyncio
    async def test_first_success_wins(self, diamond):
        adapter = ScriptedLatencyAdapter(diamond, delays={'B': 0.02})
        strategy = RecordingStrategy(PathExistsStrategy())
        searcher = AsyncFanOutSearcher(adapter)

        assert await searcher.search('A', 'X', strategy) is True
        calls_at_resolution = list(strategy.calls)

        # B would also reach X; give it time to finish if it were still running
        await asyncio.sleep(0.05)
        assert strategy.calls == calls_at_resolution
        assert sum(1 for _, _, success in strategy.calls if success) == 1

    @pytest.mark.asyncio
    async def test_in_flight_lookups_cancelled(self, diamond):
        adapter = ScriptedLatencyAdapter(diamond, delays={'B': 0.5})
        searcher = AsyncFanOutSearcher(adapter)

        assert await searcher.search('A', 'X', PathExistsStrategy()) is True

        assert adapter.cancelled == ['B']
        assert searcher.stats['lookups_cancelled'] == 1
        assert searcher.stats['results_discarded'] == 0
        assert searcher.stats['outstanding'] == 0

    @pytest.mark.asyncio
    async def test_posted_results_discarded(self, diamond):
        searcher = AsyncFanOutSearcher(AsyncMappingGraphAdapter(diamond))

        assert await searcher.search('A', 'X', PathExistsStrategy()) is True

        # B and C complete together; B resolves, C's result was already posted
        assert searcher.stats['lookups_issued'] == 3
        assert searcher.stats['lookups_completed'] == 2
        assert searcher.stats['results_discarded'] == 1
        assert searcher.stats['lookups_cancelled'] == 0
        assert searcher.stats['outstanding'] == 0

    @pytest.mark.asyncio
    async def test_no_tasks_left_behind(self, graph):
        adapter = ScriptedLatencyAdapter(graph, delays={'E': 0.2, 'F': 0.2})
        searcher = AsyncFanOutSearcher(adapter)
        before = {t for t in asyncio.all_tasks() if not t.done()}

        await searcher.search('A', 'H', PathExistsStrategy())

        leftover = {t for t in asyncio.all_tasks() if not t.done()} - before
        assert not [t for t in leftover if t.get_name().startswith('dazzlegraph-lookup')]

    @pytest.mark.asyncio
    async def test_counter_zero_after_every_search(self, graph):
        searcher = AsyncFanOutSearcher(ScriptedLatencyAdapter(graph, delays={'C': 0.01}))
        for start in graph:
            for goal in graph:
                await searcher.search(start, goal, ShortestRouteStrategy())
                assert searcher.stats['outstanding'] == 0

    @pytest.mark.asyncio
    async def test_caller_cancellation_settles_lookups(self, graph):
        adapter = ScriptedLatencyAdapter(graph, delays={'B': 10, 'C': 10})
        searcher = AsyncFanOutSearcher(adapter)

        with pytest.raises(asyncio.TimeoutError):
            await asyncio.wait_for(searcher.search('A', 'K', PathExistsStrategy()), timeout=0.05)

        assert sorted(adapter.cancelled) == ['B', 'C']
        assert searcher.stats['outstanding'] == 0
