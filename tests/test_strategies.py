"""Tests for search strategies, independent of any searcher."""

import pytest

from dazzlegraph.sync import (
    ConfigurationError,
    ParentRecording,
    PathExistsStrategy,
    ShortestRouteStrategy,
    StrategyKind,
    StrategyResult,
    create_strategy,
)


class TestStrategyResult:

    def test_no_decision(self):
        result = StrategyResult.no_decision()
        assert result.success is False

    def test_falsy_payload_is_still_a_decision(self):
        for payload in (False, 0, [], None):
            result = StrategyResult.decided(payload)
            assert result.success is True
            assert result.result == payload


class TestPathExistsStrategy:

    def test_succeeds_only_on_goal(self):
        strategy = PathExistsStrategy()
        assert not strategy.decide('A', 'B', 'K').success
        result = strategy.decide('I', 'K', 'K')
        assert result.success and result.result is True

    def test_ignores_parent(self):
        strategy = PathExistsStrategy()
        assert strategy.decide(None, 'K', 'K').result is True
        assert strategy.decide('anything', 'K', 'K').result is True


class TestShortestRouteStrategy:

    def test_root_only_route(self):
        strategy = ShortestRouteStrategy()
        result = strategy.decide(None, 'A', 'A')
        assert result.success
        assert result.result == ['A']

    def test_route_is_rebuilt_from_parents(self):
        strategy = ShortestRouteStrategy()
        strategy.decide(None, 'A', 'D')
        strategy.decide('A', 'B', 'D')
        strategy.decide('A', 'C', 'D')
        result = strategy.decide('B', 'D', 'D')
        assert result.result == ['A', 'B', 'D']

    def test_write_once_keeps_first_parent(self):
        strategy = ShortestRouteStrategy()
        strategy.decide(None, 'A', 'X')
        strategy.decide('A', 'B', 'X')
        strategy.decide('A', 'C', 'X')
        strategy.decide('B', 'D', 'X')
        strategy.decide('C', 'D', 'X')
        assert strategy.parents['D'] == 'B'

    def test_overwrite_keeps_last_parent(self):
        strategy = ShortestRouteStrategy(ParentRecording.OVERWRITE)
        strategy.decide(None, 'A', 'X')
        strategy.decide('A', 'B', 'X')
        strategy.decide('A', 'C', 'X')
        strategy.decide('B', 'D', 'X')
        strategy.decide('C', 'D', 'X')
        assert strategy.parents['D'] == 'C'

    @pytest.mark.parametrize("recording", list(ParentRecording))
    def test_root_is_never_reparented(self, recording):
        strategy = ShortestRouteStrategy(recording)
        strategy.decide(None, 'A', 'C')
        strategy.decide('A', 'B', 'C')
        strategy.decide('B', 'A', 'C')  # back edge
        result = strategy.decide('B', 'C', 'C')
        assert strategy.parents['A'] is None
        assert result.result == ['A', 'B', 'C']

    def test_overwrite_never_parents_a_node_under_its_descendant(self):
        strategy = ShortestRouteStrategy(ParentRecording.OVERWRITE)
        strategy.decide(None, 'S', 'G')
        strategy.decide('S', 'A', 'G')
        strategy.decide('A', 'B', 'G')
        strategy.decide('B', 'A', 'G')  # A is B's parent; keep A -> S
        assert strategy.parents['A'] == 'S'
        assert strategy.decide('B', 'G', 'G').result == ['S', 'A', 'B', 'G']

    @pytest.mark.parametrize("recording", list(ParentRecording))
    def test_self_loop_is_ignored(self, recording):
        strategy = ShortestRouteStrategy(recording)
        strategy.decide(None, 'S', 'X')
        strategy.decide('S', 'A', 'X')
        strategy.decide('A', 'A', 'X')
        assert strategy.parents['A'] == 'S'

    def test_reset_clears_parents(self):
        strategy = ShortestRouteStrategy()
        strategy.decide(None, 'A', 'Z')
        strategy.decide('A', 'B', 'Z')
        strategy.reset()
        assert strategy.parents == {}
        assert strategy.decide(None, 'B', 'B').result == ['B']


class TestCreateStrategy:

    def test_by_kind_and_name(self):
        assert isinstance(create_strategy(StrategyKind.EXISTS), PathExistsStrategy)
        assert isinstance(create_strategy('shortest_route'), ShortestRouteStrategy)
        assert isinstance(create_strategy('EXISTS'), PathExistsStrategy)

    def test_parent_recording_is_passed_through(self):
        strategy = create_strategy('shortest_route', ParentRecording.OVERWRITE)
        assert strategy.parent_recording is ParentRecording.OVERWRITE

    def test_fresh_instance_each_time(self):
        assert create_strategy('shortest_route') is not create_strategy('shortest_route')

    def test_unknown_name(self):
        with pytest.raises(ConfigurationError, match="Unknown search strategy"):
            create_strategy('dijkstra')
