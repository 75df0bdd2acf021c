from __future__ import annotations

import pytest

from shooting_stars import graph
from shooting_stars.grid import EMPTY_STATE, STATE_COUNT, TARGET_STATE, InvalidStateError


def test_every_grid_but_the_empty_one_reaches_the_target():
    distances = graph.distances_to_target()
    assert distances[TARGET_STATE] == 0
    assert EMPTY_STATE not in distances
    assert len(distances) == STATE_COUNT - 1


def test_longest_shortest_solution_starts_from_the_lone_centre_star():
    distances = graph.distances_to_target()
    assert max(distances.values()) == 11
    assert graph.shortest_distance(0b000010000) == 11
    assert graph.shortest_distance(EMPTY_STATE) is None


def test_edges_follow_ascending_cells():
    edges = graph.transition_graph()
    assert edges[EMPTY_STATE] == ()
    assert [cell for cell, _ in edges[STATE_COUNT - 1]] == list(range(1, 10))
    assert edges[0b100000000] == ((1, 0b010110000),)


def test_target_edges_are_not_followed_backwards():
    assert all(TARGET_STATE not in sources for sources in graph.predecessors().values())


def test_shortest_distance_validates_input():
    with pytest.raises(InvalidStateError):
        graph.shortest_distance(STATE_COUNT)
