"""
Tests for the Flip Orbit Analysis
"""

import pytest
import numpy as np

from term_machine import FlipGraph, Machine, term_count


@pytest.fixture(scope="module")
def graph_two():
    return FlipGraph(2)


class TestFlipGraph:
    def test_empty_universe(self):
        graph = FlipGraph(0)
        assert len(graph.machines) == 1
        assert graph.transitions.shape == (1, 0)
        assert graph.orbits() == [[0]]

    def test_single_variable(self):
        graph = FlipGraph(1)
        assert graph.transitions.tolist() == [[1], [0]]
        assert graph.orbits() == [[0, 1]]
        assert graph.representatives() == [0]

    def test_transitions_follow_flip(self, graph_two):
        for position, machine in enumerate(graph_two.machines):
            for variable in range(2):
                clone = machine.copy()
                clone.flip(variable)
                assert graph_two.machines[graph_two.transitions[position, variable]] == clone

    def test_transitions_are_involutions(self, graph_two):
        positions = np.arange(len(graph_two.machines))
        for variable in range(2):
            column = graph_two.transitions[:, variable]
            assert np.array_equal(column[column], positions)

    def test_orbits_partition_machines(self, graph_two):
        orbits = graph_two.orbits()
        flat = sorted(p for orbit in orbits for p in orbit)
        assert flat == list(range(2 ** term_count(2)))
        assert [orbit[0] for orbit in orbits] == graph_two.representatives()

    def test_orbits_are_closed(self, graph_two):
        for orbit in graph_two.orbits():
            members = set(orbit)
            for position in orbit:
                assert set(graph_two.transitions[position].tolist()) <= members

    def test_orbit_of(self, graph_two):
        machine = Machine.from_values(2, [False, False, True, False])
        orbit = graph_two.orbit_of(machine)
        assert graph_two.positions[machine] in orbit
        assert orbit in graph_two.orbits()

    def test_smallest_orbit(self, graph_two):
        smallest = graph_two.smallest_orbit()
        sizes = [len(orbit) for orbit in graph_two.orbits()]
        assert len(smallest) == min(sizes)
        ties = [orbit for orbit in graph_two.orbits() if len(orbit) == len(smallest)]
        assert smallest == ties[-1]

    def test_summary(self, graph_two):
        summary = graph_two.summary()
        assert summary["variables"] == 2
        assert summary["num_machines"] == 16
        assert summary["num_orbits"] == len(graph_two.orbits())
        assert summary["min_orbit_size"] <= summary["max_orbit_size"]

    def test_refuses_large_universe(self):
        with pytest.raises(ValueError):
            FlipGraph(4)
