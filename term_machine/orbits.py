"""
Flip Orbit Analysis

Exhaustive analysis of the flip graph for a small universe: every machine
is a node, and flip(v) connects a machine to the machine it turns into.
flip(v) is an involution on the full value array, so the graph is
undirected and its connected components are the orbits of the group
generated by the flips.
"""

from typing import Any, Dict, List, Optional
import logging

import numpy as np

from .constants import INDEX_DTYPE, MAX_EXHAUSTIVE_VARIABLES
from .machine import Machine
from .terms import TermCache

logger = logging.getLogger(__name__)


class FlipGraph:
    """
    Flip graph over every machine of one universe size.

    Attributes:
        variables: Universe size
        machines: Every machine, in Machine.all order
        positions: Machine → position in machines
        transitions: transitions[i, v] is the position of machines[i] after flip(v)
    """

    def __init__(self, variables: int, cache: Optional[TermCache] = None,
                 max_variables: Optional[int] = MAX_EXHAUSTIVE_VARIABLES):
        self.variables = variables
        self.machines: List[Machine] = Machine.all(variables, cache=cache, max_variables=max_variables)
        self.positions: Dict[Machine, int] = {
            machine: position for position, machine in enumerate(self.machines)
        }
        self.transitions = self._build_transitions()
        self._roots = self._union_orbits()

        logger.debug(
            "Flip graph for %d variables: %d machines, %d orbits",
            variables, len(self.machines), len(self.representatives()),
        )

    def _build_transitions(self) -> np.ndarray:
        transitions = np.empty((len(self.machines), self.variables), dtype=INDEX_DTYPE)
        for position, machine in enumerate(self.machines):
            for variable in range(self.variables):
                clone = machine.copy()
                clone.flip(variable)
                transitions[position, variable] = self.positions[clone]
        return transitions

    def _union_orbits(self) -> np.ndarray:
        """Union-find over the transitions; every root is the smallest position of its orbit."""
        parent = np.arange(len(self.machines), dtype=INDEX_DTYPE)

        def find(position: int) -> int:
            root = position
            while parent[root] != root:
                root = parent[root]
            while parent[position] != root:
                parent[position], position = root, parent[position]
            return int(root)

        for position in range(len(self.machines)):
            for target in self.transitions[position]:
                a, b = find(position), find(int(target))
                if a < b:
                    parent[b] = a
                elif b < a:
                    parent[a] = b

        return np.fromiter((find(p) for p in range(len(parent))), dtype=INDEX_DTYPE, count=len(parent))

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def representatives(self) -> List[int]:
        """Smallest position of each orbit, ascending."""
        return [int(r) for r in np.unique(self._roots)]

    def orbits(self) -> List[List[int]]:
        """Every orbit as a sorted list of positions, ordered by representative."""
        members: Dict[int, List[int]] = {}
        for position, root in enumerate(self._roots):
            members.setdefault(int(root), []).append(position)
        return [members[root] for root in sorted(members)]

    def orbit_of(self, machine: Machine) -> List[int]:
        root = self._roots[self.positions[machine]]
        return [int(p) for p in np.flatnonzero(self._roots == root)]

    def smallest_orbit(self) -> List[int]:
        """The orbit with the fewest machines; ties go to the highest representative."""
        return min(reversed(self.orbits()), key=len)

    def summary(self) -> Dict[str, Any]:
        orbits = self.orbits()
        sizes = [len(orbit) for orbit in orbits]
        return {
            "variables": self.variables,
            "num_machines": len(self.machines),
            "num_orbits": len(orbits),
            "min_orbit_size": min(sizes),
            "max_orbit_size": max(sizes),
            "representatives": [orbit[0] for orbit in orbits],
        }
