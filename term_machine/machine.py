"""
Machine Module

A Machine binds one boolean to every term of its universe. Values are kept
in a dense numpy array aligned with the Term Table, so flip is a linear
scan over flat arrays rather than a dictionary walk:

    term  ──Index Map──▶  slot  ──values[slot]──▶  bool

flip(v) toggles the singleton (v,), then toggles the suffix term[1:] of
every term that starts with v and is currently true. The suffix slots are
collected in full before any of them is toggled.
"""

from itertools import product
from typing import Any, Callable, Dict, Iterable, Iterator, List, Mapping, Optional

import numpy as np

from .constants import BOOL_DTYPE, MAX_EXHAUSTIVE_VARIABLES, NO_TAIL
from .terms import DEFAULT_TERM_CACHE, Term, TermCache, TermTable


Producer = Callable[[Term], bool]


class Machine:
    """
    Permutation-indexed boolean state machine.

    Attributes:
        variables: Universe size n (variable ids are 0..n-1)
        table: Shared Term Table for n
        values: Read-only view of the dense value array
    """

    def __init__(self, variables: int, producer: Producer, cache: Optional[TermCache] = None):
        """
        Build a machine by asking the producer for every term's initial value.

        Args:
            variables: Universe size
            producer: Called exactly once per term, in Term Table order
            cache: Term cache to resolve the table from (process default if None)
        """
        cache = cache if cache is not None else DEFAULT_TERM_CACHE
        self.variables = variables
        self.table: TermTable = cache.table_for(variables)
        self._values = np.fromiter(
            (bool(producer(term)) for term in self.table.terms),
            dtype=BOOL_DTYPE,
            count=len(self.table),
        )

    # -------------------------------------------------------------------------
    # Alternate Constructors
    # -------------------------------------------------------------------------

    @classmethod
    def from_mapping(cls, variables: int, mapping: Mapping[Term, bool],
                     cache: Optional[TermCache] = None) -> "Machine":
        """Build from a term → value mapping. A term missing from the mapping raises KeyError."""
        return cls(variables, lambda term: mapping[term], cache=cache)

    @classmethod
    def from_values(cls, variables: int, values: Iterable[bool],
                    cache: Optional[TermCache] = None) -> "Machine":
        """
        Build from a flat assignment consumed left-to-right in Term Table order.

        Raises:
            ValueError: If the assignment is shorter or longer than the table
        """
        remaining = iter(values)

        def producer(term: Term) -> bool:
            try:
                return next(remaining)
            except StopIteration:
                raise ValueError(f"Assignment ran out of values at term {list(term)}") from None

        machine = cls(variables, producer, cache=cache)
        for _ in remaining:
            raise ValueError(f"Assignment is longer than the {len(machine.table)} terms of {variables} variables")
        return machine

    @classmethod
    def iter_all(cls, variables: int, cache: Optional[TermCache] = None) -> Iterator["Machine"]:
        """
        Lazily yield every machine for a universe size.

        Assignments follow itertools.product((False, True), repeat=|terms|):
        the first slot varies slowest and the all-False machine comes first.
        """
        cache = cache if cache is not None else DEFAULT_TERM_CACHE
        size = len(cache.table_for(variables))
        for signature in product((False, True), repeat=size):
            yield cls.from_values(variables, signature, cache=cache)

    @classmethod
    def all(cls, variables: int, cache: Optional[TermCache] = None,
            max_variables: Optional[int] = MAX_EXHAUSTIVE_VARIABLES) -> List["Machine"]:
        """
        Every possible machine for a universe size: 2^|terms| of them.

        Args:
            variables: Universe size
            cache: Term cache to resolve the table from
            max_variables: Refuse larger universes; None disables the check

        Returns:
            List of machines in iter_all order
        """
        if max_variables is not None and variables > max_variables:
            raise ValueError(
                f"Refusing to enumerate machines for {variables} variables "
                f"(limit {max_variables}); pass max_variables=None to override"
            )
        return list(cls.iter_all(variables, cache=cache))

    # -------------------------------------------------------------------------
    # State Access
    # -------------------------------------------------------------------------

    @property
    def values(self) -> np.ndarray:
        view = self._values.view()
        view.flags.writeable = False
        return view

    def get(self, variable: int) -> bool:
        """Value of the singleton term (variable,)."""
        return bool(self._values[self.table.singleton(variable)])

    def set(self, variable: int, value: bool) -> None:
        """Flip the variable if its value differs, otherwise do nothing."""
        if self.get(variable) != value:
            self.flip(variable)

    def flip(self, variable: int) -> None:
        """
        Toggle a variable and cascade to the suffixes of its true terms.

        1. Toggle (variable,).
        2. Select every term starting with variable whose value is true
           (read after step 1) and take the slot of its suffix term[1:];
           singletons have no suffix.
        3. Toggle every selected suffix slot.
        """
        table = self.table
        values = self._values

        values[table.singleton(variable)] ^= True

        selected = table.tails[(table.heads == variable) & values]
        selected = selected[selected != NO_TAIL]

        # Distinct terms sharing a head have distinct suffixes, so slots are unique
        values[selected] ^= True

    def copy(self) -> "Machine":
        clone = object.__new__(type(self))
        clone.variables = self.variables
        clone.table = self.table
        clone._values = self._values.copy()
        return clone

    __copy__ = copy

    # -------------------------------------------------------------------------
    # Equality & Rendering
    # -------------------------------------------------------------------------

    def __eq__(self, other):
        if not isinstance(other, Machine):
            return NotImplemented
        return self.variables == other.variables and np.array_equal(self._values, other._values)

    def __hash__(self):
        return hash((self.variables, self._values.tobytes()))

    def to_dict(self) -> Dict[Term, bool]:
        """Term → value, in Term Table order."""
        return {term: bool(value) for term, value in zip(self.table.terms, self._values)}

    def __repr__(self):
        entries = ", ".join(
            f"{list(term)}: {bool(value)}" for term, value in zip(self.table.terms, self._values)
        )
        return f"Machine({{{entries}}})"

    def summary(self) -> Dict[str, Any]:
        return {
            "variables": self.variables,
            "num_terms": len(self.table),
            "true_terms": int(np.count_nonzero(self._values)),
            "singletons": [self.get(v) for v in range(self.variables)],
        }
