"""
Term Enumerator and Index Cache

A term is an ordered, non-repeating sequence of variable ids drawn from
{0, ..., n-1}. For a universe size n the Term Table lists every term in a
fixed order:

    length 1:  (0,) (1,) ... (n-1,)
    length 2:  (0, 1) (0, 2) ... (n-1, n-2)
    ...
    length n:  every permutation of range(n)

Within a length the order is itertools.permutations(range(n), k). The Index
Map is the inverse of the table (term → slot).

Tables are built once per universe size and shared read-only by every
Machine of that size through a TermCache.
"""

from typing import Dict, List, Tuple
from dataclasses import dataclass, field
from itertools import permutations
import logging
import threading

import numpy as np

from .constants import INDEX_DTYPE, NO_TAIL

logger = logging.getLogger(__name__)

Term = Tuple[int, ...]


# =============================================================================
# Counting
# =============================================================================

def factorial(n: int) -> int:
    result = 1
    for k in range(2, n + 1):
        result *= k
    return result


def permutation_count(n: int, k: int) -> int:
    """Number of ordered selections of k distinct items out of n: n!/(n-k)!."""
    return factorial(n) // factorial(n - k)


def term_count(n: int) -> int:
    """Size of the Term Table for universe size n."""
    return sum(permutation_count(n, k) for k in range(1, n + 1))


def enumerate_terms(n: int) -> Tuple[Term, ...]:
    """
    Enumerate every term for universe size n, in Term Table order.

    Args:
        n: Universe size (number of variables)

    Returns:
        Tuple of terms grouped by increasing length
    """
    if n < 0:
        raise ValueError(f"Universe size must be non-negative, got {n}")
    return tuple(
        term
        for length in range(1, n + 1)
        for term in permutations(range(n), length)
    )


# =============================================================================
# Term Table
# =============================================================================

@dataclass(frozen=True, eq=False)
class TermTable:
    """
    Term Table and Index Map for one universe size.

    Attributes:
        variables: Universe size n
        terms: Every term, in table order (slot → term)
        index: Inverse of terms (term → slot)
        heads: First variable of the term in each slot
        tails: Slot of term[1:] for each slot, NO_TAIL for singletons
    """
    variables: int
    terms: Tuple[Term, ...]
    index: Dict[Term, int] = field(repr=False)
    heads: np.ndarray = field(repr=False)
    tails: np.ndarray = field(repr=False)

    @classmethod
    def build(cls, variables: int) -> "TermTable":
        terms = enumerate_terms(variables)
        index = {term: slot for slot, term in enumerate(terms)}

        heads = np.fromiter((term[0] for term in terms), dtype=INDEX_DTYPE, count=len(terms))
        tails = np.fromiter(
            (index[term[1:]] if len(term) > 1 else NO_TAIL for term in terms),
            dtype=INDEX_DTYPE,
            count=len(terms),
        )
        heads.flags.writeable = False
        tails.flags.writeable = False

        return cls(variables=variables, terms=terms, index=index, heads=heads, tails=tails)

    def __len__(self) -> int:
        return len(self.terms)

    def slot(self, term: Term) -> int:
        """Slot of a term. Raises KeyError for anything that is not a term of this table."""
        return self.index[tuple(term)]

    def term(self, slot: int) -> Term:
        return self.terms[slot]

    def singleton(self, variable: int) -> int:
        """Slot of the singleton term (variable,)."""
        return self.index[(variable,)]


# =============================================================================
# Cache
# =============================================================================

class TermCache:
    """
    Lazily built Term Tables keyed by universe size.

    A table is built at most once per size; the first build for a size is
    serialized so every reader sees the same TermTable object. Built tables
    are never evicted or mutated.
    """

    def __init__(self):
        self._tables: Dict[int, TermTable] = {}
        self._lock = threading.Lock()

    def table_for(self, variables: int) -> TermTable:
        table = self._tables.get(variables)
        if table is not None:
            return table

        with self._lock:
            table = self._tables.get(variables)
            if table is None:
                table = TermTable.build(variables)
                self._tables[variables] = table
                logger.debug("Built term table for %d variables (%d terms)", variables, len(table))
            return table

    def terms_for(self, variables: int) -> Tuple[Term, ...]:
        """Term Table for a universe size (slot → term)."""
        return self.table_for(variables).terms

    def index_for(self, variables: int) -> Dict[Term, int]:
        """Index Map for a universe size (term → slot)."""
        return self.table_for(variables).index

    def cached_sizes(self) -> List[int]:
        return sorted(self._tables)

    def clear(self) -> None:
        with self._lock:
            self._tables.clear()

    def __contains__(self, variables: int) -> bool:
        return variables in self._tables


DEFAULT_TERM_CACHE = TermCache()


def table_for(variables: int) -> TermTable:
    return DEFAULT_TERM_CACHE.table_for(variables)


def terms_for(variables: int) -> Tuple[Term, ...]:
    return DEFAULT_TERM_CACHE.terms_for(variables)


def index_for(variables: int) -> Dict[Term, int]:
    return DEFAULT_TERM_CACHE.index_for(variables)
