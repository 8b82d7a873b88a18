"""
Term Machine - A Permutation-Indexed Boolean State Machine

Binds a boolean to every ordered, non-repeating sequence of variable ids
and flips variables with a bounded cascade over dependent suffix terms.
"""

__version__ = "0.1.0"

from .terms import (
    Term,
    TermTable,
    TermCache,
    DEFAULT_TERM_CACHE,
    enumerate_terms,
    term_count,
    permutation_count,
    table_for,
    terms_for,
    index_for,
)
from .machine import Machine
from .orbits import FlipGraph

__all__ = [
    "Term",
    "TermTable",
    "TermCache",
    "DEFAULT_TERM_CACHE",
    "enumerate_terms",
    "term_count",
    "permutation_count",
    "table_for",
    "terms_for",
    "index_for",
    "Machine",
    "FlipGraph",
]
