# term_machine/constants.py
"""
Term Machine Constants

This module defines constants used throughout the term machine package:

LAYER 1: Dense Storage (Term Table arrays)
- BOOL_DTYPE: dtype of a machine's value array
- INDEX_DTYPE: dtype of slot/variable arrays in a Term Table
- NO_TAIL: tail slot recorded for singleton terms

LAYER 2: Exhaustive Analysis
- MAX_EXHAUSTIVE_VARIABLES: largest universe enumerated by default
"""
import numpy as np


# =============================================================================
# LAYER 1: Dense Storage
# =============================================================================

BOOL_DTYPE = np.bool_
INDEX_DTYPE = np.intp

# A singleton term has an empty suffix, which has no slot of its own
NO_TAIL = -1


# =============================================================================
# LAYER 2: Exhaustive Analysis
# =============================================================================

# Machine.all(n) yields 2^|terms(n)| machines:
#   n=1 → 2, n=2 → 16, n=3 → 32768, n=4 → 2^64
MAX_EXHAUSTIVE_VARIABLES = 3

assert MAX_EXHAUSTIVE_VARIABLES >= 0, "MAX_EXHAUSTIVE_VARIABLES must be non-negative"
