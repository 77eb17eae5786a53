"""
===============================================================================
DUALQUAT - Numeric Constants
===============================================================================
Central repository for the numeric constants used throughout the library.
All angles are in radians unless a name says otherwise.

Tolerances are provided for callers and tests. No equality predicate in the
library falls back on them silently: every ``equals`` call takes its
tolerance explicitly.
===============================================================================
"""

import numpy as np


# =============================================================================
# MATHEMATICAL CONSTANTS
# =============================================================================
PI = np.pi
DEG2RAD = PI / 180.0

# =============================================================================
# COMPARISON TOLERANCES
# =============================================================================
EQUALS_EPSILON = 1e-15                 # exact-algebra identities (add, conj)
PRODUCT_EPSILON = 1e-12                # identities involving chained products
ROTATION_EPSILON = 1e-9                # results of trigonometric transforms

# =============================================================================
# CANONICAL COMPONENT TUPLES (w, i, j, k)
# =============================================================================
IDENTITY_COMPONENTS = (1.0, 0.0, 0.0, 0.0)
ZERO_COMPONENTS = (0.0, 0.0, 0.0, 0.0)
