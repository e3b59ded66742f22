"""Process-wide bounds for generator universes and term capacities.

The bounds fix the field widths of packed term keys. They are read once at
import time; exceeding any of them is a construction error.
"""

# Points available to ``Delta`` (variables x_1..x_n plus their negations and zero).
MAX_DIMENSION = 16

# Columns available to ``Gamma`` minors. A minor is stored as a 16-bit bitset.
MAX_GAMMA_VARIABLES = 16

# Variables available to ``Epsilon`` generators and their complements.
MAX_EPSILON_VARIABLES = 16

# Maximum number of generators in a single term, per family.
SIMPLE_VECTOR_TERM_CAPACITY = 10
DELTA_TERM_CAPACITY = 10
GAMMA_TERM_CAPACITY = 10
EPSILON_TERM_CAPACITY = 10
THETA_TERM_CAPACITY = 4

# Maximum number of parts in a co-expression term.
COEXPR_MAX_PARTS = 4
