"""Symbolax: integer linear combinations of symbols for polylogarithm identities.

## Features

### Linear combinations
- Sparse integer combinations over packed, canonical term keys
- Nil propagation, annotations, grouping
- Tensor and shuffle products, Lyndon basis

### Coalgebra
- Iterated, normal and Lie coproducts
- Deconcatenation and comultiplication into fixed shapes

### Symbol families
- Differences of points (Delta), Plücker coordinates (Gamma)
- Epsilon and Theta symbols with formal Li / Lira symbols
- Weak separation, connectivity and consecutive-index filters
"""

__version__ = "0.1.0"
__license__ = "MIT"
