"""
Lattice geometry consumed read-only by Hilbert spaces, symmetries and Hamiltonians.
"""

from .lattice import (
    Lattice,
    LatticeBC,
    LatticeDirection,
    ChainLattice,
    SquareLattice,
    handle_boundary_conditions,
)

__all__ = [
    "Lattice",
    "LatticeBC",
    "LatticeDirection",
    "ChainLattice",
    "SquareLattice",
    "handle_boundary_conditions",
]
