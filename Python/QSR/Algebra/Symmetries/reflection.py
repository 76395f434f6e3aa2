"""
Reflection (mirror) symmetry: the site order ``i -> ns - 1 - i`` is reversed.

R is an involution, so its sectors are +1 and -1 and chi(R^n) = sector^n.
On a periodic chain it commutes with translations only at k = 0 and k = pi.

--------------------------------------------
File        : QSR/Algebra/Symmetries/reflection.py
Author      : Maksymilian Kliczkowski
Date        : 2025-10-26
--------------------------------------------
"""

from __future__ import annotations

from    typing  import Optional, Tuple, TYPE_CHECKING

from QSR.Algebra.Symmetries.base import (
    SymmetryGenerators, SymmetryClass, MomentumSector, SymmetryOperator
)
from QSR.common.binary import reverse_bits

if TYPE_CHECKING:
    from QSR.lattices.lattice import Lattice

####################################################################################################

class ReflectionSymmetry(SymmetryOperator):
    """
    Mirror of the site order.

    Parameters
    ----------
    sector : int
        Reflection parity, +1 or -1.
    ns : int, optional
        Number of sites (taken from the lattice if omitted).
    lattice : Lattice, optional
    """

    generator           = SymmetryGenerators.Reflection
    symmetry_class      = SymmetryClass.REFLECTION
    compatible_with     = {SymmetryClass.PARITY}
    momentum_dependent  = {
        MomentumSector.ZERO : {SymmetryClass.TRANSLATION},
        MomentumSector.PI   : {SymmetryClass.TRANSLATION},
    }

    def __init__(self, sector: int = 1, ns: Optional[int] = None, lattice: Optional['Lattice'] = None):
        if ns is None and lattice is None:
            raise ValueError("ReflectionSymmetry requires the number of sites or a lattice.")
        self.lattice    = lattice
        self.ns         = int(ns if ns is not None else lattice.ns)
        self.sector     = self._check_pm_one(sector, "Reflection")

    def apply_int(self, state: int, ns: Optional[int] = None, **kwargs) -> Tuple[int, complex]:
        ns = self.ns if ns is None else ns
        return reverse_bits(state, ns), 1.0

    def __str__(self) -> str:
        return f"R({self.sector:+d})"

__all__ = ["ReflectionSymmetry"]

# -----------------------------------------------------
#! End of file
