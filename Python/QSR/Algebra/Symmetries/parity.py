"""
Global flip symmetries acting on every site at once.

- Parity X : flips the occupation of every site, phase 1.
- Parity Y : flips every site, phase i^ns * (-1)^{n_down}, where n_down is
             the number of empty sites before the flip. The phase squares
             to one over a double flip, so PY^2 = 1 and the sectors are +1 and -1.
- Parity Z : leaves the state unchanged, phase (-1)^{popcount}.

Commutation Rules
-----------------
Always commutes with translations, reflections and other parities.
With U(1) particle number conservation:
    - X and Y map N -> Ns - N and survive only at half filling,
    - Z is a constant inside a fixed-N sector and is therefore redundant.

--------------------------------------------
File        : QSR/Algebra/Symmetries/parity.py
Author      : Maksymilian Kliczkowski
Date        : 2025-10-26
--------------------------------------------
"""

from __future__ import annotations

from typing import Optional, Tuple, TYPE_CHECKING

from QSR.Algebra.Symmetries.base import (
    SymmetryGenerators, SymmetryClass, SymmetryOperator
)
from QSR.common.binary import flip_all, popcount

if TYPE_CHECKING:
    from QSR.Algebra.globals import GlobalSymmetry
    from QSR.lattices.lattice import Lattice

# i^n for n mod 4
_I_POWERS = (1.0, 1j, -1.0, -1j)

_AXES = {
    'x': SymmetryGenerators.ParityX,
    'y': SymmetryGenerators.ParityY,
    'z': SymmetryGenerators.ParityZ,
}

####################################################################################################

class ParitySymmetry(SymmetryOperator):
    """
    Parity (global flip) along ``axis``.

    Parameters
    ----------
    axis : str
        'x', 'y' or 'z'.
    sector : int
        +1 or -1.
    ns : int, optional
    lattice : Lattice, optional
    """

    symmetry_class      = SymmetryClass.PARITY
    compatible_with     = {
                            SymmetryClass.TRANSLATION,
                            SymmetryClass.REFLECTION,
                            SymmetryClass.PARITY,
                        }

    def __init__(self, axis: str = 'z', sector: int = 1, ns: Optional[int] = None, lattice: Optional['Lattice'] = None):
        axis = str(axis).lower()
        if axis not in _AXES:
            raise ValueError(f"Unknown parity axis: {axis}")
        if ns is None and lattice is None:
            raise ValueError("ParitySymmetry requires the number of sites or a lattice.")
        self.axis       = axis
        self.generator  = _AXES[axis]
        self.lattice    = lattice
        self.ns         = int(ns if ns is not None else lattice.ns)
        self.sector     = self._check_pm_one(sector, f"Parity {axis.upper()}")

    def apply_int(self, state: int, ns: Optional[int] = None, **kwargs) -> Tuple[int, complex]:
        ns = self.ns if ns is None else ns
        if self.axis == 'x':
            return flip_all(state, ns), 1.0
        if self.axis == 'y':
            downs   = ns - popcount(state)
            phase   = _I_POWERS[ns % 4] * (1 - 2 * (downs & 1))
            return flip_all(state, ns), phase
        return state, float(1 - 2 * (popcount(state) & 1))

    def is_compatible_with_global_symmetry(self, global_sym: 'GlobalSymmetry', **kwargs) -> Tuple[bool, str]:
        """
        Check compatibility with U(1) particle number conservation.

        X/Y need half filling N = Ns/2; Z is redundant inside a fixed-N sector.
        """
        if not global_sym.is_u1():
            return True, "Compatible"
        ns = kwargs.get('ns', self.ns)
        if self.axis in ('x', 'y'):
            if ns % 2 != 0 or global_sym.val != ns // 2:
                return False, f"Parity {self.axis.upper()} incompatible with U(1): requires half-filling N=Ns/2 (even Ns), but N={global_sym.val}, Ns={ns}"
            return True, "Compatible at half-filling"
        return False, "Parity Z acts trivially with U(1) (redundant)"

    def __str__(self) -> str:
        return f"P{self.axis}({self.sector:+d})"

__all__ = ["ParitySymmetry"]

# -----------------------------------------------------
#! End of file
