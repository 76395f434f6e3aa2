"""
Translation symmetry for integer-encoded basis states.

A translation ``T`` shifts every site by one lattice unit along a chosen
direction. On a periodic direction of length ``L`` the group generated by
``T`` is cyclic of order ``L`` and its irreducible representations are
labelled by the momentum index ``k = 0, ..., L-1`` with characters

    chi_k(T^n) = exp(2 pi i k n / L).

--------------------------------------------
File        : QSR/Algebra/Symmetries/translation.py
Author      : Maksymilian Kliczkowski
Date        : 2025-10-26
--------------------------------------------
"""

from __future__ import annotations

import  numpy   as np
from    typing  import List, Optional, Tuple, TYPE_CHECKING

from QSR.Algebra.Symmetries.base import (
    SymmetryGenerators, SymmetryClass, MomentumSector, SymmetryOperator
)
from QSR.common.binary import permute_sites
from QSR.lattices.lattice import LatticeBC, LatticeDirection

if TYPE_CHECKING:
    from QSR.lattices.lattice import Lattice

_GENERATORS = {
    LatticeDirection.X: SymmetryGenerators.Translation_x,
    LatticeDirection.Y: SymmetryGenerators.Translation_y,
    LatticeDirection.Z: SymmetryGenerators.Translation_z,
}

####################################################################################################

class TranslationSymmetry(SymmetryOperator):
    """
    Translation by one lattice unit along ``direction``.

    Parameters
    ----------
    lattice : Lattice
        Shared lattice providing coordinates and boundary conditions.
    sector : int
        Momentum index ``k`` (reduced modulo the extent ``L``).
    ns : int, optional
        Number of sites; must agree with the lattice.
    direction : str
        'x', 'y' or 'z'.
    """

    symmetry_class      = SymmetryClass.TRANSLATION
    compatible_with     = {SymmetryClass.PARITY}
    momentum_dependent  = {
        MomentumSector.ZERO : {SymmetryClass.REFLECTION},
        MomentumSector.PI   : {SymmetryClass.REFLECTION},
    }

    def __init__(self, lattice: 'Lattice', sector: int = 0, ns: Optional[int] = None, direction: str = 'x'):
        if lattice is None:
            raise ValueError("TranslationSymmetry requires a lattice instance.")
        if ns is not None and ns != lattice.ns:
            raise ValueError(f"Number of sites ({ns}) differs from the lattice ({lattice.ns}).")
        if isinstance(sector, bool) or not isinstance(sector, (int, np.integer)):
            raise ValueError(f"Translation sector must be an integer momentum index, got {sector!r}.")
        try:
            direction = LatticeDirection(direction.lower()) if isinstance(direction, str) else LatticeDirection(direction)
        except ValueError as e:
            raise ValueError(f"Unknown translation direction '{direction}'.") from e

        self.lattice        = lattice
        self.direction      = direction
        self.generator      = _GENERATORS[direction]
        self.ns             = lattice.ns
        self.extent         = lattice.extent(direction)
        if self.extent <= 1 and direction != LatticeDirection.X:
            raise ValueError(f"Lattice has no extent along '{direction.value}'.")
        if lattice.bc != LatticeBC.PBC:
            raise ValueError(f"Translation requires periodic boundary conditions, lattice has {lattice.bc.name}.")
        self.sector         = int(sector) % self.extent
        self.perm           = self._compute_permutation()

    # -----------------------------------------------------
    #! Momentum sector
    # -----------------------------------------------------

    def get_momentum_sector(self) -> MomentumSector:
        if self.sector == 0:
            return MomentumSector.ZERO
        if self.extent % 2 == 0 and self.sector == self.extent // 2:
            return MomentumSector.PI
        return MomentumSector.GENERIC

    def is_real_sector(self, **kwargs) -> bool:
        return self.get_momentum_sector() != MomentumSector.GENERIC

    # -----------------------------------------------------
    #! Permutation
    # -----------------------------------------------------

    def _compute_permutation(self) -> np.ndarray:
        ''' Site ``i`` moves to ``perm[i]`` under a single translation '''
        lat     = self.lattice
        axis    = {LatticeDirection.X: 0, LatticeDirection.Y: 1, LatticeDirection.Z: 2}[self.direction]
        perm    = np.empty(self.ns, dtype=np.int64)
        for site in range(self.ns):
            coord        = list(lat.get_coordinates(site))
            coord[axis]  = (coord[axis] + 1) % self.extent
            perm[site]   = lat.site_index(*coord)
        return perm

    # -----------------------------------------------------
    #! Application
    # -----------------------------------------------------

    def apply_int(self, state: int, ns: Optional[int] = None, **kwargs) -> Tuple[int, complex]:
        ns = self.ns if ns is None else ns
        return permute_sites(state, self.perm, ns), 1.0

    def orbit(self, state: int) -> List[int]:
        """Distinct states reached by repeated translation, starting from ``state``."""
        out     = [state]
        current = state
        for _ in range(self.extent - 1):
            current, _ = self.apply_int(current)
            if current == state:
                break
            out.append(current)
        return out

    # -----------------------------------------------------
    #! Characters and checks
    # -----------------------------------------------------

    def get_character(self, count: int, sector: Optional[int] = None, **kwargs) -> complex:
        k = self.sector if sector is None else sector
        return complex(np.exp(1j * 2.0 * np.pi * k * count / self.extent))

    def check_boundary_conditions(self, lattice: Optional['Lattice'] = None, **kwargs) -> Tuple[bool, str]:
        lat = lattice or self.lattice
        if lat is not None and lat.bc != LatticeBC.PBC:
            return False, "Translation requires periodic boundary conditions"
        return True, "Valid"

    def __repr__(self) -> str:
        return f"Translation(direction={self.direction.value},k={self.sector},L={self.extent})"

    def __str__(self) -> str:
        return f"T({self.direction.value};{self.sector})"

__all__ = ["TranslationSymmetry"]

# -----------------------------------------------------
#! End of file
