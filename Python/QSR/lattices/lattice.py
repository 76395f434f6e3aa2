"""
Minimal hypercubic lattices.

A lattice provides the site count, boundary condition, coordinates and
nearest-neighbour tables. It is created once and shared, read-only, by every
Hilbert space, symmetry operator and Hamiltonian that refers to it.

----------------------------------------------------------
File        : QSR/lattices/lattice.py
Author      : Maksymilian Kliczkowski
Date        : 2025-10-01
----------------------------------------------------------
"""

from __future__ import annotations

from abc import ABC
from enum import Enum
from typing import List, Optional, Tuple, Union

import numpy as np

# ----------------------------------------------------------------

class LatticeBC(Enum):
    """Boundary conditions."""
    PBC = 0
    OBC = 1

class LatticeDirection(Enum):
    X = 'x'
    Y = 'y'
    Z = 'z'

def handle_boundary_conditions(bc: Optional[Union[LatticeBC, str, int]]) -> LatticeBC:
    """
    Convert a user boundary condition into :class:`LatticeBC`.

    ``None`` means periodic. Strings are matched case-insensitively.
    """
    if bc is None:
        return LatticeBC.PBC
    if isinstance(bc, LatticeBC):
        return bc
    if isinstance(bc, str):
        try:
            return LatticeBC[bc.upper()]
        except KeyError as e:
            raise ValueError(f"Unknown boundary condition '{bc}'. Use one of {[b.name for b in LatticeBC]}.") from e
    if isinstance(bc, (int, np.integer)):
        return LatticeBC(int(bc))
    raise ValueError(f"Unsupported boundary condition type: {type(bc)}")

# ----------------------------------------------------------------

class Lattice(ABC):
    """
    Hypercubic lattice of ``lx * ly * lz`` sites.

    Sites are numbered ``x + lx * (y + ly * z)``.
    """

    _name = "Lattice"

    def __init__(self,
                dim : int,
                lx  : int,
                ly  : int                               = 1,
                lz  : int                               = 1,
                bc  : Optional[Union[LatticeBC, str]]   = None):
        if dim not in (1, 2, 3):
            raise ValueError(f"Lattice dimension must be 1, 2 or 3, got {dim}.")
        if lx <= 0 or ly <= 0 or lz <= 0:
            raise ValueError(f"Lattice extents must be positive, got ({lx}, {ly}, {lz}).")
        self._dim   = dim
        self._lx    = int(lx)
        self._ly    = int(ly) if dim > 1 else 1
        self._lz    = int(lz) if dim > 2 else 1
        self._bc    = handle_boundary_conditions(bc)
        self._ns    = self._lx * self._ly * self._lz
        self._nn    = self._calculate_nn()

    # ----------------------------------------------------------------

    @property
    def dim(self) -> int:           return self._dim
    @property
    def lx(self) -> int:            return self._lx
    @property
    def ly(self) -> int:            return self._ly
    @property
    def lz(self) -> int:            return self._lz
    @property
    def ns(self) -> int:            return self._ns
    @property
    def Ns(self) -> int:            return self._ns
    @property
    def bc(self) -> LatticeBC:      return self._bc
    @property
    def nn(self) -> List[List[int]]:
        return self._nn

    def extent(self, direction: Union[str, LatticeDirection]) -> int:
        direction = LatticeDirection(direction) if isinstance(direction, str) else direction
        return {LatticeDirection.X: self._lx, LatticeDirection.Y: self._ly, LatticeDirection.Z: self._lz}[direction]

    # ----------------------------------------------------------------

    def get_coordinates(self, site: int) -> Tuple[int, int, int]:
        if site < 0 or site >= self._ns:
            raise IndexError(f"Site {site} outside lattice of {self._ns} sites.")
        x   = site % self._lx
        y   = (site // self._lx) % self._ly
        z   = site // (self._lx * self._ly)
        return x, y, z

    def site_index(self, x: int, y: int = 0, z: int = 0) -> int:
        return int(x + self._lx * (y + self._ly * z))

    def _calculate_nn(self) -> List[List[int]]:
        ''' Forward and backward neighbours along every active direction '''
        nn      = []
        extents = (self._lx, self._ly, self._lz)[:self._dim]
        for site in range(self._ns):
            coord       = list(self.get_coordinates(site))
            neighbours  = []
            for d, ext in enumerate(extents):
                if ext == 1:
                    continue
                for step in (1, -1):
                    c       = coord.copy()
                    c[d]   += step
                    if c[d] < 0 or c[d] >= ext:
                        if self._bc != LatticeBC.PBC:
                            continue
                        c[d] %= ext
                    nei = self.site_index(*c)
                    if nei != site and nei not in neighbours:
                        neighbours.append(nei)
            nn.append(neighbours)
        return nn

    def get_nn(self, site: int) -> List[int]:
        return self._nn[site]

    def bonds(self) -> List[Tuple[int, int]]:
        """Unique nearest-neighbour bonds ``(i, j)`` with ``i < j``."""
        out = set()
        for i, nei in enumerate(self._nn):
            for j in nei:
                out.add((min(i, j), max(i, j)))
        return sorted(out)

    # ----------------------------------------------------------------

    def __len__(self) -> int:
        return self._ns

    def __repr__(self) -> str:
        dims = ",".join(str(l) for l in (self._lx, self._ly, self._lz)[:self._dim])
        return f"{self._name}(d={self._dim},L=({dims}),bc={self._bc.name})"

    def __str__(self) -> str:
        return self.__repr__()

# ----------------------------------------------------------------

class SquareLattice(Lattice):
    _name = "SQ"

class ChainLattice(Lattice):
    """One dimensional chain."""

    _name = "CHAIN"

    def __init__(self, lx: int, bc: Optional[Union[LatticeBC, str]] = None):
        super().__init__(dim=1, lx=lx, bc=bc)

__all__ = [
    "Lattice",
    "LatticeBC",
    "LatticeDirection",
    "ChainLattice",
    "SquareLattice",
    "handle_boundary_conditions",
]

# ----------------------------------------------------------------
#! End of QSR lattices
