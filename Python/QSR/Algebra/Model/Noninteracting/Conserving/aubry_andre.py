"""
Aubry-Andre quasiperiodic chain

-----------------------------------------------------
file    : QSR/Algebra/Model/Noninteracting/Conserving/aubry_andre.py
author  : Maksymilian Kliczkowski
email   : maksymilian.kliczkowski@pwr.edu.pl
date    : 2025-05-01
-----------------------------------------------------
"""

from    typing import Any, Dict, Optional, Union

import  numpy as np

from QSR.Algebra.hamil_quadratic                            import QuadraticHamiltonian
from QSR.Algebra.hamil_config                               import register_hamiltonian, class_builder
from QSR.Algebra.Model.Noninteracting.Conserving.free_fermions import chain_hopping
from QSR.lattices.lattice                                   import LatticeBC, handle_boundary_conditions

# ---------------------------------------------------------------------

GOLDEN_RATIO = (1.0 + np.sqrt(5.0)) / 2.0

class AubryAndre(QuadraticHamiltonian):
    r"""
    Aubry-Andre model,

    .. math::

        H = -J \sum_i \left( c_i^\dagger c_{i+1} + h.c. \right)
            + \lambda \sum_i \cos(2\pi \beta i + \phi) n_i.

    For irrational :math:`\beta` all single-particle states are extended for
    :math:`\lambda < 2J` and localized for :math:`\lambda > 2J`.
    """

    def __init__(self,
                ns      : Optional[int]                     = None,
                J       : float                             = 1.0,
                lmbd    : float                             = 0.5,
                beta    : float                             = GOLDEN_RATIO,
                phi     : float                             = 1.0,
                *,
                bc      : Optional[Union[LatticeBC, str]]   = None,
                **kwargs):
        super().__init__(ns=ns, **kwargs)
        self._J         = float(J)
        self._lmbd      = float(lmbd)
        self._beta      = float(beta)
        self._phi       = float(phi)
        if bc is None:
            self._bc    = self._lattice.bc if self._lattice is not None else LatticeBC.PBC
        else:
            self._bc    = handle_boundary_conditions(bc)
        self._name      = "AA"

    @property
    def J(self) -> float:           return self._J
    @property
    def lmbd(self) -> float:        return self._lmbd
    @property
    def beta(self) -> float:        return self._beta
    @property
    def phi(self) -> float:         return self._phi
    @property
    def bc(self) -> str:            return self._bc.name

    def onsite_potential(self) -> np.ndarray:
        ''' lambda cos(2 pi beta i + phi) for every site '''
        return self._lmbd * np.cos(2.0 * np.pi * self._beta * np.arange(self._ns) + self._phi)

    def _hamiltonian_quadratic(self):
        chain_hopping(self._hamil, self._J, 1, self._bc)
        self._hamil[np.diag_indices(self._ns)] += self.onsite_potential()

    def _info_fields(self) -> Dict[str, Any]:
        return {"Ns": self._ns, "J": self._J, "lmbd": self._lmbd, "beta": self._beta, "phi": self._phi, "BC": self.bc}

# ---------------------------------------------------------------------

register_hamiltonian(
    'aubry_andre',
    builder     = class_builder(AubryAndre),
    description = 'Aubry-Andre quasiperiodic chain.',
    tags        = ('quadratic', 'conserving', 'quasiperiodic'),
)

# ---------------------------------------------------------------------
#! End of file
# ---------------------------------------------------------------------
