"""
Analytic translational-invariant free-fermion model

-----------------------------------------------------
file    : QSR/Algebra/Model/Noninteracting/Conserving/free_fermions.py
author  : Maksymilian Kliczkowski
email   : maksymilian.kliczkowski@pwr.edu.pl
date    : 2025-05-01
-----------------------------------------------------
"""

from    typing import Any, Dict, Optional, Tuple, Union, TYPE_CHECKING

import  numba
import  numpy as np

from QSR.Algebra.hamil_quadratic    import QuadraticHamiltonian
from QSR.Algebra.hamil_config       import register_hamiltonian, class_builder
from QSR.lattices.lattice           import LatticeBC, handle_boundary_conditions

# ---------------------------------------------------------------------
#! Spectrum
# ---------------------------------------------------------------------

@numba.njit(cache=True)
def _free_fermions_spectrum(ns: int, t: float, t2: float) -> Tuple[np.ndarray, np.ndarray]:
    """
    Analytic spectrum of the free fermion model.

    Returns
    -------
    tuple
        Eigenvalues (in momentum order) and plane-wave eigenvectors.
    """
    twopi_over_L    = 2.0 * np.pi / ns
    eig_val         = np.empty(ns, dtype=np.float64)
    eig_vec         = np.empty((ns, ns), dtype=np.complex128)
    norm            = 1.0 / np.sqrt(ns)
    for k in range(ns):
        eig_val[k]  = -2.0 * t * np.cos(twopi_over_L * k) - 2.0 * t2 * np.cos(2.0 * twopi_over_L * k)
        for j in range(ns):
            eig_vec[j, k] = np.exp(1j * twopi_over_L * j * k) * norm
    return eig_val, eig_vec

def chain_hopping(mat: np.ndarray, t: float, distance: int, bc: LatticeBC) -> None:
    '''
    Add -t on the bonds (i, i +- distance) of a chain. On short rings the two
    directions, or bonds of different range, can hit the same entry and add up.
    '''
    ns = mat.shape[0]
    for i in range(ns):
        if i + distance < ns or bc == LatticeBC.PBC:
            mat[i, (i + distance) % ns] -= t
        if i - distance >= 0 or bc == LatticeBC.PBC:
            mat[i, (i - distance) % ns] -= t

# ---------------------------------------------------------------------

class FreeFermions(QuadraticHamiltonian):
    r"""
    1D tight-binding chain of free fermions.

    .. math::

        H = -t \sum_{i} \left( c_i^\dagger c_{i+1} + h.c. \right)
            -t_2 \sum_{i} \left( c_i^\dagger c_{i+2} + h.c. \right)

    For periodic boundary conditions the spectrum is known exactly,

    .. math::

        \varepsilon_k = -2t \cos\left( \frac{2\pi k}{N_s} \right) - 2t_2 \cos\left( \frac{4\pi k}{N_s} \right),
        \quad U_{j, k} = \frac{1}{\sqrt{N_s}} e^{2\pi i j k / N_s}.
    """

    def __init__(
        self,
        ns              : Optional[int]                     = None,
        t               : float                             = 1.0,
        t2              : float                             = 0.0,
        *,
        bc              : Optional[Union[LatticeBC, str]]   = None,
        **kwargs,
    ):
        super().__init__(ns=ns, **kwargs)
        self._t     = float(t)
        self._t2    = float(t2)
        if bc is None:
            self._bc = self._lattice.bc if self._lattice is not None else LatticeBC.PBC
        else:
            self._bc = handle_boundary_conditions(bc)
        self._name  = "FF"

    @property
    def t(self) -> float:           return self._t
    @property
    def t2(self) -> float:          return self._t2
    @property
    def bc(self) -> str:            return self._bc.name

    # -----------------------------------------------------------------
    #! analytic spectrum
    # -----------------------------------------------------------------

    @property
    def has_analytic_spectrum(self) -> bool:
        return self._bc == LatticeBC.PBC

    def analytic_spectrum(self, sort: bool = True) -> Tuple[np.ndarray, np.ndarray]:
        """
        Exact eigenvalues (offset included) and plane-wave eigenvectors for PBC.

        Raises
        ------
        ValueError
            For open boundary conditions.
        """
        if not self.has_analytic_spectrum:
            raise ValueError("The analytic spectrum is only available for periodic boundary conditions.")
        eig_val, eig_vec = _free_fermions_spectrum(self._ns, self._t, self._t2)
        eig_val = eig_val + self._constant_offset
        if sort:
            order           = np.argsort(eig_val, kind="stable")
            eig_val, eig_vec = eig_val[order], eig_vec[:, order]
        return eig_val, eig_vec

    # -----------------------------------------------------------------

    def _hamiltonian_quadratic(self):
        """
        Fill the hopping matrix of the chain.
        """
        chain_hopping(self._hamil, self._t, 1, self._bc)
        if self._t2 != 0.0:
            chain_hopping(self._hamil, self._t2, 2, self._bc)

    def _info_fields(self) -> Dict[str, Any]:
        return {"Ns": self._ns, "t": self._t, "t2": self._t2, "BC": self.bc}

    def __repr__(self):
        return f"FreeFermions(ns={self._ns},t={self._t},t2={self._t2},bc={self.bc})"

# ---------------------------------------------------------------------

register_hamiltonian(
    'free_fermions',
    builder     = class_builder(FreeFermions),
    description = 'Tight-binding chain with nearest and next-nearest neighbour hopping.',
    tags        = ('quadratic', 'conserving'),
)

# ---------------------------------------------------------------------
#! End of file
# ---------------------------------------------------------------------
