"""
file    : Model/Noninteracting/plrb.py
Author  : Maksymilian Kliczkowski
Email   : maksymilian.kliczkowski@pwr.edu.pl

Description
-----------
Power-law random banded (PLRB) matrix model.
"""

from    typing import Any, Dict, Optional
import  numpy as np

from QSR.Algebra.hamil_quadratic    import QuadraticHamiltonian
from QSR.Algebra.hamil_config       import register_hamiltonian, class_builder
from QSR.common.ran_wrapper         import goe

# ---------------------------------------------------------------------

def plrb_envelope(ns: int, a: float, b: float) -> np.ndarray:
    r''' 1 / sqrt(1 + (|i-j|/b)^{2a}) '''
    idx     = np.arange(ns)
    dist    = np.abs(idx[:, None] - idx[None, :]) / b
    return 1.0 / np.sqrt(1.0 + dist ** (2.0 * a))

class PowerLawRandomBanded(QuadraticHamiltonian):
    r"""
    Power-law random banded matrix,

    .. math::
        H_{ij} = \frac{G_{ij}}{\sqrt{1 + (|i-j|/b)^{2a}}},

    with :math:`G` a GOE matrix. Small ``a`` gives delocalized eigenstates,
    large ``a`` localized ones, ``a = 1`` is the critical point.
    """

    def __init__(self,
                ns      : Optional[int] = None,
                a       : float         = 1.0,
                b       : float         = 1.0,
                seed    : Optional[int] = None,
                **kwargs):
        super().__init__(ns=ns, seed=seed, **kwargs)
        if b <= 0:
            raise ValueError(f"The bandwidth b must be positive, got {b}.")
        self._a     = float(a)
        self._b     = float(b)
        self._name  = "PLRB"

    @property
    def a(self) -> float:   return self._a
    @property
    def b(self) -> float:   return self._b

    def _hamiltonian_quadratic(self):
        mat = goe(self._ns, self._new_rng()) * plrb_envelope(self._ns, self._a, self._b)
        self._hamil[...] = mat + 0j if self._iscpx else mat

    def _info_fields(self) -> Dict[str, Any]:
        return {"Ns": self._ns, "a": self._a, "b": self._b}

# ---------------------------------------------------------------------

PLRB = PowerLawRandomBanded

register_hamiltonian(
    'plrb',
    builder     = class_builder(PowerLawRandomBanded),
    description = 'Power-law random banded matrix.',
    tags        = ('quadratic', 'random'),
)

# ---------------------------------------------------------------------
#! End of file
# ---------------------------------------------------------------------
