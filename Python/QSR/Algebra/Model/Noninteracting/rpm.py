"""
file    : Model/Noninteracting/rpm.py
Author  : Maksymilian Kliczkowski
Email   : maksymilian.kliczkowski@pwr.edu.pl

Description
-----------
Rosenzweig-Porter random matrix model.
"""

from    typing import Any, Dict, Optional
import  numpy as np

from QSR.Algebra.hamil_quadratic    import QuadraticHamiltonian
from QSR.Algebra.hamil_config       import register_hamiltonian, class_builder
from QSR.common.ran_wrapper         import goe, gue

# ---------------------------------------------------------------------

class RosenzweigPorter(QuadraticHamiltonian):
    r"""
    Rosenzweig-Porter model,

    .. math::
        H = D + N_h^{-\gamma/2} V,

    with :math:`D` diagonal, :math:`D_{ii} \sim N(0, 1)`, and :math:`V` the
    off-diagonal part of a GOE matrix (GUE when ``real`` is False). Eigenstates are ergodic for
    :math:`\gamma < 1`, fractal for :math:`1 < \gamma < 2` and localized above.
    """

    def __init__(self,
                ns      : Optional[int] = None,
                g       : float         = 1.0,
                seed    : Optional[int] = None,
                real    : bool          = True,
                **kwargs):
        if not real and kwargs.get("dtype") is None:
            kwargs["dtype"] = np.complex128
        super().__init__(ns=ns, seed=seed, **kwargs)
        if not real and not self._iscpx:
            raise ValueError("Complex Rosenzweig-Porter couplings need a complex dtype.")
        self._g     = float(g)
        self._real  = bool(real)
        self._name  = "RP"

    @property
    def g(self) -> float:   return self._g
    @property
    def real(self) -> bool: return self._real

    def _hamiltonian_quadratic(self):
        rng     = self._new_rng()
        diag    = rng.standard_normal(self._ns)
        off     = goe(self._ns, rng) if self._real else gue(self._ns, rng)
        np.fill_diagonal(off, 0.0)
        mat     = np.diag(diag) + off * self._ns ** (-self._g / 2.0)
        self._hamil[...] = mat + 0j if self._iscpx else mat

    def _info_fields(self) -> Dict[str, Any]:
        fields = {"Ns": self._ns, "g": self._g}
        if not self._real:
            fields["cpx"] = True
        return fields

# ---------------------------------------------------------------------

RPM = RosenzweigPorter

register_hamiltonian(
    'rpm',
    builder     = class_builder(RosenzweigPorter),
    description = 'Rosenzweig-Porter model.',
    tags        = ('quadratic', 'random'),
)

# ---------------------------------------------------------------------
#! End of file
# ---------------------------------------------------------------------
