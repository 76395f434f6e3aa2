"""
file    : Model/Noninteracting/syk.py
Author  : Maksymilian Kliczkowski
Email   : maksymilian.kliczkowski@pwr.edu.pl

Description
-----------
Quadratic Sachdev-Ye-Kitaev (SYK2) model: a random Hermitian hopping matrix.
"""

from    typing import Any, Dict, Optional, Union, TYPE_CHECKING
import  numpy as np

from QSR.Algebra.hamil_quadratic    import QuadraticHamiltonian
from QSR.Algebra.hamil_config       import register_hamiltonian, class_builder
from QSR.common.ran_wrapper         import RMT, goe, gue

if TYPE_CHECKING:
    from QSR.Algebra.hilbert        import HilbertSpace
    from QSR.lattices.lattice       import Lattice

# ---------------------------------------------------------------------
#! HAMILTONIAN
# ---------------------------------------------------------------------

class SYK2(QuadraticHamiltonian):
    r"""
    Quadratic SYK model,

    .. math::
        H = \sum_{i,j} J_{ij} c_i^\dagger c_j, \qquad J = \frac{1}{\sqrt{N_h}} \mathrm{GOE}(N_h),

    where the GOE matrix is :math:`(A + A^T)/2` with :math:`A_{ij} \sim N(0, 1)`.
    The :math:`1/\sqrt{N_h}` scaling keeps the spectral width O(1) for all sizes.

    A complex dtype keeps the GOE matrix offset by ``0j``; ``ensemble='gue'``
    draws a complex Hermitian GUE matrix instead.
    """

    def __init__(
        self,
        ns              : Optional[int]                 = None,
        lattice         : Optional["Lattice"]           = None,
        hilbert_space   : Optional["HilbertSpace"]      = None,
        dtype           : np.dtype                      = np.dtype(np.float64),
        seed            : Optional[int]                 = None,
        ensemble        : Union[str, RMT]               = "goe",
        **kwargs,
    ):
        super().__init__(
            ns              = ns,
            lattice         = lattice,
            hilbert_space   = hilbert_space,
            dtype           = dtype,
            seed            = seed,
            **kwargs,
        )
        self._ensemble = RMT.from_name(ensemble)
        if self._ensemble not in (RMT.GOE, RMT.GUE):
            raise ValueError(f"SYK2 supports the GOE and GUE ensembles, got {self._ensemble.name}.")
        if self._ensemble == RMT.GUE and not self._iscpx:
            raise ValueError("The GUE ensemble needs a complex dtype.")
        self._name = "SYK2"

    @property
    def ensemble(self) -> RMT:
        return self._ensemble

    def _hamiltonian_quadratic(self):
        """
        Create the Hamiltonian matrix for the SYK model.
        """
        self._log("Building SYK2 Hamiltonian...", lvl=2, color="green", log='debug')
        rng = self._new_rng()
        if self._ensemble == RMT.GUE:
            mat = gue(self._ns, rng) / np.sqrt(self._ns)
        else:
            mat = goe(self._ns, rng) / np.sqrt(self._ns)
            if self._iscpx:
                mat = mat + 0j
        self._hamil[...] = mat

    def add_term(self, *args, **kwargs):
        raise NotImplementedError("Add term not implemented for SYK2 model.")

    def _info_fields(self) -> Dict[str, Any]:
        fields = {"Ns": self._ns, "BC": self.bc}
        if self._ensemble == RMT.GUE:
            fields["ens"] = self._ensemble.name
        return fields

    def __repr__(self):
        return f"SYK2(ns={self._ns},cpx={self._iscpx},ens={self._ensemble.name})"

# ---------------------------------------------------------------------

register_hamiltonian(
    'syk2',
    builder     = class_builder(SYK2),
    description = 'Quadratic SYK model with a GOE (or GUE) hopping matrix scaled by 1/sqrt(Nh).',
    tags        = ('quadratic', 'random'),
)

# ---------------------------------------------------------------------
#! END OF HAMILTONIAN
# ---------------------------------------------------------------------
