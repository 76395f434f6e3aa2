"""
QSR package initialization
=========================

Quantum Symmetry-Reduced solver core (QSR): symmetry-reduced Hilbert space
construction and quadratic Hamiltonian diagonalization.

Usage
-----
    import QSR
    from QSR import HilbertSpace, SYK2

    log     = QSR.get_logger()
    hilbert = HilbertSpace(ns=4, global_syms=[QSR.get_u1_sym(ns=4, val=2)])

----------------------------------------------------------
Author          : Maksymilian Kliczkowski
Email           : maksymilian.kliczkowski@pwr.edu.pl
Date            : 01.10.2025
Description     : Symmetry-reduced Hilbert spaces and quadratic Hamiltonians.
----------------------------------------------------------
"""

__version__         = "0.1.0"
__author__          = "Maksymilian Kliczkowski"
__email__           = "maksymilian.kliczkowski@pwr.edu.pl"
__license__         = "CC-BY-4.0"
__description__     = "Symmetry-reduced Hilbert spaces and quadratic Hamiltonian diagonalization"

__all__ = [
    # Core
    "HilbertSpace",
    "QuadraticHamiltonian",
    "GlobalSymmetry",
    "get_u1_sym",
    "SymmetryContainer",
    "Lattice",
    "ChainLattice",
    "SquareLattice",
    # Models
    "SYK2",
    "FreeFermions",
    "AubryAndre",
    "choose_model",
    "ModelParams",
    "ModelType",
    # Configuration
    "HilbertConfig",
    "HamiltonianConfig",
    # Global accessor re-exports
    "get_logger",
    "get_numpy_rng",
    "reseed_all",
    # Meta
    "__version__",
    "__author__",
    "__email__",
    "__license__",
    "__description__",
]

####################################################################################################

import importlib
from typing import Dict, Any

from .qsr_globals import get_logger, get_numpy_rng, reseed_all

# ----------------------------------------------------------------------------
# Lazy access to subpackages and common classes (keeps `import QSR` light)
# ----------------------------------------------------------------------------

_SUBMODULES: Dict[str, str] = {
    'Algebra'           : 'QSR.Algebra',
    'common'            : 'QSR.common',
    'lattices'          : 'QSR.lattices',
}

_API_EXPORTS: Dict[str, str] = {
    'HilbertSpace'          : 'QSR.Algebra.hilbert',
    'QuadraticHamiltonian'  : 'QSR.Algebra.hamil_quadratic',
    'GlobalSymmetry'        : 'QSR.Algebra.globals',
    'get_u1_sym'            : 'QSR.Algebra.globals',
    'SymmetryContainer'     : 'QSR.Algebra.Symmetries.symmetry_container',
    'Lattice'               : 'QSR.lattices.lattice',
    'ChainLattice'          : 'QSR.lattices.lattice',
    'SquareLattice'         : 'QSR.lattices.lattice',
    'SYK2'                  : 'QSR.Algebra.Model.Noninteracting.syk',
    'FreeFermions'          : 'QSR.Algebra.Model.Noninteracting.Conserving.free_fermions',
    'AubryAndre'            : 'QSR.Algebra.Model.Noninteracting.Conserving.aubry_andre',
    'choose_model'          : 'QSR.Algebra.Model',
    'ModelParams'           : 'QSR.Algebra.Model.model_params',
    'ModelType'             : 'QSR.Algebra.Model.model_params',
    'HilbertConfig'         : 'QSR.Algebra.hilbert_config',
    'HamiltonianConfig'     : 'QSR.Algebra.hamil_config',
}

def __getattr__(name: str) -> Any:  # PEP 562
    if name in _SUBMODULES:
        return importlib.import_module(_SUBMODULES[name])
    if name in _API_EXPORTS:
        mod = importlib.import_module(_API_EXPORTS[name])
        return getattr(mod, name)
    raise AttributeError(f"module 'QSR' has no attribute {name!r}")

# -------------------------------------------------------------------------------------------------
#! End of QSR package initialization
# -------------------------------------------------------------------------------------------------
