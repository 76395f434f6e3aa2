"""
QSR Algebra Module
==================

This package contains the algebraic core of QSR.

Modules:
--------
- globals         : Global symmetries (U(1) particle number) as filters
- Symmetries      : Local symmetry generators and the symmetry group container
- hilbert         : Symmetry-reduced Hilbert space
- hilbert_config  : Declarative Hilbert space configuration
- hamil_quadratic : Quadratic Hamiltonian life cycle and diagonalization
- hamil_config    : Hamiltonian configuration and registry
- Model           : Quadratic models (SYK2, free fermions, random matrices)
- Properties      : Correlation matrices and entanglement

File    : QSR/Algebra/__init__.py
Author  : Maksymilian Kliczkowski
Email   : maksymilian.kliczkowski@pwr.edu.pl
"""

# A short, user-facing description of the module
MODULE_DESCRIPTION = "Symmetry-reduced Hilbert spaces and quadratic Hamiltonians."

from .globals import GlobalSymmetry, GlobalSymmetries, get_u1_sym
from .hilbert import HilbertSpace
from .hilbert_config import HilbertConfig, SymmetrySpec
from .hamil_config import (
    HamiltonianConfig,
    HamiltonianSpec,
    HAMILTONIAN_REGISTRY,
    register_hamiltonian,
)
from .hamil_quadratic import QuadraticHamiltonian, HamiltonianState, QuadraticTerm
from .Symmetries import SymmetryGenerators, SymmetryContainer

__all__ = [
    'GlobalSymmetry',
    'GlobalSymmetries',
    'get_u1_sym',
    'HilbertSpace',
    'HilbertConfig',
    'SymmetrySpec',
    'HamiltonianConfig',
    'HamiltonianSpec',
    'HAMILTONIAN_REGISTRY',
    'register_hamiltonian',
    'QuadraticHamiltonian',
    'HamiltonianState',
    'QuadraticTerm',
    'SymmetryGenerators',
    'SymmetryContainer',
]

# ----------------------------------------------------------------------------
#! EOF
# ----------------------------------------------------------------------------
