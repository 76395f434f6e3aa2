"""
Physical properties of quadratic Hamiltonians.

Modules:
--------
- entanglement : correlation matrices, occupations and entanglement entropies of Slater determinants
                 and of random superpositions of them
"""

from .entanglement import (
    contiguous,
    correlation_matrix,
    occupations,
    entropy_from_correlation,
    entanglement_entropy,
    slater_state,
    entropy_from_state,
    random_coefficients,
    mixed_state,
    gamma_entropies,
)

__all__ = [
    "contiguous",
    "correlation_matrix",
    "occupations",
    "entropy_from_correlation",
    "entanglement_entropy",
    "slater_state",
    "entropy_from_state",
    "random_coefficients",
    "mixed_state",
    "gamma_entropies",
]
