"""
Symmetry operations for quantum many-body systems.

This module provides symmetry operators for Hilbert space construction:
- Translation symmetry (momentum sectors)
- Reflection symmetry (mirror of the site order)
- Parity symmetry (global flips)
- The container that combines them into a group and finds representatives

---------------------------------------------------
File        : QSR/Algebra/Symmetries/__init__.py
Description : Symmetry operations module initialization
Author      : Maksymilian Kliczkowski
Date        : 2025-10-27
---------------------------------------------------
"""

from QSR.Algebra.Symmetries.base import (
    SymmetryGenerators,
    SymmetryOperator,
    SymmetryClass,
    MomentumSector,
)
from QSR.Algebra.Symmetries.translation import TranslationSymmetry
from QSR.Algebra.Symmetries.reflection import ReflectionSymmetry
from QSR.Algebra.Symmetries.parity import ParitySymmetry
from QSR.Algebra.Symmetries.symmetry_container import (
    CompactSymmetryData,
    SymmetryContainer,
    create_symmetry_container_from_specs,
)

__all__ = [
    "SymmetryGenerators",
    "SymmetryOperator",
    "SymmetryClass",
    "MomentumSector",
    "TranslationSymmetry",
    "ReflectionSymmetry",
    "ParitySymmetry",
    "CompactSymmetryData",
    "SymmetryContainer",
    "create_symmetry_container_from_specs",
]
