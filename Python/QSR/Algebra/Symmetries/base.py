"""
Base classes for symmetry operations in Hilbert space.

This module defines the base class `SymmetryOperator` that every local
symmetry generator (translation, reflection, parity) inherits from and the
enumerations used to tag generators and classify them for compatibility
checks.

All operators act on integer-encoded basis states. Site ``i`` is bit
``ns - 1 - i`` of the state (see ``QSR.common.binary``).

--------------------------------------------
File        : QSR/Algebra/Symmetries/base.py
Description : Base classes for symmetry operations in Hilbert space.
Author      : Maksymilian Kliczkowski
Date        : 2025-10-26
--------------------------------------------
"""

from __future__ import annotations

from    typing      import Tuple, Dict, Optional, Set, Union, TYPE_CHECKING
from    enum        import Enum, auto

if TYPE_CHECKING:
    from QSR.Algebra.globals import GlobalSymmetry

####################################################################################################
#! Enumerations
####################################################################################################

class SymmetryGenerators(Enum):
    """Tags of the local symmetry generators that can be requested by name."""
    E               = auto()
    Translation_x   = auto()
    Translation_y   = auto()
    Translation_z   = auto()
    Reflection      = auto()
    ParityX         = auto()
    ParityY         = auto()
    ParityZ         = auto()
    Other           = auto()

    @classmethod
    def from_name(cls, name: Union[str, "SymmetryGenerators"]) -> "SymmetryGenerators":
        if isinstance(name, cls):
            return name
        key = str(name).strip()
        for member in cls:
            if member.name.lower() == key.lower():
                return member
        aliases = {
            't'     : cls.Translation_x, 'tx': cls.Translation_x, 'kx': cls.Translation_x,
            'ty'    : cls.Translation_y, 'ky': cls.Translation_y,
            'tz'    : cls.Translation_z, 'kz': cls.Translation_z,
            'r'     : cls.Reflection,    'reflection': cls.Reflection,
            'px'    : cls.ParityX, 'py': cls.ParityY, 'pz': cls.ParityZ,
        }
        if key.lower() in aliases:
            return aliases[key.lower()]
        raise ValueError(f"Unknown symmetry generator '{name}'.")

    def is_translation(self) -> bool:
        return self in (SymmetryGenerators.Translation_x, SymmetryGenerators.Translation_y, SymmetryGenerators.Translation_z)

class SymmetryClass(Enum):
    """
    Classification of symmetry types for compatibility checking.

    TRANSLATION : cyclic lattice shifts, quantum number k.
    REFLECTION  : mirror of the site order, quantum number +/- 1.
    PARITY      : global flips (X, Y) or the occupation sign (Z).
    GENERIC     : anything else.
    """
    TRANSLATION         = auto()
    REFLECTION          = auto()
    PARITY              = auto()
    GENERIC             = auto()

class MomentumSector(Enum):
    """Momentum sector classification for translation-dependent compatibility."""
    ZERO                = 0
    PI                  = 1
    GENERIC             = 2

####################################################################################################
#! Base class for symmetry operations
####################################################################################################

class SymmetryOperator:
    """
    Base class for a symmetry operation.

    Attributes
    ----------
    symmetry_class : SymmetryClass
        Classification of this symmetry type for compatibility checking.
    compatible_with : Set[SymmetryClass]
        Other symmetry classes that unconditionally commute with this one.
    momentum_dependent : Dict[MomentumSector, Set[SymmetryClass]]
        Additional compatible symmetries at specific momentum sectors.
    sector : Union[int, float, complex]
        Quantum number (sector value) for this symmetry.

    Examples
    --------
    >>> class MySymmetry(SymmetryOperator):
    ...     symmetry_class = SymmetryClass.GENERIC
    ...     def apply_int(self, state, ns, **kwargs):
    ...         return state, 1.0
    """

    generator                   : SymmetryGenerators                        = SymmetryGenerators.Other
    symmetry_class              : SymmetryClass                             = SymmetryClass.GENERIC
    compatible_with             : Set[SymmetryClass]                        = set()
    momentum_dependent          : Dict[MomentumSector, Set[SymmetryClass]]  = {}
    sector                      : Optional[Union[int, float, complex]]      = None

    @property
    def name(self) -> str:
        return self.__class__.__name__

    @staticmethod
    def _check_pm_one(sector, who: str) -> int:
        if sector not in (1, -1):
            raise ValueError(f"{who} sector must be +1 or -1, got {sector!r}.")
        return int(sector)

    # ------------------------------------------------
    # Core application
    # ------------------------------------------------

    def apply_int(self, state: int, ns: int, **kwargs) -> Tuple[int, complex]:
        """
        Apply the symmetry to a state in integer representation.

        Returns
        -------
        new_state : int
            Transformed state
        phase : complex
            Intrinsic phase picked up by the state (1 for pure permutations)
        """
        raise NotImplementedError(f"{self.__class__.__name__} must implement apply_int()")

    def __call__(self, state: int, ns: int) -> Tuple[int, complex]:
        return self.apply_int(state, ns)

    # ------------------------------------------------
    # Character computation
    # ------------------------------------------------

    def get_character(self, count: int, sector: Optional[Union[int, float, complex]] = None, **kwargs) -> complex:
        r"""
        Character :math:`\chi(op^n)` of this operation applied ``count`` times.

        Default for discrete symmetries: ``sector ** count``.
        Translation overrides it with :math:`e^{2\pi i k n / L}`.
        """
        sector = self.sector if sector is None else sector
        return sector ** count

    # ------------------------------------------------
    # Compatibility checking
    # ------------------------------------------------

    def is_real_sector(self, **kwargs) -> bool:
        """True if the sector has a real character (enhances compatibility)."""
        return True

    def commutes_with(self, other: 'SymmetryOperator', **kwargs) -> bool:
        """
        Check if this symmetry commutes with another.

        Same class always commutes, then the unconditional set is checked,
        then the momentum-dependent sets if both sectors are real.
        """
        if self.symmetry_class == other.symmetry_class:
            return True
        if other.symmetry_class in self.compatible_with:
            return True
        if self.is_real_sector(**kwargs) and other.is_real_sector(**kwargs):
            if (other.symmetry_class in self.momentum_dependent.get(MomentumSector.ZERO, set()) or
                other.symmetry_class in self.momentum_dependent.get(MomentumSector.PI,   set())):
                return True
        return False

    def check_boundary_conditions(self, lattice=None, **kwargs) -> Tuple[bool, str]:
        """Whether this symmetry is valid for the lattice boundary conditions."""
        return True, "No boundary constraint"

    def is_compatible_with_global_symmetry(self, global_sym: 'GlobalSymmetry', **kwargs) -> Tuple[bool, str]:
        """Whether the symmetry leaves the global symmetry sector invariant."""
        return True, "Compatible"

    def __repr__(self) -> str:
        return f"{self.name}(sector={self.sector})"

__all__ = [
    "SymmetryGenerators",
    "SymmetryClass",
    "MomentumSector",
    "SymmetryOperator",
]

####################################################################################################
#! End of file
####################################################################################################
