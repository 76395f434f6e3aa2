"""
Symmetry container for managing symmetry operations in Hilbert spaces.

The container separates global and local symmetries:

- **Global symmetries** (e.g. U(1) particle number) act as filters. A state
  either satisfies them or it does not, no orbits are formed.
- **Local symmetries** (translation, reflection, parity) are generators of a
  finite abelian group G. Every basis state belongs to one orbit of G; the
  orbit is represented by its smallest integer, the *representative*.

For a representative ``r`` in the one-dimensional irrep with characters chi,
the symmetric basis vector is

    |r_k> = 1 / (N_r sqrt|G|) sum_g conj(chi(g)) U(g) |r>,
    N_r^2 = | sum_{g : g r = r} conj(chi(g)) phase_g(r) |,

and ``N_r = 0`` marks an orbit that does not contribute to the sector.

----------------------------------------------------------------------------
File        : QSR/Algebra/Symmetries/symmetry_container.py
Author      : Maksymilian Kliczkowski
Date        : 2025-10-28
Version     : 1.1.0
Changelog   :
    - 2025-10-28: Initial version
    - 2025-12-08: Added compact O(1) lookup structure.
----------------------------------------------------------------------------
"""

from    __future__ import annotations

import  time
import  numba
import  numpy as np

from    collections import Counter
from    typing      import List, Tuple, Dict, Optional, Union, TYPE_CHECKING
from    dataclasses import dataclass, field
from    itertools   import combinations, product

from QSR.Algebra.Symmetries.base import SymmetryGenerators, SymmetryOperator
from QSR.Algebra.globals import GlobalSymmetry, check_all

if TYPE_CHECKING:
    from QSR.common.flog import Logger
    from QSR.lattices.lattice import Lattice

# --------------------------------------------------------------------------
#! Private helper functions
# --------------------------------------------------------------------------

@numba.njit(cache=True)
def _binary_search_representative_list(mapping: np.ndarray, state: np.int64) -> np.int64:
    """
    Binary search for ``state`` in the sorted array of representatives.
    Returns the index, or -1 when absent.
    """
    left    = 0
    right   = len(mapping) - 1
    while left <= right:
        mid         = (left + right) // 2
        if mapping[mid] == state:
            return mid
        elif mapping[mid] < state:
            left    = mid + 1
        else:
            right   = mid - 1
    return -1

#############################################################################
#! Constants
#############################################################################

_SYM_NORM_THRESHOLD = 1e-12
_INT_HUGE           = np.iinfo(np.int64).max
_REPR_MAP_DTYPE     = np.uint32
_PHASE_IDX_DTYPE    = np.uint8
_INVALID_REPR_IDX   = np.iinfo(_REPR_MAP_DTYPE).max     # marks state not in sector
_INVALID_PHASE_IDX  = np.iinfo(_PHASE_IDX_DTYPE).max    # 255, marks invalid phase index

#############################################################################
#! Type Aliases
#############################################################################

StateInt            = int
SymmetrySpecTuple   = Tuple[SymmetryGenerators, Union[int, float, complex]]
GroupElement        = Tuple[SymmetryOperator, ...]

#############################################################################
#! Compact Symmetry Data Structure
#############################################################################

@dataclass
class CompactSymmetryData:
    """
    Memory-efficient O(1) lookup of ``state -> (representative index, phase)``.

    Attributes
    ----------
    repr_map : np.ndarray
        Shape (nh_full,), dtype uint32. ``_INVALID_REPR_IDX`` if the state is not in the sector.
    phase_idx : np.ndarray
        Shape (nh_full,), dtype uint8. Index into ``phase_table``.
    phase_table : np.ndarray
        Distinct phase values, typically a handful (1, -1, i, -i, roots of unity).
    normalization : np.ndarray
        Normalization per representative.
    representative_list : np.ndarray
        Representative state values, sorted.
    """
    repr_map            : np.ndarray
    phase_idx           : np.ndarray
    phase_table         : np.ndarray
    normalization       : np.ndarray
    representative_list : np.ndarray

    @property
    def n_representatives(self) -> int:
        return len(self.representative_list)

    @property
    def nh_full(self) -> int:
        return len(self.repr_map)

    def __len__(self) -> int:
        return len(self.representative_list)

    def __contains__(self, state: int) -> bool:
        return self.is_in_sector(state)

    def __iter__(self):
        return iter(self.representative_list)

    def get_phase(self, state: int) -> complex:
        pidx = self.phase_idx[state]
        if pidx == _INVALID_PHASE_IDX:
            return 0.0
        return complex(self.phase_table[pidx])

    def get_repr_idx(self, state: int) -> int:
        """Representative index for a state (-1 if not in sector)."""
        idx = self.repr_map[state]
        if idx == _INVALID_REPR_IDX:
            return -1
        return int(idx)

    def is_in_sector(self, state: int) -> bool:
        return self.repr_map[state] != _INVALID_REPR_IDX

#############################################################################
#! Symmetry Container
#############################################################################

@dataclass
class SymmetryContainer:
    """
    Container for all symmetry operations in a Hilbert space.

    - Building symmetry groups from generators      - 'build_group()'
    - Finding representative states                 - 'find_representative()'
    - Computing normalization factors               - 'compute_normalization()'
    - O(1) lookup tables over the full space        - 'build_compact_map()'

    Examples
    --------
    >>> container = SymmetryContainer(ns=4, lattice=lattice)
    >>> container.add_generator(TranslationSymmetry(lattice, sector=0))
    >>> container.build_group()
    >>> rep, phase = container.find_representative(5)

    Parameters
    ----------
    ns : int
        Number of sites in the system
    lattice : Optional[Lattice]
        Shared lattice (needed for spatial symmetries)
    nhl : int
        Local Hilbert space dimension (2 for occupations)
    logger : Optional[Logger]
        Injected logger, the global one is used if None
    """

    ns                  : int
    lattice             : Optional['Lattice']                       = None
    nhl                 : int                                       = 2

    generators          : List[Tuple[SymmetryOperator, SymmetrySpecTuple]] = field(default_factory=list)
    global_symmetries   : List[GlobalSymmetry]                      = field(default_factory=list)
    symmetry_group      : List[GroupElement]                        = field(default_factory=list)
    _characters         : List[complex]                             = field(default_factory=list)
    _compact_data       : Optional[CompactSymmetryData]             = None
    logger              : Optional['Logger']                        = None

    # -----------------------------------------------------
    #! Initialization
    # -----------------------------------------------------

    def __post_init__(self):
        if self.ns <= 0:
            raise ValueError(f"Number of sites must be positive, got {self.ns}.")
        if self.nhl != 2:
            raise ValueError(f"Only two local states per site are supported, got nhl={self.nhl}.")
        if self.logger is None:
            from QSR.qsr_globals import get_logger
            self.logger = get_logger()

    @property
    def compact_data(self) -> Optional[CompactSymmetryData]:
        return self._compact_data

    @property
    def has_compact_data(self) -> bool:
        return self._compact_data is not None

    @property
    def group_order(self) -> int:
        return len(self.symmetry_group)

    @property
    def has_local_symmetries(self) -> bool:
        return len(self.generators) > 0

    # -----------------------------------------------------
    #! Generator Management
    # -----------------------------------------------------

    def _check_pair(self, op: SymmetryOperator, other: SymmetryOperator) -> Tuple[bool, str]:
        if op.commutes_with(other) and other.commutes_with(op):
            return True, "Compatible"
        return False, f"{op} does not commute with {other} in the requested sectors"

    def add_generator(self, operator: SymmetryOperator) -> bool:
        """
        Add a symmetry generator to the container.

        Returns False (with a warning) when the generator is incompatible with
        the boundary conditions, an existing generator or a global symmetry.
        """
        gen_type            = operator.generator
        spec                = (gen_type, operator.sector)

        bc_valid, bc_reason = operator.check_boundary_conditions(self.lattice)
        if not bc_valid:
            self.logger.warning(f"Cannot add {gen_type.name}: {bc_reason}")
            return False

        for existing_op, _ in self.generators:
            if existing_op.generator == gen_type:
                self.logger.warning(f"Cannot add {gen_type.name}: generator already present")
                return False
            compat, reason  = self._check_pair(operator, existing_op)
            if not compat:
                self.logger.warning(f"Cannot add {gen_type.name}: {reason}")
                return False

        for gsym in self.global_symmetries:
            compat, reason  = operator.is_compatible_with_global_symmetry(gsym, ns=self.ns)
            if not compat:
                self.logger.warning(f"Cannot add {gen_type.name}: {reason}")
                return False

        self.generators.append((operator, spec))
        self.symmetry_group = []
        self._compact_data  = None
        self.logger.info(f"Added symmetry generator: {gen_type.name} = {operator.sector}", lvl=1)
        return True

    def add_global_symmetry(self, global_sym: GlobalSymmetry) -> None:
        """Add a global symmetry (filtering constraint)."""
        if global_sym.ns != self.ns:
            raise ValueError(f"Global symmetry defined on {global_sym.ns} sites, container has {self.ns}.")
        self.global_symmetries.append(global_sym)
        self._compact_data  = None
        self.logger.info(f"Added global symmetry: {global_sym.name} = {global_sym.val}", lvl=1)

    # -----------------------------------------------------
    #! Group construction
    # -----------------------------------------------------

    def build_group(self) -> None:
        r"""
        Build the full symmetry group from generators.

        Algorithm
        ---------
        1. Separate translations from other generators
        2. Non-translation generators are involutions: take all their combinations
        3. Translations form a product of cyclic groups
        4. full_group = translation_group x non_translation_combos
        """
        if not self.generators:
            self.symmetry_group = [()]
            self._characters    = [1.0]
            return

        translations: Dict[str, SymmetryOperator]   = {}
        other_generators: List[SymmetryOperator]    = []
        for op, (gen_type, _) in self.generators:
            if gen_type.is_translation():
                translations[op.direction.value] = op
            else:
                other_generators.append(op)

        base_elements: List[GroupElement] = [()]
        n_other = len(other_generators)
        for r in range(1, n_other + 1):
            for combo in combinations(range(n_other), r):
                base_elements.append(tuple(other_generators[i] for i in combo))

        translation_elements = self._build_translation_group(translations)

        self.symmetry_group = [t_elem + b_elem for t_elem in translation_elements for b_elem in base_elements]
        self._characters    = [self.get_character(g) for g in self.symmetry_group]
        self._compact_data  = None
        self.logger.info(f"Built symmetry group with {len(self.symmetry_group)} elements "
                        f"({len(translation_elements)} translation x {len(base_elements)} base)", lvl=1)

    def _build_translation_group(self, translations: Dict[str, SymmetryOperator]) -> List[GroupElement]:
        ''' {Tx^i Ty^j Tz^l} with powers over the lattice extents '''
        if not translations:
            return [()]
        directions  = sorted(translations.keys())
        ranges      = [range(translations[d].extent) for d in directions]
        group       = []
        for powers in product(*ranges):
            ops = ()
            for d, power in zip(directions, powers):
                ops += (translations[d],) * power
            group.append(ops)
        return group

    # -----------------------------------------------------
    #! Core Functionality
    # -----------------------------------------------------

    def apply_group_element(self, element: GroupElement, state: StateInt) -> Tuple[StateInt, Union[complex, float]]:
        """Apply the operators of ``element`` in sequence, accumulating their phases."""
        current_state       = int(state)
        accumulated_phase   = 1.0
        for op in element:
            current_state, phase = op.apply_int(current_state, self.ns)
            accumulated_phase   *= phase
        return current_state, accumulated_phase

    def get_character(self, element: GroupElement) -> complex:
        r"""
        Character of a group element in the current sectors.

        For translation T^n in sector k: chi_k(T^n) = exp(2 pi i k n / L).
        For other symmetries: chi(g^n) = sector^n.
        """
        if len(element) == 0:
            return 1.0
        character = 1.0
        for op, count in Counter(element).items():
            character *= op.get_character(count)
        return character

    def _find_representative(self, state: StateInt) -> Tuple[StateInt, complex, int]:
        """
        Minimal state in the orbit of ``state``, the element reaching it and
        its accumulated phase. The first element reaching the minimum wins.
        """
        min_state   = _INT_HUGE
        min_phase   = 1.0
        idx         = -1
        for i, element in enumerate(self.symmetry_group):
            new_state, phase = self.apply_group_element(element, state)
            if new_state < min_state:
                min_state   = new_state
                min_phase   = phase
                idx         = i
        return min_state, min_phase, idx

    def find_representative(self, state: StateInt) -> Tuple[StateInt, complex]:
        r"""
        Find the representative (minimal state) in the orbit of ``state``.

        Returns
        -------
        representative : int
        phase : complex
            ``chi(g) * conj(phase_g(state))`` for the element ``g`` with
            ``g state = representative``. The amplitude of ``|state>`` in the
            normalized symmetric vector ``|rep_k>`` is ``phase * N_rep / sqrt|G|``.
        """
        if not self.symmetry_group or self.symmetry_group == [()]:
            return int(state), 1.0
        rep, phase, idx = self._find_representative(state)
        return rep, self._characters[idx] * np.conj(phase)

    def compute_normalization(self, state: StateInt) -> float:
        r"""
        Normalization of a representative in the current sector,

            N = sqrt| sum_{g : g s = s} conj(chi(g)) phase_g(s) |.

        Returns 0.0 when the orbit does not belong to the sector.
        """
        if len(self.symmetry_group) <= 1:
            return 1.0
        projection_sum = 0.0
        for element, character in zip(self.symmetry_group, self._characters):
            new_state, intrinsic_phase = self.apply_group_element(element, state)
            if new_state == state:
                projection_sum += np.conj(character) * intrinsic_phase
        norm = np.sqrt(abs(projection_sum))
        if norm < _SYM_NORM_THRESHOLD:
            return 0.0
        return float(norm)

    def orbit_size(self, state: StateInt) -> int:
        return len({self.apply_group_element(g, state)[0] for g in self.symmetry_group})

    def check_global_symmetries(self, state: StateInt) -> bool:
        """Chain all global symmetry checks on ``state``."""
        return check_all(self.global_symmetries, int(state))

    def is_representative(self, state: StateInt) -> Tuple[bool, float]:
        """
        Whether ``state`` passes the global symmetries, is its own orbit minimum
        and has a non-zero normalization. Returns the normalization as well.
        """
        if not self.check_global_symmetries(state):
            return False, 0.0
        if len(self.symmetry_group) > 1:
            for element in self.symmetry_group:
                if self.apply_group_element(element, state)[0] < state:
                    return False, 0.0
        norm = self.compute_normalization(state)
        return norm > _SYM_NORM_THRESHOLD, norm

    # -----------------------------------------------------
    #! Full Mapping Management
    # -----------------------------------------------------

    def build_compact_map(self,
                        nh_full             : int,
                        representative_list : np.ndarray,
                        representative_norms: np.ndarray) -> CompactSymmetryData:
        """
        Build O(1) lookup arrays over the full space for an enumerated basis.

        Every state whose representative is in ``representative_list`` gets the
        index of that representative and the index of its phase.
        """
        t0                  = time.perf_counter()
        repr_map            = np.full(nh_full, _INVALID_REPR_IDX,   dtype=_REPR_MAP_DTYPE)
        phase_idx           = np.full(nh_full, _INVALID_PHASE_IDX,  dtype=_PHASE_IDX_DTYPE)
        representative_list = np.asarray(representative_list, dtype=np.int64)
        unique_phases: List[complex] = []

        if len(representative_list) > 0:
            for state in range(nh_full):
                if not self.check_global_symmetries(state):
                    continue
                rep, phase  = self.find_representative(state)
                idx         = _binary_search_representative_list(representative_list, np.int64(rep))
                if idx < 0:
                    continue
                pidx        = None
                for j, existing in enumerate(unique_phases):
                    if abs(existing - phase) < _SYM_NORM_THRESHOLD:
                        pidx = j
                        break
                if pidx is None:
                    if len(unique_phases) >= _INVALID_PHASE_IDX:
                        raise MemoryError(f"Exceeded maximum number of distinct phases ({_INVALID_PHASE_IDX}).")
                    pidx = len(unique_phases)
                    unique_phases.append(complex(phase))
                repr_map[state]     = idx
                phase_idx[state]    = pidx

        self._compact_data = CompactSymmetryData(
            repr_map            = repr_map,
            phase_idx           = phase_idx,
            phase_table         = np.array(unique_phases, dtype=np.complex128),
            normalization       = np.asarray(representative_norms, dtype=np.float64),
            representative_list = representative_list,
        )
        self.logger.info(f"Built compact symmetry map: {nh_full} states, {len(representative_list)} representatives, "
                        f"{len(unique_phases)} distinct phases, in {time.perf_counter() - t0:.3e}s", lvl=2)
        return self._compact_data

    def __repr__(self) -> str:
        gens = ",".join(str(op) for op, _ in self.generators)
        glob = ",".join(repr(g) for g in self.global_symmetries)
        return f"SymmetryContainer(ns={self.ns},generators=[{gens}],global=[{glob}],|G|={len(self.symmetry_group)})"

####################################################################################################
#! Utility Functions
####################################################################################################

def _create_symmetry_operator(
    gen_type        : SymmetryGenerators,
    sector          : Union[int, float, complex],
    lattice         : Optional['Lattice'],
    ns              : int) -> SymmetryOperator:
    """Create the operator instance for a generator tag."""
    if gen_type.is_translation():
        from QSR.Algebra.Symmetries.translation import TranslationSymmetry
        if lattice is None:
            raise ValueError(f"{gen_type.name} requires a lattice.")
        direction = gen_type.name.split('_')[-1]
        return TranslationSymmetry(lattice=lattice, sector=sector, ns=ns, direction=direction)
    if gen_type == SymmetryGenerators.Reflection:
        from QSR.Algebra.Symmetries.reflection import ReflectionSymmetry
        return ReflectionSymmetry(sector=sector, ns=ns, lattice=lattice)
    if gen_type in (SymmetryGenerators.ParityX, SymmetryGenerators.ParityY, SymmetryGenerators.ParityZ):
        from QSR.Algebra.Symmetries.parity import ParitySymmetry
        return ParitySymmetry(axis=gen_type.name[-1].lower(), sector=sector, ns=ns, lattice=lattice)
    raise ValueError(f"Symmetry generator {gen_type.name} cannot be created from a sector alone.")

def create_symmetry_container_from_specs(
    ns                  : int,
    generator_specs     : List[SymmetrySpecTuple],
    global_syms         : List[GlobalSymmetry],
    lattice             : Optional['Lattice']   = None,
    nhl                 : int                   = 2,
    build_group         : bool                  = True,
    logger              : Optional['Logger']    = None) -> SymmetryContainer:
    """
    Factory function to create and initialize a SymmetryContainer.

    Global symmetries are added first, so that generators incompatible with
    them are rejected. Invalid sectors raise ValueError.
    """
    container = SymmetryContainer(ns=ns, lattice=lattice, nhl=nhl, logger=logger)
    for gsym in global_syms:
        container.add_global_symmetry(gsym)
    for gen_type, sector in generator_specs:
        gen_type = SymmetryGenerators.from_name(gen_type)
        if gen_type == SymmetryGenerators.E:
            continue
        container.add_generator(_create_symmetry_operator(gen_type, sector, lattice, ns))
    if build_group:
        container.build_group()
    return container

__all__ = [
    "CompactSymmetryData",
    "SymmetryContainer",
    "create_symmetry_container_from_specs",
]

####################################################################################################
#! End of file
####################################################################################################
