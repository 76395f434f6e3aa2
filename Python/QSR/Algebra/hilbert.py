"""
High-level Hilbert space class for symmetry-reduced many-body bases.

The Hilbert space enumerates the representatives of one symmetry sector:
global symmetries (U(1) particle number) filter states, local symmetries
(translation, reflection, parity) group them into orbits represented by
their smallest integer. The reduced basis is the sorted list of those
representatives together with their normalization factors.

---------------------------------------------------
File    : QSR/Algebra/hilbert.py
Author  : Maksymilian Kliczkowski
Email   : maksymilian.kliczkowski@pwr.edu.pl
Date    : 2025-02-01
Version : 1.1.0
Changes :
    - 2025.02.01 : 1.0.0 - Initial version of the Hilbert space class. - MK
    - 2025.10.26 : 1.1.0 - Symmetry container, particle-number prefilter, threaded enumeration. - MK
---------------------------------------------------
"""

import math
import time
import threading
import numpy as np

from itertools          import product
from concurrent.futures import ThreadPoolExecutor
from typing             import Union, Optional, List, Tuple, Dict, Any, Iterator, TYPE_CHECKING

from QSR.Algebra.globals                        import GlobalSymmetry, GlobalSymmetries, parse_global_syms
from QSR.Algebra.hilbert_config                 import HilbertConfig
from QSR.Algebra.Symmetries.base                import SymmetryGenerators
from QSR.Algebra.Symmetries.symmetry_container  import (
    SymmetryContainer, create_symmetry_container_from_specs, _binary_search_representative_list
)
from QSR.common.binary                          import fixed_weight_states
from QSR.common.flog                            import Logger

if TYPE_CHECKING:
    from QSR.lattices.lattice import Lattice

#####################################################################################################
#! Hilbert space class
#####################################################################################################

class HilbertSpace:
    """
    Symmetry-reduced many-body Hilbert space of ``ns`` two-level sites.

    Basis states are integers with site ``i`` stored in bit ``ns - 1 - i``, so
    site 0 is the most significant bit and ``0b1000`` on four sites occupies site 0.

    Parameters
    ----------
    ns : int, optional
        Number of sites. Inferred from ``lattice`` when omitted.
    lattice : Lattice, optional
        Shared lattice, needed for translations.
    sym_gen : list or dict, optional
        Local generators as ``[(SymmetryGenerators, sector), ...]`` or ``{name: sector}``.
    global_syms : list, optional
        Global symmetries, e.g. ``[get_u1_sym(ns=4, val=2)]``.
    nhl : int
        Local dimension (2).
    gen_mapping : bool
        Also build the O(1) full-space lookup tables.
    threadnum : int
        Number of threads for the enumeration pass.
    dtype :
        Data type of the normalization array.
    logger : Logger, optional
        Injected logger, the global one is used if None.
    """

    # --------------------------------------------------------------------------------------------------

    _ERRORS = {
        "sym_gen"       : "The symmetry generators must be provided as a dictionary or list.",
        "global_syms"   : "The global symmetries must be provided as a list.",
        "gen_mapping"   : "The flag for generating the mapping must be a boolean.",
        "ns"            : "Either 'ns' or 'lattice' must be provided.",
        "ns_positive"   : "The number of sites must be a positive integer.",
        "ns_lattice"    : "The number of sites differs from the lattice size.",
        "nhl"           : "Only two local states per site are supported (nhl=2).",
        "threadnum"     : "The number of threads must be a positive integer.",
        "vec_size"      : "The reduced vector does not match the Hilbert space dimension.",
    }

    @staticmethod
    def _raise(s: str): raise ValueError(s)

    # --------------------------------------------------------------------------------------------------
    #! Internal checks and inferences
    # --------------------------------------------------------------------------------------------------

    def _check_init_sym_errors(self, sym_gen, global_syms, gen_mapping, threadnum):
        ''' Check for initialization symmetry errors '''
        if sym_gen is not None and not isinstance(sym_gen, (dict, list, tuple)):
            HilbertSpace._raise(HilbertSpace._ERRORS["sym_gen"])
        if global_syms is not None and not isinstance(global_syms, (list, tuple, dict)):
            HilbertSpace._raise(HilbertSpace._ERRORS["global_syms"])
        if not isinstance(gen_mapping, bool):
            HilbertSpace._raise(HilbertSpace._ERRORS["gen_mapping"])
        if not isinstance(threadnum, (int, np.integer)) or threadnum < 1:
            HilbertSpace._raise(HilbertSpace._ERRORS["threadnum"])

    def _check_ns_infer(self, lattice: Optional['Lattice'], ns: Optional[int]):
        ''' Check and infer the system size Ns from provided parameters '''
        if ns is not None:
            if isinstance(ns, bool) or not isinstance(ns, (int, np.integer)) or ns <= 0:
                HilbertSpace._raise(HilbertSpace._ERRORS["ns_positive"])
            if lattice is not None and lattice.ns != ns:
                HilbertSpace._raise(f"{HilbertSpace._ERRORS['ns_lattice']} ({ns} != {lattice.ns})")
            self._ns = int(ns)
        elif lattice is not None:
            self._ns = int(lattice.ns)
        else:
            HilbertSpace._raise(HilbertSpace._ERRORS["ns"])
        self._lattice   = lattice
        self._nhfull    = 2 ** self._ns

    def _check_logger(self, logger: Optional[Logger]) -> Logger:
        ''' Check and return the logger instance '''
        if logger is None:
            from QSR.qsr_globals import get_logger
            return get_logger()
        return logger

    # --------------------------------------------------------------------------------------------------

    def __init__(self,
                ns              : Optional[int]                         = None,
                lattice         : Optional['Lattice']                   = None,
                sym_gen         : Optional[Union[Dict, List]]           = None,
                global_syms     : Optional[List[GlobalSymmetry]]        = None,
                nhl             : int                                   = 2,
                gen_mapping     : bool                                  = False,
                threadnum       : int                                   = 1,
                dtype                                                   = np.float64,
                logger          : Optional[Logger]                      = None,
                **kwargs):
        self._logger        = self._check_logger(logger)
        self._check_init_sym_errors(sym_gen, global_syms, gen_mapping, threadnum)
        if nhl != 2:
            HilbertSpace._raise(HilbertSpace._ERRORS["nhl"])
        self._check_ns_infer(lattice, ns)

        self._nhl           = nhl
        self._dtype         = dtype
        self._threadnum     = int(threadnum)
        self._gen_mapping   = gen_mapping
        self._global_syms   = parse_global_syms(global_syms, self._ns, lattice)
        self._sym_gen       = self._normalize_generators(sym_gen)

        # enumeration results
        self.representative_list    : Optional[np.ndarray] = None
        self.representative_norms   : Optional[np.ndarray] = None
        self._nh                    = self._nhfull
        self._commit_lock           = threading.Lock()
        self._committed             : Dict[int, float] = {}

        self._sym_container: Optional[SymmetryContainer] = None
        self._init_representatives(self._sym_gen, gen_mapping)

    @classmethod
    def from_config(cls, config: HilbertConfig, **overrides):
        """
        Instantiate a HilbertSpace from a :class:`HilbertConfig`.

        Parameters
        ----------
        config:
            Base configuration blueprint.
        **overrides:
            Keyword arguments applied on top of the blueprint before instantiation.
        """
        cfg = config.with_override(**overrides) if overrides else config
        return cls(**cfg.to_kwargs())

    @staticmethod
    def _normalize_generators(sym_gen) -> List[Tuple[SymmetryGenerators, Any]]:
        if sym_gen is None:
            return []
        items = sym_gen.items() if isinstance(sym_gen, dict) else sym_gen
        out = []
        for gen, sector in items:
            gen = SymmetryGenerators.from_name(gen)
            if gen != SymmetryGenerators.E:
                out.append((gen, sector))
        return out

    # --------------------------------------------------------------------------------------------------

    def _log(self, msg : str, log : Union[int, str] = 'info', lvl : int = 0, color : str = "white", append_msg = True):
        """
        Log the message.

        Args:
            msg (str) : The message to log.
            log (Union[int, str]) : The flag to log the message (default is 'info').
            lvl (int) : The level of the message.
        """
        if self._logger is None:
            return
        if isinstance(log, str):
            log = Logger.LEVELS_R[log]
        if append_msg:
            msg = f"[HilbertSpace] {msg}"
        msg = self._logger.colorize(msg, color)
        self._logger.say(msg, log=log, lvl=lvl)

    ####################################################################################################
    #! Unified symmetry container initialization
    ####################################################################################################

    def _init_sym_container(self, gen: list):
        self._sym_container = create_symmetry_container_from_specs(
            ns              = self._ns,
            generator_specs = gen,
            global_syms     = self._global_syms,
            lattice         = self._lattice,
            nhl             = self._nhl,
            build_group     = True,
            logger          = self._logger,
        )

    def _init_representatives(self, gen : list, gen_mapping : bool = False):
        """
        Initialize the representatives list and norms.

        1. For every candidate state check the global symmetries (e.g. U(1))
        2. Keep it if it is the minimum of its orbit under the local group
        3. Store its normalization, dropping orbits absent from the sector
        4. Optionally build the compact full-space lookup tables
        """
        if not gen and not self._global_syms:
            self._log("No symmetries provided, the basis is the full space.", log='debug', lvl=1)
            self._nh = self._nhfull
            return

        t0 = time.perf_counter()
        self._init_sym_container(gen)
        self._generate_repr_int()
        self._log(f"Generated {self._nh} representatives out of {self._nhfull} states in {time.perf_counter() - t0:.2e}s.",
                lvl=1, color='green')

        if gen_mapping:
            self._sym_container.build_compact_map(self._nhfull, self.representative_list, self.representative_norms)

    # --------------------------------------------------------------------------------------------------

    def _candidates(self) -> Union[np.ndarray, range]:
        """
        States to examine. A U(1) symmetry restricts them to the C(Ns, N)
        states of fixed weight; a U(1) value outside [0, Ns] leaves none.
        """
        for g in self._global_syms:
            if g.kind == GlobalSymmetries.U1:
                if g.is_empty_sector():
                    self._log(f"U(1) sector N={g.val} lies outside [0, {self._ns}], the basis is empty.", lvl=1, color='yellow')
                    return np.zeros(0, dtype=np.int64)
                return fixed_weight_states(self._ns, int(g.val))
        return range(self._nhfull)

    def _commit(self, state: int, norm: float) -> bool:
        ''' Store a representative once, the first committer wins '''
        with self._commit_lock:
            if state in self._committed:
                return False
            self._committed[state] = norm
            return True

    def _repr_kernel_int(self, candidates, start: int, stop: int, t: int) -> int:
        """
        For candidates ``[start, stop)`` find those that are representatives of
        the sector and commit them with their normalization.

        Returns the number of representatives this worker committed.
        """
        container   = self._sym_container
        committed   = 0
        for j in range(start, stop):
            state           = int(candidates[j])
            is_repr, norm   = container.is_representative(state)
            if is_repr and self._commit(state, norm):
                committed  += 1
        return committed

    def _generate_repr_int(self):
        """
        Generate the representatives, splitting the candidates over
        ``threadnum`` workers. The merged table is sorted by state.
        """
        candidates  = self._candidates()
        n_cand      = len(candidates)
        self._committed.clear()

        if self._threadnum > 1 and n_cand > 1:
            with ThreadPoolExecutor(max_workers=self._threadnum) as executor:
                futures = []
                for t in range(self._threadnum):
                    start   = int(n_cand * t / self._threadnum)
                    stop    = n_cand if (t + 1) == self._threadnum else int(n_cand * (t + 1) / self._threadnum)
                    futures.append(executor.submit(self._repr_kernel_int, candidates, start, stop, t))
                counts = [f.result() for f in futures]
            self._log(f"Threaded enumeration: {counts} representatives per worker.", log='debug', lvl=2)
        else:
            self._repr_kernel_int(candidates, 0, n_cand, 0)

        combined                    = sorted(self._committed.items())
        self.representative_list    = np.array([s for s, _ in combined], dtype=np.int64)
        self.representative_norms   = np.array([n for _, n in combined], dtype=self._dtype)
        self._committed.clear()
        self._nh                    = len(self.representative_list)

    ####################################################################################################
    #! Sector iteration
    ####################################################################################################

    @staticmethod
    def iter_momentum_sectors(lattice: 'Lattice', **hilbert_kwargs) -> Iterator[Tuple[Tuple[int, ...], 'HilbertSpace']]:
        """
        Generator that yields HilbertSpaces for all momentum sectors of a lattice.

        Yields
        ------
        (k_vector, hilbert) where k_vector is (kx,) or (kx, ky) or (kx, ky, kz).

        Examples
        --------
        >>> lattice = ChainLattice(lx=6)
        >>> for k, hilbert in HilbertSpace.iter_momentum_sectors(lattice, global_syms=[get_u1_sym(lattice, 3)]):
        ...     print(k, hilbert.dim)
        """
        gens    = [(SymmetryGenerators.Translation_x, lattice.lx)]
        if lattice.dim > 1 and lattice.ly > 1:
            gens.append((SymmetryGenerators.Translation_y, lattice.ly))
        if lattice.dim > 2 and lattice.lz > 1:
            gens.append((SymmetryGenerators.Translation_z, lattice.lz))
        extra   = list(hilbert_kwargs.pop("sym_gen", []) or [])
        for ks in product(*[range(L) for _, L in gens]):
            sym_gen = [(g, k) for (g, _), k in zip(gens, ks)] + extra
            yield tuple(ks), HilbertSpace(lattice=lattice, sym_gen=sym_gen, **hilbert_kwargs)

    ####################################################################################################
    #! Properties
    ####################################################################################################

    @property
    def ns(self) -> int:                                return self._ns
    @property
    def Ns(self) -> int:                                return self._ns
    @property
    def nh(self) -> int:                                return self._nh
    @property
    def Nh(self) -> int:                                return self._nh
    @property
    def dim(self) -> int:                               return self._nh
    @property
    def nhfull(self) -> int:                            return self._nhfull
    @property
    def lattice(self) -> Optional['Lattice']:           return self._lattice
    @property
    def logger(self) -> Logger:                         return self._logger
    @property
    def global_syms(self) -> List[GlobalSymmetry]:      return self._global_syms
    @property
    def sym_container(self) -> Optional[SymmetryContainer]: return self._sym_container
    @property
    def repr_list(self) -> Optional[np.ndarray]:        return self.representative_list
    @property
    def repr_norms(self) -> Optional[np.ndarray]:       return self.representative_norms

    @property
    def modifies(self) -> bool:
        """True if symmetries reduce the full space."""
        return self.representative_list is not None

    @property
    def group_order(self) -> int:
        return self._sym_container.group_order if self._sym_container is not None else 1

    @property
    def is_empty(self) -> bool:
        return self._nh == 0

    # --------------------------------------------------------------------------------------------------

    def get_sym_info(self) -> str:
        """
        Information string about the symmetries, e.g. ``Translation_x=0,U1=2``.
        """
        tmp = []
        if self._sym_container is not None:
            for _, (gen_type, sector) in self._sym_container.generators:
                tmp.append(f"{gen_type.name}={sector}")
        for g in self._global_syms:
            tmp.append(f"{g.name}={g.val}")
        return ",".join(tmp)

    def completeness(self) -> float:
        """
        Number of full-space states accounted for by the basis, sum_r |G| / N_r^2.

        In the trivial sector of a group without phases this equals the number of
        states passing the global symmetries.
        """
        if not self.modifies:
            return float(self._nhfull)
        if self._nh == 0:
            return 0.0
        norms = np.abs(np.asarray(self.representative_norms, dtype=np.float64))
        return float(np.sum(self.group_order / norms ** 2))

    ####################################################################################################
    #! Find the representative of a state
    ####################################################################################################

    def find_repr(self, state: int) -> Tuple[int, Union[float, complex]]:
        """
        Index of the representative of ``state`` in the reduced basis and the phase
        relating the two.

        Returns ``(nh, 0.0)`` when the state does not belong to the sector.
        """
        state = int(state)
        if not self.modifies:
            return state, 1.0
        cd = self._sym_container.compact_data
        if cd is not None:
            idx = cd.get_repr_idx(state)
            return (idx, cd.get_phase(state)) if idx >= 0 else (self._nh, 0.0)
        if not self._sym_container.check_global_symmetries(state):
            return self._nh, 0.0
        rep, phase  = self._sym_container.find_representative(state)
        idx         = int(_binary_search_representative_list(self.representative_list, np.int64(rep)))
        if idx < 0:
            return self._nh, 0.0
        return idx, phase

    def find_norm(self, idx: int) -> float:
        """Normalization of the ``idx``-th representative."""
        if not self.modifies:
            return 1.0
        return self.representative_norms[idx]

    def expand_from_reduced_space(self, vec_reduced: np.ndarray) -> np.ndarray:
        """
        Expand a vector from the reduced symmetry sector back to the full Hilbert space,

            psi(g r) += c_r conj(chi(g)) phase_g(r) / (N_r sqrt|G|).
        """
        vec_reduced = np.asarray(vec_reduced)
        if vec_reduced.shape[0] != self._nh:
            HilbertSpace._raise(f"{HilbertSpace._ERRORS['vec_size']} ({vec_reduced.shape[0]} != {self._nh})")
        if not self.modifies:
            return vec_reduced.copy()

        container   = self._sym_container
        group       = container.symmetry_group
        chars       = [container.get_character(g) for g in group]
        vec_full    = np.zeros(self._nhfull, dtype=np.complex128)
        sqrt_g      = math.sqrt(len(group))
        # intrinsic phases (ParityY) can be complex even when every character is real
        is_complex  = np.iscomplexobj(vec_reduced)

        for i, rep in enumerate(self.representative_list):
            coeff = vec_reduced[i] / (self.representative_norms[i] * sqrt_g)
            for element, char in zip(group, chars):
                new_state, phase    = container.apply_group_element(element, int(rep))
                factor              = np.conj(char) * phase
                is_complex          = is_complex or abs(np.imag(factor)) > 0
                vec_full[new_state] += coeff * factor
        return vec_full if is_complex else vec_full.real.copy()

    ####################################################################################################
    #! Operators for the Hilbert space
    ####################################################################################################

    def __len__(self):                  return self._nh

    def __getitem__(self, i):
        """The i-th basis state of the Hilbert space."""
        if i < 0 or i >= self._nh:
            raise IndexError(f"Index {i} out of range for Hilbert space of dimension {self._nh}.")
        return int(self.representative_list[i]) if self.modifies else int(i)

    def __contains__(self, state):
        """True if ``state`` is one of the basis states (representatives)."""
        state = int(state)
        if not self.modifies:
            return 0 <= state < self._nhfull
        return int(_binary_search_representative_list(self.representative_list, np.int64(state))) >= 0

    def __iter__(self):
        if self.modifies:
            for state in self.representative_list:
                yield int(state)
        else:
            yield from range(self._nh)

    def __str__(self):
        info = f"Hilbert space: Ns={self._ns}, Nh={self._nh}"
        sym  = self.get_sym_info()
        return f"{info}, Symmetries=[{sym}]" if sym else info

    def __repr__(self):
        return f"HilbertSpace(ns={self._ns},nh={self._nh},sym=[{self.get_sym_info()}])"

# --------------------------------------------------------------------------------------------------

__all__ = ["HilbertSpace"]

#####################################################################################################
#! End of file
#####################################################################################################
