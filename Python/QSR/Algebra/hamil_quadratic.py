'''
Implementation of quadratic (single-particle) Hamiltonians.

A quadratic Hamiltonian of hard-core particles,

    H = sum_{i,j} h_{ij} c_i^dag c_j,

is represented by the Hermitian Nh x Nh matrix h, Nh being the number of
single-particle modes. Models fill h in ``_hamiltonian_quadratic`` and the
base class takes care of the life cycle

    UNINITIALIZED -> INITIALIZED (init) -> BUILT (hamiltonian) -> DIAGONALIZED (diagonalize),

the cached eigen-decomposition and quantities derived from it.

----------------------------------------------------------------------------
file    : QSR/Algebra/hamil_quadratic.py
author  : Maksymilian Kliczkowski
email   : maksymilian.kliczkowski@pwr.edu.pl
date    : 2025-11-01
----------------------------------------------------------------------------
'''

import time
import numpy as np
import scipy as sp
import scipy.linalg

from typing import Any, Dict, List, Tuple, Union, Optional, Sequence, TYPE_CHECKING
from enum import Enum, unique

from QSR.Algebra.hilbert                    import HilbertSpace
from QSR.Algebra.hamil_config               import HamiltonianConfig, register_hamiltonian, class_builder
from QSR.Algebra.Properties                 import entanglement as ent
from QSR.common.flog                        import Logger
from QSR.common.binary                      import fixed_weight_states
from QSR.common.ran_wrapper                 import handle_rng

if TYPE_CHECKING:
    from QSR.lattices.lattice import Lattice

##############################################################################

_HERMITICITY_TOL = 1e-10

@unique
class HamiltonianState(Enum):
    '''
    Life cycle of a quadratic Hamiltonian
    '''
    UNINITIALIZED   = 0
    INITIALIZED     = 1
    BUILT           = 2
    DIAGONALIZED    = 3

@unique
class QuadraticTerm(Enum):
    '''
    Types of terms to be added to the quadratic Hamiltonian
    '''
    Onsite  =   0
    Hopping =   1

    @property
    def mode_num(self):
        return 1 if self == QuadraticTerm.Onsite else 2

##############################################################################

class QuadraticHamiltonian:
    r"""
    Quadratic Hamiltonian of hard-core particles, :math:`H = \sum_{ij} h_{ij} c_i^\dagger c_j`.

    The single-particle matrix is dense, of size :math:`N_h \times N_h` with
    :math:`N_h` taken from ``ns``, the lattice or the Hilbert space (in that order).
    Subclasses implement ``_hamiltonian_quadratic`` to fill ``self._hamil``;
    terms added through :meth:`add_term` are stored separately and added on
    top of the model fill.

    Example
    -------
    >>> ham = QuadraticHamiltonian(ns=4)
    >>> ham.init()
    >>> ham.add_hopping(0, 1, -1.0)
    >>> ham.hamiltonian()
    >>> ham.diagonalize()
    >>> ham.eig_val
    """

    _ERRORS = {
        "ns"            : "Either 'ns', a lattice or a Hilbert space must be provided.",
        "ns_positive"   : "The number of single-particle modes must be a positive integer.",
        "ns_mismatch"   : "The number of modes differs between the arguments.",
        "not_init"      : "The Hamiltonian is not initialized. Call init() first.",
        "not_built"     : "The Hamiltonian matrix is not built. Call hamiltonian() or build() first.",
        "not_diag"      : "The Hamiltonian is not diagonalized. Call diagonalize() first.",
        "not_hermitian" : "The Hamiltonian matrix is not Hermitian.",
        "build"         : "Failed to build the Hamiltonian matrix",
        "diag"          : "Diagonalization failed",
    }

    # ------------------------------------------------------------------------

    def _handle_system(self, ns: Optional[int], lattice: Optional['Lattice'], hilbert_space: Optional[HilbertSpace]):
        ''' Infer the number of modes and check the arguments agree '''
        candidates = []
        if ns is not None:
            if isinstance(ns, bool) or not isinstance(ns, (int, np.integer)) or ns <= 0:
                raise ValueError(f"{QuadraticHamiltonian._ERRORS['ns_positive']} Got {ns!r}.")
            candidates.append(int(ns))
        if lattice is not None:
            candidates.append(int(lattice.ns))
        if hilbert_space is not None:
            candidates.append(int(hilbert_space.ns))
            if lattice is None:
                lattice = hilbert_space.lattice
        if not candidates:
            raise ValueError(QuadraticHamiltonian._ERRORS["ns"])
        if any(c != candidates[0] for c in candidates):
            raise ValueError(f"{QuadraticHamiltonian._ERRORS['ns_mismatch']} Got {candidates}.")
        if candidates[0] <= 0:
            raise ValueError(QuadraticHamiltonian._ERRORS["ns_positive"])
        self._ns            = candidates[0]
        self._lattice       = lattice
        self._hilbert_space = hilbert_space

    def __init__(self,
                ns                      : Optional[int]             = None,
                lattice                 : Optional['Lattice']       = None,
                hilbert_space           : Optional[HilbertSpace]    = None,
                dtype                                               = np.float64,
                constant_offset         : float                     = 0.0,
                particles               : str                       = 'fermions',
                logger                  : Optional[Logger]          = None,
                seed                    : Optional[int]             = None,
                **kwargs):
        """
        Initialize a Quadratic Hamiltonian.

        Args:
            ns (int):
                Number of single-particle modes/sites.
            lattice (Lattice):
                Shared lattice, used for the number of modes and boundary conditions.
            hilbert_space (HilbertSpace):
                Optional Hilbert space the model is classified with.
            dtype (data-type):
                Matrix data type.
            constant_offset (float):
                A constant energy offset added to the eigenvalues.
            particles (str):
                'fermions' or 'bosons', only used for labels.
            logger (Logger):
                Injected logger, the global one if None.
            seed (int):
                Seed for models with randomness. The same seed gives the same matrix.
        """
        if logger is None:
            from QSR.qsr_globals import get_logger
            logger = get_logger()
        self._logger            = logger
        self._handle_system(ns, lattice, hilbert_space)

        self._dtype             = np.dtype(dtype if dtype is not None else np.float64)
        self._iscpx             = np.issubdtype(self._dtype, np.complexfloating)
        self._constant_offset   = float(constant_offset)
        self._isfermions        = particles.lower() == 'fermions'
        self._seed              = seed
        self._name              = "Quadratic"

        self._state             = HamiltonianState.UNINITIALIZED
        self._hamil             : Optional[np.ndarray] = None
        self._hamil_terms       : Optional[np.ndarray] = None
        self._invalidate_cache()

    @classmethod
    def from_config(cls, config: HamiltonianConfig, **overrides):
        """
        Instantiate the Hamiltonian through the registry entry named by ``config.kind``.
        """
        from QSR.Algebra.hamil_config import HAMILTONIAN_REGISTRY
        return HAMILTONIAN_REGISTRY.create(config, **overrides)

    @classmethod
    def from_hermitian_matrix(cls, matrix: np.ndarray, constant: float = 0.0, **kwargs) -> 'QuadraticHamiltonian':
        """
        Create an initialized Hamiltonian whose terms are the given square matrix.
        Hermiticity is checked when the matrix is built.
        """
        matrix = np.asarray(matrix)
        if matrix.ndim != 2 or matrix.shape[0] != matrix.shape[1]:
            raise ValueError("The matrix must be square.")
        kwargs.setdefault("dtype", np.complex128 if np.iscomplexobj(matrix) else np.float64)
        instance = cls(ns=matrix.shape[0], constant_offset=constant, **kwargs)
        instance.init()
        instance._hamil_terms[...] = matrix
        return instance

    # ------------------------------------------------------------------------

    def _log(self, msg : str, log : str = 'info', lvl : int = 0, color : str = "white"):
        """
        Log the message.

        Args:
            msg (str) : The message to log.
            log (str) : The logging level. Default is 'info'.
            lvl (int) : The level of the message.
        """
        if self._logger is None:
            return
        msg = self._logger.colorize(f"[{self._name}] {msg}", color)
        self._logger.say(msg, log=Logger.LEVELS_R[log], lvl=lvl)

    def _new_rng(self) -> np.random.Generator:
        ''' Fresh generator for one matrix fill '''
        return handle_rng(self._seed)

    ##########################################################################
    #! Properties
    ##########################################################################

    @property
    def name(self) -> str:                      return self._name
    @property
    def ns(self) -> int:                        return self._ns
    @property
    def Ns(self) -> int:                        return self._ns
    @property
    def nh(self) -> int:                        return self._ns
    @property
    def Nh(self) -> int:                        return self._ns
    @property
    def lattice(self):                          return self._lattice
    @property
    def hilbert_space(self):                    return self._hilbert_space
    @property
    def dtype(self):                            return self._dtype
    @property
    def iscpx(self) -> bool:                    return self._iscpx
    @property
    def seed(self):                             return self._seed
    @property
    def state(self) -> HamiltonianState:        return self._state
    @property
    def constant_offset(self) -> float:         return self._constant_offset
    @property
    def is_diagonalized(self) -> bool:          return self._state == HamiltonianState.DIAGONALIZED

    @property
    def bc(self) -> str:
        ''' Boundary condition label, PBC when no lattice is attached '''
        if self._lattice is None:
            return "PBC"
        return self._lattice.bc.name

    @property
    def hamil(self) -> np.ndarray:
        ''' The single-particle matrix. '''
        if self._state == HamiltonianState.UNINITIALIZED:
            raise RuntimeError(QuadraticHamiltonian._ERRORS["not_init"])
        return self._hamil

    @property
    def eig_val(self) -> np.ndarray:
        ''' Eigenvalues in ascending order, offset included. '''
        if self._eig_val is None:
            raise RuntimeError(QuadraticHamiltonian._ERRORS["not_diag"])
        return self._eig_val

    @property
    def eig_vec(self) -> np.ndarray:
        ''' Eigenvectors as columns. '''
        if self._eig_vec is None:
            raise RuntimeError(QuadraticHamiltonian._ERRORS["not_diag"])
        return self._eig_vec

    @property
    def av_en(self) -> float:
        self._require_diagonalized()
        return self._av_en

    @property
    def std_en(self) -> float:
        self._require_diagonalized()
        return self._std_en

    @property
    def min_en(self) -> float:
        self._require_diagonalized()
        return self._min_en

    @property
    def max_en(self) -> float:
        self._require_diagonalized()
        return self._max_en

    def _require_diagonalized(self):
        if self._eig_val is None:
            raise RuntimeError(QuadraticHamiltonian._ERRORS["not_diag"])

    ##########################################################################
    #! Build the Hamiltonian
    ##########################################################################

    def _invalidate_cache(self):
        """Wipe eigenvalues, eigenvectors and the energy statistics."""
        self._eig_val   = None
        self._eig_vec   = None
        self._av_en     = None
        self._std_en    = None
        self._min_en    = None
        self._max_en    = None

    def init(self):
        '''
        Allocate the zeroed Nh x Nh matrix. Calling it again re-zeros the matrix,
        the added terms are kept until :meth:`reset_terms`.
        '''
        self._log(f"Initializing the Hamiltonian matrix ({self._ns}x{self._ns}, {self._dtype})...", lvl=2, log='debug')
        self._hamil = np.zeros((self._ns, self._ns), dtype=self._dtype)
        if self._hamil_terms is None:
            self._hamil_terms = np.zeros((self._ns, self._ns), dtype=self._dtype)
        self._invalidate_cache()
        self._state = HamiltonianState.INITIALIZED

    def _hamiltonian_quadratic(self):
        '''
        Fill ``self._hamil`` with the model matrix. The generic Hamiltonian has no model part.
        '''
        pass

    def _check_hermitian(self):
        h = self._hamil
        if h.shape != (self._ns, self._ns):
            raise ValueError(f"The Hamiltonian matrix has shape {h.shape}, expected {(self._ns, self._ns)}.")
        if not np.all(np.isfinite(h)) or not np.allclose(h, h.conj().T, rtol=0.0, atol=_HERMITICITY_TOL):
            raise ValueError(QuadraticHamiltonian._ERRORS["not_hermitian"])

    def hamiltonian(self):
        '''
        Fill the matrix with the model and the added terms. Rebuilding resets
        the state to BUILT and drops the cached eigen-decomposition.

        Raises
        ------
        RuntimeError
            If called before :meth:`init`.
        ValueError
            If the resulting matrix is not Hermitian.
        '''
        if self._state == HamiltonianState.UNINITIALIZED:
            raise RuntimeError(QuadraticHamiltonian._ERRORS["not_init"])
        self._hamil[...] = 0
        self._hamiltonian_quadratic()
        self._hamil += self._hamil_terms
        self._check_hermitian()
        self._invalidate_cache()
        self._state = HamiltonianState.BUILT
        self._log("Hamiltonian matrix built.", lvl=2, log='debug', color='green')

    def build(self, verbose: bool = False, force: bool = False):
        '''
        Initialize and fill the matrix.

        Args:
            verbose (bool) :
                Log the timings.
            force (bool) :
                Rebuild even if the matrix is already built.
        '''
        if self._state in (HamiltonianState.BUILT, HamiltonianState.DIAGONALIZED) and not force:
            self._log("Hamiltonian matrix already built. Use force=True to rebuild.", lvl=1, log='debug')
            return

        init_start = time.perf_counter()
        self.init()
        if verbose:
            self._log(f"Initialization completed in {time.perf_counter() - init_start:.6f} seconds", lvl=2)

        ham_start = time.perf_counter()
        try:
            self.hamiltonian()
        except Exception as e:
            raise ValueError(f"{QuadraticHamiltonian._ERRORS['build']} : {str(e)}") from e
        if verbose:
            self._log(f"Hamiltonian matrix built in {time.perf_counter() - ham_start:.6f} seconds.", lvl=1)

    # ------------------------------------------------------------------------
    #! Terms
    # ------------------------------------------------------------------------

    def add_term(self,
                term_type   : QuadraticTerm,
                sites       : Union[Tuple[int, ...], List[int], int],
                value       : complex,
                remove      : bool = False):
        """
        Adds a quadratic term to the Hamiltonian.

        Parameters
        ----------
        term_type : QuadraticTerm
            QuadraticTerm.Onsite (one index) or QuadraticTerm.Hopping (two indices).
        sites : tuple[int, ...] | list[int] | int
            The site indices involved in the term.
        value : complex
            The coefficient of the term. Hopping adds ``value`` at (i, j) and its
            conjugate at (j, i).
        remove : bool
            Subtract the term instead.

        Raises
        ------
        RuntimeError
            If the Hamiltonian is not initialized.
        ValueError
            If the number of site indices does not match the term type, or a
            complex value is added to a real matrix.
        IndexError
            If a site is out of range.
        """
        if self._state == HamiltonianState.UNINITIALIZED:
            raise RuntimeError(QuadraticHamiltonian._ERRORS["not_init"])
        if isinstance(sites, (int, np.integer)):
            sites = (int(sites),)
        if len(sites) != term_type.mode_num:
            raise ValueError(f"{term_type.name} term needs {term_type.mode_num} index(es), got {len(sites)}.")
        for s in sites:
            if s < 0 or s >= self._ns:
                raise IndexError(f"Site {s} out of range [0, {self._ns}).")
        if not self._iscpx and np.iscomplexobj(value) and np.imag(value) != 0:
            raise ValueError(f"Complex coefficient {value} in a real Hamiltonian, use a complex dtype.")

        val     = -value if remove else value
        valc    = np.conj(val)
        delta   = np.zeros_like(self._hamil_terms)
        if term_type is QuadraticTerm.Onsite:
            i = sites[0]
            delta[i, i] += np.real(val) if not self._iscpx else val
        else:
            i, j = sites
            if i == j:
                delta[i, i] += np.real(val) if not self._iscpx else val
            else:
                delta[i, j] += val if self._iscpx else np.real(val)
                delta[j, i] += valc if self._iscpx else np.real(valc)

        self._hamil_terms += delta
        if self._state in (HamiltonianState.BUILT, HamiltonianState.DIAGONALIZED):
            self._hamil += delta
            self._invalidate_cache()
            self._state = HamiltonianState.BUILT
        self._log(f"add_term: {term_type.name} {tuple(sites)} {str(value)}", lvl=3, log='debug')

    def add_onsite(self, site: int, value: complex, *, remove: bool = False):
        """Convenience wrapper for adding onsite terms."""
        self.add_term(QuadraticTerm.Onsite, site, value, remove=remove)

    def add_hopping(self, i: int, j: int, value: complex, *, remove: bool = False):
        """Convenience wrapper for adding hopping terms."""
        self.add_term(QuadraticTerm.Hopping, (i, j), value, remove=remove)

    def reset_terms(self):
        """Clear the added terms. A built matrix is refilled with the model part only."""
        if self._state == HamiltonianState.UNINITIALIZED:
            raise RuntimeError(QuadraticHamiltonian._ERRORS["not_init"])
        self._hamil_terms[...] = 0
        if self._state in (HamiltonianState.BUILT, HamiltonianState.DIAGONALIZED):
            self.hamiltonian()
        else:
            self._hamil[...] = 0

    ##########################################################################
    #! Diagonalization
    ##########################################################################

    def diagonalize(self, verbose: bool = False, force: bool = False):
        """
        Diagonalize the single-particle matrix and add the constant offset to the
        eigenvalues. Repeated calls return the cached decomposition unless ``force``.

        Raises
        ------
        RuntimeError
            If the matrix is not built or the eigensolver fails.
        """
        if self._state in (HamiltonianState.UNINITIALIZED, HamiltonianState.INITIALIZED):
            raise RuntimeError(QuadraticHamiltonian._ERRORS["not_built"])
        if self._state == HamiltonianState.DIAGONALIZED and not force:
            self._log("Using cached diagonalization results.", lvl=2, log='debug')
            return

        diag_start = time.perf_counter()
        try:
            eig_val, eig_vec = sp.linalg.eigh(self._hamil)
        except (np.linalg.LinAlgError, ValueError) as e:
            self._log(f"scipy eigh failed ({e}), falling back to numpy.", lvl=1, log='warning')
            try:
                eig_val, eig_vec = np.linalg.eigh(self._hamil)
            except np.linalg.LinAlgError as e_np:
                raise RuntimeError(f"{QuadraticHamiltonian._ERRORS['diag']} : {str(e_np)}") from e_np

        self._eig_val   = np.asarray(eig_val, dtype=np.float64) + self._constant_offset
        self._eig_vec   = eig_vec
        self._calculate_av_en()
        self._state     = HamiltonianState.DIAGONALIZED
        if verbose:
            self._log(f"Diagonalization completed in {time.perf_counter() - diag_start:.6f} seconds.", lvl=1)

    def _calculate_av_en(self):
        '''
        Calculates the energy statistics of the spectrum.
        '''
        self._av_en     = float(np.mean(self._eig_val))
        self._std_en    = float(np.std(self._eig_val))
        self._min_en    = float(self._eig_val[0])
        self._max_en    = float(self._eig_val[-1])

    def get_mean_lvl_spacing(self) -> float:
        '''
        Returns the mean level spacing, the average difference between consecutive eigenvalues.
        '''
        self._require_diagonalized()
        if self._eig_val.size < 2:
            return 0.0
        return float(np.mean(np.diff(self._eig_val)))

    def get_bandwidth(self) -> float:
        '''
        Returns the bandwidth, the difference between the highest and the lowest eigenvalues.
        '''
        self._require_diagonalized()
        return float(self._eig_val[-1] - self._eig_val[0])

    ##########################################################################
    #! Many-body quantities
    ##########################################################################

    def many_body_energy(self, occupied_orbitals: Union[Sequence[int], np.ndarray]) -> float:
        r"""
        Total energy of the Slater determinant occupying the given orbitals,
        :math:`E = \sum_{q} \epsilon_q` plus the constant offset.

        Raises
        ------
        RuntimeError
            If not diagonalized.
        IndexError
            If an orbital index is out of range.
        """
        self._require_diagonalized()
        occ = np.asarray(occupied_orbitals, dtype=np.int64).ravel()
        if occ.size == 0:
            return self._constant_offset
        if occ.min() < 0 or occ.max() >= self._eig_val.shape[0]:
            raise IndexError(f"Orbital index out of range [0, {self._eig_val.shape[0]}).")
        # the offset is already part of every eigenvalue
        return float(np.sum(self._eig_val[occ] - self._constant_offset) + self._constant_offset)

    def many_body_energies(self, n_particles: Union[float, int] = 0.5) -> Dict[int, float]:
        '''
        Energies of all Slater determinants with ``n_particles`` particles.

        Parameters
        ----------
        n_particles : float or int
            Number of occupied orbitals, or a filling fraction in (0, 1).

        Returns
        -------
        dict[int, float]
            Occupation bit pattern (orbital q is bit Nh-1-q) mapped to the energy.
        '''
        self._require_diagonalized()
        if isinstance(n_particles, float) and 0.0 < n_particles < 1.0:
            n_particles = int(self._ns * n_particles)
        n_particles = int(n_particles)
        if n_particles < 0 or n_particles > self._ns:
            raise ValueError(f"The number of particles must lie in [0, {self._ns}], got {n_particles}.")

        energies = {}
        for state in fixed_weight_states(self._ns, n_particles):
            state   = int(state)
            occ     = [q for q in range(self._ns) if (state >> (self._ns - 1 - q)) & 1]
            energies[state] = self.many_body_energy(occ)
        return energies

    def correlation_matrix(self, occupied_orbitals: Union[Sequence[int], np.ndarray], sites=None) -> np.ndarray:
        ''' Single-particle correlation matrix of the Slater determinant. '''
        return ent.correlation_matrix(self.eig_vec, occupied_orbitals, sites=sites)

    def occupations(self, occupied_orbitals: Union[Sequence[int], np.ndarray]) -> np.ndarray:
        ''' Site occupations of the Slater determinant. '''
        return ent.occupations(self.eig_vec, occupied_orbitals)

    def entanglement_entropy(self, occupied_orbitals: Union[Sequence[int], np.ndarray], la: int, q: float = 1.0) -> float:
        ''' Entanglement entropy of the first ``la`` sites of the Slater determinant. '''
        return ent.entanglement_entropy(self.eig_vec, occupied_orbitals, la, q=q)

    def _orbitals_of(self, pattern: int) -> np.ndarray:
        return np.array([q for q in range(self._ns) if (pattern >> (self._ns - 1 - q)) & 1], dtype=np.int64)

    def degenerate_manifolds(self, n_particles: Union[float, int] = 0.5, tol: float = 1e-10) -> List[List[np.ndarray]]:
        '''
        Slater determinants with ``n_particles`` particles grouped by many-body energy.
        Consecutive energies closer than ``tol`` share a manifold. Groups are ordered
        by energy, each one a list of occupied-orbital arrays.
        '''
        energies    = self.many_body_energies(n_particles)
        ordered     = sorted(energies.items(), key=lambda kv: kv[1])
        groups      : List[List[np.ndarray]] = []
        last        = None
        for pattern, energy in ordered:
            if last is None or energy - last > tol:
                groups.append([])
            groups[-1].append(self._orbitals_of(pattern))
            last = energy
        return groups

    def mixed_entropies(self,
                        la          : int,
                        gamma       : int                                       = 1,
                        n_particles : Union[float, int]                         = 0.5,
                        n_real      : int                                       = 1,
                        n_comb      : Optional[int]                             = None,
                        manifold    : bool                                      = False,
                        shuffle     : bool                                      = True,
                        real        : bool                                      = False,
                        q           : float                                     = 1.0,
                        rng         : Optional[Union[int, np.random.Generator]] = None) -> np.ndarray:
        """
        Entropies of random superpositions of ``gamma`` Slater determinants.

        Parameters
        ----------
        la : int
            Subsystem [0, la).
        gamma : int
            Number of mixed determinants.
        n_particles : float or int
            Number of particles, or a filling fraction in (0, 1).
        n_real : int
            Number of random states.
        n_comb : int, optional
            Size of the pool the determinants are drawn from; all of them when None.
        manifold : bool
            Draw each state from one degenerate many-body manifold, so the
            superposition stays an eigenstate. Only manifolds with at least
            ``gamma`` members are used.
        shuffle : bool
            Shuffle the pool before it is cut to ``n_comb``; otherwise the
            lowest-energy determinants are kept.

        Raises
        ------
        RuntimeError
            If not diagonalized.
        ValueError
            If no pool holds ``gamma`` determinants.
        """
        rng = handle_rng(rng)
        if manifold:
            pools = [g for g in self.degenerate_manifolds(n_particles) if len(g) >= gamma]
            if not pools:
                raise ValueError(f"No degenerate manifold holds {gamma} Slater determinants.")
            out = np.empty(n_real, dtype=np.float64)
            for r in range(n_real):
                pool    = pools[rng.integers(len(pools))]
                out[r]  = ent.gamma_entropies(self.eig_vec, pool, la, gamma=gamma, n_real=1, rng=rng, real=real, q=q)[0]
            return out

        pool = [occ for group in self.degenerate_manifolds(n_particles) for occ in group]
        if shuffle:
            pool = [pool[i] for i in rng.permutation(len(pool))]
        if n_comb is not None:
            pool = pool[:n_comb]
        return ent.gamma_entropies(self.eig_vec, pool, la, gamma=gamma, n_real=n_real, rng=rng, real=real, q=q)

    ##########################################################################
    #! Information
    ##########################################################################

    def _info_fields(self) -> Dict[str, Any]:
        ''' Parameters in the order they appear in :meth:`info` '''
        return {"Ns": self._ns, "BC": self.bc}

    @staticmethod
    def _format_float(value: float, prec: Optional[int] = None) -> str:
        ''' Shortest round-trip form when ``prec`` is None; integral values drop the ``.0`` '''
        if prec is not None:
            return f"{value:.{prec}g}"
        return np.format_float_positional(float(value), trim='-')

    @classmethod
    def _format_value(cls, value: Any, prec: Optional[int] = None) -> str:
        if isinstance(value, (bool, np.bool_)):
            return str(int(value))
        if isinstance(value, (float, np.floating)):
            return cls._format_float(value, prec)
        if isinstance(value, (complex, np.complexfloating)):
            imag = cls._format_float(value.imag, prec)
            return f"{cls._format_float(value.real, prec)}{'' if imag.startswith('-') else '+'}{imag}i"
        return str(value)

    def info(self, skip: Sequence[str] = (), sep: str = "_", prec: Optional[int] = None) -> str:
        '''
        Deterministic description of the parameters, used for file names.

        Args:
            skip (Sequence[str]) :
                Fields to omit.
            sep (str) :
                Leading separator.
            prec (int, optional) :
                Significant digits of real parameters. None keeps every
                digit needed to tell two values apart.

        Returns:
            str : e.g. ``_SYK2,Ns=8,BC=PBC``
        '''
        skip    = set(skip)
        fields  = [f"{k}={self._format_value(v, prec)}" for k, v in self._info_fields().items() if k not in skip]
        if not fields:
            return sep + self._name
        return sep + self._name + "," + ",".join(fields)

    def __str__(self):
        return self.info()

    def __repr__(self) -> str:
        diag_status = "diagonalized" if self._eig_val is not None else "not diagonalized"
        return (f"{type(self).__name__}(ns={self._ns}, dtype={self._dtype}, {self._state.name.lower()}, "
                f"{diag_status}, constant={self._constant_offset})")

##############################################################################

register_hamiltonian(
    'quadratic',
    builder     = class_builder(QuadraticHamiltonian),
    description = 'Quadratic Hamiltonian built from onsite and hopping terms.',
    tags        = ('quadratic', 'noninteracting'),
)

__all__ = ["HamiltonianState", "QuadraticTerm", "QuadraticHamiltonian"]

# ---------------------------------------------------------------------------
#! End of file
# ---------------------------------------------------------------------------
