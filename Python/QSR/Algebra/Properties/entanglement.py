r"""
Entanglement of free-fermion eigenstates from the single-particle correlation matrix.

For a Slater determinant built from the columns ``q`` of the eigenvector matrix W
(sites x orbitals), the correlation matrix is

    C_ij = <c_i^dag c_j> = sum_{q occupied} W_iq conj(W_jq),

and the entanglement entropy of a subsystem A follows from the eigenvalues n_k of C_A:

    S = - sum_k [ n_k log(n_k) + (1 - n_k) log(1 - n_k) ].

Superpositions of several determinants are not Gaussian; their entropy is taken
from the Schmidt values of the many-body vector instead.

----------------------------------------------------------
File        : QSR/Algebra/Properties/entanglement.py
Author      : Maksymilian Kliczkowski
Date        : 2025-10-15
----------------------------------------------------------
"""

from typing import List, Optional, Sequence, Union

import numpy as np

from QSR.common.binary import fixed_weight_states
from QSR.common.ran_wrapper import handle_rng

_CORR_EPS = 1e-14

# ----------------------------------------------------------------

def contiguous(ns: int, size_a: int, start: int = 0) -> np.ndarray:
    """
    Contiguous subsystem [start, ..., start+size_a-1], wrapped around for periodic systems.
    """
    if start + size_a > ns:
        return np.sort(np.unique(np.arange(start, start + size_a) % ns))
    return np.arange(start, start + size_a, dtype=np.int64)

def _occupied_indices(occupied: Union[Sequence[int], np.ndarray], n_orb: int) -> np.ndarray:
    ''' Orbital indices from a list of indices or a boolean mask '''
    occ = np.asarray(occupied)
    if occ.dtype == bool:
        if occ.shape[0] != n_orb:
            raise ValueError(f"Occupation mask has length {occ.shape[0]}, expected {n_orb}.")
        return np.nonzero(occ)[0]
    occ = occ.astype(np.int64).ravel()
    if occ.size and (occ.min() < 0 or occ.max() >= n_orb):
        raise IndexError(f"Orbital index out of range [0, {n_orb}).")
    return occ

def correlation_matrix(eig_vec  : np.ndarray,
                    occupied    : Union[Sequence[int], np.ndarray],
                    sites       : Optional[Union[Sequence[int], np.ndarray]] = None) -> np.ndarray:
    """
    Single-particle correlation matrix of the Slater determinant of ``occupied`` orbitals.

    Parameters
    ----------
    eig_vec : np.ndarray
        Eigenvectors as columns, shape (Nh, Nh).
    occupied : array-like
        Occupied orbital indices or a boolean mask.
    sites : array-like, optional
        Restrict the matrix to these sites.
    """
    W       = np.asarray(eig_vec)
    occ     = _occupied_indices(occupied, W.shape[1])
    W_occ   = W[:, occ] if sites is None else W[np.asarray(sites, dtype=np.int64)][:, occ]
    return W_occ @ W_occ.conj().T

def occupations(eig_vec: np.ndarray, occupied: Union[Sequence[int], np.ndarray]) -> np.ndarray:
    ''' Site occupations <n_i>, the diagonal of the correlation matrix '''
    W   = np.asarray(eig_vec)
    occ = _occupied_indices(occupied, W.shape[1])
    return np.sum(np.abs(W[:, occ]) ** 2, axis=1)

def entropy_from_correlation(corr: np.ndarray, q: float = 1.0) -> float:
    """
    Entropy of a fermionic Gaussian state from its (subsystem) correlation matrix.
    ``q = 1`` gives the von Neumann entropy, other values the Renyi entropies.
    """
    if corr.shape[0] == 0:
        return 0.0
    n = np.clip(np.linalg.eigvalsh(corr), _CORR_EPS, 1.0 - _CORR_EPS)
    if q == 1.0:
        return float(-np.sum(n * np.log(n) + (1.0 - n) * np.log(1.0 - n)))
    return float(np.sum(np.log(n ** q + (1.0 - n) ** q)) / (1.0 - q))

def entanglement_entropy(eig_vec: np.ndarray,
                        occupied: Union[Sequence[int], np.ndarray],
                        la      : int,
                        q       : float = 1.0) -> float:
    """
    Entanglement entropy of the first ``la`` sites for the Slater determinant of
    ``occupied`` orbitals.

    Raises
    ------
    ValueError
        If ``la`` lies outside [0, Nh].
    """
    nh = np.asarray(eig_vec).shape[0]
    if la < 0 or la > nh:
        raise ValueError(f"Subsystem size la={la} outside [0, {nh}].")
    if la == 0 or la == nh:
        return 0.0
    return entropy_from_correlation(correlation_matrix(eig_vec, occupied, sites=contiguous(nh, la)), q=q)

# ----------------------------------------------------------------
#! Superpositions of Slater determinants
# ----------------------------------------------------------------

def slater_state(eig_vec: np.ndarray, occupied: Union[Sequence[int], np.ndarray]) -> np.ndarray:
    r"""
    Many-body vector of the Slater determinant :math:`\prod_q c_q^\dagger |0>`
    in the occupation basis (site ``i`` is bit ``Nh - 1 - i``).

    The amplitude of a configuration with occupied sites :math:`i_1 < ... < i_N`
    is the determinant of ``W[[i_1..i_N], occupied]``.
    """
    W       = np.asarray(eig_vec)
    ns      = W.shape[0]
    occ     = _occupied_indices(occupied, W.shape[1])
    psi     = np.zeros(1 << ns, dtype=np.result_type(W.dtype, np.float64))
    if occ.size == 0:
        psi[0] = 1.0
        return psi
    W_occ   = W[:, occ]
    for state in fixed_weight_states(ns, occ.size):
        state       = int(state)
        sites       = [i for i in range(ns) if (state >> (ns - 1 - i)) & 1]
        psi[state]  = np.linalg.det(W_occ[sites])
    return psi

def entropy_from_state(psi: np.ndarray, la: int, ns: Optional[int] = None, q: float = 1.0) -> float:
    """
    Entanglement entropy of the first ``la`` sites of a many-body vector, from
    its Schmidt values. With site 0 in the most significant bit the vector
    reshapes to (2^la, 2^(ns-la)).
    """
    psi = np.asarray(psi)
    ns  = int(np.log2(psi.shape[0])) if ns is None else ns
    if psi.shape[0] != 1 << ns:
        raise ValueError(f"State of length {psi.shape[0]} does not match ns={ns}.")
    if la < 0 or la > ns:
        raise ValueError(f"Subsystem size la={la} outside [0, {ns}].")
    if la == 0 or la == ns:
        return 0.0
    s = np.linalg.svd(psi.reshape(1 << la, 1 << (ns - la)), compute_uv=False)
    p = s ** 2
    p = p[p > _CORR_EPS] / np.sum(p)
    if q == 1.0:
        return float(-np.sum(p * np.log(p)))
    return float(np.log(np.sum(p ** q)) / (1.0 - q))

def random_coefficients(n: int, rng: np.random.Generator, real: bool = False) -> np.ndarray:
    ''' Normalized Gaussian vector of length ``n``, complex unless ``real`` '''
    c = rng.standard_normal(n)
    if not real:
        c = c + 1j * rng.standard_normal(n)
    return c / np.linalg.norm(c)

def mixed_state(eig_vec     : np.ndarray,
                orbital_sets: Sequence[Union[Sequence[int], np.ndarray]],
                coefficients: np.ndarray) -> np.ndarray:
    ''' Normalized superposition sum_k c_k |SD(orbital_sets[k])> '''
    if len(orbital_sets) != len(coefficients):
        raise ValueError(f"{len(orbital_sets)} orbital sets but {len(coefficients)} coefficients.")
    psi = sum(c * slater_state(eig_vec, occ) for c, occ in zip(coefficients, orbital_sets))
    return psi / np.linalg.norm(psi)

def gamma_entropies(eig_vec     : np.ndarray,
                    candidates  : Sequence[Union[Sequence[int], np.ndarray]],
                    la          : int,
                    gamma       : int                                       = 1,
                    n_real      : int                                       = 1,
                    rng         : Optional[Union[int, np.random.Generator]] = None,
                    real        : bool                                      = False,
                    q           : float                                     = 1.0) -> np.ndarray:
    """
    Entanglement entropies of random superpositions of ``gamma`` Slater determinants.

    Each realization draws ``gamma`` distinct orbital sets from ``candidates``
    and mixes them with normalized Gaussian coefficients. For ``gamma = 1`` the
    state is a single determinant and the correlation-matrix formula is used.

    Parameters
    ----------
    eig_vec : np.ndarray
        Single-particle eigenvectors as columns.
    candidates : sequence
        Pool of occupied-orbital sets to draw from.
    la : int
        Subsystem [0, la).
    gamma : int
        Number of determinants in each superposition.
    n_real : int
        Number of random states.
    real : bool
        Real coefficients instead of complex ones.

    Returns
    -------
    np.ndarray
        One entropy per realization.
    """
    if gamma < 1 or gamma > len(candidates):
        raise ValueError(f"gamma={gamma} must lie in [1, {len(candidates)}].")
    if n_real < 1:
        raise ValueError(f"The number of realizations must be positive, got {n_real}.")
    rng     = handle_rng(rng)
    W       = np.asarray(eig_vec)
    ns      = W.shape[0]
    out     = np.empty(n_real, dtype=np.float64)
    cache   = {}
    for r in range(n_real):
        picks = rng.choice(len(candidates), size=gamma, replace=False)
        if gamma == 1:
            out[r] = entanglement_entropy(W, candidates[picks[0]], la, q=q)
            continue
        for k in picks:
            if k not in cache:
                cache[k] = slater_state(W, candidates[k])
        coeff   = random_coefficients(gamma, rng, real=real)
        psi     = sum(c * cache[k] for c, k in zip(coeff, picks))
        out[r]  = entropy_from_state(psi / np.linalg.norm(psi), la, ns, q=q)
    return out

# ----------------------------------------------------------------

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

# ----------------------------------------------------------------
#! End of file
# ----------------------------------------------------------------
