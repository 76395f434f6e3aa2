"""
Random matrix ensembles used by the random quadratic models.

All draws go through a :class:`numpy.random.Generator`. Passing the same
seed reproduces the same matrix bit for bit.

----------------------------------------------------------
File        : QSR/common/ran_wrapper.py
Author      : Maksymilian Kliczkowski
Date        : 2025-10-01
----------------------------------------------------------
"""

from enum import Enum, unique
from typing import Optional, Tuple, Union

import numpy as np

# ----------------------------------------------------------------

@unique
class RMT(Enum):
    ''' Random matrix ensembles '''
    GOE     = 0
    GUE     = 1
    COE     = 2
    CUE     = 3

    @classmethod
    def from_name(cls, name: Union[str, "RMT"]) -> "RMT":
        if isinstance(name, cls):
            return name
        try:
            return cls[str(name).upper()]
        except KeyError as e:
            raise ValueError(f"Unknown random matrix ensemble '{name}'. Available: {[m.name for m in cls]}") from e

# ----------------------------------------------------------------

def handle_rng(seed: Optional[Union[int, np.random.Generator]] = None) -> np.random.Generator:
    """
    Return a generator for ``seed``: an int seeds a fresh generator, a generator
    is passed through, None falls back to the process-wide one.
    """
    if isinstance(seed, np.random.Generator):
        return seed
    if seed is None:
        from QSR.qsr_globals import get_numpy_rng
        return get_numpy_rng()
    return np.random.default_rng(seed)

def goe(n: int, rng: np.random.Generator, dtype = np.float64) -> np.ndarray:
    ''' (A + A^T) / 2 with A ~ N(0, 1) '''
    a = rng.standard_normal((n, n))
    return ((a + a.T) / 2.0).astype(dtype, copy=False)

def gue(n: int, rng: np.random.Generator, dtype = np.complex128) -> np.ndarray:
    ''' (A + A^dag) / 2 with Re A, Im A ~ N(0, 1/2) '''
    a = (rng.standard_normal((n, n)) + 1j * rng.standard_normal((n, n))) / np.sqrt(2.0)
    return ((a + a.conj().T) / 2.0).astype(dtype, copy=False)

def cue(n: int, rng: np.random.Generator, dtype = np.complex128) -> np.ndarray:
    ''' Haar random unitary from the QR decomposition of a Ginibre matrix '''
    z       = (rng.standard_normal((n, n)) + 1j * rng.standard_normal((n, n))) / np.sqrt(2.0)
    q, r    = np.linalg.qr(z)
    d       = np.diagonal(r)
    return (q * (d / np.abs(d))).astype(dtype, copy=False)

def coe(n: int, rng: np.random.Generator, dtype = np.complex128) -> np.ndarray:
    ''' U^T U with U from CUE '''
    u = cue(n, rng, dtype=np.complex128)
    return (u.T @ u).astype(dtype, copy=False)

def random_matrix(shape : Union[int, Tuple[int, int]],
                typek   : Union[str, RMT]                               = RMT.GOE,
                seed    : Optional[Union[int, np.random.Generator]]     = None,
                dtype                                                   = None) -> np.ndarray:
    """
    Draw a square random matrix from the requested ensemble.

    Parameters
    ----------
    shape : int or (int, int)
        Matrix size, must be square.
    typek : RMT or str
        Ensemble.
    seed : int or Generator, optional
        Source of randomness.
    dtype :
        Output dtype. GOE defaults to float64, the others to complex128.
    """
    n = shape if isinstance(shape, (int, np.integer)) else shape[0]
    if not isinstance(shape, (int, np.integer)) and (len(shape) != 2 or shape[0] != shape[1]):
        raise ValueError(f"Random matrices must be square, got shape {shape}.")
    typek   = RMT.from_name(typek)
    rng     = handle_rng(seed)

    if typek == RMT.GOE:
        return goe(n, rng, dtype=dtype or np.float64)
    if dtype is not None and not np.issubdtype(np.dtype(dtype), np.complexfloating):
        raise ValueError(f"{typek.name} matrices are complex, got dtype {np.dtype(dtype)}.")
    if typek == RMT.GUE:
        return gue(n, rng, dtype=dtype or np.complex128)
    if typek == RMT.CUE:
        return cue(n, rng, dtype=dtype or np.complex128)
    return coe(n, rng, dtype=dtype or np.complex128)

# ----------------------------------------------------------------

__all__ = ["RMT", "handle_rng", "random_matrix", "goe", "gue", "cue", "coe"]

# ----------------------------------------------------------------
#! End of file
# ----------------------------------------------------------------
