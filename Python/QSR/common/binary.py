"""
Bit manipulation of integer-encoded basis states.

A basis state on ``ns`` sites is an integer in ``[0, 2^ns)``. Site ``i`` is
stored in bit ``ns - 1 - i`` (the first site is the most significant bit), so
``int2binstr(state, ns)`` reads left to right as sites ``0 .. ns-1``.

----------------------------------------------------------
File        : QSR/common/binary.py
Author      : Maksymilian Kliczkowski
Date        : 2025-10-01
----------------------------------------------------------
"""

from __future__ import annotations

from itertools import combinations
from math import comb

import numba
import numpy as np

# ----------------------------------------------------------------
#! Numba kernels
# ----------------------------------------------------------------

@numba.njit(cache=True)
def _popcount64(x: np.int64) -> np.int64:
    c = np.int64(0)
    while x:
        x &= (x - 1)
        c += 1
    return c

@numba.njit(cache=True)
def _check_bit(state: np.int64, site: np.int64, ns: np.int64) -> np.int64:
    return (state >> (ns - 1 - site)) & 1

@numba.njit(cache=True)
def _reverse_bits(state: np.int64, ns: np.int64) -> np.int64:
    out = np.int64(0)
    for i in range(ns):
        out = (out << 1) | ((state >> i) & 1)
    return out

@numba.njit(cache=True)
def _permute_sites(state: np.int64, perm: np.ndarray, ns: np.int64) -> np.int64:
    ''' Move the occupation of site ``i`` to site ``perm[i]`` '''
    out = np.int64(0)
    for src in range(ns):
        if (state >> (ns - 1 - src)) & 1:
            out |= np.int64(1) << (ns - 1 - perm[src])
    return out

# ----------------------------------------------------------------
#! Python helpers
# ----------------------------------------------------------------

def popcount(state: int) -> int:
    """Number of occupied sites (set bits)."""
    return int(_popcount64(np.int64(state)))

def check_bit(state: int, site: int, ns: int) -> int:
    return int(_check_bit(np.int64(state), site, ns))

def flip_all(state: int, ns: int) -> int:
    """Flip the occupation on every site."""
    return state ^ ((1 << ns) - 1)

def reverse_bits(state: int, ns: int) -> int:
    """Mirror the site order ``i -> ns - 1 - i``."""
    return int(_reverse_bits(np.int64(state), ns))

def permute_sites(state: int, perm: np.ndarray, ns: int) -> int:
    return int(_permute_sites(np.int64(state), perm, ns))

def int2binstr(state: int, ns: int) -> str:
    return format(state, f"0{ns}b") if ns > 0 else ""

def fixed_weight_states(ns: int, n: int) -> np.ndarray:
    """
    All states on ``ns`` sites with exactly ``n`` occupied sites, sorted ascending.

    Returns an empty array when ``n`` lies outside ``[0, ns]``.
    """
    if n < 0 or n > ns:
        return np.zeros(0, dtype=np.int64)
    states = np.empty(comb(ns, n), dtype=np.int64)
    for idx, occ in enumerate(combinations(range(ns), n)):
        m = 0
        for site in occ:
            m |= 1 << (ns - 1 - site)
        states[idx] = m
    states.sort()
    return states

__all__ = [
    "popcount",
    "check_bit",
    "flip_all",
    "reverse_bits",
    "permute_sites",
    "int2binstr",
    "fixed_weight_states",
]

# ----------------------------------------------------------------
#! End of QSR binary helpers
