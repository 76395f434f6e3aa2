"""
Process-wide logger and random generator of QSR.

Both objects are created on first use. Classes that take a ``logger=``
argument fall back to :func:`get_logger`; random models that get no seed
draw from :func:`get_numpy_rng`.

    from QSR.qsr_globals import get_logger, reseed_all

    log = get_logger()
    rng = reseed_all(1234)

Importing this module only creates the lock and the empty slots.
"""

from __future__ import annotations
from typing import Optional, Any
import threading

import numpy as np

_LOCK               = threading.Lock()

_LOGGER: Any        = None
_RNG: Optional[np.random.Generator] = None
_SEED: Optional[int]                = None

def get_logger(**kwargs):
    ''' Shared logger; ``kwargs`` only matter on the very first call '''
    global _LOGGER
    if _LOGGER is not None:
        return _LOGGER
    with _LOCK:
        if _LOGGER is None:
            from QSR.common.flog import get_global_logger
            _LOGGER = get_global_logger(**kwargs)
    return _LOGGER

# ----------------------------------------------------------------

def get_numpy_rng() -> np.random.Generator:
    """Return the process-global NumPy Generator (unseeded until `reseed_all`)."""
    global _RNG
    if _RNG is not None:
        return _RNG
    with _LOCK:
        if _RNG is None:
            _RNG = np.random.default_rng(_SEED)
    return _RNG

def reseed_all(seed: int) -> np.random.Generator:
    """Replace the global generator by a freshly seeded one and return it."""
    global _RNG, _SEED
    with _LOCK:
        _SEED   = seed
        _RNG    = np.random.default_rng(seed)
    return _RNG

def current_seed() -> Optional[int]:
    return _SEED

# ----------------------------------------------------------------

__all__ = [
    "get_logger",
    "get_numpy_rng",
    "reseed_all",
    "current_seed",
]

# ----------------------------------------------------------------
#! End of QSR global singletons
