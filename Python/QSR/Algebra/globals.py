"""
file: Algebra/globals.py
Contains the GlobalSymmetry class for defining and checking global symmetries on states.

A global symmetry is an enum-tagged value object:
    - ``GlobalSymmetries.U1``    : fixed particle number, ``popcount(state) == val``,
    - ``GlobalSymmetries.OTHER`` : a named, user supplied predicate ``fun(state, val) -> bool``.
Two U1 symmetries on the same number of sites with the same value compare equal,
so symmetry objects can be stored in configurations, hashed and serialized.
"""

from __future__ import annotations

from enum import Enum, auto
from typing import TYPE_CHECKING, Callable, Dict, Iterable, List, Optional, Union

import numba
import numpy as np

from QSR.common.binary import _popcount64

if TYPE_CHECKING:
    from QSR.lattices.lattice import Lattice

# ---------------------------

class GlobalSymmetries(Enum):
    """Tags of the supported global symmetries."""
    U1      = auto()
    OTHER   = auto()

    @classmethod
    def from_name(cls, name: Union[str, "GlobalSymmetries"]) -> "GlobalSymmetries":
        if isinstance(name, cls):
            return name
        try:
            return cls[str(name).upper()]
        except KeyError as e:
            raise ValueError(f"Unknown global symmetry '{name}'.") from e

# ---------------------------

@numba.njit(cache=True)
def _u1_check(state: np.int64, val: np.int64) -> bool:
    return _popcount64(state) == val

def u1_sym(state: int, val: int) -> bool:
    """
    Global U(1) symmetry check.

    True if the number of occupied sites of ``state`` equals ``val``.
    """
    if val != int(val):
        return False
    return bool(_u1_check(np.int64(state), np.int64(val)))

def _particle_number(val) -> int:
    ''' U(1) sector value as an int; fractional or non-numeric values raise ValueError '''
    numeric = isinstance(val, (int, float, np.integer, np.floating)) and not isinstance(val, (bool, np.bool_))
    if not numeric or not float(val).is_integer():
        raise ValueError(f"U(1) sector value must be an integer, got {val!r}.")
    return int(val)

# ---------------------------

class GlobalSymmetry:
    """
    GlobalSymmetry represents a global symmetry check on a state.
    It stores:
        - a lattice (lat)   (optional, shared and never modified),
        - the number of sites (ns),
        - a symmetry value  (val),
        - a symmetry kind   (an element of GlobalSymmetries),
        - for OTHER kinds, a named checking function ``fun(state, val) -> bool``.
    """

    def __init__(self,
                ns      : Optional[int]                 = None,
                val     : int                           = 0,
                kind    : Union[GlobalSymmetries, str]  = GlobalSymmetries.U1,
                lat     : Optional['Lattice']           = None,
                fun     : Optional[Callable[[int, int], bool]] = None,
                fun_name: Optional[str]                 = None):
        if lat is not None:
            if ns is not None and ns != lat.ns:
                raise ValueError(f"Number of sites ({ns}) differs from the lattice ({lat.ns}).")
            ns = lat.ns
        if ns is None:
            raise ValueError("Either the lattice or the number of sites must be provided!")
        if ns <= 0:
            raise ValueError(f"The number of sites must be positive, got {ns}.")

        self._lat       = lat
        self._ns        = int(ns)
        self._val       = val
        self._kind      = GlobalSymmetries.from_name(kind)
        self._fun       = None
        self._fun_name  = None
        if fun is not None:
            self.set_fun(fun, fun_name)
        elif self._kind == GlobalSymmetries.OTHER:
            raise ValueError("A symmetry of kind OTHER requires a checking function.")
        if self._kind == GlobalSymmetries.U1:
            self._val = _particle_number(val)

    # ---------- SETTERS -----------

    def set_fun(self, fun: Callable[[int, int], bool], name: Optional[str] = None) -> None:
        """Install a custom checking function. The symmetry becomes of kind OTHER."""
        if not callable(fun):
            raise ValueError("The checking function must be callable.")
        self._fun       = fun
        self._fun_name  = name if name is not None else getattr(fun, "__name__", "custom")
        self._kind      = GlobalSymmetries.OTHER

    # ---------- GETTERS -----------

    @property
    def kind(self) -> GlobalSymmetries:     return self._kind
    @property
    def name(self) -> str:
        return self._kind.name if self._kind != GlobalSymmetries.OTHER else self._fun_name
    @property
    def val(self):                          return self._val
    @property
    def ns(self) -> int:                    return self._ns
    @property
    def lat(self) -> Optional['Lattice']:   return self._lat

    def is_u1(self) -> bool:
        return self._kind == GlobalSymmetries.U1

    def is_empty_sector(self) -> bool:
        """True if no state can satisfy the symmetry (U1 value outside ``[0, ns]``)."""
        return self.is_u1() and not (0 <= self._val <= self._ns)

    # ---------- CHECKER -----------

    def _predicate(self, state: int, val) -> bool:
        if self._kind == GlobalSymmetries.U1:
            return u1_sym(state, val)
        return bool(self._fun(state, val))

    def check(self, state: int, out_cond: bool = True) -> bool:
        """
        Returns True if the state satisfies the symmetry and the outer condition.

        The predicate is not evaluated when ``out_cond`` is already False, which
        lets several symmetries be chained as ``s2.check(x, s1.check(x))``.
        """
        return bool(out_cond) and self._predicate(state, self._val)

    def __call__(self, state: int) -> bool:
        return self.check(state, True)

    # ---------- VALUE SEMANTICS -----------

    def _key(self):
        if self._kind == GlobalSymmetries.U1:
            return (self._kind, self._ns, self._val)
        return (self._kind, self._ns, self._val, self._fun_name, id(self._fun))

    def __eq__(self, other) -> bool:
        if not isinstance(other, GlobalSymmetry):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def to_dict(self) -> Dict:
        return {"kind": self._kind.name, "ns": self._ns, "val": self._val, "fun": self._fun_name}

    @classmethod
    def from_dict(cls, d: Dict, fun: Optional[Callable[[int, int], bool]] = None) -> "GlobalSymmetry":
        kind = GlobalSymmetries.from_name(d["kind"])
        if kind == GlobalSymmetries.OTHER and fun is None:
            raise ValueError(f"Symmetry '{d.get('fun')}' of kind OTHER needs its checking function.")
        return cls(ns=d["ns"], val=d["val"], kind=kind, fun=fun, fun_name=d.get("fun"))

    def __repr__(self) -> str:
        return f"GlobalSymmetry({self.name},ns={self._ns},val={self._val})"

# ---------------------------
#! Factories
# ---------------------------

def get_u1_sym(lat: Optional['Lattice'] = None, val: int = 0, ns: Optional[int] = None) -> GlobalSymmetry:
    """
    Factory function that creates a U(1) global symmetry object.

    Parameters:
        lat: Lattice on which the symmetry is defined (optional if ``ns`` is given).
        val: The required number of occupied sites.
        ns : Number of sites.
    """
    return GlobalSymmetry(ns=ns, val=val, kind=GlobalSymmetries.U1, lat=lat)

def check_all(global_syms: Iterable[GlobalSymmetry], state: int) -> bool:
    """Chain ``check`` over several symmetries."""
    cond = True
    for g in global_syms:
        cond = g.check(state, cond)
    return cond

def parse_global_syms(spec: Union[None, Dict, List], ns: int, lat: Optional['Lattice'] = None) -> List[GlobalSymmetry]:
    """
    Build global symmetries from a loose specification.

    Accepts ``None``, a list of :class:`GlobalSymmetry`, or a dict such as
    ``{'U1': 2}``.
    """
    if spec is None:
        return []
    if isinstance(spec, GlobalSymmetry):
        return [spec]
    if isinstance(spec, dict):
        out = []
        for key, val in spec.items():
            kind = GlobalSymmetries.from_name(key)
            if kind != GlobalSymmetries.U1:
                raise ValueError(f"Symmetry '{key}' cannot be created from a value alone.")
            out.append(get_u1_sym(lat=lat, val=val, ns=None if lat is not None else ns))
        return out
    out = []
    for g in spec:
        if not isinstance(g, GlobalSymmetry):
            raise ValueError(f"Expected GlobalSymmetry, got {type(g)}.")
        out.append(g)
    return out

__all__ = [
    "GlobalSymmetries",
    "GlobalSymmetry",
    "u1_sym",
    "get_u1_sym",
    "check_all",
    "parse_global_syms",
]

# ---------------------------
#! End of global symmetries
