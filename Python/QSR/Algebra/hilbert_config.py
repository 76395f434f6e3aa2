"""
Frozen blueprints of Hilbert spaces.

A :class:`HilbertConfig` holds everything :class:`~QSR.Algebra.hilbert.HilbertSpace`
needs: size or lattice, local generators with their sectors, global
symmetries and the enumeration options. One blueprint can be reused across
sectors by swapping a single field with :meth:`HilbertConfig.with_override`.

----------------------------------------------------------
File        : QSR/Algebra/hilbert_config.py
Author      : Maksymilian Kliczkowski
----------------------------------------------------------
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from typing import Any, Dict, Mapping, Optional, Tuple, Union

import numpy as np

from QSR.lattices.lattice import Lattice

from .globals import GlobalSymmetry, parse_global_syms
from .Symmetries.base import SymmetryGenerators

Sector = Union[int, float, complex]

# ----------------------------------------------------------------

@dataclass(frozen=True)
class SymmetrySpec:
    ''' Local generator and its sector, e.g. ``SymmetrySpec('Translation_x', 0)`` '''

    generator   : SymmetryGenerators
    sector      : Sector

    def __post_init__(self):
        object.__setattr__(self, "generator", SymmetryGenerators.from_name(self.generator))

    def as_tuple(self) -> Tuple[SymmetryGenerators, Sector]:
        return self.generator, self.sector

# ----------------------------------------------------------------

@dataclass(frozen=True)
class HilbertConfig:
    """
    Blueprint of a Hilbert space.

    Fields follow the :class:`~QSR.Algebra.hilbert.HilbertSpace` constructor,
    with the local generators under ``symmetry_generators`` and the global
    ones under ``global_symmetries``. Keys in ``extra_kwargs`` are passed
    through to the constructor unless a field already sets them.
    """

    ns                  : Optional[int]                 = None
    lattice             : Optional[Lattice]             = None
    nhl                 : int                           = 2
    symmetry_generators : Tuple[SymmetrySpec, ...]      = ()
    global_symmetries   : Tuple[GlobalSymmetry, ...]    = ()
    gen_mapping         : bool                          = False
    dtype               : Optional[np.dtype]            = np.float64
    threadnum           : int                           = 1
    extra_kwargs        : Dict[str, Any]                = field(default_factory=dict)

    # plain fields forwarded under their own name
    _DIRECT = ("ns", "lattice", "nhl", "gen_mapping", "dtype", "threadnum")

    def with_override(self, **updates: Any) -> "HilbertConfig":
        return replace(self, **updates)

    def resolve_ns(self) -> Optional[int]:
        if self.ns is not None:
            return self.ns
        return self.lattice.ns if self.lattice is not None else None

    def sym_tuple(self) -> Tuple[Tuple[SymmetryGenerators, Sector], ...]:
        return tuple(s.as_tuple() for s in self.symmetry_generators)

    def to_kwargs(self) -> Dict[str, Any]:
        ''' Constructor arguments of :class:`~QSR.Algebra.hilbert.HilbertSpace` '''
        out                 = {name: getattr(self, name) for name in self._DIRECT}
        out["sym_gen"]      = list(self.sym_tuple())
        out["global_syms"]  = list(self.global_symmetries)
        for key, value in self.extra_kwargs.items():
            if out.get(key) is None:
                out[key] = value
        return out

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "HilbertConfig":
        """
        Build a blueprint from plain data.

        Accepts the constructor spelling (``sym_gen``, ``global_syms``) as well
        as the field names, e.g.
        ``{'ns': 6, 'sym_gen': {'Translation_x': 0}, 'global_syms': {'U1': 3}}``.
        Unknown keys land in ``extra_kwargs``.
        """
        data    = dict(data)
        lattice = data.pop("lattice", None)
        ns      = data.pop("ns", None)
        if ns is None and lattice is not None:
            ns = lattice.ns

        local   = data.pop("sym_gen", data.pop("symmetry_generators", ()))
        if isinstance(local, Mapping):
            local = local.items()
        specs   = tuple(s if isinstance(s, SymmetrySpec) else SymmetrySpec(*s) for s in local)

        glob    = data.pop("global_syms", data.pop("global_symmetries", None))
        if glob is not None and ns is None:
            raise ValueError("Global symmetries need the number of sites or a lattice.")
        gsyms   = tuple(parse_global_syms(glob, ns, lattice)) if glob is not None else ()

        names   = {f.name for f in fields(cls)}
        known   = {k: data.pop(k) for k in list(data) if k in names and k != "extra_kwargs"}
        return cls(ns=ns, lattice=lattice, symmetry_generators=specs, global_symmetries=gsyms,
                    extra_kwargs=data, **known)

__all__ = ["HilbertConfig", "SymmetrySpec"]
