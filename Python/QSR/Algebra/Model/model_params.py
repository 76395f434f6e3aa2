"""
Model parameters: the model family, its couplings and the random realizations.

A :class:`ModelParams` is a frozen description of one model family. It is
the single place where a driver selects a model and the number of disorder
realizations, and it creates the Hamiltonians for them.

----------------------------------------------------------
File        : QSR/Algebra/Model/model_params.py
Author      : Maksymilian Kliczkowski
Date        : 2025-10-20
----------------------------------------------------------
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum, unique
from typing import TYPE_CHECKING, Any, Dict, Iterator, Mapping, Optional, Tuple, Union

import numpy as np

if TYPE_CHECKING:
    from QSR.Algebra.hamil_quadratic import QuadraticHamiltonian

# ----------------------------------------------------------------

@unique
class ModelType(Enum):
    ''' Quadratic model families '''
    FREE_FERMIONS   = "free_fermions"
    AUBRY_ANDRE     = "aubry_andre"
    SYK2            = "syk2"
    PLRB            = "plrb"
    RPM             = "rpm"

    @classmethod
    def from_name(cls, name: Union[str, "ModelType"]) -> "ModelType":
        if isinstance(name, cls):
            return name
        key = str(name).lower().replace(" ", "_").replace("-", "_")
        for member in cls:
            if member.value == key or member.name.lower() == key:
                return member
        raise ValueError(f"Unknown model type '{name}'. Available: {[m.value for m in cls]}")

    @property
    def is_random(self) -> bool:
        return self in (ModelType.SYK2, ModelType.PLRB, ModelType.RPM)

# ----------------------------------------------------------------

@dataclass(frozen=True)
class ModelParams:
    """
    Parameters of a quadratic model family.

    Parameters
    ----------
    typ : ModelType
        Model family.
    ran_seed : int, optional
        Base seed; realization ``r`` uses ``ran_seed + r``.
    ran_n : tuple of int
        Numbers of random realizations, one entry per system size in a sweep.
    params : mapping
        Model couplings forwarded to the constructor, e.g. ``{'t': 1.0}``.
    q_gamma : int
        Number of Slater determinants mixed into one state.
    q_manifold : bool
        Mix only determinants of one degenerate many-body manifold.
    q_realization_num : int
        Number of random mixed states averaged over.
    q_random_comb_num : int
        Size of the pool of determinants the mixed ones are drawn from.
    q_shuffle : bool
        Shuffle the pool before cutting it to ``q_random_comb_num``.
    rp_single_particle : bool
        Rosenzweig-Porter matrix of size Ns; otherwise 2^Ns (many-body space).
    rp_be_real : bool
        Real (GOE) Rosenzweig-Porter couplings; complex (GUE) otherwise.
    plrb_mb : bool
        Power-law banded matrix of size 2^Ns instead of Ns.
    """

    typ                 : ModelType
    ran_seed            : Optional[int]         = None
    ran_n               : Tuple[int, ...]       = (1,)
    params              : Mapping[str, Any]     = field(default_factory=dict)
    # mixing of Slater determinants
    q_gamma             : int                   = 1
    q_manifold          : bool                  = False
    q_realization_num   : int                   = 100
    q_random_comb_num   : int                   = 100
    q_shuffle           : bool                  = True
    # random-matrix options
    rp_single_particle  : bool                  = True
    rp_be_real          : bool                  = True
    plrb_mb             : bool                  = False

    _OPTIONS = ("q_gamma", "q_manifold", "q_realization_num", "q_random_comb_num", "q_shuffle",
                "rp_single_particle", "rp_be_real", "plrb_mb")

    def __post_init__(self):
        object.__setattr__(self, "typ", ModelType.from_name(self.typ))
        ran_n = (self.ran_n,) if isinstance(self.ran_n, (int, np.integer)) else tuple(self.ran_n)
        if not ran_n or any(int(n) < 1 for n in ran_n):
            raise ValueError(f"The numbers of realizations must be positive, got {self.ran_n}.")
        object.__setattr__(self, "ran_n", tuple(int(n) for n in ran_n))
        object.__setattr__(self, "params", dict(self.params))
        if self.q_gamma < 1 or self.q_realization_num < 1 or self.q_random_comb_num < 1:
            raise ValueError("q_gamma, q_realization_num and q_random_comb_num must be positive.")

    def with_override(self, **updates: Any) -> "ModelParams":
        return replace(self, **updates)

    def check_complex(self) -> bool:
        ''' Whether the model needs complex storage '''
        if self.typ == ModelType.FREE_FERMIONS:
            return True
        if self.typ == ModelType.SYK2 and str(self.params.get("ensemble", "goe")).lower() == "gue":
            return True
        if self.typ == ModelType.RPM and not self.rp_be_real:
            return True
        return False

    def is_many_body(self) -> bool:
        ''' Whether the random matrix lives on the 2^Ns many-body space '''
        if self.typ == ModelType.RPM:
            return not self.rp_single_particle
        return self.typ == ModelType.PLRB and self.plrb_mb

    def matrix_size(self, ns: int) -> int:
        return 1 << int(ns) if self.is_many_body() else int(ns)

    def get_ran_real(self, idx: Optional[int] = None) -> int:
        ''' Number of realizations for the ``idx``-th entry, the last one when out of range '''
        if idx is None or idx >= len(self.ran_n):
            return self.ran_n[-1]
        return self.ran_n[idx]

    def seed_for(self, realization: int = 0) -> Optional[int]:
        return None if self.ran_seed is None else int(self.ran_seed) + int(realization)

    def create(self, realization: int = 0, **overrides: Any) -> "QuadraticHamiltonian":
        """
        Build the model for one realization. ``overrides`` (e.g. ``ns``, ``lattice``)
        are passed to the constructor on top of :attr:`params`. For many-body
        random matrices ``ns`` counts sites and the matrix has size 2^ns.
        """
        from QSR.Algebra.Model.Noninteracting import choose_model

        kwargs: Dict[str, Any] = dict(self.params)
        kwargs.update(overrides)
        if self.is_many_body():
            if kwargs.get("ns") is None:
                raise ValueError(f"A many-body {self.typ.value} matrix needs the number of sites 'ns'.")
            kwargs["ns"] = self.matrix_size(kwargs["ns"])
        if self.typ == ModelType.RPM:
            kwargs.setdefault("real", self.rp_be_real)
        if self.check_complex():
            kwargs.setdefault("dtype", np.complex128)
        if self.typ.is_random:
            kwargs.setdefault("seed", self.seed_for(realization))
        return choose_model(self.typ.value, **kwargs)

    def iter_realizations(self, idx: Optional[int] = None, **overrides: Any) -> Iterator["QuadraticHamiltonian"]:
        ''' Models for all realizations of the ``idx``-th entry of :attr:`ran_n` '''
        n = self.get_ran_real(idx) if self.typ.is_random else 1
        for r in range(n):
            yield self.create(realization=r, **overrides)

    def mixed_entropies(self,
                        ham         : "QuadraticHamiltonian",
                        la          : int,
                        n_particles : Union[float, int]                         = 0.5,
                        q           : float                                     = 1.0,
                        rng         : Optional[Union[int, np.random.Generator]] = None) -> np.ndarray:
        '''
        Entropies of ``q_realization_num`` random superpositions of ``q_gamma``
        Slater determinants of a diagonalized ``ham``, drawn as the q_* options say.
        Coefficients are real when the model is.
        '''
        return ham.mixed_entropies(la, gamma=self.q_gamma, n_particles=n_particles,
                                    n_real=self.q_realization_num, n_comb=self.q_random_comb_num,
                                    manifold=self.q_manifold, shuffle=self.q_shuffle,
                                    real=not ham.iscpx, q=q, rng=rng)

    def to_dict(self) -> Dict[str, Any]:
        out = {"typ": self.typ.value, "ran_seed": self.ran_seed, "ran_n": list(self.ran_n), "params": dict(self.params)}
        out.update({name: getattr(self, name) for name in self._OPTIONS})
        return out

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ModelParams":
        ''' Inverse of :meth:`to_dict`; without a ``params`` entry the unknown keys are the couplings '''
        data    = dict(data)
        options = {name: data.pop(name) for name in cls._OPTIONS if name in data}
        return cls(typ=data.pop("typ"), ran_seed=data.pop("ran_seed", None),
                    ran_n=tuple(data.pop("ran_n", (1,))), params=data.pop("params", data), **options)

__all__ = ["ModelType", "ModelParams"]

# ----------------------------------------------------------------
#! End of file
# ----------------------------------------------------------------
