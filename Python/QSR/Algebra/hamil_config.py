"""
Named Hamiltonian builders and frozen Hamiltonian blueprints.

Every model module registers its builder in :data:`HAMILTONIAN_REGISTRY`
under a lower-case name. A :class:`HamiltonianConfig` names one of them and
carries the size, lattice, Hilbert space and couplings; the registry turns it
into a :class:`~QSR.Algebra.hamil_quadratic.QuadraticHamiltonian`.

    cfg = HamiltonianConfig(kind="syk2", ns=8, params={"seed": 3})
    ham = HAMILTONIAN_REGISTRY.create(cfg)

----------------------------------------------------------
File        : QSR/Algebra/hamil_config.py
Author      : Maksymilian Kliczkowski
----------------------------------------------------------
"""

from __future__ import annotations

import importlib
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any, Callable, Dict, Mapping, Optional, Tuple, Union

from QSR.Algebra.hilbert import HilbertSpace
from QSR.Algebra.hilbert_config import HilbertConfig

if TYPE_CHECKING:
    from QSR.lattices.lattice import Lattice
    from .hamil_quadratic import QuadraticHamiltonian

Builder = Callable[["HamiltonianConfig", Dict[str, Any]], "QuadraticHamiltonian"]

# importing these registers the built-in models
_BUILTIN_MODULES = (
    "QSR.Algebra.hamil_quadratic",
    "QSR.Algebra.Model.Noninteracting.syk",
    "QSR.Algebra.Model.Noninteracting.plrb",
    "QSR.Algebra.Model.Noninteracting.rpm",
    "QSR.Algebra.Model.Noninteracting.Conserving.free_fermions",
    "QSR.Algebra.Model.Noninteracting.Conserving.aubry_andre",
)

# ---------------------------------------------------------------------------
#! Registry
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class HamiltonianSpec:
    ''' Registry entry: the builder and what ``describe`` reports about it '''
    name            : str
    builder         : Builder
    description     : str                   = ""
    tags            : Tuple[str, ...]       = ()
    default_params  : Mapping[str, Any]     = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return dict(name=self.name, description=self.description, tags=self.tags,
                    default_params=dict(self.default_params))

class HamiltonianRegistry:
    """
    Builders keyed by lower-case name.

    The built-in models register themselves when their modules are imported.
    A lookup that misses imports them once and retries, so the registry is
    usable without importing the model packages first.
    """

    def __init__(self) -> None:
        self._registry: Dict[str, HamiltonianSpec] = {}
        self._builtins_loaded = False

    def register(self, name: str, builder: Builder, *, description: str = "",
                tags: Tuple[str, ...] = (), default_params: Optional[Mapping[str, Any]] = None) -> HamiltonianSpec:
        ''' Add a builder; a name already taken (in any case) raises ValueError '''
        key = name.lower()
        if key in self._registry:
            raise ValueError(f"Hamiltonian '{name}' already registered.")
        entry               = HamiltonianSpec(key, builder, description, tuple(tags), dict(default_params or {}))
        self._registry[key] = entry
        return entry

    def unregister(self, name: str) -> None:
        self._registry.pop(name.lower(), None)

    def _load_builtins(self) -> None:
        if self._builtins_loaded:
            return
        self._builtins_loaded = True
        for module in _BUILTIN_MODULES:
            importlib.import_module(module)

    def get(self, name: str) -> HamiltonianSpec:
        key = name.lower()
        if key not in self._registry:
            self._load_builtins()
        if key not in self._registry:
            raise ValueError(f"Hamiltonian '{name}' is not registered. Available: {self.available()}")
        return self._registry[key]

    def available(self) -> Tuple[str, ...]:
        return tuple(self._registry)

    def describe(self, name: str) -> Dict[str, Any]:
        return self.get(name).to_dict()

    def __contains__(self, name: str) -> bool:
        return name.lower() in self._registry

    def create(self, config: "HamiltonianConfig", **overrides: Any) -> "QuadraticHamiltonian":
        """
        Build the Hamiltonian named by ``config.kind``.

        Parameters are merged in the order: registry defaults, then
        ``config.params``, then ``overrides``.
        """
        entry   = self.get(config.kind)
        params  = {**entry.default_params, **config.params, **overrides}
        return entry.builder(config, params)

HAMILTONIAN_REGISTRY = HamiltonianRegistry()

# ---------------------------------------------------------------------------
#! Configuration
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class HamiltonianConfig:
    """
    Blueprint of one Hamiltonian.

    Parameters
    ----------
    kind : str
        Registered builder name, e.g. ``"free_fermions"``.
    hilbert : HilbertSpace or HilbertConfig, optional
        A blueprint is turned into a :class:`HilbertSpace` when the model is built.
    ns : int, optional
        Single-particle dimension, taken from the lattice or the Hilbert space if omitted.
    lattice : Lattice, optional
    params : dict
        Model couplings, e.g. ``{"t": 1.0, "seed": 5}``.
    dtype : optional
        Matrix dtype; the model decides when None.
    """

    kind    : str
    hilbert : Optional[Union[HilbertSpace, HilbertConfig]]  = None
    ns      : Optional[int]                                 = None
    lattice : Optional["Lattice"]                           = None
    params  : Dict[str, Any]                                = field(default_factory=dict)
    dtype   : Optional[Any]                                 = None

    def with_override(self, **updates: Any) -> "HamiltonianConfig":
        return replace(self, **updates)

    def resolve_ns(self) -> Optional[int]:
        if self.ns is not None:
            return self.ns
        if self.lattice is not None:
            return self.lattice.ns
        if isinstance(self.hilbert, HilbertSpace):
            return self.hilbert.ns
        if isinstance(self.hilbert, HilbertConfig):
            return self.hilbert.resolve_ns()
        return None

    def resolve_hilbert(self) -> Optional[HilbertSpace]:
        if self.hilbert is None or isinstance(self.hilbert, HilbertSpace):
            return self.hilbert
        if isinstance(self.hilbert, HilbertConfig):
            return HilbertSpace.from_config(self.hilbert)
        raise TypeError(f"Unsupported hilbert specification: {type(self.hilbert)!r}")

    def to_builder_kwargs(self, extra: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        ''' Constructor arguments common to all quadratic models, updated with ``extra`` '''
        kwargs: Dict[str, Any] = {"ns": self.resolve_ns(), "lattice": self.lattice}
        hilbert = self.resolve_hilbert()
        if hilbert is not None:
            kwargs["hilbert_space"] = hilbert
            kwargs["lattice"]       = kwargs["lattice"] or hilbert.lattice
        if self.dtype is not None:
            kwargs["dtype"] = self.dtype
        kwargs.update(extra or {})
        return kwargs

# ---------------------------------------------------------------------------

def register_hamiltonian(name: str, *, builder: Builder, **metadata: Any) -> HamiltonianSpec:
    ''' Register in the global registry; ``metadata`` is description, tags and default_params '''
    return HAMILTONIAN_REGISTRY.register(name, builder, **metadata)

def class_builder(cls) -> Builder:
    ''' Builder calling ``cls`` with the config arguments and the merged parameters '''
    def _build(config: HamiltonianConfig, params: Dict[str, Any]):
        kwargs = config.to_builder_kwargs(params)
        if all(kwargs.get(k) is None for k in ("ns", "lattice", "hilbert_space")):
            raise ValueError(f"Hamiltonian '{config.kind}' requires 'ns', a lattice or a Hilbert space.")
        return cls(**kwargs)
    return _build

__all__ = [
    "HamiltonianSpec",
    "HamiltonianRegistry",
    "HAMILTONIAN_REGISTRY",
    "HamiltonianConfig",
    "register_hamiltonian",
    "class_builder",
]

# ---------------------------------------------------------------------------
#! EOF
# ---------------------------------------------------------------------------
