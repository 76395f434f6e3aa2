"""
Quadratic models without interactions.

- Conserving : particle-conserving chains (free fermions, Aubry-Andre)
- syk        : SYK2, the all-to-all random hopping model
- plrb       : power-law random banded matrices
- rpm        : Rosenzweig-Porter ensemble

Model classes are imported on first access, so importing the package does
not compile the numba kernels of every model.

----------------
File            : Algebra/Model/Noninteracting/__init__.py
Author          : Maksymilian Kliczkowski
----------------
"""

from    __future__ import annotations

import  importlib
from    typing import Dict, List, Tuple

# class name -> (module relative to this package, accepted aliases)
_MODELS: Dict[str, Tuple[str, Tuple[str, ...]]] = {
    'FreeFermions'          : ('.Conserving.free_fermions', ('free_fermions', 'ff')),
    'AubryAndre'            : ('.Conserving.aubry_andre',   ('aubry_andre', 'aa')),
    'SYK2'                  : ('.syk',                      ('syk2', 'syk')),
    'PowerLawRandomBanded'  : ('.plrb',                     ('plrb', 'power_law_random_banded')),
    'RosenzweigPorter'      : ('.rpm',                      ('rpm', 'rp', 'rosenzweig_porter')),
}

_ALIASES: Dict[str, str] = {alias: cls for cls, (_, aliases) in _MODELS.items() for alias in aliases}

__all__: List[str] = ['Conserving', 'syk', 'plrb', 'rpm', *_MODELS.keys(), 'choose_model', 'available_models']

def __getattr__(name: str):
    if name in _MODELS:
        module = importlib.import_module(_MODELS[name][0], __name__)
        return getattr(module, name)
    if name in ('Conserving', 'syk', 'plrb', 'rpm'):
        module          = importlib.import_module(f'.{name}', __name__)
        globals()[name] = module
        return module
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")

def available_models() -> List[str]:
    return list(_ALIASES.keys())

def choose_model(model_name: str, **kwargs):
    """
    Create a non-interacting model from its name.

    Args:
        model_name (str):
            Alias (``"ff"``, ``"syk2"``, ``"aubry-andre"``...) or class name.
        **kwargs:
            Forwarded to the model constructor.

    Returns:
        QuadraticHamiltonian: the model, not yet initialized.
    """
    key         = str(model_name).lower().replace(" ", "_").replace("-", "_")
    cls_name    = _ALIASES.get(key, model_name if model_name in _MODELS else None)
    if cls_name is None:
        raise ValueError(f"Unknown non-interacting model '{model_name}'. Available: {available_models()}")
    return __getattr__(cls_name)(**kwargs)

# ----------------------------------------------------------------------------
#! EOF
# ----------------------------------------------------------------------------
