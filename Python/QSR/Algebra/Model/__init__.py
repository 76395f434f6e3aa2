"""
QSR Model Module
================

Quadratic model implementations and the parameters selecting them.

Submodules:
-----------
- Noninteracting : free-fermion and random-matrix models
- model_params   : model family enum and realization bookkeeping

Author: Maksymilian Kliczkowski
Email: maksymilian.kliczkowski@pwr.edu.pl
"""

from . import Noninteracting as nintr
from .model_params import ModelType, ModelParams

__all__ = ["nintr", "choose_model", "ModelType", "ModelParams"]


def choose_model(model_name, **kwargs):
    """
    Factory function to choose a quantum model by name or :class:`ModelType`.

    Args:
        model_name (str | ModelType):
            Type of model (e.g. "syk2", "aubry_andre", "free_fermions")
        **kwargs:
            Parameters for the model constructor (ns, lattice, seed, etc.).
    Returns:
        QuadraticHamiltonian: An instance of the desired model.
    """
    if isinstance(model_name, ModelType):
        model_name = model_name.value
    return nintr.choose_model(model_name, **kwargs)
