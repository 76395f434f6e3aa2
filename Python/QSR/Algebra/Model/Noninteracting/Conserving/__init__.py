"""
Particle-conserving tight-binding models.

- free_fermions : nearest and next-nearest neighbour chain with an analytic spectrum
- aubry_andre   : quasiperiodic Aubry-Andre chain
"""

from .free_fermions import FreeFermions
from .aubry_andre import AubryAndre

__all__ = ["FreeFermions", "AubryAndre"]
