"""
Common utilities shared across QSR: logging, bit manipulation of basis states and random matrices.
"""

from .flog import Logger, get_global_logger
from .binary import popcount, check_bit, flip_all, reverse_bits, permute_sites, int2binstr, fixed_weight_states
from .ran_wrapper import RMT, random_matrix, handle_rng

__all__ = [
    "Logger",
    "get_global_logger",
    "popcount",
    "check_bit",
    "flip_all",
    "reverse_bits",
    "int2binstr",
    "permute_sites",
    "fixed_weight_states",
    "RMT",
    "random_matrix",
    "handle_rng",
]
