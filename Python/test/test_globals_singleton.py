"""
Tests for global singletons (logger, RNG) and for the injected logger
reaching the Hilbert space and Hamiltonian components.

These are lightweight runtime identity tests (no heavy numerical work) so
they should be fast and safe for CI.
"""

import io
from importlib import reload

import numpy as np

def test_logger_singleton_identity():
    ''' Test that get_logger() returns the same instance across multiple calls. '''
    from QSR.qsr_globals import get_logger
    from QSR.common.flog import get_global_logger
    log1    = get_logger()
    log2    = get_logger()
    assert log1 is log2, "get_logger() returned different instances (expected singleton)."
    assert log1 is get_global_logger()

def test_rng_identity_after_reseed():
    ''' reseeding gives a reproducible global generator '''
    from QSR.qsr_globals import reseed_all, get_numpy_rng, current_seed
    reseed_all(123)
    assert current_seed() == 123
    first = get_numpy_rng().standard_normal(3)
    reseed_all(123)
    np.testing.assert_array_equal(get_numpy_rng().standard_normal(3), first)

def test_reload_keeps_logger():
    ''' the logger lives in flog, reloading qsr_globals re-links to the same instance '''
    import QSR.qsr_globals as qg
    log1 = qg.get_logger()
    reload(qg)
    assert qg.get_logger() is log1

def _stream_logger(name: str):
    from QSR.common.flog import Logger
    stream  = io.StringIO()
    log     = Logger(name=name, level="debug", stream=stream)
    return log, stream

def test_injected_logger_hilbert():
    from QSR.Algebra.hilbert import HilbertSpace
    from QSR.Algebra.globals import get_u1_sym
    log, stream = _stream_logger("QSR.test.hilbert")
    HilbertSpace(ns=4, sym_gen={"ParityZ": 1}, global_syms=[get_u1_sym(ns=4, val=2)], logger=log)
    out = stream.getvalue()
    assert "[HilbertSpace]" in out
    assert "Cannot add ParityZ" in out
    assert "WARNING" in out

def test_injected_logger_hamiltonian():
    from QSR.Algebra.hamil_quadratic import QuadraticHamiltonian
    log, stream = _stream_logger("QSR.test.hamil")
    ham = QuadraticHamiltonian(ns=2, logger=log)
    ham.build(verbose=True)
    ham.diagonalize(verbose=True)
    out = stream.getvalue()
    assert "[Quadratic]" in out
    assert "Diagonalization completed" in out

def test_logger_levels_and_colors():
    from QSR.common.flog import Logger
    stream  = io.StringIO()
    log     = Logger(name="QSR.test.levels", level="warning", stream=stream, use_colors=True)
    log.info("hidden")
    log.warning("shown", lvl=1)
    log.set_level("error")
    log.warning("muted")
    out     = stream.getvalue()
    assert "hidden" not in out
    assert "muted" not in out
    assert "\t->" in out and "shown" in out
    assert log.colorize("x", "red") == "\033[31mx\033[0m"
    assert log.colorize("x", "unknown") == "x"

# ----------------------------------------------------------------------------------------------------
#! End of test_globals_singleton.py
# ----------------------------------------------------------------------------------------------------
