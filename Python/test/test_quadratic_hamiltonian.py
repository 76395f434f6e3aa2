"""
Tests for the QuadraticHamiltonian life cycle, terms and derived quantities.

Validates correctness of the quadratic hamiltonian implementation
against known small-system exact results.

----------------------------------------------------
File    : test/test_quadratic_hamiltonian.py
Author  : Maksymilian Kliczkowski
----------------------------------------------------
"""

import  pytest
import  numpy as np
from    math import comb

from QSR.Algebra.hamil_quadratic    import QuadraticHamiltonian, QuadraticTerm, HamiltonianState
from QSR.Algebra.hilbert            import HilbertSpace
from QSR.lattices.lattice           import ChainLattice

# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def tight_binding_4site():
    """Create a 4-site periodic tight-binding chain."""
    ham = QuadraticHamiltonian(ns=4)
    ham.init()
    t = -1.0
    for i in range(3):
        ham.add_hopping(i, i + 1, t)
    ham.add_hopping(3, 0, t)
    ham.hamiltonian()
    return ham

@pytest.fixture
def disordered_chain_6site():
    """Create a 6-site disordered open chain."""
    rng = np.random.default_rng(42)
    ham = QuadraticHamiltonian(ns=6)
    ham.init()
    for i in range(6):
        ham.add_onsite(i, rng.uniform(-0.5, 0.5))
    for i in range(5):
        ham.add_hopping(i, i + 1, -1.0)
    ham.hamiltonian()
    return ham

# =============================================================================
# Test: life cycle
# =============================================================================

class TestLifeCycle:

    def test_states(self):
        ham = QuadraticHamiltonian(ns=3)
        assert ham.state == HamiltonianState.UNINITIALIZED
        ham.init()
        assert ham.state == HamiltonianState.INITIALIZED
        np.testing.assert_array_equal(ham.hamil, np.zeros((3, 3)))
        ham.hamiltonian()
        assert ham.state == HamiltonianState.BUILT
        ham.diagonalize()
        assert ham.state == HamiltonianState.DIAGONALIZED
        assert ham.is_diagonalized

    def test_operations_out_of_order(self):
        ham = QuadraticHamiltonian(ns=3)
        with pytest.raises(RuntimeError):
            ham.hamil
        with pytest.raises(RuntimeError):
            ham.add_onsite(0, 1.0)
        with pytest.raises(RuntimeError):
            ham.hamiltonian()
        with pytest.raises(RuntimeError):
            ham.diagonalize()
        ham.init()
        with pytest.raises(RuntimeError):
            ham.diagonalize()
        with pytest.raises(RuntimeError):
            ham.eig_val
        with pytest.raises(RuntimeError):
            ham.many_body_energy([0])

    def test_build_and_rebuild_are_idempotent(self, tight_binding_4site):
        ham     = tight_binding_4site
        first   = ham.hamil.copy()
        ham.hamiltonian()
        np.testing.assert_array_equal(ham.hamil, first)
        ham.build(force=True)
        np.testing.assert_array_equal(ham.hamil, first)

    def test_build_skips_when_built(self, tight_binding_4site):
        ham = tight_binding_4site
        ham.diagonalize()
        ham.build()
        assert ham.state == HamiltonianState.DIAGONALIZED

    @pytest.mark.parametrize("kwargs", [dict(), dict(ns=0), dict(ns=-2), dict(ns=5, lattice=ChainLattice(lx=4))])
    def test_invalid_system(self, kwargs):
        with pytest.raises(ValueError):
            QuadraticHamiltonian(**kwargs)

    def test_size_from_lattice_and_hilbert(self):
        lat = ChainLattice(lx=5)
        assert QuadraticHamiltonian(lattice=lat).ns == 5
        ham = QuadraticHamiltonian(hilbert_space=HilbertSpace(lattice=lat))
        assert ham.ns == 5
        assert ham.lattice is lat

# =============================================================================
# Test: terms
# =============================================================================

class TestTerms:

    def test_hopping_is_hermitian(self):
        ham = QuadraticHamiltonian(ns=3, dtype=np.complex128)
        ham.init()
        ham.add_hopping(0, 1, 1.0 + 0.5j)
        assert ham._hamil_terms[0, 1] == 1.0 + 0.5j
        assert ham._hamil_terms[1, 0] == 1.0 - 0.5j
        ham.add_hopping(1, 1, 2.0)
        assert ham._hamil_terms[1, 1] == 2.0

    def test_remove_cancels(self):
        ham = QuadraticHamiltonian(ns=3)
        ham.init()
        ham.add_hopping(0, 2, -1.0)
        ham.add_hopping(0, 2, -1.0, remove=True)
        ham.hamiltonian()
        np.testing.assert_array_equal(ham.hamil, np.zeros((3, 3)))

    def test_term_validation(self):
        ham = QuadraticHamiltonian(ns=3)
        ham.init()
        with pytest.raises(ValueError):
            ham.add_term(QuadraticTerm.Hopping, (0,), 1.0)
        with pytest.raises(ValueError):
            ham.add_term(QuadraticTerm.Onsite, (0, 1), 1.0)
        with pytest.raises(IndexError):
            ham.add_onsite(3, 1.0)
        with pytest.raises(ValueError):
            ham.add_hopping(0, 1, 1.0j)

    def test_term_after_build_invalidates_spectrum(self, tight_binding_4site):
        ham = tight_binding_4site
        ham.diagonalize()
        ham.add_onsite(0, 0.3)
        assert ham.state == HamiltonianState.BUILT
        assert ham.hamil[0, 0] == pytest.approx(0.3)
        with pytest.raises(RuntimeError):
            ham.eig_val

    def test_init_keeps_terms_and_reset_clears_them(self, tight_binding_4site):
        ham = tight_binding_4site
        ham.init()
        ham.hamiltonian()
        assert ham.hamil[0, 1] == -1.0
        ham.reset_terms()
        np.testing.assert_array_equal(ham.hamil, np.zeros((4, 4)))

    def test_non_hermitian_matrix_is_rejected(self):
        ham = QuadraticHamiltonian.from_hermitian_matrix(np.array([[0.0, 1.0], [2.0, 0.0]]))
        with pytest.raises(ValueError):
            ham.hamiltonian()
        with pytest.raises(ValueError):
            ham.build(force=True)

    def test_non_finite_matrix_is_rejected(self):
        ham = QuadraticHamiltonian.from_hermitian_matrix(np.array([[np.nan, 0.0], [0.0, 1.0]]))
        with pytest.raises(ValueError):
            ham.hamiltonian()

# =============================================================================
# Test: spectrum
# =============================================================================

class TestSpectrum:

    def test_tight_binding_ring(self, tight_binding_4site):
        ''' eps_k = -2 cos(2 pi k / 4) '''
        ham = tight_binding_4site
        ham.diagonalize()
        np.testing.assert_allclose(ham.eig_val, [-2.0, 0.0, 0.0, 2.0], atol=1e-12)
        assert ham.get_bandwidth() == pytest.approx(4.0)
        assert ham.get_mean_lvl_spacing() == pytest.approx(4.0 / 3.0)
        assert ham.av_en == pytest.approx(0.0, abs=1e-12)
        assert ham.std_en == pytest.approx(np.sqrt(2.0))
        assert ham.min_en == pytest.approx(-2.0)
        assert ham.max_en == pytest.approx(2.0)

    def test_eigen_decomposition(self, disordered_chain_6site):
        ham = disordered_chain_6site
        ham.diagonalize()
        assert np.all(np.diff(ham.eig_val) >= 0)
        W = ham.eig_vec
        np.testing.assert_allclose(W.conj().T @ W, np.eye(6), atol=1e-10)
        np.testing.assert_allclose(ham.hamil @ W, W * ham.eig_val, atol=1e-10)

    def test_diagonalize_is_cached(self, disordered_chain_6site):
        ham = disordered_chain_6site
        ham.diagonalize()
        vals = ham.eig_val
        ham.diagonalize()
        assert ham.eig_val is vals
        ham.diagonalize(force=True)
        np.testing.assert_allclose(ham.eig_val, vals)

    def test_constant_offset(self):
        mat = np.array([[1.0, 0.5], [0.5, -1.0]])
        ham = QuadraticHamiltonian.from_hermitian_matrix(mat, constant=3.0)
        ham.hamiltonian()
        ham.diagonalize()
        np.testing.assert_allclose(ham.eig_val, np.linalg.eigvalsh(mat) + 3.0)
        assert ham.many_body_energy([]) == pytest.approx(3.0)
        assert ham.many_body_energy([0, 1]) == pytest.approx(np.trace(mat) + 3.0)

    def test_many_body_energies(self, tight_binding_4site):
        ham = tight_binding_4site
        ham.diagonalize()
        energies = ham.many_body_energies(2)
        assert len(energies) == comb(4, 2)
        assert min(energies.values()) == pytest.approx(-2.0)
        assert energies[0b1100] == pytest.approx(ham.eig_val[0] + ham.eig_val[1])
        assert ham.many_body_energies(0.5) == energies
        with pytest.raises(ValueError):
            ham.many_body_energies(5)
        with pytest.raises(IndexError):
            ham.many_body_energy([4])

    def test_entanglement_of_ground_state(self, tight_binding_4site):
        ham = tight_binding_4site
        ham.diagonalize()
        corr = ham.correlation_matrix([0, 1])
        np.testing.assert_allclose(np.trace(corr), 2.0)
        assert ham.entanglement_entropy([0, 1], 0) == 0.0
        assert ham.entanglement_entropy([0, 1], 1) > 0.0
        np.testing.assert_allclose(ham.occupations([0]), 0.25)

# =============================================================================
# Test: info
# =============================================================================

class TestInfo:

    def test_info_string(self):
        ham = QuadraticHamiltonian(ns=4)
        assert ham.info() == "_Quadratic,Ns=4,BC=PBC"
        assert ham.info(skip=["BC"]) == "_Quadratic,Ns=4"
        assert ham.info(skip=["Ns", "BC"], sep="/") == "/Quadratic"
        assert str(ham) == ham.info()

    def test_info_follows_lattice(self):
        ham = QuadraticHamiltonian(lattice=ChainLattice(lx=4, bc="obc"))
        assert ham.info() == "_Quadratic,Ns=4,BC=OBC"

#! End of test/test_quadratic_hamiltonian.py
