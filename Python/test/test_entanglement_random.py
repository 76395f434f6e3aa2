"""
Tests of the free-fermion entanglement helpers and the random matrix ensembles.

----------------------------------------------------
File    : test/test_entanglement_random.py
Author  : Maksymilian Kliczkowski
----------------------------------------------------
"""

import  pytest
import  numpy as np

from QSR.Algebra.Properties import contiguous, correlation_matrix, occupations, entropy_from_correlation, entanglement_entropy
from QSR.Algebra.Properties import slater_state, entropy_from_state, random_coefficients, mixed_state, gamma_entropies
from QSR.common.ran_wrapper import RMT, random_matrix, handle_rng

# =============================================================================
# Entanglement
# =============================================================================

def _ring_orbitals(ns: int) -> np.ndarray:
    h = np.zeros((ns, ns))
    for i in range(ns):
        h[i, (i + 1) % ns] = h[(i + 1) % ns, i] = -1.0
    return np.linalg.eigh(h)[1]

class TestEntanglement:

    def test_contiguous(self):
        np.testing.assert_array_equal(contiguous(6, 3), [0, 1, 2])
        np.testing.assert_array_equal(contiguous(6, 3, start=4), [0, 4, 5])

    def test_correlation_matrix_is_projector(self):
        W   = _ring_orbitals(6)
        C   = correlation_matrix(W, [0, 1, 2])
        np.testing.assert_allclose(C @ C, C, atol=1e-12)
        assert np.trace(C) == pytest.approx(3.0)
        mask = np.array([True, True, True, False, False, False])
        np.testing.assert_allclose(correlation_matrix(W, mask), C)

    def test_occupations(self):
        W   = _ring_orbitals(6)
        n   = occupations(W, [0, 1, 2])
        np.testing.assert_allclose(n, np.real(np.diag(correlation_matrix(W, [0, 1, 2]))))
        assert n.sum() == pytest.approx(3.0)
        np.testing.assert_allclose(occupations(np.eye(4), [1, 3]), [0.0, 1.0, 0.0, 1.0])

    def test_product_state_has_no_entanglement(self):
        ''' localized orbitals give a product state '''
        W = np.eye(6)
        assert entanglement_entropy(W, [0, 1, 2], 3) == pytest.approx(0.0, abs=1e-10)

    def test_trivial_bipartitions(self):
        W = _ring_orbitals(6)
        assert entanglement_entropy(W, [0, 1, 2], 0) == 0.0
        assert entanglement_entropy(W, [0, 1, 2], 6) == 0.0
        with pytest.raises(ValueError):
            entanglement_entropy(W, [0, 1, 2], 7)
        with pytest.raises(ValueError):
            entanglement_entropy(W, [0, 1, 2], -1)

    def test_half_chain_entropy(self):
        W = _ring_orbitals(8)
        s = entanglement_entropy(W, [0, 1, 2], 4)
        assert 0.0 < s <= 4 * np.log(2.0)

    def test_single_mode(self):
        ''' one particle shared equally between two sites: S = log 2 '''
        W = np.array([[1.0, 1.0], [1.0, -1.0]]) / np.sqrt(2.0)
        assert entanglement_entropy(W, [0], 1) == pytest.approx(np.log(2.0))
        assert entanglement_entropy(W, [0], 1, q=2.0) == pytest.approx(np.log(2.0))

    def test_renyi_bounded_by_von_neumann(self):
        W       = _ring_orbitals(8)
        corr    = correlation_matrix(W, [0, 1, 2, 3], sites=contiguous(8, 4))
        s1      = entropy_from_correlation(corr)
        s2      = entropy_from_correlation(corr, q=2.0)
        assert s2 <= s1 + 1e-12

    def test_orbital_out_of_range(self):
        with pytest.raises(IndexError):
            correlation_matrix(np.eye(3), [3])

# =============================================================================
# Superpositions of Slater determinants
# =============================================================================

class TestMixedStates:

    def test_slater_state_matches_correlation_entropy(self):
        W   = _ring_orbitals(6)
        psi = slater_state(W, [0, 1, 2])
        assert np.linalg.norm(psi) == pytest.approx(1.0)
        assert np.count_nonzero(np.abs(psi) > 1e-12) <= 20
        for la in range(7):
            assert entropy_from_state(psi, la) == pytest.approx(entanglement_entropy(W, [0, 1, 2], la), abs=1e-9)
            assert entropy_from_state(psi, la, q=2.0) == pytest.approx(entanglement_entropy(W, [0, 1, 2], la, q=2.0), abs=1e-9)

    def test_slater_state_site_order(self):
        ''' a particle on site 0 sits in the most significant bit '''
        psi = slater_state(np.eye(3), [0])
        assert psi[0b100] == pytest.approx(1.0)
        assert slater_state(np.eye(3), [])[0] == 1.0
        psi = slater_state(np.eye(3), [0, 2])
        assert abs(psi[0b101]) == pytest.approx(1.0)

    def test_cat_state_is_not_gaussian(self):
        ''' (|1100> + |0011>)/sqrt2 carries log 2, two Gaussian halves would carry 2 log 2 '''
        psi = mixed_state(np.eye(4), [[0, 1], [2, 3]], np.array([1.0, 1.0]))
        assert np.linalg.norm(psi) == pytest.approx(1.0)
        assert entropy_from_state(psi, 2) == pytest.approx(np.log(2.0))
        assert entropy_from_state(psi, 1) == pytest.approx(np.log(2.0))
        with pytest.raises(ValueError):
            mixed_state(np.eye(4), [[0, 1]], np.array([1.0, 1.0]))

    def test_entropy_from_state_validation(self):
        with pytest.raises(ValueError):
            entropy_from_state(np.ones(6), 1)
        with pytest.raises(ValueError):
            entropy_from_state(np.ones(8) / np.sqrt(8), 4)

    def test_random_coefficients(self):
        rng = handle_rng(3)
        c   = random_coefficients(5, rng)
        assert np.iscomplexobj(c) and np.linalg.norm(c) == pytest.approx(1.0)
        r   = random_coefficients(5, rng, real=True)
        assert not np.iscomplexobj(r) and np.linalg.norm(r) == pytest.approx(1.0)

    def test_gamma_one_is_the_slater_entropy(self):
        W       = _ring_orbitals(6)
        pool    = [[0, 1, 2], [0, 1, 3], [1, 2, 4]]
        ref     = {entanglement_entropy(W, occ, 3) for occ in pool}
        s       = gamma_entropies(W, pool, 3, gamma=1, n_real=10, rng=0)
        assert s.shape == (10,)
        assert all(min(abs(x - y) for y in ref) < 1e-10 for x in s)

    def test_gamma_mixing(self):
        W       = _ring_orbitals(6)
        pool    = [[0, 1, 2], [0, 1, 3], [1, 2, 4], [0, 2, 5]]
        a       = gamma_entropies(W, pool, 3, gamma=3, n_real=6, rng=11)
        b       = gamma_entropies(W, pool, 3, gamma=3, n_real=6, rng=11)
        np.testing.assert_array_equal(a, b)
        assert np.all(a >= 0.0) and np.all(a <= 3 * np.log(2.0) + 1e-12)
        assert np.all(gamma_entropies(W, pool, 3, gamma=2, n_real=4, rng=1, real=True) >= 0.0)

    def test_gamma_out_of_range(self):
        W = _ring_orbitals(4)
        with pytest.raises(ValueError):
            gamma_entropies(W, [[0, 1]], 2, gamma=2)
        with pytest.raises(ValueError):
            gamma_entropies(W, [[0, 1]], 2, gamma=0)
        with pytest.raises(ValueError):
            gamma_entropies(W, [[0, 1]], 2, n_real=0)

# =============================================================================
# Random matrices
# =============================================================================

class TestRandomMatrices:

    def test_seeded_draws(self):
        a = random_matrix(5, RMT.GOE, seed=17)
        b = random_matrix(5, "goe", seed=17)
        np.testing.assert_array_equal(a, b)
        np.testing.assert_allclose(a, a.T)

    def test_gue_is_hermitian(self):
        m = random_matrix((5, 5), RMT.GUE, seed=2)
        assert m.dtype == np.complex128
        np.testing.assert_allclose(m, m.conj().T)

    @pytest.mark.parametrize("typek", [RMT.CUE, RMT.COE])
    def test_circular_ensembles_are_unitary(self, typek):
        u = random_matrix(6, typek, seed=9)
        np.testing.assert_allclose(u.conj().T @ u, np.eye(6), atol=1e-10)

    def test_coe_is_symmetric(self):
        u = random_matrix(6, RMT.COE, seed=9)
        np.testing.assert_allclose(u, u.T, atol=1e-12)

    def test_invalid_requests(self):
        with pytest.raises(ValueError):
            random_matrix((3, 4))
        with pytest.raises(ValueError):
            random_matrix(3, RMT.GUE, dtype=np.float64)
        with pytest.raises(ValueError):
            RMT.from_name("wishart")

    def test_handle_rng(self):
        rng = np.random.default_rng(0)
        assert handle_rng(rng) is rng
        assert handle_rng(5).standard_normal() == np.random.default_rng(5).standard_normal()
        assert isinstance(handle_rng(None), np.random.Generator)

#! End of test/test_entanglement_random.py
