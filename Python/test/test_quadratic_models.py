"""
Tests of the quadratic models: random-matrix models (SYK2, PLRB, RP) and
the particle-conserving chains (free fermions, Aubry-Andre).

----------------------------------------------------
File    : test/test_quadratic_models.py
Author  : Maksymilian Kliczkowski
----------------------------------------------------
"""

import  pytest
import  numpy as np

from QSR.Algebra.Model                              import choose_model, ModelParams, ModelType
from QSR.Algebra.Model.Noninteracting               import available_models
from QSR.Algebra.Model.Noninteracting.syk           import SYK2
from QSR.Algebra.Model.Noninteracting.plrb          import PowerLawRandomBanded, plrb_envelope
from QSR.Algebra.Model.Noninteracting.rpm           import RosenzweigPorter
from QSR.Algebra.Model.Noninteracting.Conserving    import FreeFermions, AubryAndre
from QSR.Algebra.hamil_quadratic                    import HamiltonianState
from QSR.lattices.lattice                           import ChainLattice

RANDOM_MODELS = [
    (SYK2,                  dict()),
    (PowerLawRandomBanded,  dict(a=1.2, b=2.0)),
    (RosenzweigPorter,      dict(g=1.5)),
]

# =============================================================================
# Random models
# =============================================================================

class TestRandomModels:

    @pytest.mark.parametrize("cls, params", RANDOM_MODELS)
    def test_seeded_matrices_are_identical(self, cls, params):
        ''' the same seed gives the same matrix, bit for bit '''
        a = cls(ns=8, seed=123, **params)
        b = cls(ns=8, seed=123, **params)
        a.build()
        b.build()
        np.testing.assert_array_equal(a.hamil, b.hamil)
        c = cls(ns=8, seed=124, **params)
        c.build()
        assert not np.array_equal(a.hamil, c.hamil)

    @pytest.mark.parametrize("cls, params", RANDOM_MODELS)
    def test_rebuild_reproduces_matrix(self, cls, params):
        ham = cls(ns=6, seed=7, **params)
        ham.build()
        first = ham.hamil.copy()
        ham.build(force=True)
        np.testing.assert_array_equal(ham.hamil, first)

    @pytest.mark.parametrize("cls, params", RANDOM_MODELS)
    def test_spectrum(self, cls, params):
        ham = cls(ns=10, seed=1, **params)
        ham.build()
        ham.diagonalize()
        assert ham.state == HamiltonianState.DIAGONALIZED
        assert ham.eig_val.shape == (10,)
        assert np.all(np.diff(ham.eig_val) >= 0)
        np.testing.assert_allclose(ham.hamil, ham.hamil.T)

    def test_syk2_scaling(self):
        ''' the 1/sqrt(Ns) scaling keeps the spectrum of order one '''
        ham = SYK2(ns=200, seed=3)
        ham.build()
        ham.diagonalize()
        assert 1.0 < ham.get_bandwidth() < 4.0

    def test_syk2_complex(self):
        real = SYK2(ns=6, seed=5)
        cpx  = SYK2(ns=6, seed=5, dtype=np.complex128)
        real.build()
        cpx.build()
        assert cpx.hamil.dtype == np.complex128
        np.testing.assert_allclose(cpx.hamil.real, real.hamil)
        np.testing.assert_allclose(cpx.hamil.imag, 0.0)

    def test_syk2_gue(self):
        ham = SYK2(ns=6, seed=5, dtype=np.complex128, ensemble="gue")
        ham.build()
        np.testing.assert_allclose(ham.hamil, ham.hamil.conj().T)
        assert np.any(np.abs(ham.hamil.imag) > 0)
        assert ham.info() == "_SYK2,Ns=6,BC=PBC,ens=GUE"
        with pytest.raises(ValueError):
            SYK2(ns=6, ensemble="gue")
        with pytest.raises(ValueError):
            SYK2(ns=6, ensemble="cue", dtype=np.complex128)

    def test_syk2_rejects_terms(self):
        ham = SYK2(ns=4, seed=1)
        ham.init()
        with pytest.raises(NotImplementedError):
            ham.add_hopping(0, 1, 1.0)

    def test_plrb_envelope(self):
        env = plrb_envelope(5, a=1.0, b=1.0)
        np.testing.assert_allclose(np.diag(env), 1.0)
        assert env[0, 1] == pytest.approx(1.0 / np.sqrt(2.0))
        assert env[0, 4] < env[0, 1]
        with pytest.raises(ValueError):
            PowerLawRandomBanded(ns=5, b=0.0)

    def test_rpm_diagonal_dominates(self):
        ''' large g suppresses the off-diagonal part as Ns^(-g/2) '''
        ham = RosenzweigPorter(ns=64, g=4.0, seed=11)
        ham.build()
        off = ham.hamil - np.diag(np.diag(ham.hamil))
        assert np.max(np.abs(off)) < 0.01

    def test_info_strings(self):
        assert SYK2(ns=8).info() == "_SYK2,Ns=8,BC=PBC"
        assert SYK2(ns=8).info(skip=["BC"]) == "_SYK2,Ns=8"
        assert PowerLawRandomBanded(ns=8, a=1.0, b=2.0).info() == "_PLRB,Ns=8,a=1,b=2"
        assert RosenzweigPorter(ns=8, g=1.5).info() == "_RP,Ns=8,g=1.5"

    def test_info_keeps_every_digit(self):
        ''' nearby couplings must not share a file name '''
        a = FreeFermions(ns=6, t=1.00001).info()
        b = FreeFermions(ns=6, t=1.00002).info()
        assert a != b
        assert a == "_FF,Ns=6,t=1.00001,t2=0,BC=PBC"
        assert RosenzweigPorter(ns=8, g=0.1 + 0.2).info() == "_RP,Ns=8,g=0.30000000000000004"

    def test_info_precision(self):
        ham = FreeFermions(ns=6, t=1.00001)
        assert ham.info(prec=3) == "_FF,Ns=6,t=1,t2=0,BC=PBC"
        assert RosenzweigPorter(ns=8, g=1.23456).info(prec=2) == "_RP,Ns=8,g=1.2"

# =============================================================================
# Particle-conserving chains
# =============================================================================

class TestConservingChains:

    @pytest.mark.parametrize("ns, t, t2", [
        (2, 1.0, 0.0), (2, 1.0, 0.4), (3, 1.0, 0.5), (4, 1.0, 0.3),
        (5, 1.0, 0.0), (6, 1.0, 0.3), (7, 0.7, -0.2),
    ])
    def test_free_fermions_analytic_spectrum(self, ns, t, t2):
        ham = FreeFermions(ns=ns, t=t, t2=t2)
        ham.build()
        ham.diagonalize()
        eig_val, eig_vec = ham.analytic_spectrum()
        np.testing.assert_allclose(ham.eig_val, eig_val, atol=1e-10)
        np.testing.assert_allclose(ham.hamil @ eig_vec, eig_vec * eig_val, atol=1e-10)

    def test_short_rings_accumulate_bonds(self):
        ''' coinciding bonds on short rings add up instead of overwriting '''
        two = FreeFermions(ns=2, t=1.0)
        two.build()
        np.testing.assert_allclose(two.hamil, [[0.0, -2.0], [-2.0, 0.0]])
        three = FreeFermions(ns=3, t=1.0, t2=0.5)
        three.build()
        assert three.hamil[0, 1] == pytest.approx(-1.5)
        three.diagonalize()
        np.testing.assert_allclose(three.eig_val, [-3.0, 1.5, 1.5], atol=1e-10)
        three.build(force=True)
        assert three.hamil[0, 1] == pytest.approx(-1.5)

    def test_aubry_andre_short_ring(self):
        aa = AubryAndre(ns=2, J=1.0, lmbd=0.0)
        aa.build()
        assert aa.hamil[0, 1] == pytest.approx(-2.0)

    def test_free_fermions_offset(self):
        ham = FreeFermions(ns=5, constant_offset=1.5)
        ham.build()
        ham.diagonalize()
        np.testing.assert_allclose(ham.eig_val, ham.analytic_spectrum()[0], atol=1e-10)

    def test_free_fermions_open_chain(self):
        ham = FreeFermions(lattice=ChainLattice(lx=5, bc="obc"))
        assert ham.bc == "OBC"
        assert not ham.has_analytic_spectrum
        with pytest.raises(ValueError):
            ham.analytic_spectrum()
        ham.build()
        assert ham.hamil[0, 4] == 0.0
        ham.diagonalize()
        k = np.arange(1, 6)
        np.testing.assert_allclose(ham.eig_val, np.sort(-2.0 * np.cos(np.pi * k / 6)), atol=1e-10)

    def test_free_fermions_info(self):
        assert FreeFermions(ns=6, t=1.0, t2=0.5).info() == "_FF,Ns=6,t=1,t2=0.5,BC=PBC"

    def test_aubry_andre_potential(self):
        ham = AubryAndre(ns=8, J=1.0, lmbd=2.5, phi=0.0, bc="obc")
        ham.build()
        np.testing.assert_allclose(np.diag(ham.hamil), ham.onsite_potential())
        assert ham.hamil[0, 1] == -1.0
        assert ham.hamil[0, 7] == 0.0

    def test_aubry_andre_without_potential_is_free(self):
        aa = AubryAndre(ns=7, J=1.0, lmbd=0.0)
        ff = FreeFermions(ns=7, t=1.0)
        aa.build()
        ff.build()
        np.testing.assert_allclose(aa.hamil, ff.hamil)

    def test_aubry_andre_localization(self):
        ''' eigenstates are localized deep in the localized phase '''
        ext = AubryAndre(ns=89, lmbd=0.5, bc="obc")
        loc = AubryAndre(ns=89, lmbd=4.0, bc="obc")
        ipr = []
        for ham in (ext, loc):
            ham.build()
            ham.diagonalize()
            ipr.append(np.mean(np.sum(np.abs(ham.eig_vec) ** 4, axis=0)))
        assert ipr[1] > 5 * ipr[0]

# =============================================================================
# Model selection
# =============================================================================

class TestModelSelection:

    def test_choose_model(self):
        assert isinstance(choose_model("syk2", ns=4), SYK2)
        assert isinstance(choose_model("aa", ns=4), AubryAndre)
        assert isinstance(choose_model(ModelType.RPM, ns=4), RosenzweigPorter)
        assert isinstance(choose_model("Free-Fermions", ns=4), FreeFermions)
        assert "plrb" in available_models()
        with pytest.raises(ValueError):
            choose_model("hubbard", ns=4)

    def test_model_type_names(self):
        assert ModelType.from_name("SYK2") is ModelType.SYK2
        assert ModelType.from_name("aubry-andre") is ModelType.AUBRY_ANDRE
        assert ModelType.SYK2.is_random and not ModelType.FREE_FERMIONS.is_random
        with pytest.raises(ValueError):
            ModelType.from_name("unknown")

    def test_model_params_complex(self):
        assert ModelParams(ModelType.FREE_FERMIONS).check_complex()
        assert not ModelParams(ModelType.SYK2).check_complex()
        assert ModelParams("syk2", params={"ensemble": "gue"}).check_complex()
        assert not ModelParams(ModelType.AUBRY_ANDRE).check_complex()

    def test_model_params_realizations(self):
        mp = ModelParams(ModelType.PLRB, ran_seed=10, ran_n=(3, 5))
        assert mp.get_ran_real(0) == 3
        assert mp.get_ran_real(1) == 5
        assert mp.get_ran_real(7) == 5
        assert mp.get_ran_real() == 5
        assert mp.seed_for(2) == 12
        models = list(mp.iter_realizations(0, ns=6))
        assert len(models) == 3
        assert [m.seed for m in models] == [10, 11, 12]
        with pytest.raises(ValueError):
            ModelParams(ModelType.PLRB, ran_n=(0,))

    def test_model_params_create(self):
        mp  = ModelParams(ModelType.SYK2, ran_seed=4)
        a   = mp.create(ns=6)
        b   = mp.create(ns=6)
        a.build()
        b.build()
        np.testing.assert_array_equal(a.hamil, b.hamil)
        ff  = ModelParams(ModelType.FREE_FERMIONS, params={"t": 0.5}).create(ns=5)
        assert ff.iscpx
        assert ff.t == 0.5
        assert len(list(ModelParams(ModelType.FREE_FERMIONS, ran_n=4).iter_realizations(ns=5))) == 1

    def test_model_params_dict(self):
        mp = ModelParams(ModelType.RPM, ran_seed=1, ran_n=(2,), params={"g": 1.2})
        assert ModelParams.from_dict(mp.to_dict()) == mp
        mp = ModelParams(ModelType.PLRB, params={"a": 1.0}, q_gamma=3, q_manifold=True, q_shuffle=False, plrb_mb=True)
        back = ModelParams.from_dict(mp.to_dict())
        assert back == mp
        assert back.q_gamma == 3 and back.plrb_mb and not back.q_shuffle
        flat = ModelParams.from_dict({"typ": "rpm", "g": 0.5, "rp_be_real": False})
        assert flat.params == {"g": 0.5}
        assert not flat.rp_be_real

    def test_mixing_options_are_positive(self):
        with pytest.raises(ValueError):
            ModelParams(ModelType.SYK2, q_gamma=0)
        with pytest.raises(ValueError):
            ModelParams(ModelType.SYK2, q_realization_num=0)

    def test_complex_rosenzweig_porter(self):
        mp  = ModelParams(ModelType.RPM, ran_seed=2, params={"g": 1.0}, rp_be_real=False)
        assert mp.check_complex()
        ham = mp.create(ns=6)
        ham.build()
        assert ham.iscpx and not ham.real
        assert np.max(np.abs(ham.hamil.imag)) > 0.0
        np.testing.assert_allclose(ham.hamil, ham.hamil.conj().T)
        assert ham.info() == "_RP,Ns=6,g=1,cpx=1"
        with pytest.raises(ValueError):
            RosenzweigPorter(ns=4, real=False, dtype=np.float64)

    def test_many_body_matrix_size(self):
        assert ModelParams(ModelType.PLRB, params={"a": 1.0}, plrb_mb=True).create(ns=3).ns == 8
        assert ModelParams(ModelType.PLRB, params={"a": 1.0}).create(ns=3).ns == 3
        assert ModelParams(ModelType.RPM, rp_single_particle=False).create(ns=4).ns == 16
        assert ModelParams(ModelType.RPM).create(ns=4).ns == 4
        assert ModelParams(ModelType.SYK2, plrb_mb=True).matrix_size(5) == 5
        with pytest.raises(ValueError):
            ModelParams(ModelType.PLRB, plrb_mb=True).create()

# =============================================================================
# Mixed Slater determinants
# =============================================================================

class TestMixedEntropies:

    def test_degenerate_manifolds(self):
        ''' eps = -2, 0, 0, 2 at Ns = 4: three pair energies, each twice '''
        ham = FreeFermions(ns=4, t=1.0)
        ham.build()
        ham.diagonalize()
        groups = ham.degenerate_manifolds(n_particles=2)
        assert [len(g) for g in groups] == [2, 2, 2]
        for g in groups:
            energies = [ham.many_body_energy(occ) for occ in g]
            assert max(energies) - min(energies) < 1e-10

    def test_gamma_one_manifold(self):
        ham = FreeFermions(ns=6, t=1.0)
        ham.build()
        ham.diagonalize()
        ref = {ham.entanglement_entropy(occ, 3) for g in ham.degenerate_manifolds(3) for occ in g}
        s   = ham.mixed_entropies(3, gamma=1, n_particles=3, n_real=5, manifold=True, rng=2)
        assert all(min(abs(x - y) for y in ref) < 1e-10 for x in s)

    def test_model_params_mixing(self):
        mp  = ModelParams(ModelType.FREE_FERMIONS, q_gamma=2, q_manifold=True, q_realization_num=4)
        ham = mp.create(ns=6)
        ham.build()
        ham.diagonalize()
        a   = mp.mixed_entropies(ham, la=3, n_particles=3, rng=7)
        b   = mp.mixed_entropies(ham, la=3, n_particles=3, rng=7)
        assert a.shape == (4,)
        np.testing.assert_array_equal(a, b)
        assert np.all(a >= 0.0) and np.all(a <= 3 * np.log(2.0) + 1e-12)

    def test_pool_is_cut(self):
        ham = SYK2(ns=6, seed=1)
        ham.build()
        ham.diagonalize()
        s = ham.mixed_entropies(2, gamma=2, n_particles=2, n_real=3, n_comb=2, shuffle=False, rng=0)
        assert s.shape == (3,)
        with pytest.raises(ValueError):
            ham.mixed_entropies(2, gamma=3, n_particles=2, n_comb=2)
        with pytest.raises(ValueError):
            ham.mixed_entropies(2, gamma=5, n_particles=2, manifold=True)

    def test_needs_diagonalization(self):
        ham = SYK2(ns=4, seed=1)
        ham.build()
        with pytest.raises(RuntimeError):
            ham.mixed_entropies(2, gamma=1)

#! End of test/test_quadratic_models.py
