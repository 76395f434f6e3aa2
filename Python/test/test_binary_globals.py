"""
Tests of the bit helpers and the global (U(1)) symmetry filter.

--------------
File    : test/test_binary_globals.py
Author  : Maksymilian Kliczkowski
--------------
"""

import  numpy as np
import  pytest
from    math import comb

from QSR.common.binary  import popcount, check_bit, flip_all, reverse_bits, permute_sites, int2binstr, fixed_weight_states
from QSR.Algebra.globals import GlobalSymmetry, GlobalSymmetries, get_u1_sym, u1_sym, check_all, parse_global_syms
from QSR.lattices.lattice import ChainLattice, SquareLattice

########################################################################
#! BINARY
########################################################################

NS = 4

def test_popcount_exhaustive():
    ''' popcount agrees with the Python bit count on every state '''
    for state in range(2 ** NS):
        assert popcount(state) == bin(state).count("1")

def test_check_bit_is_msb_first():
    ''' site 0 is the most significant bit '''
    assert check_bit(0b1000, 0, NS) == 1
    assert check_bit(0b1000, 3, NS) == 0
    assert check_bit(0b0001, 3, NS) == 1
    assert int2binstr(0b0101, NS) == "0101"

def test_reverse_and_flip_are_involutions():
    for state in range(2 ** NS):
        assert reverse_bits(reverse_bits(state, NS), NS) == state
        assert flip_all(flip_all(state, NS), NS) == state
        assert popcount(flip_all(state, NS)) == NS - popcount(state)
    assert reverse_bits(0b0001, NS) == 0b1000
    assert reverse_bits(0b0011, NS) == 0b1100

def test_permute_sites_shift():
    ''' a cyclic shift moves site i to i+1 '''
    perm = np.array([1, 2, 3, 0], dtype=np.int64)
    assert permute_sites(0b1000, perm, NS) == 0b0100
    assert permute_sites(0b0001, perm, NS) == 0b1000
    for state in range(2 ** NS):
        assert popcount(permute_sites(state, perm, NS)) == popcount(state)

@pytest.mark.parametrize("n", range(NS + 1))
def test_fixed_weight_states(n):
    states = fixed_weight_states(NS, n)
    assert len(states) == comb(NS, n)
    assert np.all(np.diff(states) > 0)
    assert all(popcount(int(s)) == n for s in states)

def test_fixed_weight_states_out_of_range_is_empty():
    assert len(fixed_weight_states(NS, -1)) == 0
    assert len(fixed_weight_states(NS, NS + 1)) == 0

########################################################################
#! LATTICES
########################################################################

def test_chain_neighbours():
    pbc = ChainLattice(lx=NS)
    obc = ChainLattice(lx=NS, bc="obc")
    assert sorted(pbc.get_nn(0)) == [1, NS - 1]
    assert obc.get_nn(0) == [1]
    assert len(pbc.bonds()) == NS
    assert obc.bonds() == [(0, 1), (1, 2), (2, 3)]

def test_square_coordinates():
    lat = SquareLattice(dim=2, lx=3, ly=2)
    assert lat.ns == 6
    assert lat.get_coordinates(4) == (1, 1, 0)
    assert lat.site_index(1, 1) == 4
    assert sorted(lat.get_nn(0)) == [1, 2, 3]
    with pytest.raises(IndexError):
        lat.get_coordinates(6)

########################################################################
#! GLOBAL SYMMETRIES
########################################################################

def test_u1_filter_exhaustive():
    ''' U(1) accepts exactly the states with N occupied sites '''
    for n in range(NS + 1):
        u1 = get_u1_sym(ns=NS, val=n)
        accepted = [s for s in range(2 ** NS) if u1(s)]
        assert len(accepted) == comb(NS, n)
        assert all(popcount(s) == n for s in accepted)

def test_u1_chaining_short_circuits():
    u1 = get_u1_sym(ns=NS, val=2)
    assert u1.check(0b0011, True)
    assert not u1.check(0b0011, False)
    assert check_all([u1, get_u1_sym(ns=NS, val=2)], 0b0101)
    assert not check_all([u1, get_u1_sym(ns=NS, val=1)], 0b0101)

def test_u1_value_semantics():
    a = get_u1_sym(ns=NS, val=2)
    b = get_u1_sym(ns=NS, val=2)
    c = get_u1_sym(ns=NS, val=3)
    assert a == b and hash(a) == hash(b)
    assert a != c
    assert len({a, b, c}) == 2
    assert GlobalSymmetry.from_dict(a.to_dict()) == a

def test_u1_empty_sector():
    assert get_u1_sym(ns=NS, val=NS + 1).is_empty_sector()
    assert get_u1_sym(ns=NS, val=-1).is_empty_sector()
    assert not get_u1_sym(ns=NS, val=0).is_empty_sector()

@pytest.mark.parametrize("val", [2.5, "2", None, True])
def test_u1_rejects_non_integer_values(val):
    with pytest.raises(ValueError):
        get_u1_sym(ns=NS, val=val)
    with pytest.raises(ValueError):
        parse_global_syms({"U1": val}, NS)

def test_u1_integral_float_is_accepted():
    u1 = get_u1_sym(ns=NS, val=2.0)
    assert u1.val == 2 and isinstance(u1.val, int)
    assert u1(0b0011)
    assert not u1_sym(0b0011, 2.5)

def test_u1_from_lattice():
    lat = ChainLattice(lx=6)
    u1  = get_u1_sym(lat=lat, val=3)
    assert u1.ns == 6
    with pytest.raises(ValueError):
        GlobalSymmetry(ns=4, val=2, lat=lat)

def test_custom_symmetry_requires_function():
    with pytest.raises(ValueError):
        GlobalSymmetry(ns=NS, val=0, kind=GlobalSymmetries.OTHER)
    even = GlobalSymmetry(ns=NS, val=0, fun=lambda s, v: popcount(s) % 2 == v, fun_name="even")
    assert even.kind == GlobalSymmetries.OTHER
    assert even.name == "even"
    assert even(0b0011) and not even(0b0001)
    sym = get_u1_sym(ns=NS, val=1)
    sym.set_fun(lambda s, v: check_bit(s, 0, NS) == v, name="first_site")
    assert sym.kind == GlobalSymmetries.OTHER and sym.name == "first_site"
    assert sym(0b1000) and not sym(0b0001)
    with pytest.raises(ValueError):
        sym.set_fun(42)

def test_parse_global_syms():
    syms = parse_global_syms({"U1": 2}, NS)
    assert syms == [get_u1_sym(ns=NS, val=2)]
    assert parse_global_syms(None, NS) == []
    with pytest.raises(ValueError):
        parse_global_syms({"unknown": 1}, NS)

#! End of test/test_binary_globals.py
