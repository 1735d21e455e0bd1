"""Tests for the rotor kinds and the ring/position signal transform."""

from __future__ import annotations

import pytest

from alphabet_and_permutation import UPPER, Alphabet, Permutation
from errors import AlphabetError, RotorConstructionError
from rotor_and_reflector import Rotor, RotorKind
from utilities import NAVAL_WHEELS, naval_catalog

AZ = Alphabet(UPPER)


def perm_of(name: str) -> Permutation:
    return Permutation(NAVAL_WHEELS[name][1], AZ)


def test_reflector_requires_derangement():
    with pytest.raises(RotorConstructionError):
        Rotor.reflector("X", Permutation("(AB)", Alphabet("ABC")))

    refl = Rotor.reflector("B", perm_of("B"))
    assert refl.reflecting()
    assert not refl.rotates()
    assert not refl.at_notch()
    assert refl.notches == frozenset()


def test_reflector_has_one_position():
    refl = Rotor.reflector("B", perm_of("B"))
    refl.set(0)
    refl.set_symbol("A")
    refl.set_ring("A")
    with pytest.raises(RotorConstructionError):
        refl.set(1)
    with pytest.raises(RotorConstructionError):
        refl.set_symbol("B")
    with pytest.raises(RotorConstructionError):
        refl.set_ring("C")
    assert refl.setting() == 0


def test_reflector_forward_is_plain_permutation():
    refl = Rotor.reflector("B", perm_of("B"))
    for i in range(26):
        assert refl.forward(i) == refl.permutation.permute(i)


def test_fixed_rotor_never_moves():
    beta = Rotor.fixed("Beta", perm_of("Beta"))
    beta.set_symbol("C")
    beta.advance()
    assert beta.setting() == 2
    assert not beta.rotates()
    assert not beta.reflecting()
    assert not beta.at_notch()
    assert beta.kind is RotorKind.FIXED


def test_moving_rotor_notch_and_wrap():
    rotor = Rotor.moving("I", perm_of("I"), "Q")
    assert rotor.rotates()
    assert rotor.notches == frozenset({AZ.to_index("Q")})
    rotor.set_symbol("P")
    assert not rotor.at_notch()
    rotor.advance()
    assert rotor.setting() == AZ.to_index("Q")
    assert rotor.at_notch()
    rotor.set(25)
    rotor.advance()
    assert rotor.setting() == 0


def test_notch_symbols_are_listed_in_alphabet_order():
    assert naval_catalog()["VI"].notch_symbols() == "MZ"
    assert naval_catalog()["Beta"].notch_symbols() == ""


def test_bad_notches():
    with pytest.raises(RotorConstructionError):
        Rotor.moving("I", perm_of("I"), "?")
    with pytest.raises(RotorConstructionError):
        Rotor("Beta", perm_of("Beta"), RotorKind.FIXED, "A")


def test_position_out_of_range():
    rotor = Rotor.moving("I", perm_of("I"), "Q")
    with pytest.raises(AlphabetError):
        rotor.set(26)


def test_forward_follows_position():
    rotor = Rotor.moving("I", perm_of("I"), "Q")
    assert rotor.forward(AZ.to_index("A")) == AZ.to_index("E")
    rotor.set_symbol("B")
    # contact A meets wiring B->K, which leaves one contact lower: J
    assert rotor.forward(AZ.to_index("A")) == AZ.to_index("J")


def test_equal_position_and_ring_cancel_out():
    rotor = Rotor.moving("III", perm_of("III"), "V")
    rotor.set_symbol("D")
    rotor.set_ring("D")
    for i in range(26):
        assert rotor.forward(i) == rotor.permutation.permute(i)
        assert rotor.backward(i) == rotor.permutation.invert(i)


@pytest.mark.parametrize("name", ["I", "IV", "VIII", "Beta"])
@pytest.mark.parametrize("posn, ring", [(0, 0), (1, 0), (0, 7), (13, 25), (25, 3)])
def test_backward_undoes_forward(name, posn, ring):
    rotor = naval_catalog()[name]
    rotor.set(posn)
    rotor.set_ring(AZ.to_char(ring))
    for p in range(26):
        assert rotor.backward(rotor.forward(p)) == p
        assert rotor.forward(rotor.backward(p)) == p


def test_set_ring_chains():
    rotor = Rotor.fixed("Gamma", perm_of("Gamma"))
    assert rotor.set_ring("E") is rotor
    assert rotor.ring_setting == 4
    assert rotor.size == 26
    assert rotor.alphabet == AZ
    assert rotor.name == "Gamma"
