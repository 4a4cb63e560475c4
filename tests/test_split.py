import pytest
from gmpy2 import mpz

from pi_digit import InvalidRange, Split, binary_split, combine, term
from pi_digit.split import C3_OVER_24


def closed_form(a):
    P = -(6 * a - 1) * (2 * a - 1) * (6 * a - 5)
    Q = 10939058860032000 * a ** 3
    R = P * (545140134 * a + 13591409)
    return P, Q, R


def test_first_term():
    P, Q, R = term(1)
    assert P == -5
    assert Q == 10939058860032000
    assert R == -5 * 558731543


@pytest.mark.parametrize("a", [1, 2, 3, 17, 1000])
def test_term_matches_closed_form(a):
    assert tuple(term(a)) == closed_form(a)


def test_single_term_range_is_base_case():
    assert binary_split(4, 5) == term(4)


def test_values_are_mpz():
    P, Q, R = binary_split(1, 20)
    assert all(isinstance(x, type(mpz(0))) for x in (P, Q, R))


def test_two_term_combination():
    P1, Q1, R1 = closed_form(1)
    P2, Q2, R2 = closed_form(2)
    assert binary_split(1, 3) == Split(P1 * P2, Q1 * Q2, Q2 * R1 + P1 * R2)


def test_combination_is_associative():
    direct = binary_split(1, 10)
    assert combine(binary_split(1, 5), binary_split(5, 10)) == direct
    assert combine(binary_split(1, 3), binary_split(3, 10)) == direct
    assert combine(binary_split(1, 9), term(9)) == direct


def test_combination_is_not_symmetric():
    left, right = binary_split(1, 4), binary_split(4, 8)
    assert combine(left, right).R != combine(right, left).R


def test_q_is_product_of_cubes():
    _P, Q, _R = binary_split(1, 6)
    assert Q == C3_OVER_24 ** 5 * (1 * 2 * 3 * 4 * 5) ** 3


def test_inputs_are_not_mutated():
    left, right = binary_split(1, 4), binary_split(4, 8)
    before = (tuple(left), tuple(right))
    combine(left, right)
    assert (tuple(left), tuple(right)) == before


@pytest.mark.parametrize("a, b", [(0, 5), (-3, 2), (5, 5), (7, 3)])
def test_invalid_range(a, b):
    with pytest.raises(InvalidRange):
        binary_split(a, b)


def test_invalid_range_is_value_error():
    with pytest.raises(ValueError, match=r"\[5, 5\)"):
        binary_split(5, 5)
