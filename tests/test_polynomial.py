"""Tests for polynomial arithmetic over F_p."""

import pytest

from powersum_solver.common.field import PrimeField
from powersum_solver.common.polynomial import Polynomial, poly_gcd


def test_from_roots(field7):
    f = Polynomial.from_roots(field7, [1, 3])
    assert f.coeffs == [3, 3, 1]
    assert f.degree == 2
    assert f.is_monic()


def test_trailing_zeros_trimmed(field7):
    assert Polynomial([1, 2, 0, 7], field7).coeffs == [1, 2]
    assert Polynomial([0, 0], field7).is_zero()
    assert Polynomial.zero(field7).degree == -1


def test_coefficients_reduced(field7):
    assert Polynomial([-1, 8, 1], field7).coeffs == [6, 1, 1]


def test_add_sub(field7):
    a = Polynomial([1, 2, 3], field7)
    b = Polynomial([6, 5], field7)
    assert (a + b).coeffs == [0, 0, 3]
    assert (a - a).is_zero()


def test_mul(field97):
    a = Polynomial.from_roots(field97, [2])
    b = Polynomial.from_roots(field97, [5, 11])
    assert a * b == Polynomial.from_roots(field97, [2, 5, 11])
    assert (a * Polynomial.zero(field97)).is_zero()


def test_divmod_exact(field97):
    f = Polynomial.from_roots(field97, [2, 5, 11])
    q, r = divmod(f, Polynomial.from_roots(field97, [5]))
    assert r.is_zero()
    assert q == Polynomial.from_roots(field97, [2, 11])


def test_divmod_with_remainder(field7):
    # x^2 + 1 = (x - 1)(x + 1) + 2
    q, r = divmod(Polynomial([1, 0, 1], field7), Polynomial([-1, 1], field7))
    assert q.coeffs == [1, 1]
    assert r.coeffs == [2]


def test_divmod_non_monic_divisor(field97):
    f = Polynomial([3, 1, 4, 1, 5], field97)
    g = Polynomial([9, 2, 6], field97)
    q, r = divmod(f, g)
    assert q * g + r == f
    assert r.degree < g.degree


def test_divmod_small_dividend(field7):
    q, r = divmod(Polynomial([3], field7), Polynomial([1, 1], field7))
    assert q.is_zero()
    assert r.coeffs == [3]


def test_division_by_zero(field7):
    with pytest.raises(ZeroDivisionError):
        divmod(Polynomial([1, 1], field7), Polynomial.zero(field7))


def test_floordiv_and_mod(field97):
    f = Polynomial([3, 1, 4, 1, 5], field97)
    g = Polynomial([9, 2, 6], field97)
    assert (f // g) * g + (f % g) == f


def test_powmod_matches_repeated_multiplication(field97):
    base = Polynomial([2, 3, 1], field97)
    modulus = Polynomial([5, 0, 0, 1], field97)
    expected = (base * base * base * base * base) % modulus
    assert base.powmod(5, modulus) == expected


def test_powmod_zero_exponent(field97):
    modulus = Polynomial([5, 0, 0, 1], field97)
    assert Polynomial.x(field97).powmod(0, modulus).coeffs == [1]


def test_frobenius_fixes_x_modulo_split_polynomial(field7):
    # Every element of F_7 is a root of x^7 - x
    f = Polynomial.from_roots(field7, [1, 3, 6])
    x = Polynomial.x(field7)
    assert x.powmod(7, f) == x


def test_powmod_negative_exponent(field7):
    with pytest.raises(ValueError):
        Polynomial.x(field7).powmod(-1, Polynomial([1, 0, 1], field7))


def test_gcd(field97):
    a = Polynomial.from_roots(field97, [1, 2, 3])
    b = Polynomial.from_roots(field97, [2, 3, 4]).scale(5)
    assert poly_gcd(a, b) == Polynomial.from_roots(field97, [2, 3])


def test_gcd_coprime(field97):
    a = Polynomial.from_roots(field97, [1, 2])
    b = Polynomial.from_roots(field97, [3, 4])
    assert poly_gcd(a, b).coeffs == [1]


def test_gcd_with_zero(field7):
    f = Polynomial([2, 4], field7)
    assert poly_gcd(f, Polynomial.zero(field7)) == f.monic()
    assert poly_gcd(Polynomial.zero(field7), Polynomial.zero(field7)).is_zero()


def test_monic(field7):
    assert Polynomial([2, 4], field7).monic().coeffs == [4, 1]
    with pytest.raises(ValueError):
        Polynomial.zero(field7).monic()


def test_deflate(field97):
    f = Polynomial.from_roots(field97, [4, 4, 6])
    q, r = f.deflate(4)
    assert r == 0
    assert q == Polynomial.from_roots(field97, [4, 6])
    _, r = f.deflate(5)
    assert r == f.evaluate(5)


def test_evaluate(field7):
    f = Polynomial([1, 0, 1], field7)
    assert f.evaluate(0) == 1
    assert f.evaluate(3) == 3
    assert Polynomial.zero(field7).evaluate(5) == 0


def test_field_mismatch():
    a = Polynomial([1, 1], PrimeField(7))
    b = Polynomial([1, 1], PrimeField(11))
    with pytest.raises(ValueError):
        a + b


def test_repr(field7):
    assert repr(Polynomial.from_roots(field7, [1, 3])) == "x^2 + 3*x + 3"
    assert repr(Polynomial.zero(field7)) == "0"
    assert repr(Polynomial([0, 1], field7)) == "x"
