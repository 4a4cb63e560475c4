"""
Binary splitting for the Chudnovsky series.

For a half-open term range [a, b) with 1 <= a < b this computes the
triple (P, Q, R) such that:

  π ≈ 426880 * sqrt(10005) * Q(1, N) / (13591409 * Q(1, N) + R(1, N))

Everything here is exact mpz arithmetic; nothing is rounded.
"""

from __future__ import annotations

from typing import NamedTuple

from gmpy2 import mpz

from .errors import InvalidRange

# C^3 / 24, where C = 640320
C3_OVER_24 = mpz(10939058860032000)

A = mpz(13591409)
B = mpz(545140134)


class Split(NamedTuple):
    P: mpz
    Q: mpz
    R: mpz


def check_range(a: int, b: int) -> None:
    """Reject ranges the recursion cannot handle."""
    if a < 1 or b <= a:
        raise InvalidRange(a, b)


def term(a: int) -> Split:
    """Closed form of the single-term range [a, a + 1)."""
    k = mpz(a)

    # P_k = -(6k - 1)(2k - 1)(6k - 5)
    P = -((6 * k - 1) * (2 * k - 1) * (6 * k - 5))

    # Q_k = k^3 * C^3 / 24
    Q = k ** 3 * C3_OVER_24

    # R_k = P_k * (545140134 k + 13591409)
    R = P * (B * k + A)

    return Split(P, Q, R)


def combine(left: Split, right: Split) -> Split:
    """
    Merge the triples of two adjacent ranges [a, m) and [m, b).

    Order matters: `left` must cover the lower range. R of the left half
    is scaled by Q of the right half, R of the right half by P of the left.
    """
    P1, Q1, R1 = left
    P2, Q2, R2 = right
    return Split(P1 * P2, Q1 * Q2, Q2 * R1 + P1 * R2)


def _split(a: int, b: int) -> Split:
    if b - a == 1:
        return term(a)
    m = (a + b) // 2
    return combine(_split(a, m), _split(m, b))


def binary_split(a: int, b: int) -> Split:
    """Serial binary splitting over [a, b)."""
    check_range(a, b)
    return _split(a, b)
