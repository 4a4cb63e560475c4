"""
Turn the binary-splitting triple into a high-precision value of π.

  π = 426880 * sqrt(10005) * Q / (13591409 * Q + R)

Every float operation of one computation runs in the same gmpy2 context,
whose precision is fixed up front from the requested decimal digits.
"""

from __future__ import annotations

from typing import Callable, NamedTuple, Optional

import gmpy2
from gmpy2 import mpfr, mpz

from .errors import ParallelExecutionFailure
from .parallel import parallel_split
from .split import A, binary_split

# Terms and digits added on top of the requested position
GUARD_TERMS = 100
GUARD_DIGITS = 100

# log2(10) ≈ 3.32, rounded up
BITS_PER_DIGIT = 4

# Each Chudnovsky term adds roughly 14 decimal digits
DIGITS_PER_TERM = 14


class Budget(NamedTuple):
    """Term count and precision needed to resolve one digit position."""

    terms: int
    digits: int

    @property
    def bits(self) -> int:
        return self.digits * BITS_PER_DIGIT

    @classmethod
    def for_position(cls, position: int) -> "Budget":
        if position < 1:
            raise ValueError(f"digit position must be >= 1, got {position}")
        return cls(
            terms=position // DIGITS_PER_TERM + GUARD_TERMS,
            digits=position + GUARD_DIGITS,
        )


class Computation(NamedTuple):
    pi: mpfr
    precision_bits: int
    terms: int
    digits: int
    # The parallel failure that forced the serial path, if any
    fallback: Optional[ParallelExecutionFailure] = None


def assemble(Q: mpz, R: mpz, precision_bits: int) -> mpfr:
    """Combine the final Q and R into π at `precision_bits`."""
    ctx = gmpy2.context(precision=precision_bits)

    # coeff = 426880 * sqrt(10005)
    coeff = ctx.mul(mpfr(426880), ctx.sqrt(mpfr(10005)))

    numerator = ctx.mul(coeff, mpfr(Q, precision_bits))

    # Exact integer arithmetic until the final division
    denominator = A * Q + R

    return ctx.div(numerator, mpfr(denominator, precision_bits))


def chudnovsky(
    terms: int,
    digits: int,
    *,
    parallel: bool = True,
    on_fallback: Optional[Callable[[ParallelExecutionFailure], None]] = None,
    **options,
) -> Computation:
    """
    Compute π from the terms [1, terms) at roughly `digits` decimal digits.

    The parallel split is tried first. If it fails, the whole triple is
    recomputed serially and the failure is returned in `fallback`; an error
    on the serial path propagates to the caller. `on_fallback` is called
    with the failure before the serial split starts. `options` go to
    parallel_split (executor, workers, min_width, max_depth).
    """
    precision_bits = digits * BITS_PER_DIGIT
    fallback = None

    if parallel:
        try:
            _P, Q, R = parallel_split(1, terms, **options)
        except ParallelExecutionFailure as e:
            fallback = e
            if on_fallback is not None:
                on_fallback(e)
            _P, Q, R = binary_split(1, terms)
    else:
        _P, Q, R = binary_split(1, terms)

    return Computation(
        pi=assemble(Q, R, precision_bits),
        precision_bits=precision_bits,
        terms=terms,
        digits=digits,
        fallback=fallback,
    )


def compute_pi(position: int, **options) -> Computation:
    """Compute π with enough terms and precision to resolve `position`."""
    budget = Budget.for_position(position)
    return chudnovsky(budget.terms, budget.digits, **options)
