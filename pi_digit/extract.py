"""
Pick single decimal digits out of a π approximation.

Positions are 1-based and count digits after the decimal point, so the
leading "3" is never addressed: position 1 is the "1" of 3.14159...

Results are only as good as the precision of the approximation. Nothing
here can tell whether the guard digits were enough.
"""

from __future__ import annotations

from typing import NamedTuple, Optional, Tuple

import gmpy2
from gmpy2 import mpfr, mpz

# Largest position for which a context window is rendered
CONTEXT_LIMIT = 100_000

# Digits shown on each side of the requested one
CONTEXT_WINDOW = 5


class Context(NamedTuple):
    """Digits around a requested position."""

    position: int
    digit: int
    before: str
    after: str

    @property
    def start(self) -> int:
        """Position of the first digit in `before`."""
        return self.position - len(self.before)

    def render(self) -> str:
        head = "3." if self.start == 1 else "..."
        return f"{head}{self.before}[{self.digit}]{self.after}..."


def _scaled_integer(pi: mpfr, places: int) -> mpz:
    """floor(pi * 10^places), computed at the precision of `pi`."""
    ctx = gmpy2.context(precision=pi.precision)
    shifted = ctx.mul(pi, mpz(10) ** places)
    # Exact truncation; pi > 0 so floor == trunc
    num, den = shifted.as_integer_ratio()
    return num // den


def fraction_digits(pi: mpfr, places: int) -> str:
    """The first `places` digits after the decimal point, truncated."""
    if places < 0:
        raise ValueError(f"places must be >= 0, got {places}")
    # Avoids Python's int->str limit
    text = gmpy2.digits(_scaled_integer(pi, places), 10)
    # Ensure at least places + 1 characters: "3" + places decimals
    text = text.rjust(places + 1, "0")
    return text[1 : 1 + places]


def pi_text(pi: mpfr, places: int) -> str:
    """Render π as "3.<places digits>"."""
    frac = fraction_digits(pi, places)
    return f"3.{frac}" if frac else "3"


def extract_digit(
    pi: mpfr,
    position: int,
    *,
    window: int = CONTEXT_WINDOW,
    context_limit: int = CONTEXT_LIMIT,
) -> Tuple[int, Optional[Context]]:
    """
    Return the digit at `position` and, for small positions, its context.

    The digit is floor(pi * 10^position) mod 10 at the working
    precision of `pi`. Context is None once position exceeds
    `context_limit`.
    """
    if position < 1:
        raise ValueError(f"digit position must be >= 1, got {position}")

    if position > context_limit:
        return int(_scaled_integer(pi, position) % 10), None

    frac = fraction_digits(pi, position + window)
    digit = int(frac[position - 1])
    start = max(1, position - window)
    context = Context(
        position=position,
        digit=digit,
        before=frac[start - 1 : position - 1],
        after=frac[position:],
    )
    return digit, context
