"""Exceptions raised by the π digit pipeline."""

from __future__ import annotations


class PiDigitError(Exception):
    """Base class for every error raised by pi_digit."""


class InvalidRange(PiDigitError, ValueError):
    """A term range ``[a, b)`` with ``b <= a`` or ``a < 1``."""

    def __init__(self, a: int, b: int) -> None:
        super().__init__(f"invalid term range [{a}, {b}): need 1 <= a < b")
        self.a = a
        self.b = b


class ParallelExecutionFailure(PiDigitError, RuntimeError):
    """A concurrent branch of the parallel split failed.

    The original exception is kept as ``__cause__``.
    """
