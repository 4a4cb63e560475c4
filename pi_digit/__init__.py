"""Decimal digits of π via Chudnovsky binary splitting on gmpy2."""

from .assembler import Budget, Computation, assemble, chudnovsky, compute_pi
from .errors import InvalidRange, ParallelExecutionFailure, PiDigitError
from .extract import Context, extract_digit, fraction_digits, pi_text
from .parallel import parallel_split
from .split import Split, binary_split, combine, term

__all__ = [
    "Budget",
    "Computation",
    "Context",
    "InvalidRange",
    "ParallelExecutionFailure",
    "PiDigitError",
    "Split",
    "assemble",
    "binary_split",
    "chudnovsky",
    "combine",
    "compute_pi",
    "extract_digit",
    "fraction_digits",
    "parallel_split",
    "pi_text",
    "term",
]
