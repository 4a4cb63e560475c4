#!/usr/bin/env python3
"""
Print the decimal digit of π at a given position.

- Chudnovsky + binary splitting on gmpy2 (GMP/MPFR under the hood).
- The split runs on a process pool, falling back to a serial split if
  the parallel run fails.
"""

from __future__ import annotations

import sys
import time
from typing import NamedTuple, Optional

from .assembler import compute_pi
from .extract import extract_digit, pi_text

DEFAULT_POSITION = 10_000

USAGE = """\
Usage examples:
  {prog}
  {prog} 12345
  {prog} --position 1K
  {prog} -d 1e5 --workers 4
  {prog} 500 --serial --text 60
"""

_SUFFIXES = {
    "k": 1_000,
    "m": 1_000_000,
    "g": 1_000_000_000,
}


# =========================
# Position specification parser
# =========================


def parse_position_spec(spec: str) -> int:
    """
    Parse a digit position like:
      "123", "1K", "10M", "2g", "1e6", "3E7"

    Suffixes (case-insensitive): K = 10^3, M = 10^6, G = 10^9.
    Scientific notation: "<int>e<int>".

    Raises ValueError on invalid or non-positive input.
    """
    s = spec.strip()
    if not s:
        raise ValueError("Empty position specification")

    # 1) Scientific notation
    mantissa_str, sep, exp_str = s.lower().partition("e")
    if sep:
        if not mantissa_str or not exp_str:
            raise ValueError(f"Invalid scientific notation: {spec!r}")
        exp = int(exp_str)
        if exp < 0:
            raise ValueError(f"Negative exponent not supported in {spec!r}")
        value = int(mantissa_str) * 10 ** exp
    else:
        # 2) Optional K/M/G suffix
        multiplier = _SUFFIXES.get(s[-1].lower(), 1)
        if multiplier != 1:
            s = s[:-1].strip()
            if not s:
                raise ValueError(f"Missing number before suffix in {spec!r}")
        value = int(s) * multiplier

    if value <= 0:
        raise ValueError(f"Position must be positive: {spec!r}")
    return value


class Options(NamedTuple):
    position: int = DEFAULT_POSITION
    serial: bool = False
    workers: Optional[int] = None
    text: Optional[int] = None


def _flag_value(args: list[str], i: int) -> str:
    if i + 1 >= len(args):
        raise ValueError(f"Flag {args[i]!r} requires a value")
    return args[i + 1]


def parse_args(argv: list[str]) -> Options:
    """
    Read options from CLI arguments.

    Supported forms:
      pi-digit                       -> default position (10000)
      pi-digit 12345
      pi-digit --position 1K / -p 1K / --digit 1K / -d 1K
      pi-digit --workers 4 / -w 4
      pi-digit --serial
      pi-digit --text 50 / -t 50     -> also print π to 50 places
    """
    position_spec: str | None = None
    serial = False
    workers = None
    text = None
    args = argv[1:]  # skip program name

    i = 0
    while i < len(args):
        arg = args[i]
        if arg in ("--position", "-p", "--digit", "-d"):
            position_spec = _flag_value(args, i)
            i += 2
        elif arg in ("--workers", "-w"):
            workers = int(_flag_value(args, i))
            if workers < 1:
                raise ValueError(f"Worker count must be positive: {workers}")
            i += 2
        elif arg in ("--text", "-t"):
            text = int(_flag_value(args, i))
            if text < 0:
                raise ValueError(f"Text length must not be negative: {text}")
            i += 2
        elif arg == "--serial":
            serial = True
            i += 1
        elif not arg.startswith("-") and position_spec is None:
            # First bare argument is the position
            position_spec = arg
            i += 1
        else:
            raise ValueError(f"Unknown argument {arg!r}")

    position = DEFAULT_POSITION
    if position_spec is not None:
        position = parse_position_spec(position_spec)

    return Options(position, serial, workers, text)


def report_fallback(error: Exception) -> None:
    sys.stderr.write(
        f"Parallel computation failed ({error}); recomputing serially...\n"
    )
    sys.stderr.flush()


def main(argv: list[str]) -> int:
    try:
        options = parse_args(argv)
    except ValueError as e:
        prog = argv[0] if argv else "pi-digit"
        sys.stderr.write(f"Error: {e}\n")
        sys.stderr.write(USAGE.format(prog=prog))
        return 1

    mode = "serial" if options.serial else "parallel"
    print(f"Resolving digit {options.position} of π ({mode} Chudnovsky, gmpy2)...")

    start = time.perf_counter()
    # --text may need more digits than the requested position
    result = compute_pi(
        max(options.position, options.text or 0),
        parallel=not options.serial,
        on_fallback=report_fallback,
        workers=options.workers,
    )
    digit, context = extract_digit(result.pi, options.position)
    elapsed = time.perf_counter() - start

    print(f"Terms: {result.terms}, precision: {result.precision_bits} bits")
    print(f"Time: {elapsed:.4f} s")
    print(f"Digit {options.position}: {digit}")
    if context is not None:
        print(f"Context: {context.render()}")
    if options.text is not None:
        print(pi_text(result.pi, options.text))
    return 0


def run() -> None:
    # Allow large int-to-string conversions (Python 3.11+ safety limit)
    if hasattr(sys, "set_int_max_str_digits"):
        sys.set_int_max_str_digits(0)
    raise SystemExit(main(sys.argv))


if __name__ == "__main__":
    run()
