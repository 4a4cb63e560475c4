"""
Fork-join wrapper around the serial binary split.

The range is halved at the same midpoints the serial recursion uses until
a half is narrower than `min_width` or deeper than `max_depth`. Each such
half becomes one unit of work on an executor; the parent joins its two
children and combines them left then right, so the result is identical to
binary_split(a, b) whatever order the units finish in.
"""

from __future__ import annotations

import os
from concurrent.futures import Executor, Future, ProcessPoolExecutor, wait
from typing import List, Optional, Tuple, Union

import gmpy2

from .errors import ParallelExecutionFailure
from .split import Split, _split, binary_split, check_range, combine

MIN_PARALLEL_WIDTH = 1000
MAX_PARALLEL_DEPTH = 4

# A leaf future or a (left, right) pair of subtrees
Node = Union[Future, Tuple["Node", "Node"]]


def _split_unit(a: int, b: int) -> Tuple[bytes, bytes, bytes]:
    """
    Worker entry point for one unit of work.

    mpz values are shipped as bytes so they cross process boundaries cheaply.
    """
    P, Q, R = _split(a, b)
    return gmpy2.to_binary(P), gmpy2.to_binary(Q), gmpy2.to_binary(R)


def _restore(packed: Tuple[bytes, bytes, bytes]) -> Split:
    return Split(*(gmpy2.from_binary(x) for x in packed))


def _fork(
    executor: Executor,
    leaves: List[Future],
    a: int,
    b: int,
    depth: int,
    min_width: int,
    max_depth: int,
) -> Node:
    if b - a < min_width or depth > max_depth:
        leaf = executor.submit(_split_unit, a, b)
        leaves.append(leaf)
        return leaf
    m = (a + b) // 2
    return (
        _fork(executor, leaves, a, m, depth + 1, min_width, max_depth),
        _fork(executor, leaves, m, b, depth + 1, min_width, max_depth),
    )


def _discard(leaves: List[Future]) -> None:
    """Cancel queued units and wait out the ones already running."""
    for leaf in leaves:
        leaf.cancel()
    wait(leaves)


def _join(node: Node) -> Split:
    if isinstance(node, tuple):
        left, right = node
        return combine(_join(left), _join(right))
    return _restore(node.result())


def parallel_split(
    a: int,
    b: int,
    depth: int = 0,
    *,
    executor: Optional[Executor] = None,
    min_width: int = MIN_PARALLEL_WIDTH,
    max_depth: int = MAX_PARALLEL_DEPTH,
    workers: Optional[int] = None,
) -> Split:
    """
    Compute the (P, Q, R) triple of [a, b) with concurrent units of work.

    If `executor` is None a ProcessPoolExecutor with `workers` processes
    (default: os.cpu_count()) is created for this call and shut down before
    returning. A range that is already below the thresholds is computed
    in-process without touching any executor.

    Raises InvalidRange for a bad range and ParallelExecutionFailure when
    any unit of work fails.
    """
    check_range(a, b)

    if b - a < min_width or depth > max_depth:
        return binary_split(a, b)

    owned = executor is None
    if owned:
        executor = ProcessPoolExecutor(max_workers=workers or os.cpu_count())

    leaves: List[Future] = []
    try:
        # Submit every leaf before the first join so the units overlap.
        tree = _fork(executor, leaves, a, b, depth, min_width, max_depth)
        return _join(tree)
    except Exception as e:
        _discard(leaves)
        raise ParallelExecutionFailure(
            f"parallel split of [{a}, {b}) failed: {e!r}"
        ) from e
    finally:
        if owned:
            executor.shutdown(wait=True, cancel_futures=True)
