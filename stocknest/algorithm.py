"""Cutting-stock optimisation: pattern enumeration and an integer program."""

from __future__ import annotations

import math
from collections import Counter
from collections.abc import Iterable, Sequence

import numpy as np
from scipy.optimize import Bounds, LinearConstraint, milp

from stocknest.models import Cut, Solution, Stick

# Lengths are scaled to integers so that binary fractions of an inch
# (1/16, 1/32, ...) compare exactly while patterns are enumerated.
PRECISION_SCALE = 1024

_MILP_STATUS = {
    1: "iteration or time limit reached",
    2: "problem is infeasible",
    3: "problem is unbounded",
    4: "solver error",
}


class OptimizationError(Exception):
    """Raised when no cutting plan can be produced."""


def _round_half_away(x: float) -> int:
    magnitude = abs(x)
    whole = math.floor(magnitude)
    if magnitude - whole >= 0.5:
        whole += 1
    return int(math.copysign(whole, x)) if whole else 0


def _scale(value: float) -> int:
    return _round_half_away(value * PRECISION_SCALE)


def generate_patterns(
    available_cuts: Iterable[int], stock_len: int, kerf: int
) -> list[tuple[int, ...]]:
    """Enumerate every combination of cuts that fits on one stock piece.

    All values are scaled integers. Each cut consumes its length plus the
    kerf. Every fitting combination is returned, not only maximal ones;
    each pattern is sorted ascending and the list is sorted and free of
    duplicates.
    """
    unique_cuts = sorted(set(available_cuts), reverse=True)
    found: set[tuple[int, ...]] = set()

    # Each entry: (first usable index, remaining length, cuts chosen so far).
    stack: list[tuple[int, int, tuple[int, ...]]] = [(0, stock_len, ())]
    while stack:
        start, remaining, current = stack.pop()
        if current:
            found.add(tuple(sorted(current)))
        for index in range(start, len(unique_cuts)):
            length = unique_cuts[index]
            if remaining >= length + kerf:
                stack.append((index, remaining - (length + kerf), current + (length,)))

    return sorted(found)


def optimize_cutting(cuts: Sequence[Cut], stock_len: float, kerf: float) -> Solution:
    """Find a plan that uses the fewest stock pieces to produce every cut.

    Raises OptimizationError if no pattern fits or the solver finds no
    optimal plan.
    """
    scaled_stock = _scale(stock_len)
    scaled_kerf = _scale(kerf)
    scaled_cuts = [_scale(cut.length) for cut in cuts]

    patterns = generate_patterns(scaled_cuts, scaled_stock, scaled_kerf)
    if not patterns:
        raise OptimizationError(
            "no valid cutting patterns could be generated; "
            "check if any cut is larger than the stock length"
        )

    demand = Counter(scaled_cuts)
    row_keys = sorted(demand)
    row_of = {length: row for row, length in enumerate(row_keys)}

    matrix = np.zeros((len(row_keys), len(patterns)))
    for column, pattern in enumerate(patterns):
        for length, count in Counter(pattern).items():
            matrix[row_of[length], column] = count

    required = np.array([demand[length] for length in row_keys], dtype=float)
    result = milp(
        c=np.ones(len(patterns)),
        constraints=LinearConstraint(matrix, required, required),
        integrality=np.ones(len(patterns)),
        bounds=Bounds(0, np.inf),
    )
    if result.status != 0 or result.x is None:
        reason = _MILP_STATUS.get(result.status, str(result.message))
        raise OptimizationError(f"could not find an optimal solution: {reason}")

    sticks: list[Stick] = []
    total_used = 0.0
    for pattern, value in zip(patterns, result.x):
        count = _round_half_away(float(value))
        if count == 0:
            continue
        lengths = [scaled / PRECISION_SCALE for scaled in pattern]
        used = sum(lengths) + len(lengths) * kerf
        for _ in range(count):
            sticks.append(
                Stick(
                    cuts=[Cut(length, 0) for length in lengths],
                    stock_len=stock_len,
                    used_len=used,
                    waste_len=stock_len - used,
                )
            )
        total_used += used * count

    num_sticks = len(sticks)
    return Solution(
        sticks=sticks,
        total_waste=num_sticks * stock_len - total_used,
        num_sticks=num_sticks,
    )