import math
from collections import Counter

import pytest

from stocknest.algorithm import (
    PRECISION_SCALE,
    OptimizationError,
    generate_patterns,
    optimize_cutting,
)
from stocknest.models import Cut


def _cuts(*lengths):
    return [Cut(length, i + 1) for i, length in enumerate(lengths)]


def test_generate_patterns_small_case():
    assert generate_patterns([2, 1, 2], 3, 0) == [
        (1,),
        (1, 1),
        (1, 1, 1),
        (1, 2),
        (2,),
    ]


@pytest.mark.parametrize(
    "cuts, stock, kerf",
    [
        ([5, 3, 2], 10, 0),
        ([5, 3, 2], 10, 1),
        ([7, 4, 4, 1], 15, 2),
    ],
)
def test_generate_patterns_invariants(cuts, stock, kerf):
    patterns = generate_patterns(cuts, stock, kerf)
    assert patterns == sorted(set(patterns))
    for pattern in patterns:
        assert list(pattern) == sorted(pattern)
        assert set(pattern) <= set(cuts)
        assert sum(pattern) + kerf * len(pattern) <= stock
    for cut in set(cuts):
        if cut + kerf <= stock:
            assert (cut,) in patterns


def test_generate_patterns_kerf_excludes_exact_fit():
    assert generate_patterns([10], 10, 1) == []
    assert generate_patterns([10], 10, 0) == [(10,)]


def test_optimize_produces_every_cut():
    cuts = _cuts(60, 60, 60, 36, 36, 36)
    solution = optimize_cutting(cuts, 96.0, 0.0)
    produced = Counter(c.length for s in solution.sticks for c in s.cuts)
    assert produced == Counter(c.length for c in cuts)
    assert solution.num_sticks == 3
    assert solution.num_sticks == len(solution.sticks)


def test_optimize_sticks_fit_and_waste_consistent():
    kerf = 0.125
    stock = 144.0
    cuts = _cuts(30.5, 30.5, 42.25, 42.25, 42.25, 18.0, 18.0, 70.0)
    solution = optimize_cutting(cuts, stock, kerf)
    total_used = 0.0
    for stick in solution.sticks:
        expected_used = sum(c.length for c in stick.cuts) + len(stick.cuts) * kerf
        assert stick.used_len == pytest.approx(expected_used)
        assert stick.used_len <= stock
        assert stick.stock_len == stock
        assert stick.waste_len == pytest.approx(stock - stick.used_len)
        total_used += stick.used_len
    assert solution.total_waste == pytest.approx(
        solution.num_sticks * stock - total_used
    )
    lower_bound = math.ceil(sum(c.length + kerf for c in cuts) / stock)
    assert solution.num_sticks >= lower_bound


def test_optimize_is_no_worse_than_one_cut_per_stick():
    cuts = _cuts(*([12.0] * 10))
    solution = optimize_cutting(cuts, 48.0, 0.0)
    assert solution.num_sticks == math.ceil(10 * 12.0 / 48.0)
    assert all(c.id == 0 for s in solution.sticks for c in s.cuts)


def test_optimize_lengths_are_scaled_values():
    solution = optimize_cutting(_cuts(10.0 + 1 / 32), 20.0, 0.0)
    (stick,) = solution.sticks
    (cut,) = stick.cuts
    assert cut.length * PRECISION_SCALE == round(cut.length * PRECISION_SCALE)
    assert cut.length == pytest.approx(10.0 + 1 / 32)


def test_optimize_rejects_cut_longer_than_stock():
    with pytest.raises(OptimizationError):
        optimize_cutting(_cuts(100.0), 96.0, 0.125)


def test_optimize_rejects_empty_cut_list():
    with pytest.raises(OptimizationError):
        optimize_cutting([], 96.0, 0.125)


def test_optimize_infeasible_when_one_cut_cannot_fit():
    with pytest.raises(OptimizationError):
        optimize_cutting(_cuts(10.0, 120.0), 96.0, 0.0)