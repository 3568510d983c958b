"""Presentation helpers: fraction strings and grouping of identical sticks."""

from __future__ import annotations

import math
from collections.abc import Iterable

from stocknest.models import Pattern, Stick

_TOLERANCE = 1.0 / 64.0
_DENOMINATORS = (2, 4, 8, 16, 32)


def _trunc_gcd(a: int, b: int) -> int:
    """Euclid's algorithm using a remainder truncated toward zero."""
    while b:
        remainder = abs(a) % abs(b)
        a, b = b, -remainder if a < 0 else remainder
    return a


def _round_half_away(x: float) -> int:
    magnitude = abs(x)
    whole = math.floor(magnitude)
    if magnitude - whole >= 0.5:
        whole += 1
    return int(math.copysign(whole, x)) if whole else 0


def to_fraction(value: float) -> str:
    """Render a value as a simplified fraction with denominator up to 32."""
    if value == 0:
        return "0"

    if math.isfinite(value):
        for denominator in _DENOMINATORS:
            numerator = _round_half_away(value * denominator)
            if abs(value - numerator / denominator) < _TOLERANCE:
                common = _trunc_gcd(numerator, denominator)
                numerator = int(numerator / common)
                denominator = int(denominator / common)
                if denominator == 1:
                    return str(numerator)
                return f"{numerator}/{denominator}"

    return f"{value:.3f}"


def _pattern_key(stick: Stick) -> str:
    lengths = sorted((cut.length for cut in stick.cuts), reverse=True)
    return ",".join(f"{length:.5f}" for length in lengths)


def group_patterns(sticks: Iterable[Stick]) -> list[Pattern]:
    """Group sticks with the same cut lengths into patterns.

    Patterns are ordered by count, most common first, then by used length,
    longest first. Each pattern's cuts are ordered longest first.
    """
    by_key: dict[str, Pattern] = {}
    for stick in sticks:
        key = _pattern_key(stick)
        existing = by_key.get(key)
        if existing is not None:
            existing.count += 1
            continue
        by_key[key] = Pattern(
            cuts=sorted(stick.cuts, key=lambda cut: cut.length, reverse=True),
            count=1,
            used_len=stick.used_len,
            waste_len=stick.waste_len,
        )

    ordered = [by_key[key] for key in sorted(by_key)]
    ordered.sort(key=lambda p: (-p.count, -p.used_len))
    return ordered