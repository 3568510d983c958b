"""Value types shared by the parser, the optimiser and the report builder."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Cut:
    """A single piece to be cut, with its length in inches."""

    length: float = 0.0
    id: int = 0


@dataclass
class Stick:
    """One stock piece together with the cuts taken from it."""

    cuts: list[Cut] = field(default_factory=list)
    stock_len: float = 0.0
    used_len: float = 0.0
    waste_len: float = 0.0


@dataclass
class Solution:
    """A complete cutting plan."""

    sticks: list[Stick] = field(default_factory=list)
    total_waste: float = 0.0
    num_sticks: int = 0


@dataclass
class Pattern:
    """A cutting layout shared by ``count`` identical sticks."""

    cuts: list[Cut] = field(default_factory=list)
    count: int = 0
    used_len: float = 0.0
    waste_len: float = 0.0