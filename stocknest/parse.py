"""Parsing and formatting of imperial lengths."""

from __future__ import annotations

import math
import re

_WHITESPACE = " \t\n\v\f\r"

_FRACTION_RE = re.compile(
    r"\s*([0-9]+(?:\.[0-9]+)?)\s*/\s*([0-9]+(?:\.[0-9]+)?)\s*"
)
_DECIMAL_RE = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_HEX_RE = re.compile(
    r"[+-]?0[xX](?:[0-9a-fA-F]+\.?[0-9a-fA-F]*|\.[0-9a-fA-F]+)(?:[pP][+-]?[0-9]+)?"
)
_INF_RE = re.compile(r"[+-]?inf(?:inity)?", re.IGNORECASE)
_NAN_RE = re.compile(r"[+-]?nan(?:\([0-9A-Za-z_]*\))?", re.IGNORECASE)


def _trim(s: str) -> str:
    return s.strip(_WHITESPACE)


def _round_half_away(x: float) -> int:
    """Round to the nearest integer, halves away from zero."""
    magnitude = abs(x)
    whole = math.floor(magnitude)
    if magnitude - whole >= 0.5:
        whole += 1
    return int(math.copysign(whole, x)) if whole else 0


def _parse_number(text: str) -> float:
    """Parse a whole string as a number, returning 0.0 if it is not one."""
    if _DECIMAL_RE.fullmatch(text):
        value = float(text)
        return 0.0 if math.isinf(value) else value
    if _HEX_RE.fullmatch(text):
        try:
            return float.fromhex(text)
        except (OverflowError, ValueError):
            return 0.0
    if _INF_RE.fullmatch(text):
        return -math.inf if text.startswith("-") else math.inf
    if _NAN_RE.fullmatch(text):
        return math.nan
    return 0.0


def parse_fraction(s: str) -> float:
    """Parse a fraction such as ``"3/16"`` or a decimal such as ``"0.125"``.

    Anything that cannot be parsed yields 0.0.
    """
    trimmed = _trim(s)
    if not trimmed:
        return 0.0
    if "/" in trimmed:
        match = _FRACTION_RE.fullmatch(trimmed)
        if match:
            numerator = float(match.group(1))
            denominator = float(match.group(2))
            if math.isinf(numerator) or math.isinf(denominator):
                return 0.0
            if denominator != 0:
                return numerator / denominator
        return 0.0
    return _parse_number(trimmed)


def _mixed_number_split(text: str) -> int | None:
    """Index of the last whitespace that is followed later by a slash."""
    split_at = None
    for i, ch in enumerate(text):
        if ch not in _WHITESPACE:
            continue
        next_non_space = next(
            (j for j in range(i, len(text)) if text[j] not in " \t"), None
        )
        if next_non_space is not None and "/" in text[next_non_space:]:
            split_at = i
    return split_at


def parse_advanced_length(s: str) -> float:
    """Parse a length such as ``24'``, ``8'4"``, ``180 1/2`` or ``288`` into inches."""
    text = _trim(s)
    if not text:
        return 0.0

    total = 0.0
    feet_pos = text.find("'")
    if feet_pos != -1:
        total += parse_fraction(text[:feet_pos]) * 12.0
        text = _trim(text[feet_pos + 1:])

    if not text:
        return total

    if text.endswith('"'):
        text = _trim(text[:-1])

    inch_pos = text.find('"')
    if inch_pos != -1:
        total += parse_fraction(text[:inch_pos])
        after = _trim(text[inch_pos + 1:])
        if after:
            total += parse_fraction(after)
        return total

    split_at = _mixed_number_split(text)
    if split_at is not None:
        total += parse_fraction(text[:split_at])
        total += parse_fraction(text[split_at + 1:])
    else:
        total += parse_fraction(text)
    return total


def pretty_len(inches: float) -> str:
    """Format inches as feet and inches to the nearest 1/32, e.g. ``8' 4 1/2"``."""
    if abs(inches) < 1.0 / 64.0:
        return '0"'

    parts: list[str] = []
    if inches < 0:
        parts.append("-")
        inches = -inches

    inches = _round_half_away(inches * 32.0) / 32.0

    feet = int(inches / 12.0)
    remaining = inches - feet * 12.0
    if remaining >= 12.0 - 1.0 / 64.0:
        feet += 1
        remaining = 0.0

    inches_whole = int(remaining)
    fractional = remaining - inches_whole

    has_feet = feet > 0
    has_inches = inches_whole > 0
    has_fraction = fractional > 1.0 / 64.0

    if not (has_feet or has_inches or has_fraction):
        return '0"'

    if has_feet:
        parts.append(f"{feet}'")
    if has_feet and (has_inches or has_fraction):
        parts.append(" ")
    if has_inches:
        parts.append(str(inches_whole))
    if has_fraction:
        if has_inches:
            parts.append(" ")
        numerator = _round_half_away(fractional * 32)
        if numerator > 0:
            common = math.gcd(numerator, 32)
            parts.append(f"{numerator // common}/{32 // common}")
    if has_inches or has_fraction or not has_feet:
        parts.append('"')
    return "".join(parts)