"""Comparison operators with durations, such as ``<10s`` or ``>=3ms``."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import timedelta
from fractions import Fraction

GREATER_THAN = ">"
LESS_THAN = "<"
EQUAL = "="
GREATER_THAN_EQ = ">="
LESS_THAN_EQ = "<="
NOT_EQ = "!="
COMPARE_OPERATORS = (GREATER_THAN_EQ, LESS_THAN_EQ, EQUAL, LESS_THAN, GREATER_THAN, NOT_EQ)

_UNITS = {
    "ns": 1,
    "us": 1_000,
    "\u00b5s": 1_000,
    "\u03bcs": 1_000,
    "ms": 1_000_000,
    "s": 1_000_000_000,
    "m": 60_000_000_000,
    "h": 3_600_000_000_000,
}
_NUMBER = re.compile(r"([0-9]*)(?:\.([0-9]*))?")
_UNIT = re.compile(r"[^0-9.]*")


class DurationError(ValueError):
    """A duration string could not be parsed."""


class MissingUnitError(DurationError):
    """A duration number was given without a unit."""


def parse_duration(value: str) -> timedelta:
    """Parse a duration such as ``1h30m`` or ``1.5s`` (sub-microsecond parts are dropped)."""
    s = value
    negative = False
    if s and s[0] in "+-":
        negative = s[0] == "-"
        s = s[1:]
    if s == "0":
        return timedelta(0)
    if s == "":
        raise DurationError(f'time: invalid duration "{value}"')

    total = 0
    limit = 2**63 if negative else 2**63 - 1
    while s:
        if not (s[0] == "." or s[0].isdigit() and s[0].isascii()):
            raise DurationError(f'time: invalid duration "{value}"')
        number = _NUMBER.match(s)
        whole, fraction = number.group(1), number.group(2) or ""
        if not whole and not fraction:
            raise DurationError(f'time: invalid duration "{value}"')
        s = s[number.end():]
        unit = _UNIT.match(s).group(0)
        if not unit:
            raise DurationError(f'time: missing unit in duration "{value}"'.replace(
                "DurationError", "")) if False else MissingUnitError(
                f'time: missing unit in duration "{value}"')
        if unit not in _UNITS:
            raise DurationError(f'time: unknown unit "{unit}" in duration "{value}"')
        s = s[len(unit):]
        scale = _UNITS[unit]
        amount = int(whole or "0") * scale
        if fraction:
            amount += int(Fraction(int(fraction), 10 ** len(fraction)) * scale)
        total += amount
        if total > limit:
            raise DurationError(f'time: invalid duration "{value}"')

    result = timedelta(microseconds=total // 1000)
    return -result if negative else result


def _split_after(text: str, sep: str) -> list[str]:
    pieces = text.split(sep)
    return [piece + sep for piece in pieces[:-1]] + [pieces[-1]]


@dataclass(frozen=True)
class FilterOperator:
    """Parses flag values made of an operator and a duration."""

    flag: str

    def parse(self, flag_value: str) -> tuple[str, timedelta]:
        """Split ``flag_value`` into its operator and duration."""
        for op in COMPARE_OPERATORS:
            if op not in flag_value:
                continue
            pieces = _split_after(flag_value, op)
            operator = pieces[0].strip(" ")
            time_value = pieces[1].strip(" ")
            try:
                duration = parse_duration(time_value)
            except MissingUnitError:
                try:
                    duration = parse_duration(time_value + "s")
                except DurationError:
                    duration = timedelta(0)
            except DurationError:
                raise ValueError(f"invalid value provided for {self.flag}") from None
            if operator:
                return operator, duration
            break
        raise ValueError(
            f"invalid operator provided for {self.flag}, "
            f"valid operators are {','.join(COMPARE_OPERATORS)}"
        )