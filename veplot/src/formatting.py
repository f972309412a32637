"""
Formatting capabilities injected into the render plan builder.

The pipeline never formats times or numbers itself; it calls a
:class:`TimeFormatter` for x-axis labels and a :class:`NumberFormatter` for
range labels. The defaults here render times in a fixed time zone and
numbers with a fixed count of significant digits, rounding half away from
zero.

Significant-digit rounding works on the shortest decimal representation of
the float (``str(value)``), so ``2.675`` rounds to ``2.68`` at three digits.

CHANGELOG:
- 2026-10-08: Initial creation (STORY-107)

TODO:
- None
"""

from __future__ import annotations

import math
from datetime import UTC, datetime, tzinfo
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Protocol
from zoneinfo import ZoneInfo


class TimeFormatter(Protocol):
    """Turns an epoch-millisecond timestamp into an axis label."""

    def __call__(self, timestamp_ms: int) -> str: ...


class NumberFormatter(Protocol):
    """Turns a value into a label with *precision* significant digits."""

    def __call__(self, value: float, precision: int) -> str: ...


class LocalTimeFormatter:
    """Format timestamps as wall-clock time in a given zone.

    Args:
        tz: A ``tzinfo`` or an IANA zone name such as ``"Europe/Brussels"``.
        fmt: ``strftime`` pattern for the label.
    """

    def __init__(self, tz: tzinfo | str = UTC, fmt: str = "%Y-%m-%d %H:%M:%S") -> None:
        self.tz = ZoneInfo(tz) if isinstance(tz, str) else tz
        self.fmt = fmt

    def __call__(self, timestamp_ms: int) -> str:
        return datetime.fromtimestamp(timestamp_ms / 1000, tz=self.tz).strftime(self.fmt)


# ---------------------------------------------------------------------------
# Significant-digit rounding
# ---------------------------------------------------------------------------


def _quantize(value: Decimal, precision: int) -> Decimal:
    quantum = Decimal(1).scaleb(value.adjusted() - precision + 1)
    return value.quantize(quantum, rounding=ROUND_HALF_UP)


def _check_precision(precision: int) -> None:
    if precision < 1:
        raise ValueError(f"precision must be >= 1, got {precision}")


def _round_decimal(value: float, precision: int) -> Decimal:
    """Round a finite, non-zero float to *precision* significant digits."""
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, precision + 2)
        exact = Decimal(str(value))
        rounded = _quantize(exact, precision)
        # 99999.5 -> 100000 gains a digit; requantize at the new magnitude.
        if rounded.adjusted() != exact.adjusted():
            rounded = _quantize(rounded, precision)
    return rounded


def round_significant(value: float, precision: int) -> float:
    """Round *value* to *precision* significant digits, half away from zero.

    Non-finite values are returned unchanged.

    Raises:
        ValueError: If *precision* is less than 1.
    """
    _check_precision(precision)
    if not math.isfinite(value) or value == 0:
        return value
    return float(_round_decimal(value, precision))


def format_precision(value: float, precision: int) -> str:
    """Format *value* with exactly *precision* significant digits.

    Fixed notation is used unless the decimal exponent is below -6 or at
    least *precision*, in which case exponent notation (``1.2346e+5``) is
    used. ``format_precision(12.5, 5) == "12.500"``.

    Raises:
        ValueError: If *precision* is less than 1.
    """
    _check_precision(precision)
    if not math.isfinite(value):
        return str(value)
    if value == 0:
        return "0" if precision == 1 else "0." + "0" * (precision - 1)

    rounded = _round_decimal(value, precision)
    exponent = rounded.adjusted()
    if exponent < -6 or exponent >= precision:
        sign, digits, _ = rounded.as_tuple()
        coefficient = "".join(str(d) for d in digits).ljust(precision, "0")[:precision]
        mantissa = coefficient[0]
        if precision > 1:
            mantissa += "." + coefficient[1:]
        exp_sign = "+" if exponent >= 0 else "-"
        return f"{'-' if sign else ''}{mantissa}e{exp_sign}{abs(exponent)}"

    places = max(precision - 1 - exponent, 0)
    return f"{rounded:.{places}f}"
