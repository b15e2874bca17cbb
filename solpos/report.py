"""Conversion to fixed-point decimals and the printed summary."""
from __future__ import annotations

from decimal import Decimal
from fractions import Fraction

from .models import PositionReport


def to_decimal(raw: int | Fraction, decimals: int) -> Decimal:
    """Scale a raw amount to a ``Decimal`` with exactly ``decimals`` places.

    Fractional raw amounts are truncated at the last place; raw amounts are
    never negative.
    """
    value = Fraction(raw)
    scaled = value.numerator // value.denominator
    return Decimal(scaled).scaleb(-decimals)


def format_amount(raw: int | Fraction, decimals: int) -> str:
    return f"{to_decimal(raw, decimals):f}"


def format_report(report: PositionReport) -> str:
    """Human-readable summary in fixed order."""
    balances = report.balances
    decimals = balances.decimals
    label = report.pool_label or "pool"
    lines = [
        f"SOL Balance/Position Summary for address: {report.wallet}",
        f"- SOL: {format_amount(balances.native, decimals)}",
        f"- WSOL: {format_amount(balances.wrapped, decimals)}",
        f"- SOL Unified (SOL + WSOL): {format_amount(balances.unified, decimals)}",
        f"- SOL in {label} LP Position: "
        f"{format_amount(report.position.native_value, decimals)}",
    ]
    if not report.position.rate_defined and report.position.wallet_lp:
        lines.append("  (pool reserve empty on one side; only the native side is counted)")
    return "\n".join(lines)
