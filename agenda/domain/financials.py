"""
Financial calculator for event payouts.

net = gross - commission - taxes, recomputed from scratch on every change.
Net is never clamped: a negative value flags a bad deal to the operator.
"""

import math
import re

from agenda.domain.entities import CommissionType, Financials

_NON_DIGITS = re.compile(r"\D")


def compute_commission(gross: float, commission_type: CommissionType, commission_value: float) -> float:
    if commission_type == "PERCENTAGE":
        return gross * commission_value / 100
    return commission_value


def compute_net(
    gross: float,
    commission_type: CommissionType,
    commission_value: float,
    taxes: float,
) -> float:
    return gross - compute_commission(gross, commission_type, commission_value) - taxes


def recalculate(financials: Financials) -> Financials:
    """Return a copy of ``financials`` with net_value derived from the other inputs."""
    net = compute_net(
        financials.gross_value,
        financials.commission_type,
        financials.commission_value,
        financials.taxes,
    )
    return financials.model_copy(update={"net_value": net})


def parse_cents_input(raw: str | None) -> float:
    """
    Parse masked currency input typed as minor units.

    Only the digit characters count; they form an integer number of cents.
    "150000" -> 1500.0, "R$ 1.500,00" -> 1500.0, "" -> 0.0
    """
    if not raw:
        return 0.0
    digits = _NON_DIGITS.sub("", raw)
    if not digits:
        return 0.0
    return int(digits) / 100


def parse_decimal_comma(raw: str | None) -> float:
    """
    Parse a spreadsheet amount such as "1500,50", "20.000" or "20.000,00".

    Dots are always thousand separators; the comma is the decimal mark.
    Anything non-numeric, including "nan" and "inf", yields 0.0.
    """
    if not raw:
        return 0.0
    value = raw.strip().replace(".", "").replace(",", ".", 1)
    try:
        result = float(value)
    except ValueError:
        return 0.0
    return result if math.isfinite(result) else 0.0
