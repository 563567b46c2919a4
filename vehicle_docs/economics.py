"""Monetary derivations for contracts and invoices.

The entered sale price is always tax-inclusive. Base and tax are derived from it
in one pass and rounded half-up to cents; there is no base -> gross direction.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import NamedTuple, Optional

from vehicle_docs.formatting import to_decimal

CENT = Decimal("0.01")
HUNDRED = Decimal("100")

DEFAULT_TAX_RATE = Decimal("21")

DEPOSIT_PERCENT_OPTIONS = (5, 10, 15, 20)
DEFAULT_DEPOSIT_PERCENT = 10


class TaxBreakdown(NamedTuple):
    tax_base: Decimal
    tax_amount: Decimal
    total_with_tax: Decimal


def round2(value) -> Decimal:
    """Round half-up to two decimal places."""
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def derive_from_gross(gross_price, tax_rate_percent=DEFAULT_TAX_RATE) -> TaxBreakdown:
    """Split a tax-inclusive price into base and tax.

    >>> derive_from_gross(12100, 21)
    TaxBreakdown(tax_base=Decimal('10000.00'), tax_amount=Decimal('2100.00'), total_with_tax=Decimal('12100'))
    """
    gross = to_decimal(gross_price)
    rate = to_decimal(tax_rate_percent)
    tax_base = round2(gross / (1 + rate / HUNDRED))
    tax_amount = round2(gross - tax_base)
    return TaxBreakdown(tax_base, tax_amount, gross)


def remaining_balance(total_price, deposit_amount) -> Decimal:
    return round2(to_decimal(total_price) - to_decimal(deposit_amount))


def suggested_deposit(total_price, percent=DEFAULT_DEPOSIT_PERCENT) -> Decimal:
    return round2(to_decimal(total_price) * to_decimal(percent) / HUNDRED)


def deposit_percent(deposit_amount, total_price) -> int:
    """Deposit as a whole percentage of the total (0 when the total is 0)."""
    total = to_decimal(total_price)
    if total <= 0:
        return 0
    ratio = to_decimal(deposit_amount) / total * HUNDRED
    return int(ratio.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def highlighted_deposit_option(deposit_amount, total_price) -> Optional[int]:
    """The selector option matching the deposit, if any."""
    percent = deposit_percent(deposit_amount, total_price)
    if percent in DEPOSIT_PERCENT_OPTIONS:
        return percent
    return None
