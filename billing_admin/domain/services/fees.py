# billing_admin/domain/services/fees.py
"""
Tax / MDR / profit for card transactions.

Each POS channel has a fixed menu of (tax %, MDR %) pairs. Picking a tax rate
on a channel fixes the MDR rate (first pair with that tax rate wins).
"""
from dataclasses import asdict, dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Dict, List, Optional, Tuple

from billing_admin.core.errors import ValidationFailure

CENT = Decimal("0.01")

TAX_MDR_RATES: Dict[str, Tuple[Tuple[Decimal, Decimal], ...]] = {
    "MP": (
        (Decimal("3.50"), Decimal("1.50")),
        (Decimal("3.00"), Decimal("2.00")),
        (Decimal("2.80"), Decimal("2.00")),
        (Decimal("2.00"), Decimal("1.50")),
    ),
    "PH": (
        (Decimal("3.50"), Decimal("1.50")),
        (Decimal("2.80"), Decimal("2.00")),
        (Decimal("1.90"), Decimal("1.50")),
    ),
    "MOS": (
        (Decimal("2.80"), Decimal("2.00")),
        (Decimal("2.50"), Decimal("2.00")),
        (Decimal("2.00"), Decimal("1.50")),
        (Decimal("1.80"), Decimal("1.50")),
    ),
}

# Stored POS value -> rate channel
POS_ALIASES = {"INJ": "PH"}

FEE_FIELDS = ("tax", "mdr", "charges", "profit")


@dataclass(frozen=True)
class FeeBreakdown:
    tax: Decimal
    mdr: Decimal
    charges: Decimal
    profit: Decimal

    def as_dict(self) -> Dict[str, Decimal]:
        return asdict(self)


def _channel(pos_type: Optional[str]) -> Optional[str]:
    if not pos_type:
        return None
    channel = POS_ALIASES.get(pos_type, pos_type)
    return channel if channel in TAX_MDR_RATES else None


def _to_decimal(value: Any, name: str) -> Decimal:
    if isinstance(value, bool):
        raise ValidationFailure({name: f"{name} must be a number"})
    try:
        number = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        raise ValidationFailure({name: f"{name} must be a number"})
    if not number.is_finite():
        raise ValidationFailure({name: f"{name} must be a number"})
    return number


def round_cents(value: Decimal) -> Decimal:
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def available_tax_rates(pos_type: Optional[str]) -> List[Decimal]:
    channel = _channel(pos_type)
    if channel is None:
        return []
    return [tax for tax, _ in TAX_MDR_RATES[channel]]


def mdr_rate_for(pos_type: Optional[str], tax_rate: Any) -> Optional[Decimal]:
    channel = _channel(pos_type)
    if channel is None or tax_rate in (None, ""):
        return None
    try:
        wanted = Decimal(str(tax_rate))
    except (InvalidOperation, ValueError):
        return None
    for tax, mdr in TAX_MDR_RATES[channel]:
        if tax == wanted:
            return mdr
    return None


def compute_fees(amount: Any, pos_type: str, tax_rate: Any) -> FeeBreakdown:
    if _channel(pos_type) is None:
        raise ValidationFailure({"pos_type": f"Unknown POS type: {pos_type}"})
    mdr_rate = mdr_rate_for(pos_type, tax_rate)
    if mdr_rate is None:
        raise ValidationFailure(
            {"tax_rate": f"Tax rate {tax_rate} is not available for POS type {pos_type}"}
        )
    amount = _to_decimal(amount, "amount")
    tax_rate = _to_decimal(tax_rate, "tax_rate")

    tax = amount * tax_rate / 100
    mdr = amount * mdr_rate / 100
    return FeeBreakdown(
        tax=round_cents(tax),
        mdr=round_cents(mdr),
        charges=round_cents(mdr),
        profit=round_cents(tax - mdr),
    )


def apply_transaction_fees(values: Dict[str, Any]) -> Dict[str, Any]:
    """
    Returns a copy of a transaction form with its derived fields set.

    Debit: tax, mdr, charges and profit are recomputed from amount, pos_type
    and tax_rate. Credit: pos_type, tax_rate and the derived fields are cleared.
    """
    result = dict(values)
    if result.get("transaction_type") != "debit":
        for key in ("pos_type", "tax_rate") + FEE_FIELDS:
            result[key] = None
        return result

    fees = compute_fees(result.get("amount"), result.get("pos_type"), result.get("tax_rate"))
    result["tax_rate"] = _to_decimal(result["tax_rate"], "tax_rate")
    result.update(fees.as_dict())
    return result


def rate_table() -> Dict[str, List[Dict[str, Decimal]]]:
    table = {
        channel: [{"tax": tax, "mdr": mdr} for tax, mdr in pairs]
        for channel, pairs in TAX_MDR_RATES.items()
    }
    for alias, channel in POS_ALIASES.items():
        table[alias] = table[channel]
    return table
