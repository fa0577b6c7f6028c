"""
Job cost calculation.

A pure function shared by the form preview endpoint and by the job service,
so that the amounts persisted on a job are always exactly what the preview
showed for the same inputs.

    base_amount  = quantity * rate
    waste_amount = base_amount * waste_percentage / 100
    grand_total  = base_amount + cooly + waste_amount
                   + sum(entry.cost + entry.waste_amount)

Percent-derived waste is rounded half-up to whole paise (two places).
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

CENT = Decimal("0.01")
HUNDRED = Decimal("100")
ZERO = Decimal("0")


def to_decimal(value: Any) -> Decimal:
    """Convert ints, floats, strings and Decimals without binary float noise."""
    if isinstance(value, Decimal):
        return value
    if value is None:
        return ZERO
    return Decimal(str(value))


def to_money(value: Any) -> Decimal:
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def percentage_of(amount: Any, percentage: Any) -> Decimal:
    """Return percentage% of amount, rounded to paise."""
    return to_money(to_decimal(amount) * to_decimal(percentage) / HUNDRED)


@dataclass(frozen=True)
class EntryCost:
    """Cost of one machine entry after waste has been resolved."""

    cost: Decimal
    waste_percentage: Decimal
    waste_amount: Decimal

    @property
    def total(self) -> Decimal:
        return self.cost + self.waste_amount


@dataclass(frozen=True)
class CostBreakdown:
    base_amount: Decimal
    cooly_amount: Decimal
    waste_amount: Decimal
    machine_cost: Decimal
    machine_waste_amount: Decimal
    grand_total: Decimal
    entries: list[EntryCost] = field(default_factory=list)


def _entry_value(entry: Any, name: str) -> Any:
    if isinstance(entry, Mapping):
        return entry.get(name)
    return getattr(entry, name, None)


def resolve_entry_cost(entry: Any, base_amount: Decimal) -> EntryCost:
    """
    Resolve a machine entry's waste.

    An explicitly supplied waste_amount is used as entered; otherwise it is
    derived from the entry's waste_percentage of the job's base amount.
    """
    cost = to_money(_entry_value(entry, "cost"))
    waste_percentage = to_decimal(_entry_value(entry, "waste_percentage"))
    supplied = _entry_value(entry, "waste_amount")
    if cost < 0 or waste_percentage < 0:
        raise ValueError("Machine cost and waste percentage must not be negative")

    if supplied is None:
        waste_amount = percentage_of(base_amount, waste_percentage)
    else:
        waste_amount = to_money(supplied)
        if waste_amount < 0:
            raise ValueError("Machine waste amount must not be negative")

    return EntryCost(
        cost=cost, waste_percentage=waste_percentage, waste_amount=waste_amount
    )


def calculate_job_cost(
    quantity: int,
    rate: Any,
    cooly: Any = ZERO,
    waste_percentage: Any = ZERO,
    machine_entries: Iterable[Any] = (),
) -> CostBreakdown:
    """
    Compute the cost breakdown of a job.

    machine_entries may be model instances or mappings exposing cost,
    waste_percentage and optionally waste_amount.
    """
    rate_value = to_decimal(rate)
    cooly_amount = to_money(cooly)
    waste_pct = to_decimal(waste_percentage)
    if quantity < 0 or rate_value < 0 or cooly_amount < 0 or waste_pct < 0:
        raise ValueError("Quantity, rate, cooly and waste must not be negative")

    base_amount = to_money(Decimal(quantity) * rate_value)
    waste_amount = percentage_of(base_amount, waste_pct)

    entries = [resolve_entry_cost(entry, base_amount) for entry in machine_entries]
    machine_cost = sum((e.cost for e in entries), ZERO)
    machine_waste_amount = sum((e.waste_amount for e in entries), ZERO)

    grand_total = (
        base_amount + cooly_amount + waste_amount + machine_cost + machine_waste_amount
    )

    return CostBreakdown(
        base_amount=base_amount,
        cooly_amount=cooly_amount,
        waste_amount=waste_amount,
        machine_cost=to_money(machine_cost),
        machine_waste_amount=to_money(machine_waste_amount),
        grand_total=to_money(grand_total),
        entries=entries,
    )
