"""Per-calculator default inputs and accepted input ranges"""

from dataclasses import dataclass, replace
from typing import Dict, List, Optional, Tuple

from sky_financial.domain.models import CalculationInput, CalculatorKind
from sky_financial.utils.currency import round_currency

Range = Tuple[float, float]


@dataclass(frozen=True)
class InputBounds:
    """Inclusive (min, max) ranges; None means the field is ignored for the kind"""

    amount: Range
    rate: Optional[Range] = None
    duration: Optional[Range] = None
    deductions: Optional[Range] = None


RATE_RANGE: Range = (1, 30)

INPUT_BOUNDS: Dict[CalculatorKind, InputBounds] = {
    CalculatorKind.SIP: InputBounds(amount=(500, 500_000), rate=RATE_RANGE, duration=(1, 40)),
    CalculatorKind.LUMPSUM: InputBounds(amount=(500, 500_000), rate=RATE_RANGE, duration=(1, 40)),
    CalculatorKind.EMI: InputBounds(amount=(500, 10_000_000), rate=RATE_RANGE, duration=(1, 40)),
    CalculatorKind.PPF: InputBounds(amount=(500, 500_000), rate=RATE_RANGE, duration=(1, 50)),
    CalculatorKind.TAX: InputBounds(amount=(500_000, 5_000_000), deductions=(0, 500_000)),
}

DEFAULT_INPUTS: Dict[CalculatorKind, CalculationInput] = {
    CalculatorKind.SIP: CalculationInput(amount=5000, rate=12, duration=10),
    CalculatorKind.LUMPSUM: CalculationInput(amount=100_000, rate=12, duration=10),
    CalculatorKind.EMI: CalculationInput(amount=5_000_000, rate=9, duration=20),
    CalculatorKind.PPF: CalculationInput(amount=100_000, rate=7.1, duration=15),
    # Only the standard deduction applies until the user adds more
    CalculatorKind.TAX: CalculationInput(amount=1_200_000, deductions=0),
}


def bounds_for(kind: CalculatorKind) -> InputBounds:
    return INPUT_BOUNDS[CalculatorKind(kind)]


def default_input(kind: CalculatorKind) -> CalculationInput:
    return DEFAULT_INPUTS[CalculatorKind(kind)]


def _checked_fields(bounds: InputBounds) -> List[Tuple[str, Range]]:
    fields = [("amount", bounds.amount)]
    for name in ("rate", "duration", "deductions"):
        limits = getattr(bounds, name)
        if limits is not None:
            fields.append((name, limits))
    return fields


def _num(value: float) -> str:
    return f"{value:.0f}" if float(value).is_integer() else str(value)


def find_violations(kind: CalculatorKind, data: CalculationInput) -> List[str]:
    """List every field of data outside the kind's range; empty when valid"""
    violations = []
    for name, (low, high) in _checked_fields(bounds_for(kind)):
        value = getattr(data, name)
        if not low <= value <= high:
            violations.append(f"{name} must be between {_num(low)} and {_num(high)}, got {_num(value)}")
    return violations


def _round_2dp(value: float) -> float:
    return round_currency(value * 100) / 100


def clamp_input(kind: CalculatorKind, data: CalculationInput) -> CalculationInput:
    """
    Pull every checked field into range.

    Values are rounded to 2 decimals and durations to whole years,
    the same way the calculator sliders settle typed-in values.
    """
    changes = {}
    for name, (low, high) in _checked_fields(bounds_for(kind)):
        value = min(max(getattr(data, name), low), high)
        changes[name] = round_currency(value) if name == "duration" else _round_2dp(value)
    return replace(data, **changes)
