"""Investment and loan formulas: SIP, lumpsum, EMI and PPF"""

from sky_financial.domain.models import (
    INVESTED_COLOR,
    RETURNS_COLOR,
    BreakdownEntry,
    CalculationInput,
    CalculatorKind,
    EmiResult,
    InvestmentResult,
)
from sky_financial.utils.currency import round_currency


def _investment_result(
    kind: CalculatorKind, invested: float, total: float
) -> InvestmentResult:
    """Round at the result boundary and build the invested/returns breakdown"""
    invested_amount = round_currency(invested)
    wealth_gained = round_currency(total - invested)

    return InvestmentResult(
        kind=kind,
        invested_amount=invested_amount,
        wealth_gained=wealth_gained,
        total_value=round_currency(total),
        breakdown=[
            BreakdownEntry(label="Invested", value=invested_amount, color=INVESTED_COLOR),
            BreakdownEntry(label="Returns", value=wealth_gained, color=RETURNS_COLOR),
        ],
    )


def calculate_sip(data: CalculationInput) -> InvestmentResult:
    """
    Future value of a monthly SIP.

    Contributions are made at the start of each month (annuity-due):
        FV = P × ({(1 + i)^n - 1} / i) × (1 + i)
    with i the monthly rate and n the number of monthly contributions.
    A zero rate means no growth: FV = P × n.
    """
    monthly_rate = data.rate / 100 / 12
    periods = data.duration * 12
    invested = data.amount * periods

    if monthly_rate == 0:
        total = invested
    else:
        growth = (1 + monthly_rate) ** periods
        total = data.amount * ((growth - 1) / monthly_rate) * (1 + monthly_rate)

    return _investment_result(CalculatorKind.SIP, invested, total)


def calculate_lumpsum(data: CalculationInput) -> InvestmentResult:
    """One-off investment compounded annually for whole years"""
    total = data.amount * (1 + data.rate / 100) ** data.duration
    return _investment_result(CalculatorKind.LUMPSUM, data.amount, total)


def calculate_emi(data: CalculationInput) -> EmiResult:
    """
    Equated monthly installment for an amortizing loan.

        EMI = P × r × (1 + r)^m / ((1 + r)^m - 1)

    Zero interest splits the principal evenly across installments.
    With no installments at all the whole principal is payable at once.
    """
    monthly_rate = data.rate / 12 / 100
    installments = data.duration * 12

    if installments == 0:
        monthly_payment = float(data.amount)
        total_payable = float(data.amount)
    else:
        growth = (1 + monthly_rate) ** installments
        if monthly_rate == 0 or growth == 1:
            monthly_payment = data.amount / installments
        else:
            monthly_payment = data.amount * monthly_rate * growth / (growth - 1)
        total_payable = monthly_payment * installments

    principal = round_currency(data.amount)
    interest = round_currency(total_payable - data.amount)

    return EmiResult(
        principal=principal,
        interest=interest,
        monthly_payment=round_currency(monthly_payment),
        total_payable=round_currency(total_payable),
        breakdown=[
            BreakdownEntry(label="Principal", value=principal, color=INVESTED_COLOR),
            BreakdownEntry(label="Interest", value=interest, color=RETURNS_COLOR),
        ],
    )


def calculate_ppf(data: CalculationInput) -> InvestmentResult:
    """
    Simplified PPF projection.

    Each year the yearly deposit is added first, then a full year's interest
    is credited on the whole balance. Real PPF accrual (lowest monthly balance)
    is not modelled.
    """
    balance = 0.0
    for _ in range(data.duration):
        balance += data.amount
        balance += balance * (data.rate / 100)

    return _investment_result(CalculatorKind.PPF, data.amount * data.duration, balance)
