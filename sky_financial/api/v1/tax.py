"""POST /v1/tax/liability - tax payable under a single regime"""

from fastapi import APIRouter

from sky_financial.api.v1.schemas import TaxLiabilityRequest, TaxLiabilityResponse
from sky_financial.domain.tax import tax_liability
from sky_financial.utils.currency import format_inr

router = APIRouter()


@router.post("/tax/liability", response_model=TaxLiabilityResponse)
def get_tax_liability(request_body: TaxLiabilityRequest):
    """
    Tax on an already-taxable income (after deductions), cess included.

    Returns:
        Tax in whole rupees plus its display string
    """
    tax = tax_liability(request_body.taxable_income, request_body.regime)

    return TaxLiabilityResponse(
        taxable_income=request_body.taxable_income,
        regime=request_body.regime,
        tax=tax,
        formatted=format_inr(tax),
    )
