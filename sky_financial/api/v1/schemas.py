"""Pydantic schemas for API request/response validation"""

from datetime import datetime
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, Field

from sky_financial.domain.models import CalculatorKind, TaxRegime


class CalculationRequest(BaseModel):
    """Request body for POST /v1/calculate"""

    kind: CalculatorKind
    amount: float = Field(..., ge=0, description="Contribution, principal or annual income in rupees")
    rate: float = Field(0.0, ge=0, description="Annual rate in percent")
    duration: int = Field(0, ge=0, description="Duration in whole years")
    deductions: float = Field(0.0, ge=0, description="Old regime deductions (TAX only)")
    clamp: bool = Field(False, description="Clamp out-of-range values instead of rejecting them")


class BreakdownSchema(BaseModel):
    """Chart slice with its display value"""

    label: str
    value: int
    color: str
    formatted: str


class InvestmentResultSchema(BaseModel):
    """Response for SIP, LUMPSUM and PPF calculations"""

    kind: Literal["SIP", "LUMPSUM", "PPF"]
    invested_amount: int
    wealth_gained: int
    total_value: int
    breakdown: List[BreakdownSchema]


class EmiResultSchema(BaseModel):
    """Response for EMI calculations"""

    kind: Literal["EMI"]
    principal: int
    interest: int
    monthly_payment: int
    total_payable: int
    breakdown: List[BreakdownSchema]


class TaxResultSchema(BaseModel):
    """Response for TAX calculations"""

    kind: Literal["TAX"]
    gross_income: float
    taxable_old: float
    taxable_new: float
    old_tax: int
    new_tax: int
    savings: int
    better_regime: Optional[TaxRegime] = None
    breakdown: List[BreakdownSchema]


CalculationResponse = Annotated[
    Union[InvestmentResultSchema, EmiResultSchema, TaxResultSchema],
    Field(discriminator="kind"),
]


class InputBoundsSchema(BaseModel):
    """Accepted (min, max) per field; null when the field is ignored"""

    amount: List[float]
    rate: Optional[List[float]] = None
    duration: Optional[List[float]] = None
    deductions: Optional[List[float]] = None


class DefaultInputSchema(BaseModel):
    amount: float
    rate: float
    duration: int
    deductions: float


class CalculatorInfo(BaseModel):
    """Single calculator with its starting input and limits"""

    kind: CalculatorKind
    defaults: DefaultInputSchema
    bounds: InputBoundsSchema


class CalculatorListResponse(BaseModel):
    """Response for GET /v1/calculators"""

    calculators: List[CalculatorInfo]


class TaxLiabilityRequest(BaseModel):
    """Request body for POST /v1/tax/liability"""

    taxable_income: float = Field(..., ge=0, description="Annual taxable income in rupees")
    regime: TaxRegime


class TaxLiabilityResponse(BaseModel):
    """Response for POST /v1/tax/liability"""

    taxable_income: float
    regime: TaxRegime
    tax: int
    formatted: str


class ChatMessageSchema(BaseModel):
    """Single turn in a chat transcript"""

    id: str
    role: Literal["user", "model"]
    text: str
    timestamp: datetime


class ChatSessionResponse(BaseModel):
    """Response for POST /v1/chat/sessions and GET /v1/chat/sessions/{session_id}"""

    session_id: str
    created_at: datetime
    welcome: str
    messages: List[ChatMessageSchema]


class ChatMessageRequest(BaseModel):
    """Request body for POST /v1/chat/sessions/{session_id}/messages"""

    message: str = Field(..., min_length=1, max_length=4000, description="User text")
