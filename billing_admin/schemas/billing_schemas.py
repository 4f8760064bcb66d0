# billing_admin/schemas/billing_schemas.py
from decimal import Decimal
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class FeeQuoteRequest(BaseModel):
    amount: Decimal = Field(..., description="Transaction amount", examples=[4000])
    pos_type: str = Field(..., description="POS channel (MP, MOS, INJ/PH)", examples=["MP"])
    tax_rate: Decimal = Field(..., description="Tax rate in percent", examples=[3.5])


class FeeQuoteResponse(BaseModel):
    pos_type: str
    tax_rate: float
    mdr_rate: float
    tax: float
    mdr: float
    charges: float
    profit: float


class RatePair(BaseModel):
    tax: float
    mdr: float


class OnboardingRequest(BaseModel):
    """Combined customer form: the customer plus optional first records."""

    customer: Dict[str, Any]
    tax: Optional[Dict[str, Any]] = None
    document: Optional[Dict[str, Any]] = None
    account: Optional[Dict[str, Any]] = None


class CascadeDeleteResponse(BaseModel):
    customer_id: int
    deleted: Dict[str, int]


class CardCatalogResponse(BaseModel):
    bank_name: str
    card_type: str
    card_names: List[str]
