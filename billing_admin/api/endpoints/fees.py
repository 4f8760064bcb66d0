# billing_admin/api/endpoints/fees.py
from typing import Dict, List, Optional

from fastapi import APIRouter

from billing_admin.core.errors import NotFound
from billing_admin.domain.services.fees import compute_fees, mdr_rate_for, rate_table
from billing_admin.schemas.billing_schemas import FeeQuoteRequest, FeeQuoteResponse, RatePair

router = APIRouter(prefix="/fees", tags=["fees"])


@router.get("/rates", response_model=Dict[str, List[RatePair]])
def list_rates(pos_type: Optional[str] = None):
    table = rate_table()
    if pos_type is None:
        return table
    if pos_type not in table:
        raise NotFound(f"Unknown POS type: {pos_type}")
    return {pos_type: table[pos_type]}


@router.post("/quote", response_model=FeeQuoteResponse)
def quote_fees(body: FeeQuoteRequest):
    fees = compute_fees(body.amount, body.pos_type, body.tax_rate)
    return FeeQuoteResponse(
        pos_type=body.pos_type,
        tax_rate=float(body.tax_rate),
        mdr_rate=float(mdr_rate_for(body.pos_type, body.tax_rate)),
        tax=float(fees.tax),
        mdr=float(fees.mdr),
        charges=float(fees.charges),
        profit=float(fees.profit),
    )
