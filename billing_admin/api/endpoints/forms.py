# billing_admin/api/endpoints/forms.py
"""
Form submissions: validated first, then written through the table gateway.

A form that fails validation answers 422 and never reaches the database.
"""
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from billing_admin.api.deps import read_json_object
from billing_admin.core.config import settings
from billing_admin.core.rate_limit import limiter
from billing_admin.domain.registry import resolve_table
from billing_admin.domain.services import table_gateway
from billing_admin.domain.services.customer_service import onboard_customer
from billing_admin.domain.services.validation import card_names_for, prepare_form, validate_onboarding
from billing_admin.infra.db.session import get_db
from billing_admin.schemas.billing_schemas import CardCatalogResponse, OnboardingRequest

router = APIRouter(tags=["forms"])


def _filled(section: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    if not section:
        return None
    if all(v is None or (isinstance(v, str) and not v.strip()) for v in section.values()):
        return None
    return section


@router.get("/cards/catalog", response_model=CardCatalogResponse)
def card_catalog(bank_name: str, card_type: str):
    return CardCatalogResponse(
        bank_name=bank_name,
        card_type=card_type,
        card_names=card_names_for(bank_name, card_type),
    )


@router.post("/forms/customers/onboard", status_code=201)
@limiter.limit(settings.RATE_LIMIT)
async def onboard(request: Request, body: OnboardingRequest, db: AsyncSession = Depends(get_db)):
    validate_onboarding(body.customer, body.tax, body.document, body.account)
    sections = {
        "customer_tax_details": _filled(body.tax),
        "identity_documents": _filled(body.document),
        "accounts": _filled(body.account),
    }
    return await onboard_customer(db, body.customer, sections)


@router.post("/forms/{table}", status_code=201)
@limiter.limit(settings.RATE_LIMIT)
async def submit_form(table: str, request: Request, db: AsyncSession = Depends(get_db)):
    resolve_table(table)
    payload = await read_json_object(request)
    values = prepare_form(table, payload)
    return await table_gateway.create_row(db, table, values)


@router.patch("/forms/{table}/{row_id}")
@limiter.limit(settings.RATE_LIMIT)
async def update_form(
    table: str,
    row_id: str,
    request: Request,
    db: AsyncSession = Depends(get_db),
):
    resolve_table(table)
    table_gateway.parse_id(row_id)
    payload = await read_json_object(request)
    current = None
    if table == "transactions":
        current = await table_gateway.get_row(db, table, row_id)
    values = prepare_form(table, payload, partial=True, current=current)
    return await table_gateway.update_row(db, table, row_id, values)
