# billing_admin/api/endpoints/customers.py
from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from billing_admin.core.errors import QueryFailure
from billing_admin.domain.services.cascade import delete_customer_cascade
from billing_admin.domain.services.customer_service import get_customer_summary, list_customer_cards
from billing_admin.domain.services.table_gateway import parse_id
from billing_admin.infra.db.session import get_db
from billing_admin.schemas.billing_schemas import CascadeDeleteResponse

router = APIRouter(tags=["customers"])


@router.get("/customers/{customer_id}")
async def get_customer(customer_id: str, db: AsyncSession = Depends(get_db)):
    try:
        return await get_customer_summary(db, customer_id)
    except SQLAlchemyError as e:
        raise QueryFailure(str(getattr(e, "orig", None) or e)) from e


@router.delete("/customers/{customer_id}/cascade", response_model=CascadeDeleteResponse)
async def delete_customer(customer_id: str, db: AsyncSession = Depends(get_db)):
    deleted = await delete_customer_cascade(db, customer_id)
    return CascadeDeleteResponse(customer_id=parse_id(customer_id), deleted=deleted)


@router.get("/customer-cards/{customer_id}")
async def get_customer_cards(customer_id: str, db: AsyncSession = Depends(get_db)):
    try:
        return await list_customer_cards(db, customer_id)
    except SQLAlchemyError as e:
        raise QueryFailure(str(getattr(e, "orig", None) or e)) from e
