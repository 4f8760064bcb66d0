# billing_admin/api/endpoints/relations.py
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from billing_admin.domain.services.relations import relation_options
from billing_admin.domain.services.table_gateway import list_raw_rows
from billing_admin.infra.db.session import get_db

router = APIRouter(prefix="/rel", tags=["relations"])


@router.get("/{table}")
async def list_relation_rows(table: str, db: AsyncSession = Depends(get_db)):
    return await list_raw_rows(db, table)


@router.get("/{table}/{field}/options")
async def list_relation_options(table: str, field: str, db: AsyncSession = Depends(get_db)):
    return await relation_options(db, table, field)
