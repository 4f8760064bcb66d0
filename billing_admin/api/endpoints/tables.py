# billing_admin/api/endpoints/tables.py
from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from billing_admin.api.deps import read_json_object
from billing_admin.domain.registry import resolve_table
from billing_admin.domain.services import table_gateway
from billing_admin.infra.db.session import get_db

router = APIRouter(tags=["tables"])


@router.get("/{table}")
async def list_table(table: str, db: AsyncSession = Depends(get_db)):
    return await table_gateway.list_rows(db, table)


@router.post("/{table}", status_code=201)
async def create_table_row(table: str, request: Request, db: AsyncSession = Depends(get_db)):
    resolve_table(table)
    payload = await read_json_object(request)
    return await table_gateway.create_row(db, table, payload)


@router.patch("/{table}/{row_id}")
async def update_table_row(
    table: str,
    row_id: str,
    request: Request,
    db: AsyncSession = Depends(get_db),
):
    resolve_table(table)
    table_gateway.parse_id(row_id)
    payload = await read_json_object(request)
    return await table_gateway.update_row(db, table, row_id, payload)


@router.delete("/{table}/{row_id}")
async def delete_table_row(table: str, row_id: str, db: AsyncSession = Depends(get_db)):
    return await table_gateway.delete_row(db, table, row_id)
