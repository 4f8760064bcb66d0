# billing_admin/domain/services/relations.py
from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from billing_admin.core.config import settings
from billing_admin.core.errors import NotFound, SchemaNotFound
from billing_admin.domain.registry import get_table_schema, resolve_table
from billing_admin.domain.services.table_gateway import run_statement


async def relation_options(db: AsyncSession, table: str, field_name: str) -> List[dict]:
    """``{value, label}`` pairs for the foreign-key dropdown of ``table.field_name``."""
    resolve_table(table)
    schema = get_table_schema(table)
    if schema is None:
        raise SchemaNotFound()
    spec = schema.get_field(field_name)
    if spec is None or spec.relation is None:
        raise NotFound(f"{table}.{field_name} has no relation")

    target = resolve_table(spec.relation.table)
    value_col = target.c[spec.relation.value_field]
    label_col = target.c[spec.relation.label_field]
    stmt = select(value_col, label_col).order_by(label_col).limit(settings.LIST_LIMIT)
    rows = await run_statement(db, stmt)
    return [{"value": r[0], "label": r[1]} for r in rows]
