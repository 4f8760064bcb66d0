# billing_admin/domain/services/table_gateway.py
"""
Generic CRUD over the registry tables.

Table and column identifiers only ever come from the registry (``Table`` and
``Column`` objects); request values are always bound parameters.
"""
import logging
import math
from datetime import date, datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Optional

from sqlalchemy import delete, insert, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from billing_admin.core.config import settings
from billing_admin.core.errors import (
    InvalidFieldValue,
    InvalidId,
    NoValidFields,
    QueryFailure,
    SchemaNotFound,
)
from billing_admin.domain.registry import FieldSpec, TableSchema, get_table_schema, resolve_table

logger = logging.getLogger(__name__)

_TRUE = {"true", "1", "yes", "on"}
_FALSE = {"false", "0", "no", "off"}


def parse_id(raw: Any) -> int:
    """Row ids must be finite, integral numbers."""
    if isinstance(raw, bool):
        raise InvalidId()
    try:
        value = float(raw)
    except (TypeError, ValueError):
        raise InvalidId()
    if not math.isfinite(value) or not value.is_integer():
        raise InvalidId()
    return int(value)


def _parse_datetime(value: str) -> datetime:
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    parsed = datetime.fromisoformat(text)
    # Columns are naive UTC
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def coerce_value(spec: FieldSpec, value: Any) -> Any:
    """Convert a JSON value to what the column expects for ``spec.type``."""
    if value is None:
        return None
    if spec.type in ("text", "textarea", "enum"):
        return value if isinstance(value, str) else str(value)
    if isinstance(value, str) and not value.strip():
        return None

    try:
        if spec.type == "number":
            if isinstance(value, bool):
                raise ValueError("boolean is not a number")
            number = Decimal(str(value).strip())
            if not number.is_finite():
                raise ValueError("number must be finite")
            return number

        if spec.type == "select":
            return parse_id(value)

        if spec.type == "boolean":
            if isinstance(value, bool):
                return value
            if isinstance(value, (int, float)) and value in (0, 1):
                return bool(value)
            lowered = str(value).strip().lower()
            if lowered in _TRUE:
                return True
            if lowered in _FALSE:
                return False
            raise ValueError("not a boolean")

        if spec.type == "datetime":
            if isinstance(value, datetime):
                return value
            return _parse_datetime(str(value))

        if spec.type == "date":
            if isinstance(value, date) and not isinstance(value, datetime):
                return value
            return _parse_datetime(str(value)).date()
    except (ValueError, InvalidOperation, InvalidId):
        raise InvalidFieldValue(f"Invalid value for {spec.name}")

    return value


def filter_payload(schema: TableSchema, payload: Dict[str, Any]) -> Dict[str, Any]:
    """Keep only registry fields (unknown keys are dropped) and coerce them."""
    values: Dict[str, Any] = {}
    for spec in schema.fields:
        if spec.name in payload:
            values[spec.name] = coerce_value(spec, payload[spec.name])
    return values


def _schema_for(table: str) -> TableSchema:
    schema = get_table_schema(table)
    if schema is None:
        raise SchemaNotFound()
    return schema


async def run_statement(db: AsyncSession, stmt, *, commit: bool = False):
    try:
        result = await db.execute(stmt)
        rows = result.fetchall() if result.returns_rows else []
        if commit:
            await db.commit()
        return rows
    except SQLAlchemyError as e:
        await db.rollback()
        detail = str(getattr(e, "orig", None) or e)
        logger.error("Query failed: %s", detail)
        raise QueryFailure(detail) from e


async def list_rows(db: AsyncSession, table: str) -> List[dict]:
    t = resolve_table(table)
    stmt = select(t).order_by(t.c.id.desc()).limit(settings.LIST_LIMIT)
    rows = await run_statement(db, stmt)
    return [dict(r._mapping) for r in rows]


async def list_raw_rows(db: AsyncSession, table: str) -> List[dict]:
    """Unordered rows for relation pickers."""
    t = resolve_table(table)
    rows = await run_statement(db, select(t).limit(settings.LIST_LIMIT))
    return [dict(r._mapping) for r in rows]


async def get_row(db: AsyncSession, table: str, row_id: Any) -> Optional[dict]:
    t = resolve_table(table)
    pk = parse_id(row_id)
    rows = await run_statement(db, select(t).where(t.c.id == pk))
    return dict(rows[0]._mapping) if rows else None


async def create_row(db: AsyncSession, table: str, payload: Dict[str, Any]) -> Optional[dict]:
    t = resolve_table(table)
    schema = _schema_for(table)
    values = filter_payload(schema, payload)
    if not values:
        raise NoValidFields()

    stmt = insert(t).values(**values).returning(*t.c)
    rows = await run_statement(db, stmt, commit=True)
    row = dict(rows[0]._mapping) if rows else None
    logger.info("Created %s row id=%s", table, row and row.get("id"))
    return row


async def update_row(
    db: AsyncSession,
    table: str,
    row_id: Any,
    payload: Dict[str, Any],
) -> Optional[dict]:
    t = resolve_table(table)
    pk = parse_id(row_id)
    schema = _schema_for(table)
    values = filter_payload(schema, payload)
    if not values:
        raise NoValidFields()

    stmt = update(t).where(t.c.id == pk).values(**values).returning(*t.c)
    rows = await run_statement(db, stmt, commit=True)
    if not rows:
        logger.info("Update on %s id=%s matched no row", table, pk)
        return None
    logger.info("Updated %s row id=%s fields=%s", table, pk, sorted(values))
    return dict(rows[0]._mapping)


async def delete_row(db: AsyncSession, table: str, row_id: Any) -> dict:
    t = resolve_table(table)
    pk = parse_id(row_id)
    await run_statement(db, delete(t).where(t.c.id == pk), commit=True)
    logger.info("Deleted %s row id=%s", table, pk)
    return {"ok": True}
