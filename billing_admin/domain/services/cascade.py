# billing_admin/domain/services/cascade.py
"""
Removing a customer together with everything that points at it.

Two ways to do it:

* ``CascadeDeleteOrchestrator`` drives the generic API row by row, the way
  the admin UI does. Best effort: a failed step is logged and skipped, and
  the customer row is deleted at the end regardless.
* ``delete_customer_cascade`` does the same sweep server side inside one
  database transaction, so it either removes everything or nothing.

Both walk ``DEPENDENT_TABLES`` in order before touching ``customers``.
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Protocol

import requests
from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from billing_admin.core.config import settings
from billing_admin.core.errors import NotFound, QueryFailure
from billing_admin.domain.registry import resolve_table
from billing_admin.domain.services.table_gateway import parse_id

logger = logging.getLogger(__name__)

DEPENDENT_TABLES = (
    "transactions",
    "card_details",
    "customer_credits",
    "payment_alerts",
    "accounts",
    "customer_tax_details",
    "identity_documents",
)
CUSTOMER_TABLE = "customers"


class TableClient(Protocol):
    def list_rows(self, table: str) -> List[dict]: ...

    def delete_row(self, table: str, row_id: Any) -> None: ...


class GatewayClient:
    """HTTP client for the generic table API."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
        api_key: Optional[str] = None,
    ):
        self.base_url = (base_url or settings.GATEWAY_BASE_URL).rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout or settings.GATEWAY_TIMEOUT
        api_key = api_key if api_key is not None else settings.ADMIN_API_KEY
        self.headers = {"X-API-Key": api_key} if api_key else {}

    def _url(self, *parts: Any) -> str:
        return "/".join([self.base_url, "api", *(str(p) for p in parts)])

    def list_rows(self, table: str) -> List[dict]:
        resp = self.session.get(self._url(table), headers=self.headers, timeout=self.timeout)
        resp.raise_for_status()
        data = resp.json()
        return data if isinstance(data, list) else []

    def delete_row(self, table: str, row_id: Any) -> None:
        resp = self.session.delete(self._url(table, row_id), headers=self.headers, timeout=self.timeout)
        resp.raise_for_status()


@dataclass
class CascadeReport:
    customer_id: int
    deleted: Dict[str, int] = field(default_factory=dict)
    failed: Dict[str, List[Any]] = field(default_factory=dict)
    customer_deleted: bool = False

    @property
    def complete(self) -> bool:
        return self.customer_deleted and not self.failed


class CascadeDeleteOrchestrator:
    def __init__(self, client: TableClient):
        self.client = client

    def _sweep(self, table: str, report: CascadeReport) -> None:
        try:
            rows = self.client.list_rows(table)
        except Exception as e:
            logger.error("Failed to fetch %s for customer %s: %s", table, report.customer_id, e)
            report.failed.setdefault(table, []).append(None)
            return

        owned = [r for r in rows if _same_id(r.get("customer_id"), report.customer_id)]
        logger.info("Found %d %s rows for customer %s", len(owned), table, report.customer_id)

        for row in owned:
            try:
                self.client.delete_row(table, row["id"])
            except Exception as e:
                logger.error("Failed to delete %s row %s: %s", table, row.get("id"), e)
                report.failed.setdefault(table, []).append(row.get("id"))
                continue
            report.deleted[table] = report.deleted.get(table, 0) + 1

    def delete_customer(self, customer_id: Any) -> CascadeReport:
        report = CascadeReport(customer_id=parse_id(customer_id))
        for table in DEPENDENT_TABLES:
            self._sweep(table, report)

        # Runs even when part of the sweep failed
        self.client.delete_row(CUSTOMER_TABLE, report.customer_id)
        report.customer_deleted = True
        if report.failed:
            logger.warning(
                "Customer %s deleted with leftover rows: %s", report.customer_id, report.failed
            )
        else:
            logger.info("Customer %s deleted with all dependent rows", report.customer_id)
        return report


def _same_id(value: Any, customer_id: int) -> bool:
    try:
        return value is not None and int(value) == customer_id
    except (TypeError, ValueError):
        return False


async def delete_customer_cascade(db: AsyncSession, customer_id: Any) -> Dict[str, int]:
    """Delete a customer and its dependent rows in a single transaction."""
    pk = parse_id(customer_id)
    customers = resolve_table(CUSTOMER_TABLE)
    counts: Dict[str, int] = {}

    try:
        async with db.begin():
            found = await db.execute(select(customers.c.id).where(customers.c.id == pk))
            if found.first() is None:
                raise NotFound("Customer not found")

            for table in DEPENDENT_TABLES:
                t = resolve_table(table)
                res = await db.execute(delete(t).where(t.c.customer_id == pk))
                counts[table] = res.rowcount

            res = await db.execute(delete(customers).where(customers.c.id == pk))
            counts[CUSTOMER_TABLE] = res.rowcount
    except SQLAlchemyError as e:
        detail = str(getattr(e, "orig", None) or e)
        logger.error("Cascade delete of customer %s rolled back: %s", pk, detail)
        raise QueryFailure(detail) from e

    logger.info("Customer %s removed: %s", pk, counts)
    return counts
