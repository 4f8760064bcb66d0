# billing_admin/domain/services/stats_service.py
from sqlalchemy import case, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from billing_admin.core.config import settings
from billing_admin.infra.db.models.account import Account
from billing_admin.infra.db.models.customer import Customer
from billing_admin.infra.db.models.transaction import Transaction


async def get_dashboard_stats(db: AsyncSession) -> dict:
    """Dashboard counters plus the most recent transactions."""
    signed_amount = case(
        (Transaction.transaction_type == "credit", Transaction.amount),
        else_=-Transaction.amount,
    )

    # All aggregates go out as one statement of scalar subqueries
    totals_stmt = select(
        select(func.count(Customer.id)).scalar_subquery().label("customers"),
        select(func.count(Account.id)).scalar_subquery().label("accounts"),
        select(func.count(Transaction.id)).scalar_subquery().label("transactions"),
        select(func.coalesce(func.sum(Account.pending_amount), 0)).scalar_subquery().label("pending"),
        select(func.coalesce(func.sum(signed_amount), 0)).scalar_subquery().label("revenue"),
    )
    totals = (await db.execute(totals_stmt)).one()

    recent_stmt = (
        select(Transaction.__table__, Customer.full_name.label("customer_name"))
        .outerjoin(Customer, Customer.id == Transaction.customer_id)
        .order_by(Transaction.transaction_date.desc())
        .limit(settings.RECENT_LIMIT)
    )
    recent = (await db.execute(recent_stmt)).fetchall()

    return {
        "stats": {
            "customers": int(totals.customers or 0),
            "accounts": int(totals.accounts or 0),
            "transactions": int(totals.transactions or 0),
            "pending": float(totals.pending or 0),
            "revenue": float(totals.revenue or 0),
        },
        "recent": [dict(r._mapping) for r in recent],
    }
