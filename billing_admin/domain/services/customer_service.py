# billing_admin/domain/services/customer_service.py
import logging
from typing import List

from sqlalchemy import insert, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from billing_admin.core.errors import NotFound, QueryFailure
from billing_admin.domain.registry import get_table_schema, resolve_table
from billing_admin.domain.services.table_gateway import filter_payload, parse_id
from billing_admin.infra.db.models.card import CardDetail
from billing_admin.infra.db.models.customer import Customer

logger = logging.getLogger(__name__)


async def get_customer_summary(db: AsyncSession, customer_id) -> dict:
    pk = parse_id(customer_id)
    res = await db.execute(select(Customer.id, Customer.full_name).where(Customer.id == pk))
    row = res.first()
    if row is None:
        raise NotFound("Customer not found")
    return dict(row._mapping)


async def list_customer_cards(db: AsyncSession, customer_id) -> List[dict]:
    pk = parse_id(customer_id)
    res = await db.execute(
        select(CardDetail.__table__)
        .where(CardDetail.customer_id == pk)
        .order_by(CardDetail.id.desc())
    )
    cards = [dict(r._mapping) for r in res.fetchall()]
    if not cards:
        return cards

    name = (await db.execute(select(Customer.full_name).where(Customer.id == pk))).scalar()
    if name is not None:
        for card in cards:
            card["customer_name"] = name
    return cards


async def onboard_customer(
    db: AsyncSession,
    customer: dict,
    sections: dict,
) -> dict:
    """
    Insert a customer and its optional first tax detail, identity document
    and account in one transaction. ``sections`` maps table name to the
    (already validated) values for that table.
    """
    created: dict = {}
    try:
        async with db.begin():
            t = resolve_table("customers")
            values = filter_payload(get_table_schema("customers"), customer)
            row = (await db.execute(insert(t).values(**values).returning(*t.c))).one()
            created["customer"] = dict(row._mapping)
            customer_id = row.id

            for table, section in sections.items():
                if not section:
                    continue
                st = resolve_table(table)
                values = filter_payload(get_table_schema(table), {**section, "customer_id": customer_id})
                row = (await db.execute(insert(st).values(**values).returning(*st.c))).one()
                created[table] = dict(row._mapping)
    except SQLAlchemyError as e:
        detail = str(getattr(e, "orig", None) or e)
        logger.error("Onboarding rolled back: %s", detail)
        raise QueryFailure(detail) from e

    logger.info("Onboarded customer %s with %s", customer_id, sorted(k for k in created if k != "customer"))
    return created
