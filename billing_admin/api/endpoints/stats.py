# billing_admin/api/endpoints/stats.py
from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from billing_admin.core.errors import QueryFailure
from billing_admin.domain.services.stats_service import get_dashboard_stats
from billing_admin.infra.db.session import get_db

router = APIRouter(tags=["stats"])


@router.get("/stats")
async def dashboard_stats(db: AsyncSession = Depends(get_db)):
    try:
        return await get_dashboard_stats(db)
    except SQLAlchemyError as e:
        raise QueryFailure(str(getattr(e, "orig", None) or e)) from e
