# billing_admin/api/endpoints/health.py
from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from billing_admin.core.config import settings
from billing_admin.infra.db.session import get_db
from billing_admin.schemas.health_schemas import ComponentStatus, HealthResponse, StatusObject

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check(db: AsyncSession = Depends(get_db)):
    t = datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")

    try:
        await db.execute(text("SELECT 1"))
        db_status = ComponentStatus(status="operational", detail="Database connection OK")
    except Exception as e:
        db_status = ComponentStatus(status="major_outage", detail=f"Database error: {e}")

    if db_status.status != "operational":
        status = StatusObject(indicator="major_outage", description="Database unavailable.")
    else:
        status = StatusObject(indicator="operational", description="All systems functional.")

    return HealthResponse(
        name=settings.PROJECT_NAME,
        version=settings.PROJECT_VERSION,
        time=t,
        status=status,
        components={"database": db_status},
    )
