# billing_admin/api/router.py
from fastapi import APIRouter, Depends

from billing_admin.api.endpoints.customers import router as customers_router
from billing_admin.api.endpoints.fees import router as fees_router
from billing_admin.api.endpoints.forms import router as forms_router
from billing_admin.api.endpoints.health import router as health_router
from billing_admin.api.endpoints.relations import router as relations_router
from billing_admin.api.endpoints.stats import router as stats_router
from billing_admin.api.endpoints.tables import router as tables_router
from billing_admin.core.security import get_api_key

api_router = APIRouter(prefix="/api")

api_router.include_router(health_router)

admin_router = APIRouter(dependencies=[Depends(get_api_key)])
admin_router.include_router(stats_router)
admin_router.include_router(customers_router)
admin_router.include_router(relations_router)
admin_router.include_router(fees_router)
admin_router.include_router(forms_router)
# Catch-all /{table} routes go last
admin_router.include_router(tables_router)

api_router.include_router(admin_router)
