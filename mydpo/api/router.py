from fastapi import APIRouter

from mydpo.api.compliance import router as compliance_router
from mydpo.api.health import router as health_router

api_router = APIRouter()

# -------------------------------------------------
# system / ops
# -------------------------------------------------
api_router.include_router(
    health_router,
    prefix="/health",
    tags=["health"],
)

# -------------------------------------------------
# compliance
# -------------------------------------------------
api_router.include_router(
    compliance_router,
    prefix="/compliance",
    tags=["compliance"],
)
