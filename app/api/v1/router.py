from fastapi import APIRouter

from app.api.v1.health import router as health_router
from app.api.v1.auth import router as auth_router

# PARTICIPANT-FACING
from app.api.v1.participants import router as participants_router
from app.api.v1.selections import router as selections_router

# ADMIN
from app.api.v1.admin.participants import router as admin_participants_router
from app.api.v1.admin.selections import router as admin_selections_router
from app.api.v1.admin.stats import router as admin_stats_router
from app.api.v1.admin.events import router as admin_events_router
from app.api.v1.admin.reset import router as admin_reset_router
from app.api.v1.export import router as export_router
from app.api.v1.audit import router as audit_router


v1_router = APIRouter()

# ------------------------------------------------------------------
# SYSTEM / CORE
# ------------------------------------------------------------------
v1_router.include_router(health_router, tags=["health"])
v1_router.include_router(auth_router, tags=["auth"])

# ------------------------------------------------------------------
# PARTICIPANTS
# ------------------------------------------------------------------
v1_router.include_router(participants_router)
v1_router.include_router(selections_router, tags=["selections"])

# ------------------------------------------------------------------
# ADMIN
# ------------------------------------------------------------------
v1_router.include_router(admin_participants_router)
v1_router.include_router(admin_selections_router)
v1_router.include_router(admin_stats_router)
v1_router.include_router(admin_events_router)
v1_router.include_router(admin_reset_router)
v1_router.include_router(export_router, tags=["export"])
v1_router.include_router(audit_router, tags=["audit"])
