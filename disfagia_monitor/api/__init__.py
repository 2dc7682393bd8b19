# API routes
from fastapi import APIRouter
from disfagia_monitor.api.patients import router as patients_router
from disfagia_monitor.api.triage import router as triage_router
from disfagia_monitor.api.daily_records import router as daily_records_router
from disfagia_monitor.api.history import router as history_router

# Combine all routers
router = APIRouter()
router.include_router(patients_router)
router.include_router(triage_router)
router.include_router(daily_records_router)
router.include_router(history_router)

__all__ = ["router"]
