"""API v1 routes."""

from fastapi import APIRouter

from jobtrack.api.v1 import auth, customers, health, jobs

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(customers.router, prefix="/customers", tags=["customers"])
router.include_router(jobs.router, prefix="/jobs", tags=["jobs"])
