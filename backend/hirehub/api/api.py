"""
API Router Aggregator.

Combines all v1 API routers into a single router for the main app.
"""

from fastapi import APIRouter

from hirehub.api.v1 import jobs, recruiters, users

api_router = APIRouter()

api_router.include_router(
    jobs.router,
    prefix="/jobs",
    tags=["Jobs"],
)

api_router.include_router(
    users.router,
    prefix="/user",
    tags=["Users"],
)

api_router.include_router(
    recruiters.router,
    prefix="/recruiter",
    tags=["Recruiters"],
)
