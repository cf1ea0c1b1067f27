"""API v1 router aggregation.

Includes all endpoint modules with consistent prefix and tags. All routes
use dependencies from access_admin.api.v1.dependencies.
"""

from fastapi import APIRouter

from access_admin.api.v1.endpoints import (
    access,
    apps,
    audit_logs,
    brand_mappings,
    brands,
    health,
    users,
)

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(apps.router, prefix="/apps", tags=["apps"])
api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(access.router, prefix="/users", tags=["user-access"])
api_router.include_router(brands.router, prefix="/brands", tags=["brands"])
api_router.include_router(
    brand_mappings.router, prefix="/brand-mappings", tags=["brand-mappings"]
)
api_router.include_router(audit_logs.router, prefix="/audit-logs", tags=["audit-logs"])
