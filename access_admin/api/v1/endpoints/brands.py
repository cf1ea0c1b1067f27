"""Brand lookups for the grant screens: available, granted, licensed and assigned."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from access_admin.api.v1.dependencies import (
    CurrentAdmin,
    get_access_query_service,
    get_catalog_query_service,
)
from access_admin.application.use_cases import AccessQueryService, CatalogQueryService
from access_admin.schemas.directory import BrandResponse, PlatformResponse

router = APIRouter()


@router.get("/available", response_model=list[BrandResponse])
async def list_available_brands(
    _: CurrentAdmin,
    service: Annotated[AccessQueryService, Depends(get_access_query_service)],
    user_id: str = Query(..., min_length=1),
    app_id: str = Query(..., min_length=1),
):
    """Brands licensed under the application that the user does not hold yet."""
    return await service.list_available_brands(user_id, app_id)


@router.get("/granted", response_model=list[BrandResponse])
async def list_granted_brands(
    _: CurrentAdmin,
    service: Annotated[AccessQueryService, Depends(get_access_query_service)],
    user_id: str = Query(..., min_length=1),
    app_id: str = Query(..., min_length=1),
):
    return await service.list_granted_brands(user_id, app_id)


@router.get("/{brand_id}/platforms", response_model=list[PlatformResponse])
async def list_licensed_platforms(
    brand_id: str,
    _: CurrentAdmin,
    service: Annotated[CatalogQueryService, Depends(get_catalog_query_service)],
    app_id: str = Query(..., min_length=1),
):
    """Platforms with an active catalog entry for (application, brand)."""
    return await service.list_licensed_platforms(app_id, brand_id)


@router.get("/{brand_id}/platforms/assigned", response_model=list[PlatformResponse])
async def list_assigned_platforms(
    brand_id: str,
    _: CurrentAdmin,
    service: Annotated[AccessQueryService, Depends(get_access_query_service)],
    user_id: str = Query(..., min_length=1),
    app_id: str = Query(..., min_length=1),
):
    return await service.list_assigned_platforms(user_id, app_id, brand_id)
