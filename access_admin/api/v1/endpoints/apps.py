"""Applications API: list and get (read-only)."""

from typing import Annotated

from fastapi import APIRouter, Depends

from access_admin.api.v1.dependencies import CurrentAdmin, get_catalog_query_service
from access_admin.application.use_cases import CatalogQueryService
from access_admin.schemas.directory import AppResponse

router = APIRouter()


@router.get("", response_model=list[AppResponse])
async def list_apps(
    _: CurrentAdmin,
    service: Annotated[CatalogQueryService, Depends(get_catalog_query_service)],
):
    """Active applications ordered by name."""
    return await service.list_apps()


@router.get("/{app_id}", response_model=AppResponse)
async def get_app(
    app_id: str,
    _: CurrentAdmin,
    service: Annotated[CatalogQueryService, Depends(get_catalog_query_service)],
):
    return await service.get_app(app_id)
