"""Brand mappings API: the master catalog of licensed (application, brand, platform).

Mutations cascade to user grants of removed platforms, are audited, and
invalidate every user's cached access.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from access_admin.api.v1.dependencies import (
    CurrentAdmin,
    get_catalog_query_service,
    get_catalog_service,
)
from access_admin.application.dtos.catalog import MappingChangeResult, MappingDeletionResult
from access_admin.application.use_cases import CatalogQueryService, CatalogService
from access_admin.core.limiter import limit_writes
from access_admin.schemas.catalog import (
    CombinationValidateRequest,
    CombinationValidateResponse,
    MappedBrandResponse,
    MappingChangeResponse,
    MappingCreateRequest,
    MappingDeletionResponse,
    MappingDetailsResponse,
    MappingUpdateRequest,
)
from access_admin.schemas.directory import (
    BrandResponse,
    DashboardTypeResponse,
    PlatformResponse,
)

router = APIRouter()


def _change_response(result: MappingChangeResult) -> MappingChangeResponse:
    return MappingChangeResponse(
        app_id=result.app_id,
        brand_id=result.brand_id,
        added=sorted(result.added),
        removed=sorted(result.removed),
        dashboards=result.dashboards,
        grants_revoked=result.grants_revoked,
        affected_user_ids=sorted(result.affected_user_ids),
        summary=result.summary(),
    )


def _deletion_response(result: MappingDeletionResult) -> MappingDeletionResponse:
    return MappingDeletionResponse(
        app_id=result.app_id,
        brand_id=result.brand_id,
        dashboards_removed=result.dashboards_removed,
        entries_removed=result.entries_removed,
        grants_removed=result.grants_removed,
        affected_user_ids=sorted(result.affected_user_ids),
    )


@router.get("", response_model=list[MappedBrandResponse])
async def list_mapped_brands(
    _: CurrentAdmin,
    service: Annotated[CatalogQueryService, Depends(get_catalog_query_service)],
    app_id: str = Query(..., min_length=1),
):
    """Brands with active entries, each with its platforms and dashboard flag."""
    brands = await service.list_mapped_brands(app_id)
    return [MappedBrandResponse.model_validate(b) for b in brands]


@router.get("/unmapped", response_model=list[BrandResponse])
async def list_unmapped_brands(
    _: CurrentAdmin,
    service: Annotated[CatalogQueryService, Depends(get_catalog_query_service)],
    app_id: str = Query(..., min_length=1),
):
    return await service.list_unmapped_brands(app_id)


@router.get("/platforms", response_model=list[PlatformResponse])
async def list_platforms(
    _: CurrentAdmin,
    service: Annotated[CatalogQueryService, Depends(get_catalog_query_service)],
):
    return await service.list_platforms()


@router.get("/dashboard-types", response_model=list[DashboardTypeResponse])
async def list_dashboard_types(
    _: CurrentAdmin,
    service: Annotated[CatalogQueryService, Depends(get_catalog_query_service)],
):
    return await service.list_dashboard_types()


@router.post("/validate", response_model=CombinationValidateResponse)
async def validate_combination(
    body: CombinationValidateRequest,
    _: CurrentAdmin,
    service: Annotated[CatalogQueryService, Depends(get_catalog_query_service)],
):
    """Report which platforms lack an active catalog entry; does not write."""
    check = await service.validate_combination(
        body.app_id, body.brand_id, body.platform_ids
    )
    return CombinationValidateResponse(
        valid=check.valid, invalid_platform_ids=sorted(check.invalid)
    )


@router.post("", response_model=MappingChangeResponse, status_code=201)
@limit_writes
async def create_mapping(
    request: Request,
    body: MappingCreateRequest,
    admin: CurrentAdmin,
    service: Annotated[CatalogService, Depends(get_catalog_service)],
):
    """Map a brand to platforms under an application (409 when already mapped)."""
    result = await service.create_mapping(
        admin,
        body.app_id,
        body.brand_id,
        body.platform_ids,
        [d.to_dto() for d in body.dashboards],
    )
    return _change_response(result)


@router.get("/{app_id}/{brand_id}", response_model=MappingDetailsResponse)
async def get_mapping_details(
    app_id: str,
    brand_id: str,
    _: CurrentAdmin,
    service: Annotated[CatalogQueryService, Depends(get_catalog_query_service)],
):
    return MappingDetailsResponse.model_validate(
        await service.get_mapping_details(app_id, brand_id)
    )


@router.put("/{app_id}/{brand_id}", response_model=MappingChangeResponse)
@limit_writes
async def update_mapping(
    request: Request,
    app_id: str,
    brand_id: str,
    body: MappingUpdateRequest,
    admin: CurrentAdmin,
    service: Annotated[CatalogService, Depends(get_catalog_service)],
):
    """Reconcile the mapping to exactly these platforms; replaces dashboards."""
    result = await service.update_mapping(
        admin, app_id, brand_id, body.platform_ids, [d.to_dto() for d in body.dashboards]
    )
    return _change_response(result)


@router.delete("/{app_id}/{brand_id}", response_model=MappingDeletionResponse)
@limit_writes
async def delete_mapping(
    request: Request,
    app_id: str,
    brand_id: str,
    admin: CurrentAdmin,
    service: Annotated[CatalogService, Depends(get_catalog_service)],
):
    """Remove the mapping and every user grant it licensed."""
    return _deletion_response(await service.delete_mapping(admin, app_id, brand_id))
