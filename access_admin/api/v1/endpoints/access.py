"""User access API: inspect, grant, reconcile and remove a user's grants.

All mutations are audited and invalidate the user's cached access.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from access_admin.api.v1.dependencies import (
    CurrentAdmin,
    get_access_query_service,
    get_grant_service,
)
from access_admin.application.dtos.access import BrandPlatform, GrantChangeResult
from access_admin.application.use_cases import AccessQueryService, GrantService
from access_admin.core.limiter import limit_writes
from access_admin.schemas.access import (
    AccessTreeResponse,
    AddBrandAccessRequest,
    AppAccessCheckResponse,
    AppNodeResponse,
    BrandPlatformPair,
    GrantAppAccessRequest,
    GrantChangeResponse,
    ScopeRemovalResponse,
    SetAppAccessRequest,
    SetBrandPlatformsRequest,
    UserAppBrandsResponse,
)

router = APIRouter()


def _pairs(pairs: frozenset[BrandPlatform]) -> list[BrandPlatformPair]:
    return [BrandPlatformPair(brand_id=b, platform_id=p) for b, p in sorted(pairs)]


def _change_response(result: GrantChangeResult) -> GrantChangeResponse:
    return GrantChangeResponse(
        user_id=result.user_id,
        app_id=result.app_id,
        added=_pairs(result.added),
        removed=_pairs(result.removed),
        unchanged=_pairs(result.unchanged),
        summary=result.summary(),
    )


@router.get("/{user_id}/apps/{app_id}/access", response_model=AppAccessCheckResponse)
async def check_app_access(
    user_id: str,
    app_id: str,
    _: CurrentAdmin,
    service: Annotated[AccessQueryService, Depends(get_access_query_service)],
):
    """Whether the user holds at least one grant under the application."""
    return AppAccessCheckResponse.model_validate(
        await service.check_app_access(user_id, app_id)
    )


@router.get("/{user_id}/apps/{app_id}/brands", response_model=UserAppBrandsResponse)
async def get_user_app_brands(
    user_id: str,
    app_id: str,
    _: CurrentAdmin,
    service: Annotated[AccessQueryService, Depends(get_access_query_service)],
):
    """Brands with their granted platforms under one application (404 when none)."""
    return UserAppBrandsResponse.model_validate(
        await service.get_user_app_brands(user_id, app_id)
    )


@router.get("/{user_id}/access-tree", response_model=AccessTreeResponse)
async def get_access_tree(
    user_id: str,
    _: CurrentAdmin,
    service: Annotated[AccessQueryService, Depends(get_access_query_service)],
):
    """Applications, brands and platforms held by the user."""
    tree = await service.get_access_tree(user_id)
    return AccessTreeResponse(
        user_id=user_id, apps=[AppNodeResponse.model_validate(n) for n in tree]
    )


@router.post(
    "/{user_id}/apps/{app_id}/grant-access",
    response_model=GrantChangeResponse,
    status_code=201,
)
@limit_writes
async def grant_app_access(
    request: Request,
    user_id: str,
    app_id: str,
    body: GrantAppAccessRequest,
    admin: CurrentAdmin,
    service: Annotated[GrantService, Depends(get_grant_service)],
):
    """First-time grant of an application (409 when the user already has access)."""
    result = await service.grant_app_access(
        admin, user_id, app_id, [b.to_dto() for b in body.brands]
    )
    return _change_response(result)


@router.put("/{user_id}/apps/{app_id}/access", response_model=GrantChangeResponse)
@limit_writes
async def set_app_access(
    request: Request,
    user_id: str,
    app_id: str,
    body: SetAppAccessRequest,
    admin: CurrentAdmin,
    service: Annotated[GrantService, Depends(get_grant_service)],
):
    """Reconcile every grant under the application to exactly the given brands."""
    result = await service.set_app_access(
        admin, user_id, app_id, [b.to_dto() for b in body.brands]
    )
    return _change_response(result)


@router.post(
    "/{user_id}/apps/{app_id}/brands",
    response_model=GrantChangeResponse,
    status_code=201,
)
@limit_writes
async def add_brand_access(
    request: Request,
    user_id: str,
    app_id: str,
    body: AddBrandAccessRequest,
    admin: CurrentAdmin,
    service: Annotated[GrantService, Depends(get_grant_service)],
):
    """Add platforms of one brand; already-held platforms are reported unchanged."""
    result = await service.add_brand_access(
        admin, user_id, app_id, body.brand_id, body.platform_ids
    )
    return _change_response(result)


@router.put(
    "/{user_id}/apps/{app_id}/brands/{brand_id}/platforms",
    response_model=GrantChangeResponse,
)
@limit_writes
async def set_brand_platforms(
    request: Request,
    user_id: str,
    app_id: str,
    brand_id: str,
    body: SetBrandPlatformsRequest,
    admin: CurrentAdmin,
    service: Annotated[GrantService, Depends(get_grant_service)],
):
    """Reconcile the brand's platforms to exactly the given set; empty removes all."""
    result = await service.set_brand_platforms(
        admin, user_id, app_id, brand_id, body.platform_ids
    )
    return _change_response(result)


@router.delete(
    "/{user_id}/apps/{app_id}/brands/{brand_id}", response_model=ScopeRemovalResponse
)
@limit_writes
async def remove_brand_access(
    request: Request,
    user_id: str,
    app_id: str,
    brand_id: str,
    admin: CurrentAdmin,
    service: Annotated[GrantService, Depends(get_grant_service)],
):
    return ScopeRemovalResponse.model_validate(
        await service.remove_brand_access(admin, user_id, app_id, brand_id)
    )


@router.delete("/{user_id}/apps/{app_id}", response_model=ScopeRemovalResponse)
@limit_writes
async def remove_app_access(
    request: Request,
    user_id: str,
    app_id: str,
    admin: CurrentAdmin,
    service: Annotated[GrantService, Depends(get_grant_service)],
):
    """Remove every grant the user holds under the application."""
    return ScopeRemovalResponse.model_validate(
        await service.remove_app_access(admin, user_id, app_id)
    )
