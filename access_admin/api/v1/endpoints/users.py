"""Users API: paged search, detail, and status change."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from access_admin.api.v1.dependencies import CurrentAdmin, get_user_service
from access_admin.application.use_cases import UserService
from access_admin.application.use_cases.users import MAX_PAGE_SIZE
from access_admin.core.limiter import limit_writes
from access_admin.schemas.directory import (
    UserListResponse,
    UserResponse,
    UserStatusUpdate,
)

router = APIRouter()


@router.get("", response_model=UserListResponse)
async def list_users(
    _: CurrentAdmin,
    service: Annotated[UserService, Depends(get_user_service)],
    search: str | None = Query(None, description="Matches email, first or last name"),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=MAX_PAGE_SIZE),
):
    """List users, newest first."""
    page_result = await service.list_users(search=search, page=page, limit=limit)
    return UserListResponse.model_validate(page_result)


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: str,
    _: CurrentAdmin,
    service: Annotated[UserService, Depends(get_user_service)],
):
    return UserResponse.model_validate(await service.get_user(user_id))


@router.put("/{user_id}/status", response_model=UserResponse)
@limit_writes
async def update_user_status(
    request: Request,
    user_id: str,
    body: UserStatusUpdate,
    admin: CurrentAdmin,
    service: Annotated[UserService, Depends(get_user_service)],
):
    """Set ACTIVE or INACTIVE. Audited."""
    user = await service.update_user_status(admin, user_id, body.status)
    return UserResponse.model_validate(user)
