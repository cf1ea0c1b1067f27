"""Application, registry and user API schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class AppResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    status: str


class BrandResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    company_name: str | None = None
    logo_url: str | None = None
    status: str


class PlatformResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    logo_url: str | None = None
    status: str


class DashboardTypeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    color: str | None = None


class UserResponse(BaseModel):
    """User list/detail response."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    first_name: str | None
    last_name: str | None
    full_name: str
    user_type: str | None
    organisation: str | None
    status: str
    created_at: datetime | None = None
    last_login_at: datetime | None = None


class UserListResponse(BaseModel):
    """Paginated list of users."""

    model_config = ConfigDict(from_attributes=True)

    items: list[UserResponse]
    total: int
    page: int
    limit: int
    total_pages: int


class UserStatusUpdate(BaseModel):
    """Request body for PUT /users/{user_id}/status."""

    status: str = Field(..., min_length=1, description="ACTIVE or INACTIVE")
