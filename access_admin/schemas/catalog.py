"""Brand mapping (master catalog) API schemas."""

from pydantic import BaseModel, ConfigDict, Field

from access_admin.application.dtos.catalog import DashboardBindingInput


class DashboardBindingRequest(BaseModel):
    """Dashboard metadata for one platform of the mapping."""

    platform_id: str = Field(..., min_length=1)
    dashboard_type_id: str = Field(..., min_length=1)
    url: str | None = Field(default=None, max_length=2048)
    workspace_id: str | None = None
    report_id: str | None = None
    dataset_id: str | None = None

    def to_dto(self) -> DashboardBindingInput:
        return DashboardBindingInput(**self.model_dump())


class MappingUpdateRequest(BaseModel):
    """Request body for PUT /brand-mappings/{app_id}/{brand_id}."""

    platform_ids: list[str]
    dashboards: list[DashboardBindingRequest] = Field(default_factory=list)


class MappingCreateRequest(MappingUpdateRequest):
    """Request body for POST /brand-mappings."""

    app_id: str = Field(..., min_length=1)
    brand_id: str = Field(..., min_length=1)


class CombinationValidateRequest(BaseModel):
    """Request body for POST /brand-mappings/validate."""

    app_id: str = Field(..., min_length=1)
    brand_id: str = Field(..., min_length=1)
    platform_ids: list[str]


class CombinationValidateResponse(BaseModel):
    valid: bool
    invalid_platform_ids: list[str]


class DashboardBindingResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    platform_id: str
    dashboard_type_id: str
    dashboard_type: str
    url: str | None = None
    workspace_id: str | None = None
    report_id: str | None = None
    dataset_id: str | None = None


class MappedPlatformResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    platform_id: str
    platform_name: str
    logo_url: str | None = None
    has_dashboard: bool
    dashboard_name: str | None = None


class MappedBrandResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    brand_id: str
    brand_name: str
    company_name: str | None = None
    logo_url: str | None = None
    platforms: list[MappedPlatformResponse]


class MappingDetailsResponse(BaseModel):
    """Current mapping state for the edit view."""

    model_config = ConfigDict(from_attributes=True)

    app_id: str
    brand_id: str
    platform_ids: list[str]
    dashboards: list[DashboardBindingResponse]


class MappingChangeResponse(BaseModel):
    app_id: str
    brand_id: str
    added: list[str]
    removed: list[str]
    dashboards: int
    grants_revoked: int
    affected_user_ids: list[str]
    summary: str


class MappingDeletionResponse(BaseModel):
    app_id: str
    brand_id: str
    dashboards_removed: int
    entries_removed: int
    grants_removed: int
    affected_user_ids: list[str]
