"""Grant API schemas: requests for grant mutations and the nested access views."""

from pydantic import BaseModel, ConfigDict, Field

from access_admin.application.dtos.access import BrandPlatforms


class BrandPlatformsRequest(BaseModel):
    """One brand and the platforms wanted for it."""

    brand_id: str = Field(..., min_length=1)
    platform_ids: list[str] = Field(default_factory=list)

    def to_dto(self) -> BrandPlatforms:
        return BrandPlatforms(
            brand_id=self.brand_id, platform_ids=frozenset(self.platform_ids)
        )


class GrantAppAccessRequest(BaseModel):
    """Request body for POST .../grant-access (first-time grant)."""

    brands: list[BrandPlatformsRequest]


class SetAppAccessRequest(BaseModel):
    """Request body for PUT .../access; omitted brands lose all grants."""

    brands: list[BrandPlatformsRequest] = Field(default_factory=list)


class AddBrandAccessRequest(BaseModel):
    """Request body for POST .../brands."""

    brand_id: str = Field(..., min_length=1)
    platform_ids: list[str]


class SetBrandPlatformsRequest(BaseModel):
    """Request body for PUT .../brands/{brand_id}/platforms; empty unassigns all."""

    platform_ids: list[str] = Field(default_factory=list)


class PlatformNodeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    platform_id: str
    platform_name: str
    logo_url: str | None = None


class BrandNodeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    brand_id: str
    brand_name: str
    logo_url: str | None = None
    platforms: list[PlatformNodeResponse]


class AppNodeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    app_id: str
    app_name: str
    brands: list[BrandNodeResponse]


class AccessTreeResponse(BaseModel):
    user_id: str
    apps: list[AppNodeResponse]


class AppAccessCheckResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    user_id: str
    user_name: str
    app_id: str
    app_name: str
    has_access: bool


class UserAppBrandsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    user_id: str
    app_id: str
    app_name: str
    brands: list[BrandNodeResponse]
    total_brands: int
    total_platforms: int


class BrandPlatformPair(BaseModel):
    brand_id: str
    platform_id: str


class GrantChangeResponse(BaseModel):
    """Outcome of a grant mutation; pairs are sorted for stable output."""

    user_id: str
    app_id: str
    added: list[BrandPlatformPair]
    removed: list[BrandPlatformPair]
    unchanged: list[BrandPlatformPair]
    summary: str


class ScopeRemovalResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    user_id: str
    app_id: str
    brand_id: str | None = None
    brands_removed: int
    platforms_removed: int
