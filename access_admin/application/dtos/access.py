"""DTOs for grants, reconciliation deltas, and the nested access view."""

from dataclasses import dataclass, field
from typing import Generic, Hashable, TypeVar

K = TypeVar("K", bound=Hashable)

# (brand_id, platform_id) within one (user, application) scope.
BrandPlatform = tuple[str, str]


@dataclass(frozen=True)
class Delta(Generic[K]):
    """Minimal change set between a current and a desired set."""

    to_add: frozenset[K]
    to_remove: frozenset[K]

    @property
    def is_empty(self) -> bool:
        return not self.to_add and not self.to_remove

    def summary(self) -> str:
        """Return the compact audit form, e.g. 'added:1,removed:1'."""
        return f"added:{len(self.to_add)},removed:{len(self.to_remove)}"


@dataclass(frozen=True)
class BrandPlatforms:
    """Desired platform set for one brand (request record)."""

    brand_id: str
    platform_ids: frozenset[str]


@dataclass(frozen=True)
class GrantRow:
    """Flat joined grant row: one (user, application, brand, platform) with names."""

    user_id: str
    app_id: str
    app_name: str
    brand_id: str
    brand_name: str
    platform_id: str
    platform_name: str
    brand_logo_url: str | None = None
    platform_logo_url: str | None = None


@dataclass(frozen=True)
class PlatformNode:
    platform_id: str
    platform_name: str
    logo_url: str | None = None


@dataclass(frozen=True)
class BrandNode:
    brand_id: str
    brand_name: str
    logo_url: str | None = None
    platforms: list[PlatformNode] = field(default_factory=list)


@dataclass(frozen=True)
class AppNode:
    app_id: str
    app_name: str
    brands: list[BrandNode] = field(default_factory=list)


@dataclass(frozen=True)
class AppAccessCheck:
    """Answer to 'does user U have any grant under application A?'."""

    user_id: str
    user_name: str
    app_id: str
    app_name: str
    has_access: bool


@dataclass(frozen=True)
class UserAppBrands:
    """Brands and platforms granted to one user under one application."""

    user_id: str
    app_id: str
    app_name: str
    brands: list[BrandNode]

    @property
    def total_brands(self) -> int:
        return len(self.brands)

    @property
    def total_platforms(self) -> int:
        return sum(len(b.platforms) for b in self.brands)


@dataclass(frozen=True)
class GrantChangeResult:
    """Outcome of a grant mutation within one (user, application) scope."""

    user_id: str
    app_id: str
    added: frozenset[BrandPlatform]
    removed: frozenset[BrandPlatform]
    unchanged: frozenset[BrandPlatform] = frozenset()

    def summary(self) -> str:
        return f"added:{len(self.added)},removed:{len(self.removed)}"


@dataclass(frozen=True)
class ScopeRemovalResult:
    """Outcome of removing a whole brand or application scope for a user."""

    user_id: str
    app_id: str
    brand_id: str | None
    brands_removed: int
    platforms_removed: int
