"""DTOs for master registries (applications, brands, platforms, dashboard types) and users."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class AppResult:
    """Application (top-level access scope)."""

    id: str
    name: str
    status: str


@dataclass(frozen=True)
class BrandResult:
    """Brand from the master registry (read-only)."""

    id: str
    name: str
    company_name: str | None = None
    logo_url: str | None = None
    status: str = "ACTIVE"


@dataclass(frozen=True)
class PlatformResult:
    """Platform from the master registry (read-only)."""

    id: str
    name: str
    logo_url: str | None = None
    status: str = "ACTIVE"


@dataclass(frozen=True)
class DashboardTypeResult:
    """Master dashboard kind that a DashboardBinding can reference."""

    id: str
    name: str
    color: str | None = None


@dataclass(frozen=True)
class UserResult:
    """User that grants are issued to."""

    id: str
    email: str
    first_name: str | None
    last_name: str | None
    user_type: str | None
    organisation: str | None
    status: str
    created_at: datetime | None = None
    last_login_at: datetime | None = None

    @property
    def full_name(self) -> str:
        parts = [p for p in (self.first_name, self.last_name) if p]
        return " ".join(parts) or self.email


@dataclass(frozen=True)
class UserPage:
    """One page of users plus paging totals."""

    items: list[UserResult]
    total: int
    page: int
    limit: int

    @property
    def total_pages(self) -> int:
        return (self.total + self.limit - 1) // self.limit if self.limit else 0
