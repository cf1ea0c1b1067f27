"""DTOs for the master catalog (licensed combinations and dashboard bindings)."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class DashboardBindingInput:
    """Requested dashboard metadata for one licensed platform."""

    platform_id: str
    dashboard_type_id: str
    url: str | None = None
    workspace_id: str | None = None
    report_id: str | None = None
    dataset_id: str | None = None


@dataclass(frozen=True)
class DashboardBindingResult:
    id: str
    app_id: str
    brand_id: str
    platform_id: str
    dashboard_type_id: str
    dashboard_type: str
    url: str | None = None
    workspace_id: str | None = None
    report_id: str | None = None
    dataset_id: str | None = None


@dataclass(frozen=True)
class CatalogEntryResult:
    """Licensed (application, brand, platform) with its optional dashboard binding."""

    id: str
    app_id: str
    brand_id: str
    platform_id: str
    status: str
    dashboard: DashboardBindingResult | None = None


@dataclass(frozen=True)
class MappedPlatform:
    platform_id: str
    platform_name: str
    logo_url: str | None = None
    has_dashboard: bool = False
    dashboard_name: str | None = None


@dataclass(frozen=True)
class MappedBrand:
    """Brand with active catalog entries under an application."""

    brand_id: str
    brand_name: str
    company_name: str | None = None
    logo_url: str | None = None
    platforms: list[MappedPlatform] = field(default_factory=list)


@dataclass(frozen=True)
class MappingDetails:
    """Current catalog state for one (application, brand), for the edit view."""

    app_id: str
    brand_id: str
    platform_ids: list[str]
    dashboards: list[DashboardBindingResult]


@dataclass(frozen=True)
class CombinationCheck:
    """Result of validating platforms against the catalog."""

    valid: bool
    invalid: frozenset[str] = frozenset()


@dataclass(frozen=True)
class MappingChangeResult:
    """Outcome of creating or reconciling a catalog mapping."""

    app_id: str
    brand_id: str
    added: frozenset[str]
    removed: frozenset[str]
    dashboards: int
    grants_revoked: int = 0
    affected_user_ids: frozenset[str] = frozenset()

    def summary(self) -> str:
        added = ", ".join(sorted(self.added)) or "none"
        removed = ", ".join(sorted(self.removed)) or "none"
        return (
            f"Added: {added}, Removed: {removed}, "
            f"dashboards: {self.dashboards}, grants revoked: {self.grants_revoked}"
        )


@dataclass(frozen=True)
class MappingDeletionResult:
    """Counts removed by the catalog cascade (bindings, entries, grants)."""

    app_id: str
    brand_id: str
    dashboards_removed: int
    entries_removed: int
    grants_removed: int
    affected_user_ids: frozenset[str] = frozenset()
