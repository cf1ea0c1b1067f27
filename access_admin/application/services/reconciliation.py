"""Desired-state reconciliation helpers.

Pure set arithmetic shared by grant reconciliation (per user) and catalog
reconciliation (per application and brand). Membership is by identifier
equality only; input order never matters.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Hashable, TypeVar

from access_admin.application.dtos.access import BrandPlatform, BrandPlatforms, Delta
from access_admin.application.dtos.catalog import CombinationCheck
from access_admin.domain.exceptions import ValidationException

K = TypeVar("K", bound=Hashable)


def compute_delta(current: Iterable[K], desired: Iterable[K]) -> Delta[K]:
    """Return to_add = desired minus current, to_remove = current minus desired."""
    current_set = frozenset(current)
    desired_set = frozenset(desired)
    return Delta(
        to_add=desired_set - current_set,
        to_remove=current_set - desired_set,
    )


def check_combination(licensed: Iterable[str], requested: Iterable[str]) -> CombinationCheck:
    """Every requested platform must be licensed; an empty request is valid."""
    invalid = frozenset(requested) - frozenset(licensed)
    return CombinationCheck(valid=not invalid, invalid=invalid)


def normalize_ids(values: Iterable[str], field: str) -> frozenset[str]:
    """Strip ids and reject blanks; duplicates collapse."""
    result = set()
    for value in values:
        cleaned = value.strip() if isinstance(value, str) else ""
        if not cleaned:
            raise ValidationException(f"{field} must not contain empty ids", field=field)
        result.add(cleaned)
    return frozenset(result)


def flatten_brand_platforms(brands: Iterable[BrandPlatforms]) -> frozenset[BrandPlatform]:
    """Expand per-brand requests to (brand, platform) pairs; a brand may appear once."""
    seen: set[str] = set()
    pairs: set[BrandPlatform] = set()
    for item in brands:
        if item.brand_id in seen:
            raise ValidationException(
                f"Brand {item.brand_id} appears more than once", field="brands"
            )
        seen.add(item.brand_id)
        pairs.update((item.brand_id, platform_id) for platform_id in item.platform_ids)
    return frozenset(pairs)


def group_by_brand(pairs: Iterable[BrandPlatform]) -> dict[str, set[str]]:
    """Group (brand, platform) pairs into {brand_id: platform_ids}."""
    grouped: dict[str, set[str]] = {}
    for brand_id, platform_id in pairs:
        grouped.setdefault(brand_id, set()).add(platform_id)
    return grouped
