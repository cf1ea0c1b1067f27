"""Tests for desired-state reconciliation helpers."""

import pytest

from access_admin.application.dtos.access import BrandPlatforms
from access_admin.application.services.reconciliation import (
    check_combination,
    compute_delta,
    flatten_brand_platforms,
    group_by_brand,
    normalize_ids,
)
from access_admin.domain.exceptions import ValidationException


def test_compute_delta_adds_and_removes() -> None:
    delta = compute_delta({"P1", "P2"}, {"P2", "P3"})
    assert delta.to_add == frozenset({"P3"})
    assert delta.to_remove == frozenset({"P1"})
    assert delta.summary() == "added:1,removed:1"


def test_compute_delta_equal_sets_is_empty() -> None:
    delta = compute_delta(["P1", "P2"], ["P2", "P1"])
    assert delta.is_empty
    assert delta.summary() == "added:0,removed:0"


def test_compute_delta_from_empty_adds_everything() -> None:
    delta = compute_delta(set(), {"P1"})
    assert delta.to_add == {"P1"}
    assert not delta.to_remove


def test_compute_delta_to_empty_removes_everything() -> None:
    delta = compute_delta({"P1", "P2"}, [])
    assert delta.to_remove == {"P1", "P2"}
    assert not delta.to_add


def test_applying_delta_converges_to_desired() -> None:
    current = {("B1", "P1"), ("B1", "P2"), ("B2", "P1")}
    desired = {("B1", "P2"), ("B3", "P9")}
    delta = compute_delta(current, desired)
    assert (current - delta.to_remove) | delta.to_add == desired
    assert not delta.to_add & delta.to_remove


def test_check_combination_reports_unlicensed() -> None:
    check = check_combination({"P1", "P2"}, {"P2", "P9"})
    assert not check.valid
    assert check.invalid == frozenset({"P9"})


def test_check_combination_empty_request_is_valid() -> None:
    assert check_combination(set(), []).valid


def test_normalize_ids_strips_and_dedupes() -> None:
    assert normalize_ids([" P1", "P1", "P2 "], "platform_ids") == frozenset({"P1", "P2"})


def test_normalize_ids_rejects_blank() -> None:
    with pytest.raises(ValidationException) as exc_info:
        normalize_ids(["P1", "  "], "platform_ids")
    assert exc_info.value.details == {"field": "platform_ids"}


def test_flatten_brand_platforms() -> None:
    pairs = flatten_brand_platforms(
        [
            BrandPlatforms("B1", frozenset({"P1", "P2"})),
            BrandPlatforms("B2", frozenset()),
        ]
    )
    assert pairs == {("B1", "P1"), ("B1", "P2")}


def test_flatten_brand_platforms_rejects_repeated_brand() -> None:
    with pytest.raises(ValidationException):
        flatten_brand_platforms(
            [BrandPlatforms("B1", frozenset({"P1"})), BrandPlatforms("B1", frozenset({"P2"}))]
        )


def test_group_by_brand() -> None:
    grouped = group_by_brand([("B1", "P1"), ("B2", "P1"), ("B1", "P2")])
    assert grouped == {"B1": {"P1", "P2"}, "B2": {"P1"}}
