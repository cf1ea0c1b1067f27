"""Application services: reconciliation, access-tree building, audit recording."""

from access_admin.application.services.access_tree_builder import (
    build_access_tree,
    group_brands,
)
from access_admin.application.services.audit_recorder import AuditRecorder
from access_admin.application.services.reconciliation import (
    check_combination,
    compute_delta,
)

__all__ = [
    "AuditRecorder",
    "build_access_tree",
    "check_combination",
    "compute_delta",
    "group_brands",
]
