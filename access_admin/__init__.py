"""Access administration service: catalog, grants, reconciliation, and audit."""
