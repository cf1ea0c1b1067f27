"""Infrastructure: SQL persistence, cache invalidation, identity clients."""
