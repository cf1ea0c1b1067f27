"""Persistence: async engine, ORM models, repositories, and the transactional store factory."""
