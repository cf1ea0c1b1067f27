"""Core: config, constants, rate limiting, exception handlers, and lifespan.

Single place for settings and shared constants.
"""

from access_admin.core.config import Settings, get_settings

__all__ = ["Settings", "get_settings"]
