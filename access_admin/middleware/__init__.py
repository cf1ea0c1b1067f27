"""Raw ASGI middleware: request id propagation and security headers."""

from access_admin.middleware.request_id import RequestIDMiddleware
from access_admin.middleware.security_headers import SecurityHeadersMiddleware

__all__ = ["RequestIDMiddleware", "SecurityHeadersMiddleware"]
