from .header_claims import AccessDeniedError, authorize_admin, reflect_headers

__all__ = [
    "AccessDeniedError",
    "authorize_admin",
    "reflect_headers",
]
