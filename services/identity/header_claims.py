"""Reflect identity headers injected by the upstream gateway.

Nothing here verifies a token. The gateway in front of this service is
trusted to have validated the caller and to forward the claims as plain
``X-User-*`` headers; any client that reaches the service directly can set
them to anything.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Mapping, Optional

from starlette.datastructures import Headers

from schemas.identity import AdminInfoResponse, ExtractedClaims, HeaderReflectionResponse

USER_ID_HEADER = "X-User-ID"
USER_NAME_HEADER = "X-User-Name"
USER_EMAIL_HEADER = "X-User-Email"
USER_ROLES_HEADER = "X-User-Roles"
FORWARDED_HEADER_PREFIX = "x-"
ADMIN_ROLE_MARKER = "admin"


class AccessDeniedError(Exception):
    """The caller's roles header does not grant access."""


def _as_headers(headers: Mapping[str, str] | Headers) -> Headers:
    if isinstance(headers, Headers):
        return headers
    return Headers(headers=dict(headers))


def reflect_headers(
    headers: Mapping[str, str] | Headers,
    now: Optional[datetime] = None,
) -> HeaderReflectionResponse:
    headers = _as_headers(headers)
    forwarded = {}
    for name in headers.keys():
        if name.lower().startswith(FORWARDED_HEADER_PREFIX) and name not in forwarded:
            forwarded[name] = ",".join(headers.getlist(name))

    return HeaderReflectionResponse(
        message="JWT validation successful!",
        extracted_claims=ExtractedClaims(
            user_id=headers.get(USER_ID_HEADER),
            user_name=headers.get(USER_NAME_HEADER),
            user_email=headers.get(USER_EMAIL_HEADER),
            user_roles=headers.get(USER_ROLES_HEADER),
        ),
        all_headers=forwarded,
        timestamp=now or datetime.now(timezone.utc),
    )


def authorize_admin(headers: Mapping[str, str] | Headers) -> AdminInfoResponse:
    headers = _as_headers(headers)
    roles = headers.get(USER_ROLES_HEADER) or ""
    if ADMIN_ROLE_MARKER not in roles:
        raise AccessDeniedError("Admin role required")

    return AdminInfoResponse(
        message="Welcome admin!",
        admin_data="Secret admin information",
        user_id=headers.get(USER_ID_HEADER),
    )
