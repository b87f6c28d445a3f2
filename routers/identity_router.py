from fastapi import APIRouter, HTTPException, Request, status

from schemas import AdminInfoResponse, HeaderReflectionResponse
from services.identity import AccessDeniedError, authorize_admin, reflect_headers

router = APIRouter()


@router.get("/jwt-info", response_model=HeaderReflectionResponse)
async def jwt_info(request: Request) -> HeaderReflectionResponse:
    """Echo the identity claims forwarded by the gateway."""
    return reflect_headers(request.headers)


@router.get("/admin-only", response_model=AdminInfoResponse)
async def admin_only(request: Request) -> AdminInfoResponse:
    """Role check on the forwarded roles header; not a substitute for authentication."""
    try:
        return authorize_admin(request.headers)
    except AccessDeniedError as exc:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(exc)) from exc
