from __future__ import annotations

from datetime import datetime
from typing import Dict, Optional

from pydantic import Field

from schemas.naming import WireModel


class ExtractedClaims(WireModel):
    user_id: Optional[str] = None
    user_name: Optional[str] = None
    user_email: Optional[str] = None
    user_roles: Optional[str] = None


class HeaderReflectionResponse(WireModel):
    message: str
    extracted_claims: ExtractedClaims
    all_headers: Dict[str, str] = Field(default_factory=dict)
    timestamp: datetime


class AdminInfoResponse(WireModel):
    message: str
    admin_data: str
    user_id: Optional[str] = None
