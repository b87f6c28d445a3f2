from __future__ import annotations

from typing import Optional

from pydantic import Field

from schemas.naming import WireModel


class Post(WireModel):
    id: Optional[int] = Field(None, description="Assigned by the upstream API")
    user_id: int = Field(..., description="Identifier of the owning user")
    title: str
    body: str
