from __future__ import annotations

from typing import Optional

from pydantic import ConfigDict, Field

from schemas.naming import WireModel


class User(WireModel):
    """Upstream user; fields beyond ``id`` and ``name`` are carried as-is."""

    model_config = ConfigDict(extra="allow")

    id: Optional[int] = Field(None, description="Assigned by the upstream API")
    name: str
