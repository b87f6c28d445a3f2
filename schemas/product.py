from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Annotated

from pydantic import ConfigDict, PlainSerializer

from schemas.naming import WireModel

JsonDecimal = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class ProductResponse(WireModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    price: JsonDecimal
    description: str
    created_at: datetime
