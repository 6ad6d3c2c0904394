from pydantic import Field
from typing import Optional

from schemas.base import CamelModel


class PickupPointCreate(CamelModel):
    name: str = Field(min_length=1)
    address: str = Field(min_length=1)


class PickupPointUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1)
    address: Optional[str] = Field(None, min_length=1)


class PickupPointOut(PickupPointCreate):
    id: int
