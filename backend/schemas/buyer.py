from pydantic import Field
from typing import Optional

from schemas.base import CamelModel


class BuyerCreate(CamelModel):
    name: str = Field(min_length=1)
    email: str = Field(min_length=1)
    phone: Optional[str] = None


# Schema for partial updates (PUT only touches the fields it sends)
class BuyerUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1)
    email: Optional[str] = Field(None, min_length=1)
    phone: Optional[str] = None


class BuyerOut(BuyerCreate):
    id: int
