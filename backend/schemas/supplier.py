from pydantic import Field
from typing import Optional

from schemas.base import CamelModel


class SupplierCreate(CamelModel):
    name: str = Field(min_length=1)
    inn: str = Field(min_length=1, description="Taxpayer identification number")
    email: str = Field(min_length=1)


class SupplierUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1)
    inn: Optional[str] = Field(None, min_length=1)
    email: Optional[str] = Field(None, min_length=1)


class SupplierOut(SupplierCreate):
    id: int
