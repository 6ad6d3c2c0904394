# backend/schemas/product.py
from decimal import Decimal
from pydantic import Field
from typing import Optional, List

from schemas.base import CamelModel


# Shared base attributes for product entities
class ProductBase(CamelModel):
    name: str = Field(min_length=1)
    price: Decimal = Field(ge=0, max_digits=12, decimal_places=2)
    photo: Optional[str] = None
    characteristics: Optional[str] = None
    category_id: Optional[int] = None
    manufacturer_id: int


# Schema for creating a new product
class ProductCreate(ProductBase):
    pass


# Schema for partial product updates
class ProductUpdate(CamelModel):
    """All fields optional; only the fields sent are changed."""
    name: Optional[str] = Field(None, min_length=1)
    price: Optional[Decimal] = Field(None, ge=0, max_digits=12, decimal_places=2)
    photo: Optional[str] = None
    characteristics: Optional[str] = None
    category_id: Optional[int] = None
    manufacturer_id: Optional[int] = None


# Full product representation including ID
class ProductOut(ProductBase):
    id: int


class ProductEnvelope(CamelModel):
    product: ProductOut
    status: str = "success"


class ProductList(CamelModel):
    products: List[ProductOut]
    status: str = "success"
