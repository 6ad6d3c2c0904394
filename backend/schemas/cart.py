from pydantic import AliasChoices, Field
from typing import List

from schemas.base import CamelModel


# Request schema for adding a product to the buyer's cart
class CartAddItem(CamelModel):
    buyer_id: int
    product_id: int
    quantity: int = Field(ge=1)


class CartRemoveItem(CamelModel):
    buyer_id: int
    product_id: int


class CartUpdateQuantity(CamelModel):
    buyer_id: int
    product_id: int
    quantity: int = Field(ge=1)


# Response schema for a single cart line item
class CartItemOut(CamelModel):
    id: int
    product_id: int
    quantity: int
    cart_id: int


class CartOut(CamelModel):
    id: int
    buyer_id: int
    cart_items: List[CartItemOut] = Field(
        validation_alias=AliasChoices("items", "cartItems", "cart_items"), serialization_alias="cartItems"
    )


class CartEnvelope(CamelModel):
    cart: CartOut
    status: str = "success"
