# backend/routes/cart.py
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from database import get_db
from utils.audit import write_log
from models.buyer import Buyer
from models.product import Product
from repositories.cart import CartRepository
from schemas.base import MessageOut
from schemas.cart import CartAddItem, CartRemoveItem, CartUpdateQuantity, CartEnvelope, CartOut
from services.errors import NotFoundError

router = APIRouter(prefix="/cart", tags=["Cart"])


def _ensure_buyer(db: Session, buyer_id: int):
    if db.get(Buyer, buyer_id) is None:
        raise NotFoundError("Buyer")


@router.get("/{buyer_id}", response_model=CartEnvelope)
def get_cart(buyer_id: int, db: Session = Depends(get_db)):
    cart = CartRepository(db).find_by_buyer(buyer_id)
    if not cart:
        raise HTTPException(status_code=404, detail="Cart not found")
    return CartEnvelope(cart=CartOut.model_validate(cart))


@router.post("/add-product", response_model=MessageOut)
def add_product(payload: CartAddItem, db: Session = Depends(get_db)):
    _ensure_buyer(db, payload.buyer_id)
    if db.get(Product, payload.product_id) is None:
        raise NotFoundError("Product")

    # Creates the cart on first use, merges quantities for a product already in it
    cart = CartRepository(db).add_or_merge_item(payload.buyer_id, payload.product_id, payload.quantity)

    write_log(
        db,
        buyer_id=payload.buyer_id,
        action="CART_ADD",
        resource="cart",
        meta={"cart_id": cart.id, "product_id": payload.product_id, "qty": payload.quantity},
    )
    return MessageOut(message="Product added to cart successfully")


@router.delete("/remove-product", response_model=MessageOut)
def remove_product(payload: CartRemoveItem, db: Session = Depends(get_db)):
    cart = CartRepository(db).remove_item(payload.buyer_id, payload.product_id)

    write_log(
        db,
        buyer_id=payload.buyer_id,
        action="CART_REMOVE",
        resource="cart",
        meta={"cart_id": cart.id, "product_id": payload.product_id},
    )
    return MessageOut(message="Product removed from cart successfully")


@router.put("/update-quantity", response_model=MessageOut)
def update_quantity(payload: CartUpdateQuantity, db: Session = Depends(get_db)):
    cart = CartRepository(db).set_item_quantity(payload.buyer_id, payload.product_id, payload.quantity)

    write_log(
        db,
        buyer_id=payload.buyer_id,
        action="CART_UPDATE",
        resource="cart",
        meta={"cart_id": cart.id, "product_id": payload.product_id, "qty": payload.quantity},
    )
    return MessageOut(message="Product quantity updated in cart successfully")
