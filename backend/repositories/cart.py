from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from models.cart import Cart, CartItem
from repositories.base import storage_errors
from services.errors import ConflictError, InvalidDataError, NotFoundError


class CartRepository:
    """
    Persistence for a buyer's cart and its line items.

    Every change to the items bumps ``Cart.version`` so checkout can detect
    a cart modified underneath it.
    """

    def __init__(self, db: Session):
        self.db = db

    def find_by_buyer(self, buyer_id: int) -> Optional[Cart]:
        with storage_errors("cart lookup"):
            return (
                self.db.query(Cart)
                .options(selectinload(Cart.items))
                .filter(Cart.buyer_id == buyer_id)
                .first()
            )

    def get_by_buyer(self, buyer_id: int) -> Cart:
        cart = self.find_by_buyer(buyer_id)
        if cart is None:
            raise NotFoundError("Cart")
        return cart

    def delete_cart_and_items(self, cart_id: int, expected_version: Optional[int] = None):
        # Items go first so a cart row never disappears while its items remain
        with storage_errors("cart delete"):
            self.db.query(CartItem).filter(CartItem.cart_id == cart_id).delete(synchronize_session=False)
            query = self.db.query(Cart).filter(Cart.id == cart_id)
            if expected_version is not None:
                query = query.filter(Cart.version == expected_version)
            deleted = query.delete(synchronize_session=False)
        if deleted != 1:
            raise ConflictError("Cart was modified or removed during checkout")

    def add_or_merge_item(self, buyer_id: int, product_id: int, quantity: int) -> Cart:
        if quantity < 1:
            raise InvalidDataError("Quantity must be at least 1")
        try:
            return self._add_or_merge(buyer_id, product_id, quantity)
        except IntegrityError:
            # Cart or item was inserted concurrently, merge into the stored one
            self.db.rollback()
            return self._add_or_merge(buyer_id, product_id, quantity)

    def _add_or_merge(self, buyer_id: int, product_id: int, quantity: int) -> Cart:
        with storage_errors("add to cart"):
            cart = self.find_by_buyer(buyer_id)
            if cart is None:
                cart = Cart(buyer_id=buyer_id, version=1)
                self.db.add(cart)
            else:
                cart.version = Cart.version + 1

            item = self._find_item(cart, product_id)
            if item is not None:
                item.quantity = CartItem.quantity + quantity
            else:
                cart.items.append(CartItem(product_id=product_id, quantity=quantity))

            self.db.commit()
        return cart

    def remove_item(self, buyer_id: int, product_id: int) -> Cart:
        cart = self.get_by_buyer(buyer_id)
        item = self._require_item(cart, product_id)
        with storage_errors("remove from cart"):
            cart.items.remove(item)
            cart.version = Cart.version + 1
            self.db.commit()
        return cart

    def set_item_quantity(self, buyer_id: int, product_id: int, quantity: int) -> Cart:
        if quantity < 1:
            raise InvalidDataError("Quantity must be at least 1")
        cart = self.get_by_buyer(buyer_id)
        item = self._require_item(cart, product_id)
        with storage_errors("update cart quantity"):
            item.quantity = quantity
            cart.version = Cart.version + 1
            self.db.commit()
        return cart

    @staticmethod
    def _find_item(cart: Cart, product_id: int) -> Optional[CartItem]:
        return next((it for it in cart.items if it.product_id == product_id), None)

    def _require_item(self, cart: Cart, product_id: int) -> CartItem:
        item = self._find_item(cart, product_id)
        if item is None:
            raise NotFoundError("Cart item", "Product not found in cart")
        return item
