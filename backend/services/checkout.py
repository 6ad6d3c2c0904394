# backend/services/checkout.py
import logging
from decimal import Decimal
from typing import Dict, Iterable, Tuple

from sqlalchemy.orm import Session

from models.buyer import Buyer
from models.order import Order, OrderItem
from models.pickup_point import PickupPoint
from repositories.base import storage_errors
from repositories.cart import CartRepository
from repositories.order import OrderRepository
from repositories.product import ProductPriceLookup
from services.errors import InvalidDataError, NotFoundError
from services.locks import BuyerLockRegistry

logger = logging.getLogger(__name__)


def calculate_total(lines: Iterable[Tuple[int, int]], prices: Dict[int, Decimal]) -> Decimal:
    """Sum of quantity * unit price over (product_id, quantity) lines, in exact decimals."""
    return sum((prices[product_id] * quantity for product_id, quantity in lines), Decimal("0"))


class CheckoutService:
    """
    Turns a buyer's cart into an order.

    The order insert and the cart deletion share one transaction: either the
    order exists and the cart is gone, or nothing changed. Checkouts for the
    same buyer are serialized by ``locks``; the cart version read at the start
    must still be current when the cart is deleted.
    """

    def __init__(
        self,
        db: Session,
        locks: BuyerLockRegistry,
        carts: CartRepository = None,
        prices: ProductPriceLookup = None,
        orders: OrderRepository = None,
    ):
        self.db = db
        self.locks = locks
        self.carts = carts or CartRepository(db)
        self.prices = prices or ProductPriceLookup(db)
        self.orders = orders or OrderRepository(db)

    def checkout(self, buyer_id: int, pickup_point_id: int) -> Order:
        with self.locks.hold(buyer_id):
            try:
                order = self._place_order(buyer_id, pickup_point_id)
                with storage_errors("checkout commit"):
                    self.db.commit()
            except Exception:
                self.db.rollback()
                raise

        logger.info(
            "Order %s placed for buyer %s, total %s", order.id, buyer_id, order.total_cost
        )
        return order

    def _place_order(self, buyer_id: int, pickup_point_id: int) -> Order:
        self._require(Buyer, buyer_id, "Buyer")
        self._require(PickupPoint, pickup_point_id, "Pickup point")

        cart = self.carts.get_by_buyer(buyer_id)
        if not cart.items:
            raise InvalidDataError("Cart is empty")

        lines = [(it.product_id, it.quantity) for it in cart.items]
        prices = self.prices.get_prices(product_id for product_id, _ in lines)
        total = calculate_total(lines, prices)

        order = Order(
            buyer_id=buyer_id,
            total_cost=total,
            pickup_point_id=pickup_point_id,
            items=[
                OrderItem(product_id=product_id, quantity=quantity, unit_price=prices[product_id])
                for product_id, quantity in lines
            ],
        )
        self.orders.create(order)

        # Only after the order is flushed; a failure here rolls the order back too
        self.carts.delete_cart_and_items(cart.id, expected_version=cart.version)
        # Rows are gone; drop the stale objects (items cascade) from the session
        self.db.expunge(cart)
        return order

    def _require(self, model, entity_id: int, entity: str):
        with storage_errors(f"{entity.lower()} lookup"):
            found = self.db.get(model, entity_id)
        if found is None:
            raise NotFoundError(entity)
        return found
