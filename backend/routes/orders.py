# backend/routes/orders.py

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from database import get_db
from utils.audit import write_log
from repositories.order import OrderRepository
from schemas.order import CheckoutOut, CheckoutPayload, OrderList, OrderOut
from services.checkout import CheckoutService
from services.errors import ShopError

router = APIRouter(prefix="/orders", tags=["Orders"])


@router.get("/by-buyer/{buyer_id}", response_model=OrderList)
def list_buyer_orders(buyer_id: int, db: Session = Depends(get_db)):
    orders = OrderRepository(db).find_by_buyer(buyer_id)
    return OrderList(orders=[OrderOut.model_validate(o) for o in orders])


# Convert the buyer's cart into an order and discard the cart
@router.post("/checkout", response_model=CheckoutOut)
def checkout(payload: CheckoutPayload, request: Request, db: Session = Depends(get_db)):
    service = CheckoutService(db, request.app.state.checkout_locks)
    try:
        order = service.checkout(payload.buyer_id, payload.pick_up_point_id)
    except ShopError as exc:
        # Client-side failures are worth an audit entry; storage failures are only logged
        if exc.status_code < 500:
            write_log(
                db,
                buyer_id=payload.buyer_id,
                action="ORDER_CHECKOUT",
                resource="orders",
                status="FAIL",
                meta={"reason": exc.message, "pickup_point_id": payload.pick_up_point_id},
            )
        raise

    order_id, total = order.id, order.total_cost
    write_log(
        db,
        buyer_id=payload.buyer_id,
        action="ORDER_CHECKOUT",
        resource="orders",
        meta={"order_id": order_id, "total_cost": str(total), "pickup_point_id": payload.pick_up_point_id},
    )
    return CheckoutOut(message="Order placed successfully", order_id=order_id)
