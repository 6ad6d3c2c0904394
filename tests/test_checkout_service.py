import threading
from concurrent.futures import ThreadPoolExecutor
from decimal import Decimal
from unittest import mock

import pytest
from sqlalchemy import update

from models.cart import Cart, CartItem
from models.order import Order
from models.pickup_point import PickupPoint
from models.product import Product
from repositories.cart import CartRepository
from repositories.order import OrderRepository
from repositories.product import ProductPriceLookup
from services.checkout import CheckoutService, calculate_total
from services.errors import ConflictError, InvalidDataError, NotFoundError, UnavailableError
from services.locks import BuyerLockRegistry


@pytest.fixture()
def locks():
    return BuyerLockRegistry()


@pytest.fixture()
def service(db, locks):
    return CheckoutService(db, locks)


def _fill_cart(db, buyer_id, *lines):
    carts = CartRepository(db)
    for product_id, quantity in lines:
        carts.add_or_merge_item(buyer_id, product_id, quantity)


def _cart_lines(db, buyer_id):
    cart = CartRepository(db).find_by_buyer(buyer_id)
    return None if cart is None else [(it.product_id, it.quantity) for it in cart.items]


def test_calculate_total():
    prices = {1: Decimal("1000.00"), 2: Decimal("500.00")}
    assert calculate_total([(1, 2), (2, 1)], prices) == Decimal("2500")
    assert calculate_total([], prices) == Decimal("0")


def test_checkout_places_order_and_discards_cart(db, service, catalog):
    _fill_cart(db, catalog.buyer_id, (catalog.kettle_id, 2), (catalog.mug_id, 1))

    order = service.checkout(catalog.buyer_id, catalog.pickup_id)

    assert order.total_cost == Decimal("2500")
    assert order.buyer_id == catalog.buyer_id
    assert order.pickup_point_id == catalog.pickup_id
    assert order.ordered_products == [catalog.kettle_id, catalog.mug_id]
    assert [(it.quantity, it.unit_price) for it in order.items] == [
        (2, Decimal("1000.00")),
        (1, Decimal("500.00")),
    ]

    assert _cart_lines(db, catalog.buyer_id) is None
    assert db.query(CartItem).count() == 0
    assert len(OrderRepository(db).find_by_buyer(catalog.buyer_id)) == 1


def test_totals_are_exact_decimals(db, service, catalog):
    db.get(Product, catalog.kettle_id).price = Decimal("0.10")
    db.get(Product, catalog.mug_id).price = Decimal("0.20")
    db.commit()

    totals = []
    for _ in range(3):
        _fill_cart(db, catalog.buyer_id, (catalog.kettle_id, 3), (catalog.mug_id, 2))
        totals.append(service.checkout(catalog.buyer_id, catalog.pickup_id).total_cost)

    assert totals == [Decimal("0.70")] * 3


def test_checkout_without_cart(db, service, catalog):
    with pytest.raises(NotFoundError) as err:
        service.checkout(catalog.buyer_id, catalog.pickup_id)

    assert err.value.entity == "Cart"
    assert db.query(Order).count() == 0


def test_checkout_with_empty_cart(db, service, catalog):
    _fill_cart(db, catalog.buyer_id, (catalog.kettle_id, 1))
    CartRepository(db).remove_item(catalog.buyer_id, catalog.kettle_id)

    with pytest.raises(InvalidDataError):
        service.checkout(catalog.buyer_id, catalog.pickup_id)

    assert _cart_lines(db, catalog.buyer_id) == []
    assert db.query(Order).count() == 0


def test_deleted_product_leaves_cart_untouched(db, service, catalog):
    _fill_cart(db, catalog.buyer_id, (catalog.kettle_id, 2), (catalog.mug_id, 1))
    db.delete(db.get(Product, catalog.mug_id))
    db.commit()

    with pytest.raises(NotFoundError) as err:
        service.checkout(catalog.buyer_id, catalog.pickup_id)

    assert err.value.entity == "Product"
    assert db.query(Order).count() == 0
    assert _cart_lines(db, catalog.buyer_id) == [(catalog.kettle_id, 2), (catalog.mug_id, 1)]

    # Once the dead line is gone the same cart checks out
    CartRepository(db).remove_item(catalog.buyer_id, catalog.mug_id)
    assert service.checkout(catalog.buyer_id, catalog.pickup_id).total_cost == Decimal("2000")


def test_unknown_pickup_point(db, service, catalog):
    _fill_cart(db, catalog.buyer_id, (catalog.kettle_id, 1))

    with pytest.raises(NotFoundError) as err:
        service.checkout(catalog.buyer_id, catalog.pickup_id + 100)

    assert err.value.entity == "Pickup point"
    assert _cart_lines(db, catalog.buyer_id) == [(catalog.kettle_id, 1)]


def test_unknown_buyer(service, catalog):
    with pytest.raises(NotFoundError) as err:
        service.checkout(catalog.buyer_id + 100, catalog.pickup_id)
    assert err.value.entity == "Buyer"


def test_failed_order_insert_keeps_cart(db, locks, catalog):
    _fill_cart(db, catalog.buyer_id, (catalog.kettle_id, 2))
    carts = mock.Mock(wraps=CartRepository(db))
    orders = mock.Mock()
    orders.create.side_effect = UnavailableError("order insert timed out")
    service = CheckoutService(db, locks, carts=carts, orders=orders)

    with pytest.raises(UnavailableError):
        service.checkout(catalog.buyer_id, catalog.pickup_id)

    carts.delete_cart_and_items.assert_not_called()
    assert _cart_lines(db, catalog.buyer_id) == [(catalog.kettle_id, 2)]
    assert not locks.is_locked(catalog.buyer_id)


def test_cart_changed_during_checkout_rolls_back_order(db, locks, catalog):
    class CartChangedMidway(CartRepository):
        def get_by_buyer(self, buyer_id):
            cart = super().get_by_buyer(buyer_id)
            self.db.execute(
                update(Cart)
                .where(Cart.id == cart.id)
                .values(version=Cart.version + 1)
                .execution_options(synchronize_session=False)
            )
            return cart

    _fill_cart(db, catalog.buyer_id, (catalog.kettle_id, 1))
    service = CheckoutService(db, locks, carts=CartChangedMidway(db))

    with pytest.raises(ConflictError):
        service.checkout(catalog.buyer_id, catalog.pickup_id)

    assert db.query(Order).count() == 0
    assert _cart_lines(db, catalog.buyer_id) == [(catalog.kettle_id, 1)]


def test_concurrent_checkout_for_same_buyer_conflicts(db, service, locks, catalog):
    _fill_cart(db, catalog.buyer_id, (catalog.kettle_id, 1))

    with locks.hold(catalog.buyer_id):
        with pytest.raises(ConflictError):
            service.checkout(catalog.buyer_id, catalog.pickup_id)
        assert _cart_lines(db, catalog.buyer_id) == [(catalog.kettle_id, 1)]

    service.checkout(catalog.buyer_id, catalog.pickup_id)
    with pytest.raises(NotFoundError):
        service.checkout(catalog.buyer_id, catalog.pickup_id)

    assert db.query(Order).filter(Order.buyer_id == catalog.buyer_id).count() == 1


def test_parallel_checkouts_place_a_single_order(file_database, file_catalog):
    workers = 8
    locks = BuyerLockRegistry()
    barrier = threading.Barrier(workers)

    setup = file_database.session()
    _fill_cart(setup, file_catalog.buyer_id, (file_catalog.kettle_id, 2), (file_catalog.mug_id, 1))
    setup.close()

    def attempt(_):
        session = file_database.session()
        try:
            service = CheckoutService(session, locks)
            barrier.wait()
            service.checkout(file_catalog.buyer_id, file_catalog.pickup_id)
            return "placed"
        except ConflictError:
            return "conflict"
        except NotFoundError:
            return "no cart"
        finally:
            session.close()

    with ThreadPoolExecutor(max_workers=workers) as pool:
        outcomes = list(pool.map(attempt, range(workers)))

    assert outcomes.count("placed") == 1
    assert set(outcomes) <= {"placed", "conflict", "no cart"}

    check = file_database.session()
    try:
        orders = check.query(Order).filter(Order.buyer_id == file_catalog.buyer_id).all()
        assert len(orders) == 1
        assert orders[0].total_cost == Decimal("2500")
        assert _cart_lines(check, file_catalog.buyer_id) is None
        assert check.query(CartItem).count() == 0
    finally:
        check.close()


def test_other_buyers_do_not_contend(db, service, locks, catalog):
    other = PickupPoint(name="North", address="Mira av. 12")
    db.add(other)
    db.commit()
    _fill_cart(db, catalog.buyer_id, (catalog.mug_id, 1))

    with locks.hold(catalog.buyer_id + 1):
        order = service.checkout(catalog.buyer_id, other.id)

    assert order.pickup_point_id == other.id


def test_order_keeps_price_snapshot(db, service, catalog):
    _fill_cart(db, catalog.buyer_id, (catalog.kettle_id, 1))
    order_id = service.checkout(catalog.buyer_id, catalog.pickup_id).id

    db.get(Product, catalog.kettle_id).price = Decimal("1999.99")
    db.commit()

    order = db.get(Order, order_id)
    assert order.total_cost == Decimal("1000")
    assert order.items[0].unit_price == Decimal("1000")


def test_price_lookup(db, catalog):
    prices = ProductPriceLookup(db)

    assert prices.get_price(catalog.mug_id) == Decimal("500")
    assert prices.get_prices([catalog.kettle_id, catalog.mug_id, catalog.kettle_id]) == {
        catalog.kettle_id: Decimal("1000"),
        catalog.mug_id: Decimal("500"),
    }
    with pytest.raises(NotFoundError):
        prices.get_prices([catalog.kettle_id, 999])
