import pytest

from models.cart import Cart, CartItem
from repositories.cart import CartRepository
from services.errors import ConflictError, InvalidDataError, NotFoundError


@pytest.fixture()
def carts(db):
    return CartRepository(db)


def test_first_add_creates_cart(carts, catalog):
    assert carts.find_by_buyer(catalog.buyer_id) is None

    cart = carts.add_or_merge_item(catalog.buyer_id, catalog.kettle_id, 2)

    assert cart.buyer_id == catalog.buyer_id
    assert [(it.product_id, it.quantity) for it in cart.items] == [(catalog.kettle_id, 2)]


def test_adding_same_product_merges_quantities(carts, catalog):
    carts.add_or_merge_item(catalog.buyer_id, catalog.kettle_id, 2)
    carts.add_or_merge_item(catalog.buyer_id, catalog.kettle_id, 3)

    cart = carts.get_by_buyer(catalog.buyer_id)
    assert len(cart.items) == 1
    assert cart.items[0].quantity == 5


def test_items_keep_insertion_order(carts, catalog):
    carts.add_or_merge_item(catalog.buyer_id, catalog.mug_id, 1)
    carts.add_or_merge_item(catalog.buyer_id, catalog.kettle_id, 1)

    cart = carts.get_by_buyer(catalog.buyer_id)
    assert [it.product_id for it in cart.items] == [catalog.mug_id, catalog.kettle_id]
    assert cart.item_ids == sorted(cart.item_ids)


def test_every_change_bumps_version(carts, catalog):
    carts.add_or_merge_item(catalog.buyer_id, catalog.kettle_id, 1)
    first = carts.get_by_buyer(catalog.buyer_id).version

    carts.add_or_merge_item(catalog.buyer_id, catalog.mug_id, 1)
    carts.set_item_quantity(catalog.buyer_id, catalog.mug_id, 4)
    carts.remove_item(catalog.buyer_id, catalog.kettle_id)

    assert carts.get_by_buyer(catalog.buyer_id).version == first + 3


def test_set_item_quantity(carts, catalog):
    carts.add_or_merge_item(catalog.buyer_id, catalog.kettle_id, 1)

    cart = carts.set_item_quantity(catalog.buyer_id, catalog.kettle_id, 7)

    assert cart.items[0].quantity == 7


def test_quantity_below_one_is_rejected(carts, catalog):
    carts.add_or_merge_item(catalog.buyer_id, catalog.kettle_id, 1)

    with pytest.raises(InvalidDataError):
        carts.set_item_quantity(catalog.buyer_id, catalog.kettle_id, 0)
    with pytest.raises(InvalidDataError):
        carts.add_or_merge_item(catalog.buyer_id, catalog.kettle_id, 0)


def test_remove_item(carts, catalog):
    carts.add_or_merge_item(catalog.buyer_id, catalog.kettle_id, 1)
    carts.add_or_merge_item(catalog.buyer_id, catalog.mug_id, 1)

    cart = carts.remove_item(catalog.buyer_id, catalog.kettle_id)

    assert [it.product_id for it in cart.items] == [catalog.mug_id]


def test_remove_without_cart(carts, catalog):
    with pytest.raises(NotFoundError) as err:
        carts.remove_item(catalog.buyer_id, catalog.kettle_id)
    assert err.value.message == "Cart not found"


def test_update_product_not_in_cart(carts, catalog):
    carts.add_or_merge_item(catalog.buyer_id, catalog.kettle_id, 1)

    with pytest.raises(NotFoundError) as err:
        carts.set_item_quantity(catalog.buyer_id, catalog.mug_id, 2)
    assert err.value.message == "Product not found in cart"


def test_delete_cart_and_items(db, carts, catalog):
    cart = carts.add_or_merge_item(catalog.buyer_id, catalog.kettle_id, 1)
    carts.add_or_merge_item(catalog.buyer_id, catalog.mug_id, 1)
    cart_id = cart.id

    carts.delete_cart_and_items(cart_id)
    db.commit()

    assert carts.find_by_buyer(catalog.buyer_id) is None
    assert db.query(CartItem).filter(CartItem.cart_id == cart_id).count() == 0


def test_delete_with_stale_version_conflicts(db, carts, catalog):
    cart = carts.add_or_merge_item(catalog.buyer_id, catalog.kettle_id, 1)
    cart_id, version = cart.id, cart.version

    with pytest.raises(ConflictError):
        carts.delete_cart_and_items(cart_id, expected_version=version + 1)
    db.rollback()

    assert db.get(Cart, cart_id) is not None
    assert db.query(CartItem).filter(CartItem.cart_id == cart_id).count() == 1
