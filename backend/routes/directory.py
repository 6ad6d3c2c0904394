# backend/routes/directory.py
# Buyers, suppliers, categories and pickup points: plain CRUD, buyers also drop their cart
from models.buyer import Buyer
from models.category import Category
from models.pickup_point import PickupPoint
from models.supplier import Supplier
from repositories.cart import CartRepository
from routes.crud import build_crud_router
from schemas.buyer import BuyerCreate, BuyerOut, BuyerUpdate
from schemas.category import CategoryCreate, CategoryOut, CategoryUpdate
from schemas.pickup_point import PickupPointCreate, PickupPointOut, PickupPointUpdate
from schemas.supplier import SupplierCreate, SupplierOut, SupplierUpdate


def _drop_buyer_cart(db, buyer):
    # A buyer takes their cart with them; orders stay as history
    carts = CartRepository(db)
    cart = carts.find_by_buyer(buyer.id)
    if cart is not None:
        carts.delete_cart_and_items(cart.id)
        db.expunge(cart)


buyers_router = build_crud_router(
    model=Buyer,
    create_schema=BuyerCreate,
    update_schema=BuyerUpdate,
    out_schema=BuyerOut,
    prefix="/buyers",
    singular="buyer",
    plural="buyers",
    label="Buyer",
    tags=["Buyers"],
    before_delete=_drop_buyer_cart,
)

suppliers_router = build_crud_router(
    model=Supplier,
    create_schema=SupplierCreate,
    update_schema=SupplierUpdate,
    out_schema=SupplierOut,
    prefix="/suppliers",
    singular="supplier",
    plural="suppliers",
    label="Supplier",
    tags=["Suppliers"],
)

categories_router = build_crud_router(
    model=Category,
    create_schema=CategoryCreate,
    update_schema=CategoryUpdate,
    out_schema=CategoryOut,
    prefix="/categories",
    singular="category",
    plural="categories",
    label="Category",
    tags=["Categories"],
)

pickup_points_router = build_crud_router(
    model=PickupPoint,
    create_schema=PickupPointCreate,
    update_schema=PickupPointUpdate,
    out_schema=PickupPointOut,
    prefix="/pickuppoints",
    singular="pickupPoint",
    plural="pickupPoints",
    label="Pickup point",
    tags=["Pickup points"],
)
