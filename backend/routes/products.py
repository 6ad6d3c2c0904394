# backend/routes/products.py
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy.orm import Session

from database import get_db
from models.category import Category
from models.product import Product
from models.supplier import Supplier
from schemas.product import ProductCreate, ProductEnvelope, ProductList, ProductOut, ProductUpdate
from services.errors import InvalidDataError, NotFoundError

router = APIRouter(prefix="/products", tags=["Products"])


# ---- HELPERS ----
def _get_product_or_404(db: Session, product_id: int) -> Product:
    product = db.get(Product, product_id)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return product


def _check_references(db: Session, manufacturer_id: Optional[int], category_id: Optional[int]):
    # Referenced supplier and category must exist when given
    if manufacturer_id is not None and db.get(Supplier, manufacturer_id) is None:
        raise NotFoundError("Supplier")
    if category_id is not None and db.get(Category, category_id) is None:
        raise NotFoundError("Category")


# =========================
# LIST / DETAILS
# =========================
@router.get("", response_model=ProductList)
def list_products(
    manufacturer: Optional[int] = Query(None, description="Filter by supplier id"),
    category: Optional[int] = Query(None, description="Filter by category id"),
    db: Session = Depends(get_db),
):
    query = db.query(Product)
    if manufacturer is not None:
        query = query.filter(Product.manufacturer_id == manufacturer)
    if category is not None:
        query = query.filter(Product.category_id == category)

    products = query.order_by(Product.id).all()
    return ProductList(products=[ProductOut.model_validate(p) for p in products])


@router.get("/{product_id}", response_model=ProductEnvelope)
def get_product(product_id: int, db: Session = Depends(get_db)):
    return ProductEnvelope(product=ProductOut.model_validate(_get_product_or_404(db, product_id)))


# =========================
# CREATE / UPDATE / DELETE
# =========================
@router.post("", response_model=ProductEnvelope, status_code=201)
def create_product(payload: ProductCreate, db: Session = Depends(get_db)):
    _check_references(db, payload.manufacturer_id, payload.category_id)

    product = Product(**payload.model_dump())
    db.add(product)
    db.commit()
    db.refresh(product)
    return ProductEnvelope(product=ProductOut.model_validate(product))


@router.put("/{product_id}", response_model=ProductEnvelope)
def update_product(product_id: int, payload: ProductUpdate, db: Session = Depends(get_db)):
    product = _get_product_or_404(db, product_id)

    changes = payload.model_dump(exclude_unset=True)
    for field in ("name", "price", "manufacturer_id"):
        if field in changes and changes[field] is None:
            raise InvalidDataError(f"Field '{field}' cannot be empty")
    _check_references(db, changes.get("manufacturer_id"), changes.get("category_id"))

    # New price only affects future checkouts; placed orders keep their snapshot
    for field, value in changes.items():
        setattr(product, field, value)

    db.commit()
    db.refresh(product)
    return ProductEnvelope(product=ProductOut.model_validate(product))


@router.delete("/{product_id}", status_code=204)
def delete_product(product_id: int, db: Session = Depends(get_db)):
    product = _get_product_or_404(db, product_id)
    db.delete(product)
    db.commit()
    return Response(status_code=204)
