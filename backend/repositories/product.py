from decimal import Decimal
from typing import Dict, Iterable

from sqlalchemy.orm import Session

from models.product import Product
from repositories.base import storage_errors
from services.errors import NotFoundError


class ProductPriceLookup:
    """Read-only access to current unit prices. Nothing is cached."""

    def __init__(self, db: Session):
        self.db = db

    def get_price(self, product_id: int) -> Decimal:
        return self.get_prices([product_id])[product_id]

    def get_prices(self, product_ids: Iterable[int]) -> Dict[int, Decimal]:
        wanted = set(product_ids)
        if not wanted:
            return {}
        with storage_errors("price lookup"):
            rows = self.db.query(Product.id, Product.price).filter(Product.id.in_(wanted)).all()
        prices = {pid: Decimal(price) for pid, price in rows}
        missing = wanted - prices.keys()
        if missing:
            raise NotFoundError("Product", f"Product not found: {sorted(missing)[0]}")
        return prices
