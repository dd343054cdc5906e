import uuid
import logging
from sqlmodel import select, Session

from core.exceptions import NotFoundError
from models.products import Product

logger = logging.getLogger(__name__)


def list_products(db: Session) -> list[Product]:
    """List the menu ordered by name."""
    return db.exec(select(Product).order_by(Product.name)).all()


def create_product(db: Session, name: str, price: int) -> Product:
    """Add a product to the menu."""
    product = Product(name=name, price=price)
    db.add(product)
    db.commit()
    db.refresh(product)
    return product


def delete_product(db: Session, product_id: uuid.UUID) -> None:
    """Remove a product. Items already ordered keep their own copy."""
    product = db.get(Product, product_id)
    if not product:
        raise NotFoundError(f"Product {product_id} not found")

    db.delete(product)
    db.commit()
    logger.info(f"Deleted product {product.name!r}")
