import uuid
from fastapi import APIRouter

from api.deps import SessionDep
from crud import products as crud_products
from schemas.products import ProductCreate, ProductResponse

router = APIRouter(prefix="/products", tags=["products"])


@router.get("", response_model=list[ProductResponse])
def list_products(db: SessionDep):
    """List the menu."""
    return crud_products.list_products(db)


@router.post("", response_model=ProductResponse, status_code=201)
def create_product(product_data: ProductCreate, db: SessionDep):
    """Add a product to the menu."""
    return crud_products.create_product(db, product_data.name, product_data.price)


@router.delete("/{product_id}", status_code=204)
def delete_product(product_id: uuid.UUID, db: SessionDep):
    """Remove a product from the menu."""
    crud_products.delete_product(db, product_id)
    return None
