from typing import List, Optional

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from products_api.errors import StorageError
from products_api.models import Product
from products_api.schemas import ProductCreate


def create_product(db: Session, payload: ProductCreate) -> Product:
    product = Product(name=payload.name, description=payload.description, price=payload.price)
    try:
        db.add(product)
        db.commit()
        db.refresh(product)
    except SQLAlchemyError as e:
        db.rollback()
        raise StorageError("could not insert product") from e
    return product


def list_products(db: Session) -> List[Product]:
    try:
        return list(db.execute(select(Product).order_by(Product.id)).scalars().all())
    except SQLAlchemyError as e:
        db.rollback()
        raise StorageError("could not list products") from e


def get_product(db: Session, product_id: int) -> Optional[Product]:
    try:
        return db.get(Product, product_id)
    except SQLAlchemyError as e:
        db.rollback()
        raise StorageError(f"could not load product {product_id}") from e


def delete_product(db: Session, product_id: int) -> bool:
    """Delete by primary key; True only if this call removed a row."""
    try:
        result = db.execute(delete(Product).where(Product.id == product_id))
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        raise StorageError(f"could not delete product {product_id}") from e
    return result.rowcount > 0
