from typing import Any, List

from fastapi import APIRouter, Body, Depends, status
from sqlalchemy.orm import Session

from products_api.core.db import get_db
from products_api.core.logging import get_logger
from products_api.errors import MalformedRequestError, NotFoundError, error_boundary
from products_api.repositories import create_product, delete_product, get_product, list_products
from products_api.schemas import MessageResponse, ProductRead
from products_api.validation import parse_product_id, validate_product_create

logger = get_logger(__name__)

router = APIRouter(prefix="/api/products", tags=["products"])

_ERRORS = {
    status.HTTP_400_BAD_REQUEST: {"model": MessageResponse},
    status.HTTP_404_NOT_FOUND: {"model": MessageResponse},
    status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": MessageResponse},
}


@router.get("", response_model=List[ProductRead], responses=_ERRORS)
def http_list_products(db: Session = Depends(get_db)):
    with error_boundary("error retrieving the products"):
        return list_products(db)


@router.post("", response_model=ProductRead, status_code=status.HTTP_201_CREATED, responses=_ERRORS)
def http_create_product(payload: Any = Body(default=None), db: Session = Depends(get_db)):
    with error_boundary("error creating the product"):
        if not isinstance(payload, dict):
            raise MalformedRequestError()

        data = validate_product_create(payload)
        product = create_product(db, data)
        logger.info("product %s created", product.id)
        return product


@router.delete("/{product_id}", response_model=MessageResponse, responses=_ERRORS)
def http_delete_product(product_id: str, db: Session = Depends(get_db)):
    with error_boundary("error deleting the product"):
        pk = parse_product_id(product_id)

        if get_product(db, pk) is None:
            raise NotFoundError()

        # Another request may have removed it since the lookup.
        if not delete_product(db, pk):
            raise NotFoundError()

        logger.info("product %s deleted", pk)
        return MessageResponse(message="product deleted successfully")
