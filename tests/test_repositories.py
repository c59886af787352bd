from decimal import Decimal

import pytest

from products_api.errors import StorageError
from products_api.repositories import create_product, delete_product, get_product, list_products
from products_api.schemas import ProductCreate


def _payload(name="Pen", price="1.50"):
    return ProductCreate(name=name, description="Blue ink pen", price=Decimal(price))


def test_create_assigns_id(db):
    product = create_product(db, _payload())

    assert product.id == 1
    assert product.name == "Pen"
    assert product.price == Decimal("1.50")


def test_list_returns_insertion_order(db):
    for name in ("a", "b", "c"):
        create_product(db, _payload(name=name))

    assert [p.name for p in list_products(db)] == ["a", "b", "c"]


def test_get_product(db):
    created = create_product(db, _payload())

    assert get_product(db, created.id).name == "Pen"
    assert get_product(db, created.id + 1) is None


def test_delete_product_reports_whether_a_row_existed(db):
    created = create_product(db, _payload())

    assert delete_product(db, created.id) is True
    assert delete_product(db, created.id) is False
    assert list_products(db) == []


@pytest.mark.parametrize(
    "call",
    [
        lambda s: list_products(s),
        lambda s: get_product(s, 1),
        lambda s: delete_product(s, 1),
        lambda s: create_product(s, _payload()),
    ],
)
def test_sqlalchemy_errors_become_storage_errors(broken_db, call):
    with pytest.raises(StorageError):
        call(broken_db)
    broken_db.rollback.assert_called_once()
