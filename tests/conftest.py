"""Shared fixtures for the cart pricing tests."""
import pytest

from cart import CartStore
from catalog import Catalog, Category, Product
from promotions import DEFAULT_PROMOTIONS


@pytest.fixture
def catalog() -> Catalog:
    """Two figuras at different prices plus one product per other category."""
    return Catalog(
        [
            Product(id=1, title="Figura A", category=Category.FIGURAS, price=60000),
            Product(id=2, title="Figura B", category=Category.FIGURAS, price=50000),
            Product(id=3, title="Polera A", category=Category.POLERAS, price=20000),
            Product(id=4, title="Poster A", category=Category.POSTERS, price=9000),
        ]
    )


@pytest.fixture
def store() -> CartStore:
    return CartStore()


@pytest.fixture
def promotions():
    return DEFAULT_PROMOTIONS
