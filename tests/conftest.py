import jwt
import pytest

from storefront.core.config import settings as storefront_settings
from storefront.database.admins import admin_db
from storefront.database.carts import cart_db
from storefront.database.orders import order_db
from storefront.database.products import PRODUCTS, product_db
from vault import ContactBundle, ContactCodec

TEST_SECRET = "test-pii-secret"


def make_token(user_id: str, **claims) -> str:
    """Identity token the storefront accepts for user_id."""
    return jwt.encode(
        {"sub": user_id, **claims},
        storefront_settings.identity_token_secret,
        algorithm=storefront_settings.identity_token_algorithm,
    )


@pytest.fixture(autouse=True)
def reset_storefront():
    """Fresh storefront tables for every test."""
    cart_db.rows.clear()
    order_db.orders.clear()
    admin_db.admins.clear()
    product_db.products = PRODUCTS.copy()
    yield
    cart_db.rows.clear()
    order_db.orders.clear()
    admin_db.admins.clear()


@pytest.fixture()
def codec():
    return ContactCodec(TEST_SECRET)


@pytest.fixture()
def contact():
    return ContactBundle(
        first_name="Ada",
        last_name="Lovelace",
        email="ada@example.com",
        phone="+44 20 7946 0000",
        address="12 St James's Square",
        city="London",
        region="Greater London",
        postal_code="SW1Y 4JH",
        country="UK",
    )
