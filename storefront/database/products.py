"""Product catalog for the storefront"""

from decimal import Decimal
from typing import Iterable, Optional

from ..models.product import Product, ProductCategory

# Seed catalog spanning several stores
PRODUCTS: dict[str, Product] = {
    "prod-001": Product(
        id="prod-001",
        name="Merino Crew Sweater",
        description="Fine-gauge merino wool sweater with ribbed cuffs.",
        price=Decimal("89.00"),
        category=ProductCategory.CLOTHING,
        images=["/static/images/merino-crew.jpg"],
        sizes=["S", "M", "L", "XL"],
        store_name="Northwind Apparel",
    ),
    "prod-002": Product(
        id="prod-002",
        name="Organic Cotton Tee",
        description="Heavyweight tee in GOTS-certified organic cotton.",
        price=Decimal("24.50"),
        category=ProductCategory.CLOTHING,
        images=["/static/images/cotton-tee.jpg"],
        sizes=["XS", "S", "M", "L"],
        store_name="Northwind Apparel",
        free_shipping=True,
    ),
    "prod-003": Product(
        id="prod-003",
        name="Leather Chelsea Boot",
        description="Full-grain leather boot with elastic side panels.",
        price=Decimal("159.99"),
        category=ProductCategory.FOOTWEAR,
        images=["/static/images/chelsea-boot.jpg"],
        sizes=["40", "41", "42", "43", "44"],
        store_name="Cobbler & Co",
    ),
    "prod-004": Product(
        id="prod-004",
        name="Canvas Weekender Bag",
        description="Waxed canvas duffel with leather handles.",
        price=Decimal("120.00"),
        category=ProductCategory.ACCESSORIES,
        images=["/static/images/weekender.jpg"],
        store_name="Cobbler & Co",
    ),
    "prod-005": Product(
        id="prod-005",
        name="Stoneware Mug Set",
        description="Set of four hand-glazed stoneware mugs.",
        price=Decimal("42.00"),
        category=ProductCategory.HOME,
        images=["/static/images/mug-set.jpg"],
        store_name="Kiln House",
    ),
    "prod-006": Product(
        id="prod-006",
        name="Linen Throw Blanket",
        description="Stonewashed linen throw, 130 x 170 cm.",
        price=Decimal("75.00"),
        category=ProductCategory.HOME,
        images=["/static/images/linen-throw.jpg"],
        store_name="Kiln House",
        free_shipping=True,
    ),
    "prod-007": Product(
        id="prod-007",
        name="The Pragmatic Programmer",
        description="20th anniversary edition. Hardcover.",
        price=Decimal("39.99"),
        category=ProductCategory.BOOKS,
        images=["/static/images/pragmatic-programmer.jpg"],
        store_name="Dog-Ear Books",
    ),
}


class ProductDatabase:
    """In-memory product database"""

    def __init__(self):
        self.products = PRODUCTS.copy()

    def get_product(self, product_id: str) -> Optional[Product]:
        """Get a product by ID"""
        return self.products.get(product_id)

    def get_products(self, product_ids: Iterable[str]) -> list[Product]:
        """Batch lookup; unknown IDs are skipped"""
        seen = set()
        results = []
        for product_id in product_ids:
            if product_id in seen:
                continue
            seen.add(product_id)
            product = self.products.get(product_id)
            if product:
                results.append(product)
        return results

    def delete_product(self, product_id: str) -> bool:
        """Remove a product from the catalog"""
        return self.products.pop(product_id, None) is not None


# Singleton instance
product_db = ProductDatabase()
