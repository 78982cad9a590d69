"""Product catalog and catalog seeding.

This module provides the read-mostly product catalog and the two ways of
seeding it: the built-in sample products, or a CSV file loaded with pandas.
Catalog iteration order is the seeding order and never changes.
"""

import logging
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional

import pandas as pd

from storefront.commerce.models import Product
from storefront.exceptions import CatalogLoadError

# Configure module logger
logger = logging.getLogger(__name__)

# Columns a catalog CSV must provide
REQUIRED_COLUMNS = ("id", "name", "price")
OPTIONAL_COLUMNS = {
    "description": "",
    "category": "",
    "stock": "0",
    "rating": "0",
    "image_url": "",
}


class Catalog:
    """Immutable mapping of product ID to product, in seeding order."""

    def __init__(self, products: Iterable[Product] = ()):
        self._products: Dict[str, Product] = {}
        for product in products:
            if product.id in self._products:
                raise ValueError(f"Duplicate product id: {product.id}")
            self._products[product.id] = product

    def get(self, product_id: str) -> Optional[Product]:
        return self._products.get(product_id)

    def all(self) -> List[Product]:
        return list(self._products.values())

    def __iter__(self) -> Iterator[Product]:
        return iter(self._products.values())

    def __len__(self) -> int:
        return len(self._products)

    def __contains__(self, product_id: object) -> bool:
        return product_id in self._products


def sample_products() -> List[Product]:
    """Return the built-in demo products."""
    return [
        Product(
            id="1",
            name="iPhone 15 Pro",
            description="Latest iPhone with advanced features",
            price=Decimal("999.99"),
            category="Electronics",
            stock=50,
            rating=4.5,
            image_url="https://example.com/iphone.jpg",
        ),
        Product(
            id="2",
            name="MacBook Pro M3",
            description="Powerful laptop for professionals",
            price=Decimal("1999.99"),
            category="Electronics",
            stock=30,
            rating=4.8,
            image_url="https://example.com/macbook.jpg",
        ),
        Product(
            id="3",
            name="AirPods Pro",
            description="Wireless earbuds with noise cancellation",
            price=Decimal("249.99"),
            category="Electronics",
            stock=100,
            rating=4.6,
            image_url="https://example.com/airpods.jpg",
        ),
        Product(
            id="4",
            name="iPad Air",
            description="Versatile tablet for work and play",
            price=Decimal("599.99"),
            category="Electronics",
            stock=75,
            rating=4.4,
            image_url="https://example.com/ipad.jpg",
        ),
        Product(
            id="5",
            name="Apple Watch Series 9",
            description="Smartwatch with health monitoring",
            price=Decimal("399.99"),
            category="Electronics",
            stock=60,
            rating=4.7,
            image_url="https://example.com/watch.jpg",
        ),
    ]


def load_catalog_csv(csv_path: str) -> Catalog:
    """Load a product catalog from a CSV file.

    The file must have ``id``, ``name`` and ``price`` columns; ``description``,
    ``category``, ``stock``, ``rating`` and ``image_url`` are optional and get
    defaults when absent or blank. Rows keep their file order.

    Args:
        csv_path: Path to the catalog CSV.

    Returns:
        A Catalog holding one product per row.

    Raises:
        CatalogLoadError: If the file is missing or unparseable, lacks required
            columns, contains duplicate IDs (compared after trimming
            whitespace), or has an invalid price, stock or rating.
    """
    csv_file = Path(csv_path)
    if not csv_file.exists():
        raise CatalogLoadError(csv_path, "file not found")

    logger.info(f"Loading catalog from {csv_path}")
    # Read everything as text so IDs like "007" and prices keep their form
    try:
        df = pd.read_csv(csv_file, dtype=str, keep_default_na=False)
    except (pd.errors.EmptyDataError, pd.errors.ParserError) as e:
        raise CatalogLoadError(csv_path, f"unreadable CSV: {e}") from e

    missing = [col for col in REQUIRED_COLUMNS if col not in df.columns]
    if missing:
        raise CatalogLoadError(csv_path, f"missing required columns: {missing}")

    df["id"] = df["id"].str.strip()
    duplicated = df["id"][df["id"].duplicated()].unique().tolist()
    if duplicated:
        raise CatalogLoadError(csv_path, f"duplicate product ids: {duplicated}")

    for column, default in OPTIONAL_COLUMNS.items():
        if column not in df.columns:
            df[column] = ""
        df[column] = df[column].replace("", default)

    products = []
    for row_number, row in enumerate(df.to_dict(orient="records"), start=1):
        try:
            price = Decimal(str(row["price"]).strip())
            stock = int(row["stock"])
            rating = float(row["rating"])
            if price < 0 or stock < 0:
                raise ValueError("price and stock must be non-negative")
            product = Product(
                id=row["id"],
                name=str(row["name"]),
                description=str(row["description"]),
                price=price,
                category=str(row["category"]),
                stock=stock,
                rating=rating,
                image_url=str(row["image_url"]),
            )
        except (InvalidOperation, ValueError) as e:
            raise CatalogLoadError(csv_path, f"row {row_number}: {e}") from e
        products.append(product)

    logger.info(f"Loaded {len(products)} products")
    return Catalog(products)


def build_catalog(csv_path: Optional[str] = None) -> Catalog:
    """Build the startup catalog from ``csv_path`` or the sample products."""
    if csv_path:
        return load_catalog_csv(csv_path)
    logger.info("Seeding catalog with sample products")
    return Catalog(sample_products())
