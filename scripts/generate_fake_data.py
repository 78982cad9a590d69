"""Generate a fake product catalog for testing and development.

This module creates a synthetic catalog CSV that the API can be seeded with
via ``STOREFRONT_CATALOG_CSV``.

Example:
    Run the script directly to generate default data:
        $ python scripts/generate_fake_data.py

    Or import and use programmatically:
        from scripts.generate_fake_data import generate_fake_catalog
        df = generate_fake_catalog(num_products=200)
"""

import random
from pathlib import Path
from typing import Optional

import pandas as pd

# Default configuration constants
DEFAULT_NUM_PRODUCTS = 100
DEFAULT_CATEGORIES = ("Electronics", "Books", "Home", "Sports", "Toys", "Clothing")
ADJECTIVES = ("Classic", "Smart", "Compact", "Deluxe", "Portable", "Eco")
NOUNS = {
    "Electronics": ("Headphones", "Speaker", "Tablet", "Camera", "Charger"),
    "Books": ("Novel", "Cookbook", "Atlas", "Biography", "Guide"),
    "Home": ("Lamp", "Kettle", "Blanket", "Vase", "Clock"),
    "Sports": ("Racket", "Yoga Mat", "Ball", "Helmet", "Bottle"),
    "Toys": ("Puzzle", "Robot", "Kite", "Blocks", "Plush"),
    "Clothing": ("Jacket", "Scarf", "Sneakers", "Hat", "Sweater"),
}


def generate_fake_catalog(
    num_products: int = DEFAULT_NUM_PRODUCTS,
    seed: Optional[int] = None,
) -> pd.DataFrame:
    """Generate a synthetic product catalog.

    Args:
        num_products: Number of products to create. Must be positive.
        seed: Optional random seed for reproducible output.

    Returns:
        A pandas DataFrame with the catalog CSV columns: id, name,
        description, price, category, stock, rating, image_url. IDs are
        "1" to ``num_products``.

    Raises:
        ValueError: If num_products is not positive.
    """
    if num_products <= 0:
        raise ValueError("num_products must be positive")

    rng = random.Random(seed)
    rows = []
    for product_id in range(1, num_products + 1):
        category = rng.choice(DEFAULT_CATEGORIES)
        name = f"{rng.choice(ADJECTIVES)} {rng.choice(NOUNS[category])}"
        rows.append({
            "id": str(product_id),
            "name": name,
            "description": f"{name} from our {category.lower()} range",
            "price": f"{rng.uniform(5, 500):.2f}",
            "category": category,
            "stock": rng.randint(0, 200),
            "rating": round(rng.uniform(1, 5), 1),
            "image_url": f"https://example.com/products/{product_id}.jpg",
        })

    return pd.DataFrame(rows)


def main() -> None:
    """Generate a catalog with default parameters into data/catalog.csv."""
    print(f"Generating {DEFAULT_NUM_PRODUCTS} fake products...")

    df = generate_fake_catalog(num_products=DEFAULT_NUM_PRODUCTS)

    data_dir = Path(__file__).parent.parent / 'data'
    data_dir.mkdir(exist_ok=True)

    output_path = data_dir / 'catalog.csv'
    df.to_csv(output_path, index=False)

    print(f"\nCatalog generated successfully!")
    print(f"Saved to: {output_path}")
    print(f"\nData preview:")
    print(df.head(10))
    print(f"\nProducts per category:")
    print(df['category'].value_counts().to_string())


if __name__ == '__main__':
    main()
