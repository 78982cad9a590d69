"""CLI script for getting product recommendations.

Useful for trying the recommendation tiers without running the server. Seeds
a shop, replays the given orders and searches for one user, and prints the
recommendations.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from storefront.commerce.catalog import build_catalog
from storefront.commerce.service import ShopService
from storefront.exceptions import StorefrontException

# Setup logging
logging.basicConfig(
    level=logging.WARNING,
    format="%(levelname)s: %(message)s"
)
logger = logging.getLogger(__name__)


def replay_history(
    shop: ShopService,
    user_id: str,
    ordered: List[str],
    searches: List[str],
) -> None:
    """Place one order per product ID and record each search for the user."""
    for product_id in ordered:
        shop.add_to_cart(user_id, product_id, 1)
        shop.checkout(user_id)
    for query in searches:
        shop.search_products(query, user_id)


def main() -> None:
    """Main CLI function."""
    parser = argparse.ArgumentParser(
        description="Get product recommendations for a user",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python scripts/recommend_cli.py u1
  python scripts/recommend_cli.py u1 --order 1 --order 3
  python scripts/recommend_cli.py u1 --search iPad --limit 3
  python scripts/recommend_cli.py u1 --catalog data/catalog.csv
        """
    )

    parser.add_argument("user_id", help="User ID to get recommendations for")
    parser.add_argument(
        "--catalog",
        default=None,
        help="Catalog CSV to seed from (default: built-in sample products)"
    )
    parser.add_argument(
        "--order",
        action="append",
        default=[],
        metavar="PRODUCT_ID",
        help="Product the user has ordered; repeatable"
    )
    parser.add_argument(
        "--search",
        action="append",
        default=[],
        metavar="QUERY",
        help="Query the user has searched for; repeatable"
    )
    parser.add_argument(
        "--limit",
        type=int,
        default=5,
        help="Number of recommendations to return (default: 5)"
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging"
    )

    args = parser.parse_args()

    if args.verbose:
        logging.getLogger().setLevel(logging.INFO)

    try:
        shop = ShopService(build_catalog(args.catalog))
        replay_history(shop, args.user_id, args.order, args.search)
        result = shop.recommendations(args.user_id, args.limit)
    except StorefrontException as e:
        print(f"Error: {e.message}", file=sys.stderr)
        sys.exit(1)

    print(f"\nRecommendations for user {args.user_id} (strategy: {result.strategy}):")
    for product in result.products:
        print(f"  {product.id:>6}  {product.name}  [{product.category}]  rating {product.rating}")
    print()


if __name__ == "__main__":
    main()
