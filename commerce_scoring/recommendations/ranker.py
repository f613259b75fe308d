"""
Recommendation ranker: orders scored products and groups them by category.

Usage flow
----------
1. rank_products(products)
   -> list[Product]  (relevance descending, ``rank`` filled in 1..n)

2. top_n_per_category(ranked, n=3)
   -> dict[category, list[Product]]  (top-N per category)

Products without a relevance score rank after every scored product.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable

from commerce_scoring.models.product import Product


def _sort_key(product: Product) -> tuple[bool, float, int]:
    unscored = product.relevance_score is None
    score = product.relevance_score or 0.0
    return (unscored, -score, product.product_id)


def rank_products(products: Iterable[Product]) -> list[Product]:
    """Sort by relevance descending, ties by product id ascending.

    Returns new ``Product`` copies with ``rank`` set (1 = most relevant).
    """
    ordered = sorted(products, key=_sort_key)
    return [
        p.model_copy(update={"rank": rank})
        for rank, p in enumerate(ordered, start=1)
    ]


def top_n_per_category(
    products: Iterable[Product],
    n: int = 3,
) -> dict[str, list[Product]]:
    """Return the top-N products per category.

    Each product id appears at most once per category; the higher-scoring
    copy is kept.  Within a category products are ordered as in
    ``rank_products``.

    Args:
        products: Scored products (ranked or not).
        n:        Max results per category (default 3).

    Returns:
        Dict mapping category -> list of up to ``n`` products (desc order).
    """
    by_cat: dict[str, dict[int, Product]] = defaultdict(dict)
    for p in products:
        best = by_cat[p.category]
        existing = best.get(p.product_id)
        if existing is None or _sort_key(p) < _sort_key(existing):
            best[p.product_id] = p

    return {
        cat: sorted(items.values(), key=_sort_key)[:n]
        for cat, items in by_cat.items()
    }
