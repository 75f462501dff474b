# farmfresh/client/catalog.py
"""Shop listing: filtering and sorting of an already fetched product list.

The filter and sort functions are pure and never modify their input;
fetch_products loads the list they work on.
"""
import math
from datetime import datetime, timezone
from typing import Iterable, List, Optional, Sequence, Tuple

from farmfresh.schemas.product import ProductOut

SORT_OPTIONS = ("featured", "price-low", "price-high", "name-asc", "name-desc", "rating", "newest")

PriceRange = Tuple[Optional[float], Optional[float]]

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


def _matches_search(product: ProductOut, needle: str) -> bool:
    return needle in product.name.lower() or needle in (product.description or "").lower()


def filter_products(
    products: Iterable[ProductOut],
    search: str = "",
    category_ids: Optional[Iterable[int]] = None,
    price_range: Optional[PriceRange] = None,
    organic_only: bool = False,
) -> List[ProductOut]:
    needle = (search or "").strip().lower()
    categories = set(category_ids or ())
    low, high = price_range or (None, None)

    result = []
    for product in products:
        if needle and not _matches_search(product, needle):
            continue
        if categories and product.category_id not in categories:
            continue
        if low is not None and product.price < low:
            continue
        if high is not None and product.price > high:
            continue
        if organic_only and not product.is_organic:
            continue
        result.append(product)
    return result


def _created(product: ProductOut) -> datetime:
    created = product.created_at
    if created is None:
        return _EPOCH
    return created if created.tzinfo else created.replace(tzinfo=timezone.utc)


def sort_products(products: Iterable[ProductOut], sort_by: str = "featured") -> List[ProductOut]:
    """Sort by one of SORT_OPTIONS. "featured" puts featured products first
    and orders each group by name."""
    items = list(products)
    if sort_by == "featured":
        return sorted(items, key=lambda p: (not p.featured, p.name.casefold()))
    if sort_by == "price-low":
        return sorted(items, key=lambda p: p.price)
    if sort_by == "price-high":
        return sorted(items, key=lambda p: p.price, reverse=True)
    if sort_by == "name-asc":
        return sorted(items, key=lambda p: p.name.casefold())
    if sort_by == "name-desc":
        return sorted(items, key=lambda p: p.name.casefold(), reverse=True)
    if sort_by == "rating":
        return sorted(items, key=lambda p: p.rating, reverse=True)
    if sort_by == "newest":
        return sorted(items, key=_created, reverse=True)
    raise ValueError(f"Unknown sort option {sort_by!r}, expected one of {', '.join(SORT_OPTIONS)}")


def list_products(products: Sequence[ProductOut], sort_by: str = "featured", **filters) -> List[ProductOut]:
    return sort_products(filter_products(products, **filters), sort_by)


def price_ceiling(products: Sequence[ProductOut], default: float = 100.0) -> float:
    """Upper bound for the price slider: the highest price rounded up."""
    if not products:
        return default
    return float(math.ceil(max(p.price for p in products)))


async def fetch_products(api, category_id: Optional[int] = None, farmer_id: Optional[int] = None) -> List[ProductOut]:
    params = {}
    if category_id is not None:
        params["categoryId"] = category_id
    if farmer_id is not None:
        params["farmerId"] = farmer_id
    data = await api.get("/api/products", params=params or None)
    return [ProductOut.model_validate(item) for item in data]
