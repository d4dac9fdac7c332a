"""
Static business rules used by the viability check.

All tables are read-only. Keywords are matched as case-insensitive
substrings of a suggestion's categories.
"""
from __future__ import annotations

from types import MappingProxyType
from typing import NamedTuple

# ---------------------------------------------------------------------------
# Store-type compatibility
# ---------------------------------------------------------------------------

STORE_COMPATIBILITY: MappingProxyType[str, MappingProxyType[str, tuple[str, ...]]] = MappingProxyType({
    "coffee_shop": MappingProxyType({
        "excellent": ("coffee", "espresso", "matcha", "tea", "pastry", "pastries", "latte"),
        "good": ("bakery", "snack", "sandwich", "breakfast", "chocolate", "juice"),
        "avoid": ("alcohol", "beer", "wine", "spirits", "tobacco", "furniture"),
    }),
    "bakery": MappingProxyType({
        "excellent": ("bread", "pastry", "pastries", "cake", "croissant", "dessert"),
        "good": ("coffee", "tea", "jam", "sandwich", "cookie"),
        "avoid": ("alcohol", "tobacco", "electronics", "seafood"),
    }),
    "bookstore": MappingProxyType({
        "excellent": ("book", "novel", "poetry", "comic", "stationery"),
        "good": ("coffee", "tea", "gift", "journal", "puzzle"),
        "avoid": ("alcohol", "tobacco", "perishable", "meat"),
    }),
    "gift_shop": MappingProxyType({
        "excellent": ("gift", "souvenir", "craft", "candle", "postcard"),
        "good": ("chocolate", "candy", "jewelry", "art", "stationery"),
        "avoid": ("perishable", "meat", "seafood", "tobacco"),
    }),
    "convenience_store": MappingProxyType({
        "excellent": ("snack", "drink", "beverage", "candy", "essentials"),
        "good": ("coffee", "sandwich", "ice cream", "magazine"),
        "avoid": ("furniture", "luxury", "jewelry", "fine art"),
    }),
    "restaurant": MappingProxyType({
        "excellent": ("dish", "cuisine", "dessert", "entree", "appetizer"),
        "good": ("wine", "beer", "cocktail", "coffee", "tea"),
        "avoid": ("clothing", "electronics", "furniture", "tobacco"),
    }),
    "bar": MappingProxyType({
        "excellent": ("beer", "wine", "cocktail", "spirits", "whiskey"),
        "good": ("snack", "bar food", "appetizer", "music"),
        "avoid": ("children", "kids", "toy", "baby"),
    }),
    "clothing_store": MappingProxyType({
        "excellent": ("apparel", "clothing", "shoes", "accessories", "fashion"),
        "good": ("jewelry", "bag", "hat", "sunglasses"),
        "avoid": ("food", "perishable", "alcohol", "meat"),
    }),
    "grocery_store": MappingProxyType({
        "excellent": ("produce", "organic", "dairy", "bread", "snack", "beverage"),
        "good": ("wine", "beer", "flowers", "household"),
        "avoid": ("furniture", "electronics", "jewelry"),
    }),
})

# ---------------------------------------------------------------------------
# Location conflicts
# ---------------------------------------------------------------------------


class LocationConflict(NamedTuple):
    avoid: tuple[str, ...]
    reason: str


LOCATION_CONFLICTS: MappingProxyType[str, LocationConflict] = MappingProxyType({
    "museum": LocationConflict(
        avoid=("souvenir", "postcard", "art print", "replica", "museum merchandise"),
        reason="Direct competition with museum gift shop",
    ),
    "stadium": LocationConflict(
        avoid=("jersey", "team merchandise", "foam finger", "sports memorabilia"),
        reason="Direct competition with stadium merchandise stands",
    ),
    "school": LocationConflict(
        avoid=("alcohol", "beer", "wine", "tobacco", "vape", "cannabis"),
        reason="Restricted product near a school",
    ),
    "hospital": LocationConflict(
        avoid=("alcohol", "tobacco", "vape", "energy drink"),
        reason="Inappropriate product near a hospital",
    ),
    "airport": LocationConflict(
        avoid=("travel pillow", "luggage", "duty free"),
        reason="Direct competition with airport concessions",
    ),
    "farmers market": LocationConflict(
        avoid=("produce", "honey", "fresh flowers", "local vegetables"),
        reason="Direct competition with farmers market vendors",
    ),
})

# ---------------------------------------------------------------------------
# Informational tables
# ---------------------------------------------------------------------------

DEMOGRAPHIC_APPEAL: MappingProxyType[str, tuple[str, ...]] = MappingProxyType({
    "gen_z": ("matcha", "boba", "bubble tea", "vegan", "plant-based", "vintage", "sticker", "energy drink"),
    "millennials": ("craft beer", "avocado", "cold brew", "oat milk", "natural wine", "sourdough"),
    "families": ("kids", "children", "toy", "snack", "ice cream", "juice"),
    "professionals": ("espresso", "coffee", "salad", "lunch", "notebook", "premium"),
    "tourists": ("souvenir", "postcard", "local", "gift", "map"),
    "seniors": ("tea", "puzzle", "newspaper", "classic", "pastry"),
})

IMPLEMENTATION_COMPLEXITY: MappingProxyType[str, tuple[str, ...]] = MappingProxyType({
    "high": ("alcohol", "beer", "wine", "spirits", "tobacco", "pharmacy", "hot food", "seafood", "meat"),
    "medium": ("coffee", "espresso", "bakery", "pastry", "dairy", "ice cream", "fresh", "produce"),
    "low": ("snack", "packaged", "candy", "stationery", "gift", "book", "accessories", "tea"),
})

COMPLEXITY_ORDER = ("high", "medium", "low")
DEFAULT_COMPLEXITY = "medium"
