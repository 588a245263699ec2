"""
Chefini Shopping - Grocery ordering links.

Builds web search URLs (and app deep links where the service has one) for
sending a shopping-list item to an Indian quick-commerce or grocery app.
"""

import re
from enum import Enum
from typing import Dict, List, Optional
from urllib.parse import quote


class ShoppingServiceId(str, Enum):
    """Supported grocery services"""
    BLINKIT = "blinkit"
    ZEPTO = "zepto"
    SWIGGY_INSTAMART = "swiggy-instamart"
    AMAZON_FRESH = "amazon-fresh"
    BIGBASKET = "bigbasket"
    JIOMART = "jiomart"
    DEALSHARE = "dealshare"


SHOPPING_SERVICES: List[Dict[str, str]] = [
    {"id": ShoppingServiceId.BLINKIT.value, "name": "Blinkit", "type": "search", "description": "10-min delivery"},
    {"id": ShoppingServiceId.ZEPTO.value, "name": "Zepto", "type": "search", "description": "Quick delivery"},
    {"id": ShoppingServiceId.SWIGGY_INSTAMART.value, "name": "Swiggy Instamart", "type": "search", "description": "Fast grocery"},
    {"id": ShoppingServiceId.AMAZON_FRESH.value, "name": "Amazon Fresh", "type": "url", "description": "Same-day delivery"},
    {"id": ShoppingServiceId.BIGBASKET.value, "name": "BigBasket", "type": "url", "description": "Scheduled delivery"},
    {"id": ShoppingServiceId.JIOMART.value, "name": "JioMart", "type": "url", "description": "Hyperlocal delivery"},
    {"id": ShoppingServiceId.DEALSHARE.value, "name": "DealShare", "type": "url", "description": "Budget grocery"},
]

# {q} is replaced with the URL-encoded item
WEB_SEARCH_URLS: Dict[ShoppingServiceId, str] = {
    ShoppingServiceId.BLINKIT: "https://blinkit.com/s/?q={q}",
    ShoppingServiceId.ZEPTO: "https://www.zeptonow.com/search?query={q}",
    ShoppingServiceId.AMAZON_FRESH: "https://www.amazon.in/s?k={q}&i=amazonfresh",
    ShoppingServiceId.SWIGGY_INSTAMART: "https://www.swiggy.com/instamart/search?custom_back=true&query={q}",
    ShoppingServiceId.BIGBASKET: "https://www.bigbasket.com/ps/?q={q}",
    ShoppingServiceId.JIOMART: "https://www.jiomart.com/search?q={q}",
    ShoppingServiceId.DEALSHARE: "https://www.dealshare.in/search?query={q}",
}

DEEP_LINKS: Dict[ShoppingServiceId, str] = {
    ShoppingServiceId.BLINKIT: "blinkit://search?query={q}",
    ShoppingServiceId.ZEPTO: "zepto://search?query={q}",
    ShoppingServiceId.SWIGGY_INSTAMART: "swiggy://instamart/search?query={q}",
}

_QUANTITY_RE = re.compile(
    r"\d+\s*(cups|cup|tbsp|tsp|kg|gms|gm|g|ml|ltr|l|pieces|piece|pcs|oz|lb)\b",
    re.IGNORECASE,
)


def clean_item(item: str) -> str:
    """
    Strip quantities and units from a shopping-list item.

    Example:
        >>> clean_item("2 cups rice")
        'rice'
    """
    return _QUANTITY_RE.sub("", item).strip()


def _encode(item: str) -> str:
    # Same reserved set as JavaScript's encodeURIComponent
    return quote(clean_item(item), safe="-_.!~*'()")


def web_url(service_id: str, item: str) -> str:
    """Web search URL for an item, or '#' for an unknown service."""
    try:
        template = WEB_SEARCH_URLS[ShoppingServiceId(service_id)]
    except ValueError:
        return "#"
    return template.format(q=_encode(item))


def deep_link(service_id: str, item: str) -> Optional[str]:
    """Mobile app deep link, for services that support one."""
    try:
        template = DEEP_LINKS.get(ShoppingServiceId(service_id))
    except ValueError:
        return None
    if not template:
        return None
    return template.format(q=_encode(item))


def order_links(item: str) -> List[Dict[str, Optional[str]]]:
    """Ordering options for one item across every supported service."""
    return [
        {
            **service,
            "url": web_url(service["id"], item),
            "deepLink": deep_link(service["id"], item),
        }
        for service in SHOPPING_SERVICES
    ]
