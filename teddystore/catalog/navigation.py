from __future__ import annotations

from typing import Any, Dict, List, Optional
from urllib.parse import urlsplit

FALLBACK_HEADER_MENU: Dict[str, Any] = {
    "id": "gid://shopify/Menu/199655587896",
    "items": [
        {
            "id": "gid://shopify/MenuItem/461609500728",
            "resourceId": None,
            "tags": [],
            "title": "Collections",
            "type": "HTTP",
            "url": "/collections",
            "items": [],
        },
        {
            "id": "gid://shopify/MenuItem/461609533496",
            "resourceId": None,
            "tags": [],
            "title": "Blog",
            "type": "HTTP",
            "url": "/blogs/journal",
            "items": [],
        },
        {
            "id": "gid://shopify/MenuItem/461609566264",
            "resourceId": None,
            "tags": [],
            "title": "Policies",
            "type": "HTTP",
            "url": "/policies",
            "items": [],
        },
        {
            "id": "gid://shopify/MenuItem/461609599032",
            "resourceId": "gid://shopify/Page/92591030328",
            "tags": [],
            "title": "About",
            "type": "PAGE",
            "url": "/pages/about",
            "items": [],
        },
    ],
}


def is_internal_url(url: str, public_store_domain: str, primary_domain_url: str) -> bool:
    if "myshopify.com" in url:
        return True
    if public_store_domain and public_store_domain in url:
        return True
    return bool(primary_domain_url) and primary_domain_url in url


def menu_item_url(url: str, public_store_domain: str, primary_domain_url: str) -> str:
    """Strip the domain from links that point back into this store."""
    if is_internal_url(url, public_store_domain, primary_domain_url):
        return urlsplit(url).path or "/"
    return url


def normalize_menu(
    menu: Optional[Dict[str, Any]],
    public_store_domain: str = "",
    primary_domain_url: str = "",
) -> List[Dict[str, Any]]:
    """Flatten a storefront menu into ``{id, title, url}`` links.

    Items without a URL are skipped. A missing menu falls back to
    ``FALLBACK_HEADER_MENU``.
    """
    source = menu or FALLBACK_HEADER_MENU
    links = []
    for item in source.get("items") or []:
        url = item.get("url")
        if not url:
            continue
        links.append(
            {
                "id": item.get("id"),
                "title": item.get("title"),
                "url": menu_item_url(url, public_store_domain, primary_domain_url),
            }
        )
    return links
