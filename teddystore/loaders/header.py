from __future__ import annotations

from teddystore.catalog.navigation import normalize_menu
from teddystore.loaders.context import LoaderContext, PageData
from teddystore.storefront.queries import HEADER_QUERY


def load_header(ctx: LoaderContext) -> PageData:
    """Shop info and the main menu with store-internal links made relative."""
    menu_handle = ctx.config.get("HEADER_MENU_HANDLE", "main-menu")
    data = ctx.storefront.query(HEADER_QUERY, {"headerMenuHandle": menu_handle})
    shop = data.get("shop") or {}
    primary_domain_url = (shop.get("primaryDomain") or {}).get("url") or ""
    return PageData(
        critical={
            "shop": {"name": shop.get("name"), "primary_domain_url": primary_domain_url},
            "menu": normalize_menu(
                data.get("menu"),
                public_store_domain=ctx.config.get("PUBLIC_STORE_DOMAIN", ""),
                primary_domain_url=primary_domain_url,
            ),
        }
    )
