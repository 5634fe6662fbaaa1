from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from teddystore.loaders.collection import fetch_recommended_products
from teddystore.loaders.context import LoaderContext, PageData
from teddystore.storefront.queries import ALL_COLLECTIONS_QUERY, TAB_FIRST_COLLECTION_QUERY

logger = logging.getLogger(__name__)

DEFAULT_TAB_COLLECTIONS = ("best-sellers", "new-arrivals", "dressed-up-bears", "tiny-teddies")


def tab_collection_handles(config) -> List[str]:
    raw = config.get("HOME_TAB_COLLECTIONS")
    if not raw:
        return list(DEFAULT_TAB_COLLECTIONS)
    if isinstance(raw, str):
        return [h.strip() for h in raw.split(",") if h.strip()]
    return list(raw)


def load_home(ctx: LoaderContext) -> PageData:
    deferred = {
        "recommended_products": ctx.runner.submit("recommended_products", fetch_recommended_products, ctx),
    }
    page = PageData(critical={}, deferred=deferred)
    try:
        page.critical = load_critical_data(ctx)
    except Exception:
        page.cancel_deferred()
        raise
    return page


def load_critical_data(ctx: LoaderContext) -> Dict[str, Any]:
    handles = tab_collection_handles(ctx.config)

    def fetch_tab(handle: str) -> Optional[Dict[str, Any]]:
        return ctx.storefront.query(TAB_FIRST_COLLECTION_QUERY, {"handle": handle}).get("collection")

    # Tabs load concurrently; order follows the configured handles.
    tabs = ctx.runner.map(fetch_tab, handles)
    missing = [h for h, c in zip(handles, tabs) if not c]
    if missing:
        logger.warning("home tab collections not found: %s", ", ".join(missing))

    data = ctx.storefront.query(ALL_COLLECTIONS_QUERY)
    return {
        "tabbed_collections": [c for c in tabs if c],
        "categories": (data.get("collections") or {}).get("nodes") or [],
    }
