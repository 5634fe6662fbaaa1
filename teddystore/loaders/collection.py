"""Collection page loader.

Critical data (the collection and its filtered, sorted page of products) is
awaited; if it is unavailable the request fails. Deferred data
(recommendations) is best-effort and never fails the page.
"""

from __future__ import annotations

import logging
from typing import Any, Dict

from teddystore.app.common.errors import CollectionNotFound, RedirectRequired
from teddystore.catalog.filters import TranslatedQuery, sort_choices, translate
from teddystore.loaders.context import LoaderContext, PageData
from teddystore.loaders.deferred import Deferred
from teddystore.storefront.pagination import DEFAULT_PAGE_SIZE, get_pagination_variables, page_links
from teddystore.storefront.queries import ALL_COLLECTIONS_QUERY, COLLECTION_QUERY, RECOMMENDED_PRODUCTS_QUERY

logger = logging.getLogger(__name__)

COLLECTIONS_FALLBACK_URL = "/collections"


def load_collection(ctx: LoaderContext) -> PageData:
    handle = ctx.params.get("handle")
    if not handle:
        raise RedirectRequired(COLLECTIONS_FALLBACK_URL)

    # Start non-critical work before blocking on the critical query.
    deferred = load_deferred_data(ctx)
    page = PageData(critical={}, deferred=deferred)
    try:
        page.critical = load_critical_data(ctx, handle)
    except Exception:
        page.cancel_deferred()
        raise
    return page


def build_collection_variables(handle: str, query: TranslatedQuery, pagination: Dict[str, Any]) -> Dict[str, Any]:
    variables: Dict[str, Any] = {
        "handle": handle,
        **pagination,
        "sortKey": query.sort_key,
        "reverse": query.reverse,
    }
    if query.filters:
        variables["filters"] = query.filter_variables()
    return variables


def load_critical_data(ctx: LoaderContext, handle: str) -> Dict[str, Any]:
    search = ctx.search_params
    query = translate(search)
    page_size = int(ctx.config.get("COLLECTION_PAGE_SIZE", DEFAULT_PAGE_SIZE))
    variables = build_collection_variables(handle, query, get_pagination_variables(search, page_by=page_size))

    logger.info(
        "collection %s filters=%d sortKey=%s reverse=%s",
        handle,
        len(query.filters),
        query.sort_key,
        query.reverse,
    )

    data = ctx.storefront.query(COLLECTION_QUERY, variables)
    collection = data.get("collection")
    if not collection:
        raise CollectionNotFound(handle)

    store_name = ctx.config.get("STORE_NAME", "Hydrogen")
    products = collection.get("products") or {}
    return {
        "collection": collection,
        "title": f"{store_name} | {collection.get('title') or ''} Collection",
        "applied": {
            "filters": query.filter_variables(),
            "sortKey": query.sort_key,
            "reverse": query.reverse,
        },
        "sort_options": sort_choices(search, query.sort),
        "pagination": page_links(search, products.get("pageInfo")),
    }


def fetch_recommended_products(ctx: LoaderContext) -> Any:
    data = ctx.storefront.query(RECOMMENDED_PRODUCTS_QUERY)
    return data.get("products")


def load_deferred_data(ctx: LoaderContext) -> Dict[str, Deferred]:
    return {
        "recommended_products": ctx.runner.submit("recommended_products", fetch_recommended_products, ctx),
    }


def load_collection_list(ctx: LoaderContext) -> PageData:
    """The ``/collections`` listing, target of the missing-handle redirect."""
    data = ctx.storefront.query(ALL_COLLECTIONS_QUERY)
    collections = (data.get("collections") or {}).get("nodes") or []
    return PageData(critical={"collections": collections})
