from __future__ import annotations

from flask import Blueprint

from teddystore.app.common.request_context import loader_context
from teddystore.app.common.streaming import stream_page
from teddystore.loaders.collection import load_collection, load_collection_list

bp = Blueprint("collections", __name__)


@bp.get("/collections")
def list_collections():
    """GET /collections - All custom collections (redirect target for a missing handle)."""
    page = load_collection_list(loader_context())
    return page.critical, 200


@bp.get("/collections/", defaults={"handle": None})
@bp.get("/collections/<handle>")
def show_collection(handle: str | None):
    """GET /collections/<handle> - Collection page as NDJSON.

    Query params:
      - filter.v.option.<name>, filter.v.price.gte, filter.v.price.lte,
        filter.p.m.<namespace>.<key>
      - sortKey, reverse
      - cursor, direction (next|previous)
    """
    return stream_page(load_collection(loader_context(handle=handle)))
