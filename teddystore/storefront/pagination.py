"""Cursor pagination for products connections.

URLs carry ``cursor`` and ``direction`` (``next`` / ``previous``); these map
onto the ``first``/``endCursor`` or ``last``/``startCursor`` query variables.
"""

from __future__ import annotations

from typing import Any, Dict, Optional
from urllib.parse import urlencode

from teddystore.catalog.filters import SearchParams, first_value, iter_params

CURSOR_PARAM = "cursor"
DIRECTION_PARAM = "direction"
DEFAULT_PAGE_SIZE = 12


def get_pagination_variables(params: SearchParams, page_by: int = DEFAULT_PAGE_SIZE) -> Dict[str, Any]:
    cursor = first_value(params, CURSOR_PARAM) or None
    if first_value(params, DIRECTION_PARAM) == "previous" and cursor:
        return {"last": page_by, "startCursor": cursor}
    return {"first": page_by, "endCursor": cursor}


def _page_url(params: SearchParams, direction: str, cursor: str) -> str:
    kept = [(k, v) for k, v in iter_params(params) if k not in (CURSOR_PARAM, DIRECTION_PARAM)]
    kept.append((DIRECTION_PARAM, direction))
    kept.append((CURSOR_PARAM, cursor))
    return "?" + urlencode(kept)


def page_links(params: SearchParams, page_info: Optional[Dict[str, Any]]) -> Dict[str, Optional[str]]:
    """Previous/next page query strings for a connection's ``pageInfo``."""
    info = page_info or {}
    previous = None
    following = None
    if info.get("hasPreviousPage") and info.get("startCursor"):
        previous = _page_url(params, "previous", info["startCursor"])
    if info.get("hasNextPage") and info.get("endCursor"):
        following = _page_url(params, "next", info["endCursor"])
    return {"previous": previous, "next": following}
