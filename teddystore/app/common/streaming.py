"""NDJSON page responses.

The first line carries the critical data so the client can render at once;
each deferred value follows on its own line as soon as it resolves::

    {"type": "critical", "data": {...}}
    {"type": "deferred", "name": "recommended_products", "data": {...} | null}
"""

from __future__ import annotations

from flask import Response, json, stream_with_context

from teddystore.loaders.context import PageData
from teddystore.loaders.deferred import as_resolved

NDJSON_MIMETYPE = "application/x-ndjson"


def stream_page(page: PageData) -> Response:
    def generate():
        yield json.dumps({"type": "critical", "data": page.critical}) + "\n"
        for name, value in as_resolved(page.deferred):
            yield json.dumps({"type": "deferred", "name": name, "data": value}) + "\n"

    return Response(stream_with_context(generate()), mimetype=NDJSON_MIMETYPE)
