import uuid
from flask import current_app, g, request

from teddystore.loaders.context import LoaderContext

REQUEST_ID_HEADER = "X-Request-ID"


def init_request_id() -> str:
    rid = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
    g.request_id = rid
    return rid


def loader_context(**params) -> LoaderContext:
    """Build the loader context for the current request from app extensions."""
    return LoaderContext(
        storefront=current_app.extensions["storefront"],
        params=params,
        url=request.url,
        runner=current_app.extensions["deferred_runner"],
        config=current_app.config,
    )
