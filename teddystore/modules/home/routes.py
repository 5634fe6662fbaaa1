from __future__ import annotations

from flask import Blueprint

from teddystore.app.common.request_context import loader_context
from teddystore.app.common.streaming import stream_page
from teddystore.loaders.home import load_home

bp = Blueprint("home", __name__)


@bp.get("/")
def home():
    """GET / - Tabbed collections and categories, recommendations deferred."""
    return stream_page(load_home(loader_context()))
