from flask import Blueprint

from teddystore.app.common.request_context import loader_context
from teddystore.loaders.header import load_header

bp = Blueprint("navigation", __name__)


@bp.get("/header")
def header():
    """GET /header - Shop name and main menu links."""
    return load_header(loader_context()).critical, 200
