from flask import Flask

from teddystore.modules.collections.routes import bp as collections_bp
from teddystore.modules.home.routes import bp as home_bp
from teddystore.modules.navigation.routes import bp as navigation_bp


def register_page_blueprints(app: Flask) -> None:
    app.register_blueprint(home_bp)
    app.register_blueprint(collections_bp)
    app.register_blueprint(navigation_bp)

    # Root API document
    @app.get("/api")
    def api_index():
        return {
            "name": "Teddystore storefront API",
            "version": "0.1.0",
            "endpoints": {
                "home": ["/"],
                "collections": ["/collections", "/collections/<handle>"],
                "navigation": ["/header"],
                "health": ["/health"],
            },
            "streaming": "Page endpoints answer application/x-ndjson: critical line first, deferred lines after.",
        }, 200
