from __future__ import annotations

import logging
from flask import Flask, g, jsonify, redirect, request
from werkzeug.exceptions import HTTPException

from teddystore.app.config import Config
from teddystore.app.extensions import cors, deferred_runner, storefront
from teddystore.app.common.errors import ApiError, RedirectRequired, error_body
from teddystore.app.common.request_context import REQUEST_ID_HEADER, init_request_id
from teddystore.app.api.register import register_page_blueprints
from teddystore.app.cli import cli_bp
from teddystore.storefront.client import StorefrontError


def create_app(config_object: type[Config] = Config) -> Flask:
    app = Flask(__name__, instance_relative_config=True)
    app.config.from_object(config_object)
    app.json.sort_keys = False

    # Basic logging (enough for perf debugging)
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s %(message)s")

    # Extensions
    cors.init_app(app, resources={r"/*": {"origins": app.config.get("CORS_ORIGINS") or "*"}})
    storefront.init_app(app)
    deferred_runner.init_app(app)

    # Request id
    @app.before_request
    def _before_request():
        init_request_id()

    @app.after_request
    def _after_request(response):
        rid = getattr(g, "request_id", None)
        if rid:
            response.headers[REQUEST_ID_HEADER] = rid
        return response

    # Health endpoint (for Docker/uptime checks)
    @app.get("/health")
    def health():
        return {"status": "ok"}, 200

    # Page blueprints + /api index
    register_page_blueprints(app)

    # CLI (flask fetch-collection)
    app.register_blueprint(cli_bp)

    # Error handlers
    @app.errorhandler(RedirectRequired)
    def handle_redirect(err: RedirectRequired):
        return redirect(err.location, code=302)

    @app.errorhandler(ApiError)
    def handle_api_error(err: ApiError):
        app.logger.log(err.log_level, "%s %s -> %s", request.method, request.path, err)
        return jsonify(err.to_dict(getattr(g, "request_id", None))), err.status_code

    @app.errorhandler(StorefrontError)
    def handle_storefront_error(err: StorefrontError):
        app.logger.error("Storefront API failure: %s", err.message)
        payload = error_body(
            "upstream_error",
            "Storefront API request failed",
            {"upstream_status": err.status_code},
            getattr(g, "request_id", None),
        )
        return jsonify(payload), 502

    @app.errorhandler(HTTPException)
    def handle_http_exception(err: HTTPException):
        # Normalize Werkzeug errors into our JSON shape
        payload = error_body("http_error", err.description, {"name": err.name}, getattr(g, "request_id", None))
        return jsonify(payload), err.code or 500

    @app.errorhandler(Exception)
    def handle_unexpected(err: Exception):
        app.logger.exception("Unhandled exception")
        payload = error_body("internal_error", "Internal server error", request_id=getattr(g, "request_id", None))
        return jsonify(payload), 500

    return app
