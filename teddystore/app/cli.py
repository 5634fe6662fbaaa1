from __future__ import annotations

import json

import click
from flask import Blueprint, current_app

from teddystore.app.common.errors import ApiError, RedirectRequired
from teddystore.loaders.collection import load_collection
from teddystore.loaders.context import LoaderContext
from teddystore.storefront.client import StorefrontError

cli_bp = Blueprint("cli", __name__, cli_group=None)


@cli_bp.cli.command("fetch-collection")
@click.argument("handle")
@click.option("--query", "query_string", default="", help="Collection URL query string, e.g. 'sortKey=PRICE&reverse=true'.")
def fetch_collection(handle: str, query_string: str) -> None:
    """Load a collection page and print it as JSON (deferred data resolved).

    Handy for checking filter/sort translation against the live storefront.
    """
    ctx = LoaderContext(
        storefront=current_app.extensions["storefront"],
        params={"handle": handle},
        url=f"/collections/{handle}?{query_string.lstrip('?')}",
        runner=current_app.extensions["deferred_runner"],
        config=current_app.config,
    )
    try:
        page = load_collection(ctx)
    except RedirectRequired as exc:
        raise click.ClickException(f"redirect to {exc.location}")
    except ApiError as exc:
        raise click.ClickException(exc.message)
    except StorefrontError as exc:
        raise click.ClickException(exc.message)

    out = {"critical": page.critical, "deferred": page.resolve_deferred()}
    click.echo(json.dumps(out, indent=2, default=str))
