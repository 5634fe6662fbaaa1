import os
import sys
import threading

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from teddystore.app.config import TestConfig
from teddystore.app.factory import create_app
from teddystore.loaders.context import LoaderContext
from teddystore.loaders.deferred import DeferredRunner
from teddystore.storefront.queries import (
    ALL_COLLECTIONS_QUERY,
    COLLECTION_QUERY,
    HEADER_QUERY,
    RECOMMENDED_PRODUCTS_QUERY,
    TAB_FIRST_COLLECTION_QUERY,
)


class FakeStorefront:
    """Stands in for StorefrontClient: answers by GraphQL document, records calls."""

    def __init__(self, responses=None):
        self.responses = dict(responses or {})
        self.calls = []
        self._lock = threading.Lock()

    def query(self, document, variables=None):
        with self._lock:
            self.calls.append((document, dict(variables or {})))
        resp = self.responses.get(document, {})
        if callable(resp):
            resp = resp(variables or {})
        if isinstance(resp, Exception):
            raise resp
        return resp

    def calls_for(self, document):
        return [v for d, v in self.calls if d == document]


def make_collection(handle="teddy-bears", title="Teddy Bears", has_next=False):
    return {
        "id": f"gid://shopify/Collection/{handle}",
        "handle": handle,
        "title": title,
        "description": "Soft friends.",
        "products": {
            "nodes": [
                {"id": "gid://shopify/Product/1", "handle": "honey-bear", "title": "Honey Bear"},
                {"id": "gid://shopify/Product/2", "handle": "tiny-ted", "title": "Tiny Ted"},
            ],
            "filters": [],
            "pageInfo": {
                "hasPreviousPage": False,
                "hasNextPage": has_next,
                "startCursor": "c1",
                "endCursor": "c2",
            },
        },
    }


RECOMMENDED = {"products": {"nodes": [{"id": "gid://shopify/Product/9", "handle": "party-bear"}]}}
ALL_COLLECTIONS = {
    "collections": {
        "nodes": [
            {"id": "gid://shopify/Collection/1", "handle": "best-sellers", "title": "Best Sellers"},
            {"id": "gid://shopify/Collection/2", "handle": "tiny-teddies", "title": "Tiny Teddies"},
        ]
    }
}


@pytest.fixture()
def storefront():
    return FakeStorefront(
        {
            COLLECTION_QUERY: lambda v: {"collection": make_collection(v["handle"])},
            RECOMMENDED_PRODUCTS_QUERY: RECOMMENDED,
            ALL_COLLECTIONS_QUERY: ALL_COLLECTIONS,
            TAB_FIRST_COLLECTION_QUERY: lambda v: {"collection": {"handle": v["handle"], "title": v["handle"].title()}},
            HEADER_QUERY: {"shop": {"name": "Teddy", "primaryDomain": {"url": "https://teddy.example"}}, "menu": None},
        }
    )


@pytest.fixture()
def runner():
    r = DeferredRunner(max_workers=4)
    yield r
    r.shutdown()


@pytest.fixture()
def make_ctx(storefront, runner):
    def _make(url="https://teddy.example/collections/teddy-bears", config=None, **params):
        return LoaderContext(
            storefront=storefront,
            params=params,
            url=url,
            runner=runner,
            config=config or {"COLLECTION_PAGE_SIZE": 12, "STORE_NAME": "Hydrogen"},
        )

    return _make


@pytest.fixture()
def app(storefront):
    app = create_app(TestConfig)
    app.extensions["storefront"] = storefront
    yield app


@pytest.fixture()
def client(app):
    with app.test_client() as client:
        yield client
