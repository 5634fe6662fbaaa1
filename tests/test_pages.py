import json

from teddystore.storefront.client import StorefrontError
from teddystore.storefront.queries import (
    ALL_COLLECTIONS_QUERY,
    COLLECTION_QUERY,
    RECOMMENDED_PRODUCTS_QUERY,
    TAB_FIRST_COLLECTION_QUERY,
)


def ndjson(response):
    return [json.loads(line) for line in response.get_data(as_text=True).splitlines() if line]


def test_collection_page_streams_critical_then_deferred(client):
    r = client.get("/collections/teddy-bears?sortKey=PRICE&reverse=true")
    assert r.status_code == 200
    assert r.mimetype == "application/x-ndjson"

    lines = ndjson(r)
    assert lines[0]["type"] == "critical"
    assert lines[0]["data"]["collection"]["handle"] == "teddy-bears"
    assert lines[0]["data"]["applied"] == {"filters": [], "sortKey": "PRICE", "reverse": True}
    assert lines[1] == {
        "type": "deferred",
        "name": "recommended_products",
        "data": {"nodes": [{"id": "gid://shopify/Product/9", "handle": "party-bear"}]},
    }


def test_collection_page_without_handle_redirects(client, storefront):
    r = client.get("/collections/")
    assert r.status_code == 302
    assert r.headers["Location"].endswith("/collections")
    assert storefront.calls == []


def test_collection_not_found_is_404(client, storefront):
    storefront.responses[COLLECTION_QUERY] = {"collection": None}
    r = client.get("/collections/ghost-bears")
    assert r.status_code == 404
    assert r.json["error"]["code"] == "not_found"
    assert r.json["error"]["message"] == "Collection ghost-bears not found"


def test_upstream_failure_is_502(client, storefront):
    storefront.responses[COLLECTION_QUERY] = StorefrontError("Storefront API returned HTTP 500", status_code=500)
    r = client.get("/collections/teddy-bears")
    assert r.status_code == 502
    assert r.json["error"]["code"] == "upstream_error"
    assert r.json["error"]["details"] == {"upstream_status": 500}


def test_deferred_failure_still_serves_page(client, storefront):
    storefront.responses[RECOMMENDED_PRODUCTS_QUERY] = StorefrontError("timeout")
    r = client.get("/collections/teddy-bears")
    assert r.status_code == 200
    lines = ndjson(r)
    assert lines[0]["data"]["collection"]["title"] == "Teddy Bears"
    assert lines[1] == {"type": "deferred", "name": "recommended_products", "data": None}


def test_bad_price_filter_is_400(client):
    r = client.get("/collections/teddy-bears?filter.v.price.lte=lots")
    assert r.status_code == 400
    assert r.json["error"]["code"] == "invalid_filter"
    assert r.json["error"]["details"]["parameter"] == "filter.v.price.lte"


def test_collections_listing(client):
    r = client.get("/collections")
    assert r.status_code == 200
    assert [c["handle"] for c in r.json["collections"]] == ["best-sellers", "tiny-teddies"]


def test_home_page(client, storefront):
    r = client.get("/")
    assert r.status_code == 200
    lines = ndjson(r)
    critical = lines[0]["data"]
    assert [c["handle"] for c in critical["tabbed_collections"]] == [
        "best-sellers",
        "new-arrivals",
        "dressed-up-bears",
        "tiny-teddies",
    ]
    assert len(critical["categories"]) == 2
    assert lines[1]["name"] == "recommended_products"
    assert len(storefront.calls_for(TAB_FIRST_COLLECTION_QUERY)) == 4


def test_home_page_drops_missing_tabs(client, storefront):
    storefront.responses[TAB_FIRST_COLLECTION_QUERY] = lambda v: {
        "collection": None if v["handle"] == "new-arrivals" else {"handle": v["handle"]}
    }
    storefront.responses[ALL_COLLECTIONS_QUERY] = {"collections": None}
    critical = ndjson(client.get("/"))[0]["data"]
    assert [c["handle"] for c in critical["tabbed_collections"]] == ["best-sellers", "dressed-up-bears", "tiny-teddies"]
    assert critical["categories"] == []


def test_home_page_tab_failure_is_fatal(client, storefront):
    storefront.responses[TAB_FIRST_COLLECTION_QUERY] = StorefrontError("down")
    r = client.get("/")
    assert r.status_code == 502


def test_header(client):
    r = client.get("/header")
    assert r.status_code == 200
    assert r.json["shop"] == {"name": "Teddy", "primary_domain_url": "https://teddy.example"}
    assert [link["title"] for link in r.json["menu"]] == ["Collections", "Blog", "Policies", "About"]
