from teddystore.catalog.navigation import FALLBACK_HEADER_MENU, menu_item_url, normalize_menu


def test_fallback_menu_when_missing():
    links = normalize_menu(None)
    assert [l["url"] for l in links] == [i["url"] for i in FALLBACK_HEADER_MENU["items"]]


def test_internal_links_are_made_relative():
    menu = {
        "items": [
            {"id": "1", "title": "Shop", "url": "https://teddy.myshopify.com/collections/all"},
            {"id": "2", "title": "About", "url": "https://teddy.example/pages/about"},
            {"id": "3", "title": "Store", "url": "https://shop.teddy.example/"},
            {"id": "4", "title": "Instagram", "url": "https://instagram.com/teddy"},
            {"id": "5", "title": "Broken", "url": None},
        ]
    }
    links = normalize_menu(menu, public_store_domain="shop.teddy.example", primary_domain_url="https://teddy.example")
    assert [(l["id"], l["url"]) for l in links] == [
        ("1", "/collections/all"),
        ("2", "/pages/about"),
        ("3", "/"),
        ("4", "https://instagram.com/teddy"),
    ]


def test_external_link_untouched_without_domains():
    assert menu_item_url("https://example.org/x", "", "") == "https://example.org/x"
