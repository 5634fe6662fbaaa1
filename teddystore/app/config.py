import os

from dotenv import load_dotenv

load_dotenv()


class Config:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret")

    STORE_NAME = os.getenv("STORE_NAME", "Hydrogen")

    # Storefront API
    PUBLIC_STORE_DOMAIN = os.getenv("PUBLIC_STORE_DOMAIN", "")
    PUBLIC_STOREFRONT_API_TOKEN = os.getenv("PUBLIC_STOREFRONT_API_TOKEN", "")
    STOREFRONT_API_VERSION = os.getenv("STOREFRONT_API_VERSION", "2025-07")
    STOREFRONT_TIMEOUT = float(os.getenv("STOREFRONT_TIMEOUT", "10"))
    STOREFRONT_COUNTRY = os.getenv("STOREFRONT_COUNTRY", "")
    STOREFRONT_LANGUAGE = os.getenv("STOREFRONT_LANGUAGE", "")

    # Pages
    COLLECTION_PAGE_SIZE = int(os.getenv("COLLECTION_PAGE_SIZE", "12"))
    HOME_TAB_COLLECTIONS = os.getenv("HOME_TAB_COLLECTIONS", "best-sellers,new-arrivals,dressed-up-bears,tiny-teddies")
    HEADER_MENU_HANDLE = os.getenv("HEADER_MENU_HANDLE", "main-menu")

    # Deferred loads run on a shared thread pool
    DEFERRED_MAX_WORKERS = int(os.getenv("DEFERRED_MAX_WORKERS", "8"))

    # Comma-separated list
    CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "").split(",") if o.strip()]

    APP_HOST = os.getenv("APP_HOST", "0.0.0.0")
    APP_PORT = int(os.getenv("APP_PORT", "8080"))


class TestConfig(Config):
    TESTING = True
    PUBLIC_STORE_DOMAIN = "teddy-test.myshopify.com"
    PUBLIC_STOREFRONT_API_TOKEN = "test-token"
    DEFERRED_MAX_WORKERS = 4
