from __future__ import annotations

import logging
import threading
from typing import Any, Dict, List, Optional

import requests

logger = logging.getLogger(__name__)

DEFAULT_API_VERSION = "2025-07"
STOREFRONT_TOKEN_HEADER = "X-Shopify-Storefront-Access-Token"


class StorefrontError(Exception):
    """The Storefront API call failed (transport, HTTP status, or GraphQL errors)."""

    def __init__(self, message: str, status_code: Optional[int] = None, errors: Optional[List[Any]] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.errors = errors or []


def _normalize_store_domain(val: str) -> str:
    v = (val or "").strip()
    if v.lower().startswith("https://"):
        v = v[8:]
    elif v.lower().startswith("http://"):
        v = v[7:]
    return v.strip().strip("/")


class StorefrontClient:
    """Thin Storefront API GraphQL client.

    Usable standalone or as a Flask extension (``init_app`` reads the
    ``PUBLIC_STORE_DOMAIN`` / ``PUBLIC_STOREFRONT_API_TOKEN`` family of
    config keys). No retries here; callers decide what a failure means.
    """

    def __init__(
        self,
        store_domain: str = "",
        access_token: str = "",
        api_version: str = DEFAULT_API_VERSION,
        timeout: float = 10.0,
        country: Optional[str] = None,
        language: Optional[str] = None,
        session: Optional[requests.Session] = None,
    ):
        self.store_domain = _normalize_store_domain(store_domain)
        self.access_token = access_token
        self.api_version = api_version
        self.timeout = timeout
        self.country = country
        self.language = language
        self._session = session
        self._local = threading.local()

    def init_app(self, app) -> None:
        self.store_domain = _normalize_store_domain(app.config.get("PUBLIC_STORE_DOMAIN", ""))
        self.access_token = app.config.get("PUBLIC_STOREFRONT_API_TOKEN", "")
        self.api_version = app.config.get("STOREFRONT_API_VERSION", DEFAULT_API_VERSION)
        self.timeout = float(app.config.get("STOREFRONT_TIMEOUT", 10.0))
        self.country = app.config.get("STOREFRONT_COUNTRY") or None
        self.language = app.config.get("STOREFRONT_LANGUAGE") or None
        app.extensions["storefront"] = self

    @property
    def session(self) -> requests.Session:
        """HTTP session for the calling thread.

        Request threads and deferred pool threads each get their own
        ``requests.Session``. An injected session is used as given.
        """
        if self._session is not None:
            return self._session
        session = getattr(self._local, "session", None)
        if session is None:
            session = self._local.session = requests.Session()
        return session

    @property
    def endpoint(self) -> str:
        if not self.store_domain:
            raise StorefrontError("PUBLIC_STORE_DOMAIN is not set")
        return f"https://{self.store_domain}/api/{self.api_version}/graphql.json"

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json", "Accept": "application/json"}
        if self.access_token:
            headers[STOREFRONT_TOKEN_HEADER] = self.access_token
        return headers

    def _with_context(self, variables: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        merged: Dict[str, Any] = {}
        if self.country:
            merged["country"] = self.country
        if self.language:
            merged["language"] = self.language
        merged.update(variables or {})
        return merged

    def query(self, document: str, variables: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """POST ``document`` and return the ``data`` object of the response.

        Raises:
            StorefrontError: on network failure, a non-2xx status, a body that
                is not JSON, or a response carrying GraphQL ``errors``.
        """
        payload = {"query": document, "variables": self._with_context(variables)}
        try:
            resp = self.session.post(self.endpoint, json=payload, headers=self._headers(), timeout=self.timeout)
        except requests.RequestException as exc:
            raise StorefrontError(f"Storefront request failed: {exc}") from exc

        if not resp.ok:
            raise StorefrontError(
                f"Storefront API returned HTTP {resp.status_code}",
                status_code=resp.status_code,
            )

        try:
            body = resp.json()
        except ValueError as exc:
            raise StorefrontError("Storefront API returned a non-JSON body", status_code=resp.status_code) from exc

        errors = body.get("errors")
        if errors:
            messages = "; ".join(str(e.get("message", e)) if isinstance(e, dict) else str(e) for e in errors)
            raise StorefrontError(f"Storefront API error: {messages}", status_code=resp.status_code, errors=errors)

        data = body.get("data")
        if data is None:
            raise StorefrontError("Storefront API response has no data", status_code=resp.status_code)
        logger.debug("storefront query ok (%d bytes)", len(resp.content))
        return data
