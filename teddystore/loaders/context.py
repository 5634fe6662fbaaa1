from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Protocol, Tuple
from urllib.parse import parse_qsl, urlsplit

from teddystore.loaders.deferred import Deferred, DeferredRunner, resolve_all


class QueryClient(Protocol):
    def query(self, document: str, variables: Optional[Dict[str, Any]] = None) -> Dict[str, Any]: ...


@dataclass
class LoaderContext:
    """Everything a page loader may look at for one request."""

    storefront: QueryClient
    params: Mapping[str, Any]
    url: str
    runner: DeferredRunner
    config: Mapping[str, Any] = field(default_factory=dict)

    @property
    def search_params(self) -> List[Tuple[str, str]]:
        # Pairs in URL order; a MultiDict would group repeated keys together.
        return parse_qsl(urlsplit(self.url).query, keep_blank_values=True)


@dataclass
class PageData:
    """Loader output: critical data is ready, deferred handles resolve later."""

    critical: Dict[str, Any]
    deferred: Dict[str, Deferred] = field(default_factory=dict)

    def resolve_deferred(self, timeout: Optional[float] = None) -> Dict[str, Any]:
        return resolve_all(self.deferred, timeout=timeout)

    def cancel_deferred(self) -> None:
        for handle in self.deferred.values():
            handle.cancel()
