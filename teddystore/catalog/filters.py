"""Collection filter and sort parameters.

Translates the query string of a collection URL into the ``filters``,
``sortKey`` and ``reverse`` variables of the Storefront API products
connection, and back again for the sort selector.

Recognised keys::

    filter.v.option.<name>=<value>     variant option (Color, Size, ...)
    filter.v.price.gte=<number>        lower price bound
    filter.v.price.lte=<number>        upper price bound
    filter.p.m.<namespace>.<key>=<v>   product metafield
    sortKey=<PRODUCT_COLLECTION_SORT_KEY>
    reverse=true
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple, Union
from urllib.parse import urlencode

from werkzeug.datastructures import MultiDict

from teddystore.app.common.errors import InvalidFilterError

OPTION_PREFIX = "filter.v.option."
PRICE_MIN_KEY = "filter.v.price.gte"
PRICE_MAX_KEY = "filter.v.price.lte"
METAFIELD_PREFIX = "filter.p.m."
METAFIELD_RE = re.compile(r"^filter\.p\.m\.([^.]+)\.([^.]+)$")

SORT_KEY_PARAM = "sortKey"
REVERSE_PARAM = "reverse"
DEFAULT_SORT_KEY = "RELEVANCE"

SearchParams = Union[MultiDict, Dict[str, str], Iterable[Tuple[str, str]]]


@dataclass(frozen=True)
class VariantOption:
    name: str
    value: str

    def to_variable(self) -> Dict[str, Any]:
        return {"variantOption": {"name": self.name, "value": self.value}}


@dataclass(frozen=True)
class PriceRange:
    min: Optional[float] = None
    max: Optional[float] = None

    def to_variable(self) -> Dict[str, Any]:
        bounds: Dict[str, float] = {}
        if self.min is not None:
            bounds["min"] = self.min
        if self.max is not None:
            bounds["max"] = self.max
        return {"price": bounds}


@dataclass(frozen=True)
class ProductMetafield:
    namespace: str
    key: str
    value: str

    def to_variable(self) -> Dict[str, Any]:
        return {
            "productMetafield": {
                "namespace": self.namespace,
                "key": self.key,
                "value": self.value,
            }
        }


FilterCriterion = Union[VariantOption, PriceRange, ProductMetafield]


@dataclass(frozen=True)
class SortSpec:
    sort_key: str = DEFAULT_SORT_KEY
    reverse: bool = False


DEFAULT_SORT = SortSpec()


@dataclass(frozen=True)
class TranslatedQuery:
    filters: Tuple[FilterCriterion, ...]
    sort: SortSpec

    @property
    def sort_key(self) -> str:
        return self.sort.sort_key

    @property
    def reverse(self) -> bool:
        return self.sort.reverse

    def filter_variables(self) -> List[Dict[str, Any]]:
        return [f.to_variable() for f in self.filters]


def iter_params(params: SearchParams) -> Iterator[Tuple[str, str]]:
    """Yield ``(key, value)`` pairs, repeated keys included.

    Pairs from a sequence come out in source order. A ``MultiDict`` has
    already grouped its values by key, so interleaved keys lose their
    relative order; loaders pass the parsed pair list instead.
    """
    if isinstance(params, MultiDict):
        yield from params.items(multi=True)
    elif isinstance(params, dict):
        yield from params.items()
    else:
        yield from params


def first_value(params: SearchParams, key: str) -> Optional[str]:
    for k, v in iter_params(params):
        if k == key:
            return v
    return None


def _parse_price(key: str, value: str) -> float:
    try:
        number = float(value)
    except ValueError:
        raise InvalidFilterError(key, value) from None
    if not math.isfinite(number):
        raise InvalidFilterError(key, value)
    return number


def parse_filters(params: SearchParams) -> List[FilterCriterion]:
    """Build filter criteria in the order their parameters appear.

    Criteria are never merged: ``gte`` and ``lte`` produce two separate
    ``PriceRange`` entries. Metafield keys with more than two segments after
    the prefix are ignored.
    """
    filters: List[FilterCriterion] = []

    for key, value in iter_params(params):
        if not value:
            continue

        if key.startswith(OPTION_PREFIX):
            filters.append(VariantOption(name=key[len(OPTION_PREFIX):], value=value))

        if key == PRICE_MIN_KEY:
            filters.append(PriceRange(min=_parse_price(key, value)))

        if key == PRICE_MAX_KEY:
            filters.append(PriceRange(max=_parse_price(key, value)))

        if key.startswith(METAFIELD_PREFIX):
            match = METAFIELD_RE.match(key)
            if match:
                namespace, metafield_key = match.groups()
                filters.append(ProductMetafield(namespace=namespace, key=metafield_key, value=value))

    return filters


def parse_sort(params: SearchParams) -> SortSpec:
    sort_key = first_value(params, SORT_KEY_PARAM) or DEFAULT_SORT_KEY
    reverse = first_value(params, REVERSE_PARAM) == "true"
    return SortSpec(sort_key=sort_key, reverse=reverse)


def translate(params: SearchParams) -> TranslatedQuery:
    """Translate collection URL parameters into product query inputs.

    Raises:
        InvalidFilterError: a price bound is not a finite number.
    """
    return TranslatedQuery(filters=tuple(parse_filters(params)), sort=parse_sort(params))


# --- Sort selector ---------------------------------------------------------


@dataclass(frozen=True)
class SortOption:
    label: str
    sort_key: str
    reverse: bool


SORT_OPTIONS: Tuple[SortOption, ...] = (
    SortOption("Featured", "MANUAL", False),
    SortOption("Price: Low to High", "PRICE", False),
    SortOption("Price: High to Low", "PRICE", True),
    SortOption("Newest to Oldest", "CREATED", True),
    SortOption("Oldest to Newest", "CREATED", False),
    SortOption("Alphabetical A–Z", "TITLE", False),
    SortOption("Alphabetical Z–A", "TITLE", True),
)


def find_sort_option(sort: SortSpec) -> Optional[SortOption]:
    """Return the selector entry for ``sort``, or None for the default (relevance) order."""
    for option in SORT_OPTIONS:
        if option.sort_key == sort.sort_key and option.reverse == sort.reverse:
            return option
    return None


def sort_url(params: SearchParams, option: SortOption) -> str:
    """Query string for ``option`` keeping every other parameter in place."""
    kept = [(k, v) for k, v in iter_params(params) if k not in (SORT_KEY_PARAM, REVERSE_PARAM)]
    kept.append((SORT_KEY_PARAM, option.sort_key))
    kept.append((REVERSE_PARAM, "true" if option.reverse else "false"))
    return "?" + urlencode(kept)


def sort_choices(params: SearchParams, sort: SortSpec) -> List[Dict[str, Any]]:
    selected = find_sort_option(sort)
    return [
        {
            "label": option.label,
            "sortKey": option.sort_key,
            "reverse": option.reverse,
            "url": sort_url(params, option),
            "selected": option is selected,
        }
        for option in SORT_OPTIONS
    ]
