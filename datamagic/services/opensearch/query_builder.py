import logging
from typing import Any, Dict, List, Mapping, Optional, Union

from datamagic.exceptions import InvalidPagination
from datamagic.schemas.search import SearchOptions
from datamagic.services.field_mapper import canonical_key

logger = logging.getLogger(__name__)

# San Francisco International Airport
DEFAULT_LOCATION = {"lat": 37.615223, "lon": -122.389977}
GEO_FIELD = "location"

RESERVED_TERMS = ("distance", "zip", "page", "per_page")


def normalize_terms(terms: Optional[Mapping[Any, Any]]) -> Dict[str, Any]:
    """
    Canonicalize filter-term keys to plain strings.

    Reserved keys (distance, zip, page, per_page) are matched case-insensitively.
    """
    normalized = {}
    for key, value in (terms or {}).items():
        name = canonical_key(key)
        if name.lower() in RESERVED_TERMS:
            name = name.lower()
        normalized[name] = value
    return normalized


def parse_pagination(name: str, value: Any) -> int:
    """Accept non-negative ints and strings of digits, reject anything else."""
    if isinstance(value, bool):
        raise InvalidPagination(f"{name} must be a non-negative integer, got {value!r}")
    if isinstance(value, int):
        number = value
    elif isinstance(value, str) and value.strip().isdigit():
        number = int(value.strip())
    else:
        raise InvalidPagination(f"{name} must be a non-negative integer, got {value!r}")
    if number < 0:
        raise InvalidPagination(f"{name} must be a non-negative integer, got {value!r}")
    return number


class SearchQueryBuilder:
    """
    Query builder for filter-term searches.

    Builds OpenSearch requests with:
    - Geo-distance filtering around a fixed reference location
    - Exact term filters for every remaining term
    - from/size pagination
    """

    def __init__(
        self,
        terms: Optional[Mapping[Any, Any]],
        index: str,
        page_size: int = 20,
        location: Optional[Dict[str, float]] = None,
    ):
        self.terms = normalize_terms(terms)
        self.index = index
        self.location = location or DEFAULT_LOCATION

        self.geo_filter = self._extract_geo_filter()
        self.page = parse_pagination("page", self._pop_or_default("page", 0))
        self.per_page = parse_pagination("per_page", self._pop_or_default("per_page", page_size))

    def build(self) -> Dict[str, Any]:
        """Build the complete request: target index plus query body."""
        return {
            "index": self.index,
            "body": {
                "from": self.page,
                "size": self.per_page,
                "query": self._build_query(),
            },
        }

    def _pop_or_default(self, name: str, default: int) -> Any:
        value = self.terms.pop(name, None)
        if value is None or value == "":
            return default
        return value

    def _extract_geo_filter(self) -> Optional[Dict[str, Any]]:
        distance = self.terms.get("distance")
        if not distance:
            return None
        # zip is implied by the geo clause
        self.terms.pop("distance", None)
        self.terms.pop("zip", None)
        return {
            "geo_distance": {
                "distance": distance,
                GEO_FIELD: {"lat": self.location["lat"], "lon": self.location["lon"]},
            }
        }

    def _build_query(self) -> Dict[str, Any]:
        filters = []
        if self.geo_filter:
            filters.append(self.geo_filter)
        filters.extend(self._build_term_filters())

        if not filters:
            return {"match_all": {}}
        return {"bool": {"filter": filters}}

    def _build_term_filters(self) -> List[Dict[str, Any]]:
        filters = []
        for field, value in self.terms.items():
            if value is None or value == "":
                continue
            if isinstance(value, (list, tuple, set)):
                filters.append({"terms": {field: list(value)}})
            else:
                filters.append({"term": {field: value}})
        return filters


class QueryTranslator:
    """Resolves the target index and turns filter terms into a search request."""

    def __init__(self, resolver, config_store):
        self.resolver = resolver
        self.config_store = config_store

    def translate(
        self,
        terms: Optional[Mapping[Any, Any]],
        options: Union[SearchOptions, Mapping, None] = None,
    ) -> Dict[str, Any]:
        index_name = self.resolver.resolve_index_from_options(options)
        request = SearchQueryBuilder(
            terms=terms,
            index=index_name,
            page_size=self.config_store.page_size,
        ).build()
        logger.info(f"full_query: {request}")
        return request
