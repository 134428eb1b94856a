from .client import OpenSearchClient
from .factory import make_opensearch_client
from .query_builder import QueryTranslator, SearchQueryBuilder

__all__ = ["OpenSearchClient", "make_opensearch_client", "QueryTranslator", "SearchQueryBuilder"]
