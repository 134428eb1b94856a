import logging
from concurrent.futures import Future
from typing import Any, Dict, Mapping, Optional, Union

from datamagic.config import Settings
from datamagic.schemas.search import SearchOptions, SearchResult

from .config_store import ConfigStore
from .importer import Importer
from .index_manager import IndexManager
from .index_naming import IndexNameResolver
from .opensearch.client import OpenSearchClient
from .opensearch.query_builder import QueryTranslator

logger = logging.getLogger(__name__)


class DataMagic:
    """
    Search facade over environment-scoped indices.

    Holds the shared search client, configuration store and the resolver,
    translator, index manager and importer built on them.
    """

    def __init__(
        self,
        settings: Settings,
        search_client: OpenSearchClient,
        config_store: ConfigStore,
    ):
        self.settings = settings
        self.search_client = search_client
        self.config_store = config_store
        self.resolver = IndexNameResolver(config_store, settings.environment_variable)
        self.translator = QueryTranslator(self.resolver, config_store)
        self.index_manager = IndexManager(search_client, self.resolver, config_store)
        self.importer = Importer(
            search_client,
            self.index_manager,
            config_store,
            config_store.data_source,
            chunk_size=settings.opensearch.bulk_chunk_size,
        )

    def scoped_index_name(self, index_name: str) -> str:
        return self.resolver.scoped_index_name(index_name)

    def search(
        self,
        terms: Optional[Mapping[Any, Any]],
        options: Union[SearchOptions, Mapping, None] = None,
    ) -> SearchResult:
        """
        Search an index with exact-match filter terms.

        Args:
            terms: field -> value filters, plus optional distance, zip, page and per_page
            options: ``api`` endpoint or logical ``index`` to search

        Returns:
            Total hit count, pagination and the matching source documents

        Raises:
            ConfigurationNotFound: If ``options.api`` is not configured
            SearchEngineError: Propagated from the search engine unchanged
        """
        self.config_store.load_if_needed()
        request = self.translator.translate(terms, options)

        response = self.search_client.search(request)
        logger.debug(f"result: {response}")

        hits = response["hits"]
        total = hits["total"]
        if isinstance(total, dict):
            total = total["value"]
        return SearchResult(
            total=total,
            page=request["body"]["from"],
            per_page=request["body"]["size"],
            results=[hit["_source"] for hit in hits["hits"]],
        )

    def create_index_if_needed(self, index_name: str) -> str:
        return self.index_manager.create_index_if_needed(index_name)

    def delete_index(self, index_name: str) -> str:
        return self.index_manager.delete_index(index_name)

    def import_csv(self, index_name: str, data, dictionary: Optional[Mapping[str, str]] = None) -> int:
        return self.importer.import_csv(index_name, data, dictionary)

    def import_all(self, path: Optional[str] = None) -> Dict[str, Any]:
        return self.importer.import_all(path)

    def reindex_if_needed(self) -> Optional[Future]:
        return self.index_manager.reindex_if_needed(self.importer.import_all)

    def close(self) -> None:
        self.index_manager.shutdown(wait=False)
