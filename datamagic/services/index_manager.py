import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Callable, Dict, List, Optional

from .opensearch.client import OpenSearchClient
from .opensearch.index_config import DATA_INDEX_MAPPING

logger = logging.getLogger(__name__)


class IndexManager:
    """
    Creates, re-creates and deletes data indices, and starts a background
    re-import when the loaded configuration has never been indexed.
    """

    def __init__(self, search_client: OpenSearchClient, resolver, config_store):
        self.search_client = search_client
        self.resolver = resolver
        self.config_store = config_store
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="reindex")
        self._files: Dict[str, List[str]] = {}
        self._files_lock = threading.Lock()

    # ============================================================
    # INDEX MANAGEMENT
    # ============================================================

    def create_index(self, scoped_index_name: str) -> None:
        """Delete any index with this name, then create it with the geo_point mapping."""
        self.search_client.delete_index(scoped_index_name)
        self.search_client.create_index(scoped_index_name, DATA_INDEX_MAPPING)

    def create_index_if_needed(self, index_name: str) -> str:
        """
        Create the scoped index for a logical name unless it already exists.

        Returns:
            The scoped index name
        """
        scoped = self.resolver.scoped_index_name(index_name)
        if not self.search_client.index_exists(scoped):
            logger.info(f"creating index: {scoped}")
            self.create_index(scoped)
        return scoped

    def recreate_index(self, index_name: str) -> str:
        scoped = self.resolver.scoped_index_name(index_name)
        self.create_index(scoped)
        with self._files_lock:
            self._files.pop(scoped, None)
        return scoped

    def delete_index(self, index_name: str) -> str:
        scoped = self.resolver.scoped_index_name(index_name)
        self.search_client.delete_index(scoped)
        self.search_client.clear_cache()
        with self._files_lock:
            forgotten = self._files.pop(scoped, [])
        if forgotten:
            logger.info(f"Forgot {len(forgotten)} ingested files for {scoped}")
        return scoped

    # ============================================================
    # INGESTION BOOKKEEPING
    # ============================================================

    def record_file(self, scoped_index_name: str, name: str) -> None:
        with self._files_lock:
            self._files.setdefault(scoped_index_name, []).append(name)

    def ingested_files(self, index_name: str) -> List[str]:
        scoped = self.resolver.scoped_index_name(index_name)
        with self._files_lock:
            return list(self._files.get(scoped, []))

    # ============================================================
    # RE-INDEXING
    # ============================================================

    def reindex_if_needed(self, import_all: Callable[[], Dict[str, Any]]) -> Optional[Future]:
        """
        Load the configuration at the data path and, if it was never indexed,
        re-import everything on a background thread.

        Returns:
            A future for the background import, or None when nothing is needed.
            The import's failure is logged and kept on the future, never raised here.
        """
        index = self.config_store.load(self.config_store.data_path)
        if not self.config_store.is_new(index):
            logger.info(f"Configuration for index {index} already indexed")
            return None

        logger.info("new config detected... re-indexing in the background")
        future = self._executor.submit(import_all)
        future.add_done_callback(self._log_reindex_result)
        return future

    @staticmethod
    def _log_reindex_result(future: Future) -> None:
        error = future.exception()
        if error is not None:
            logger.error("Background re-index failed", exc_info=error)
        else:
            logger.info(f"Background re-index complete: {future.result()}")

    def shutdown(self, wait: bool = False) -> None:
        self._executor.shutdown(wait=wait)
