import logging
from typing import Any, Dict, Iterable, Optional

from opensearchpy import OpenSearch, helpers
from opensearchpy.exceptions import NotFoundError

logger = logging.getLogger(__name__)


class OpenSearchClient:
    """
    Thin wrapper over the low-level OpenSearch client.

    One instance is created at bootstrap and shared by every component.
    Errors raised by the engine propagate to the caller unchanged.
    """

    def __init__(self, host: str = "http://localhost:9200", client: Optional[OpenSearch] = None):
        """Initialize OpenSearch client."""
        self.host = host
        self.client = client or OpenSearch(
            hosts=[host],
            http_compress=True,
            use_ssl=host.startswith("https"),
            verify_certs=False,
            ssl_assert_hostname=False,
            ssl_show_warn=False,
        )
        logger.info(f"OpenSearch client initialized with host: {host}")

    # ============================================================
    # INDEX MANAGEMENT
    # ============================================================

    def index_exists(self, index: str) -> bool:
        return bool(self.client.indices.exists(index=index))

    def create_index(self, index: str, body: Dict[str, Any]) -> Dict[str, Any]:
        response = self.client.indices.create(index=index, body=body)
        logger.info(f"Created index: {index}")
        return response

    def delete_index(self, index: str) -> bool:
        """
        Delete an index, ignoring a missing one.

        Returns:
            True if an index was deleted, False if it did not exist
        """
        try:
            self.client.indices.delete(index=index)
        except NotFoundError:
            logger.debug(f"Index {index} not found, nothing to delete")
            return False
        logger.info(f"Deleted index: {index}")
        return True

    def clear_cache(self) -> None:
        self.client.indices.clear_cache()

    def refresh(self, index: str) -> None:
        self.client.indices.refresh(index=index)

    # ============================================================
    # DOCUMENTS
    # ============================================================

    def bulk_index(self, index: str, documents: Iterable[Dict[str, Any]], chunk_size: int = 500) -> int:
        """Bulk index documents, returns the number indexed."""
        actions = ({"_index": index, "_source": doc} for doc in documents)
        success, _ = helpers.bulk(self.client, actions, chunk_size=chunk_size)
        logger.info(f"Bulk indexed {success} documents into {index}")
        return success

    def get_document(self, index: str, doc_id: str) -> Optional[Dict[str, Any]]:
        try:
            response = self.client.get(index=index, id=doc_id)
        except NotFoundError:
            return None
        return response.get("_source")

    def put_document(self, index: str, doc_id: str, document: Dict[str, Any]) -> None:
        self.client.index(index=index, id=doc_id, body=document, refresh=True)

    # ============================================================
    # SEARCH
    # ============================================================

    def search(self, request: Dict[str, Any]) -> Dict[str, Any]:
        """Run a structured request of the form ``{index, body}``."""
        return self.client.search(index=request["index"], body=request["body"])

    # ============================================================
    # HEALTH
    # ============================================================

    def health_check(self) -> bool:
        """Check if OpenSearch is healthy and accessible."""
        try:
            health = self.client.cluster.health()
            return health["status"] in ["green", "yellow"]
        except Exception as e:
            logger.error(f"Health check failed: {e}")
            return False

