from typing import Optional

from datamagic.config import Settings, get_settings
from datamagic.services.credentials import CredentialProvider

from .client import OpenSearchClient


def make_opensearch_client(
    settings: Optional[Settings] = None,
    credentials: Optional[CredentialProvider] = None,
) -> OpenSearchClient:
    """Factory function to create an OpenSearch client, preferring a platform-bound service url."""
    if settings is None:
        settings = get_settings()
    if credentials is None:
        credentials = CredentialProvider(settings)
    host = credentials.search_engine_url() or settings.opensearch.host
    return OpenSearchClient(host=host)
