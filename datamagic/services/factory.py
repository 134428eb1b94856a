from typing import Mapping, Optional

from datamagic.config import Settings, get_settings

from .config_store import ConfigStore
from .credentials import CredentialProvider
from .data_magic import DataMagic
from .data_source import make_data_source
from .opensearch.factory import make_opensearch_client


def make_data_magic(settings: Optional[Settings] = None, environ: Optional[Mapping[str, str]] = None) -> DataMagic:
    """Build the DataMagic service and its collaborators once, at bootstrap."""
    if settings is None:
        settings = get_settings()
    credentials = CredentialProvider(settings, environ)
    search_client = make_opensearch_client(settings, credentials)
    data_source = make_data_source(settings, credentials)
    config_store = ConfigStore(settings, data_source, search_client)
    return DataMagic(settings, search_client, config_store)
