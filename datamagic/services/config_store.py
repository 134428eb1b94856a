import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import yaml

from datamagic.config import Settings
from datamagic.exceptions import ConfigurationError

from .data_source import DataSource, join_path
from .index_naming import current_environment, scope_name
from .opensearch.index_config import CONFIG_INDEX_MAPPING

logger = logging.getLogger(__name__)

DEFAULT_INDEX = "general"
DEFAULT_API = "data"
CONFIG_FILE = "data.yaml"


@dataclass(frozen=True)
class ConfigurationEntry:
    api: str
    index: str
    dictionary: Dict[str, str] = field(default_factory=dict)
    page_size: int = 20
    files: List[str] = field(default_factory=list)
    version: Optional[str] = None


class ConfigStore:
    """
    Holds the data.yaml configuration for each API endpoint.

    Loading is compute-once: concurrent first callers of ``load_if_needed``
    wait on the same load instead of reading the file twice.
    """

    def __init__(self, settings: Settings, data_source: DataSource, search_client=None):
        self.settings = settings
        self.data_source = data_source
        self.search_client = search_client
        self._entries: Dict[str, ConfigurationEntry] = {}
        self._default_api: Optional[str] = None
        self._loaded = False
        self._lock = threading.Lock()

    @property
    def data_path(self) -> str:
        return self.settings.data_path

    @property
    def default_entry(self) -> Optional[ConfigurationEntry]:
        if self._default_api is None:
            return None
        return self._entries[self._default_api]

    @property
    def page_size(self) -> int:
        entry = self.default_entry
        return entry.page_size if entry else self.settings.page_size

    @property
    def dictionary(self) -> Dict[str, str]:
        entry = self.default_entry
        return dict(entry.dictionary) if entry else {}

    # ============================================================
    # LOADING
    # ============================================================

    def load_if_needed(self) -> None:
        if self._loaded:
            return
        with self._lock:
            if not self._loaded:
                self._load(self.data_path)
                self._loaded = True

    def load(self, path: Optional[str] = None) -> str:
        """
        Load data.yaml from a directory (local or s3://) and register its endpoint.

        Returns:
            The logical index name declared by the configuration
        """
        with self._lock:
            index = self._load(path or self.data_path)
            self._loaded = True
        return index

    def _load(self, directory: str) -> str:
        config_path = join_path(directory, CONFIG_FILE)
        logger.info(f"Loading configuration from {config_path}")
        data = yaml.safe_load(self.data_source.read(config_path)) or {}
        if not isinstance(data, dict):
            raise ConfigurationError(f"{config_path} must contain a mapping")

        entry = self._parse_entry(data)
        self._entries[entry.api] = entry
        self._default_api = entry.api
        logger.info(f"Configured endpoint '{entry.api}' -> index '{entry.index}'")
        return entry.index

    def _parse_entry(self, data: Dict[str, Any]) -> ConfigurationEntry:
        dictionary = data.get("dictionary") or {}
        if not isinstance(dictionary, dict):
            raise ConfigurationError("dictionary must map source field names to index field names")

        files = []
        for item in data.get("files") or []:
            files.append(item["name"] if isinstance(item, dict) else str(item))

        options = data.get("options") or {}
        page_size = data.get("page_size", options.get("page_size", self.settings.page_size))
        version = data.get("version")

        return ConfigurationEntry(
            api=str(data.get("api") or DEFAULT_API),
            index=str(data.get("index") or DEFAULT_INDEX),
            dictionary={str(k): str(v) for k, v in dictionary.items()},
            page_size=int(page_size),
            files=files,
            version=None if version is None else str(version),
        )

    # ============================================================
    # LOOKUP
    # ============================================================

    def find_index_for(self, api: str) -> Optional[str]:
        entry = self._entries.get(str(api))
        return entry.index if entry else None

    def api_endpoint_names(self) -> List[str]:
        return sorted(self._entries)

    def entry_for_index(self, index: str) -> Optional[ConfigurationEntry]:
        for entry in self._entries.values():
            if entry.index == index:
                return entry
        return None

    # ============================================================
    # VERSION TRACKING
    # ============================================================

    def _config_index(self) -> str:
        return scope_name(current_environment(self.settings.environment_variable), self.settings.config_index)

    def is_new(self, index: str) -> bool:
        """True when this configuration version has never been indexed."""
        entry = self.entry_for_index(index)
        if entry is None or self.search_client is None:
            return True
        config_index = self._config_index()
        if not self.search_client.index_exists(config_index):
            return True
        stored = self.search_client.get_document(config_index, index)
        if stored is None:
            return True
        return stored.get("version") != entry.version

    def mark_indexed(self, index: str) -> None:
        entry = self.entry_for_index(index)
        if entry is None or self.search_client is None:
            return
        config_index = self._config_index()
        if not self.search_client.index_exists(config_index):
            self.search_client.create_index(config_index, CONFIG_INDEX_MAPPING)
        self.search_client.put_document(config_index, index, {"version": entry.version, "api": entry.api})
        logger.info(f"Recorded configuration version {entry.version} for index {index}")
