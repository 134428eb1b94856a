import csv
import io
import logging
from typing import Any, Dict, Iterable, Mapping, Optional, TextIO, Union

from .config_store import ConfigStore
from .data_source import DataSource, join_path
from .field_mapper import map_field_names
from .index_manager import IndexManager
from .opensearch.client import OpenSearchClient

logger = logging.getLogger(__name__)


class Importer:
    """Reads csv files, renames their columns through the dictionary and bulk indexes them."""

    def __init__(
        self,
        search_client: OpenSearchClient,
        index_manager: IndexManager,
        config_store: ConfigStore,
        data_source: DataSource,
        chunk_size: int = 500,
    ):
        self.search_client = search_client
        self.index_manager = index_manager
        self.config_store = config_store
        self.data_source = data_source
        self.chunk_size = chunk_size

    def import_csv(
        self,
        index_name: str,
        data: Union[str, TextIO],
        dictionary: Optional[Mapping[str, str]] = None,
        file_name: Optional[str] = None,
    ) -> int:
        """
        Index the rows of a csv document into the scoped index for ``index_name``.

        Args:
            index_name: Logical index name
            data: csv text or an open text stream, first row is the header
            dictionary: source column -> indexed field, defaults to the loaded config's
            file_name: Name recorded in the ingested files list

        Returns:
            Number of documents indexed
        """
        self.config_store.load_if_needed()
        if dictionary is None:
            dictionary = self.config_store.dictionary
        scoped = self.index_manager.create_index_if_needed(index_name)
        stream = io.StringIO(data) if isinstance(data, str) else data

        documents = list(self._mapped_rows(csv.DictReader(stream), dictionary))
        indexed = 0
        if documents:
            indexed = self.search_client.bulk_index(scoped, documents, chunk_size=self.chunk_size)
            self.search_client.refresh(scoped)
        if file_name:
            self.index_manager.record_file(scoped, file_name)
        logger.info(f"Imported {indexed} rows into {scoped}")
        return indexed

    @staticmethod
    def _mapped_rows(rows: Iterable[Dict[str, Any]], dictionary: Mapping[str, str]):
        for row in rows:
            mapped = map_field_names(row, dictionary)
            if mapped:
                yield mapped

    def import_all(self, path: Optional[str] = None) -> Dict[str, Any]:
        """
        Rebuild the configured index from every data file.

        Returns:
            Summary with the index, imported files and row count
        """
        directory = path or self.config_store.data_path
        index = self.config_store.load(directory)
        entry = self.config_store.entry_for_index(index)

        self.index_manager.recreate_index(index)

        files = list(entry.files) or self.data_source.list_csv(directory)
        rows = 0
        for name in files:
            logger.info(f"Importing {name} into {index}")
            text = self.data_source.read(join_path(directory, name))
            rows += self.import_csv(index, text, entry.dictionary, file_name=name)

        self.config_store.mark_indexed(index)
        return {"index": index, "files": files, "rows": rows}
