import threading
from unittest.mock import MagicMock

import pytest

from datamagic.config import Settings
from datamagic.exceptions import ConfigurationError, DataSourceError
from datamagic.services.config_store import ConfigStore
from datamagic.services.data_source import DataSource
from datamagic.services.opensearch.index_config import CONFIG_INDEX_MAPPING


def test_load_registers_endpoint(config_store, data_dir):
    assert config_store.load(str(data_dir)) == "colleges"

    assert config_store.find_index_for("colleges") == "colleges"
    assert config_store.api_endpoint_names() == ["colleges"]
    assert config_store.page_size == 20
    assert config_store.dictionary["school.name"] == "name"

    entry = config_store.entry_for_index("colleges")
    assert entry.files == ["schools.csv"]
    assert entry.version == "1"


def test_defaults_for_minimal_config(tmp_path, search_client):
    (tmp_path / "data.yaml").write_text("dictionary: {a: b}\n")
    store = ConfigStore(Settings(data_path=str(tmp_path), page_size=15), DataSource(), search_client)

    assert store.load(str(tmp_path)) == "general"
    assert store.find_index_for("data") == "general"
    assert store.page_size == 15


def test_unknown_api_has_no_index(config_store):
    config_store.load_if_needed()
    assert config_store.find_index_for("unknown") is None


def test_non_mapping_yaml_is_rejected(tmp_path, search_client):
    (tmp_path / "data.yaml").write_text("- just\n- a list\n")
    store = ConfigStore(Settings(data_path=str(tmp_path)), DataSource(), search_client)
    with pytest.raises(ConfigurationError):
        store.load_if_needed()


def test_missing_config_file(tmp_path, search_client):
    store = ConfigStore(Settings(data_path=str(tmp_path / "missing")), DataSource(), search_client)
    with pytest.raises(DataSourceError):
        store.load_if_needed()


def test_load_if_needed_reads_once_under_concurrency(settings):
    source = MagicMock()
    source.read.return_value = "api: colleges\nindex: colleges\n"
    store = ConfigStore(settings, source)

    threads = [threading.Thread(target=store.load_if_needed) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    store.load_if_needed()

    source.read.assert_called_once()


def test_is_new_without_search_client(settings, data_dir):
    store = ConfigStore(settings, DataSource())
    store.load_if_needed()
    assert store.is_new("colleges") is True


def test_is_new_compares_recorded_version(config_store, low_level_client):
    config_store.load_if_needed()
    low_level_client.indices.exists.return_value = True
    low_level_client.get.return_value = {"_source": {"version": "1"}}

    assert config_store.is_new("colleges") is False

    low_level_client.get.return_value = {"_source": {"version": "2"}}
    assert config_store.is_new("colleges") is True


def test_mark_indexed_creates_config_index(config_store, low_level_client):
    config_store.load_if_needed()
    low_level_client.indices.exists.return_value = False

    config_store.mark_indexed("colleges")

    low_level_client.indices.create.assert_called_once_with(index="test-config", body=CONFIG_INDEX_MAPPING)
    low_level_client.index.assert_called_once_with(
        index="test-config", id="colleges", body={"version": "1", "api": "colleges"}, refresh=True
    )
