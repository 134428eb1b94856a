from unittest.mock import MagicMock

import pytest

from datamagic.config import Settings
from datamagic.services.config_store import ConfigStore
from datamagic.services.data_magic import DataMagic
from datamagic.services.data_source import DataSource
from datamagic.services.opensearch.client import OpenSearchClient

DATA_YAML = """
version: 1
index: colleges
api: colleges
page_size: 20
dictionary:
  school.name: name
  school.degrees_awarded.predominant: level
  location.lat: location.lat
  location.lon: location.lon
files:
  - name: schools.csv
"""

SCHOOLS_CSV = """school.name,school.degrees_awarded.predominant,location.lat,location.lon,ignored
Yale University,3,41.3111,-72.9267,a
Stanford University,3,37.4275,-122.1697,b
"""


@pytest.fixture(autouse=True)
def environment(monkeypatch):
    monkeypatch.setenv("RACK_ENV", "test")
    monkeypatch.delenv("VCAP_APPLICATION", raising=False)


@pytest.fixture
def data_dir(tmp_path):
    (tmp_path / "data.yaml").write_text(DATA_YAML)
    (tmp_path / "schools.csv").write_text(SCHOOLS_CSV)
    return tmp_path


@pytest.fixture
def settings(data_dir):
    return Settings(data_path=str(data_dir), page_size=20)


@pytest.fixture
def low_level_client():
    client = MagicMock()
    client.search.return_value = {
        "hits": {
            "total": {"value": 1, "relation": "eq"},
            "hits": [{"_id": "1", "_score": 1.0, "_source": {"name": "Yale University", "level": "3"}}],
        }
    }
    client.indices.exists.return_value = False
    return client


@pytest.fixture
def search_client(low_level_client):
    return OpenSearchClient(host="http://opensearch:9200", client=low_level_client)


@pytest.fixture
def config_store(settings, search_client):
    return ConfigStore(settings, DataSource(), search_client)


@pytest.fixture
def data_magic(settings, search_client, config_store):
    service = DataMagic(settings, search_client, config_store)
    yield service
    service.close()
