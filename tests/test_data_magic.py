import pytest
from opensearchpy.exceptions import TransportError

from datamagic.exceptions import ConfigurationNotFound, SearchEngineError
from datamagic.schemas.search import SearchResult
from datamagic.services.opensearch.query_builder import DEFAULT_LOCATION


def test_search_by_api(data_magic, low_level_client):
    result = data_magic.search({"name": "Yale"}, {"api": "colleges"})

    low_level_client.search.assert_called_once_with(
        index="test-colleges",
        body={
            "from": 0,
            "size": 20,
            "query": {"bool": {"filter": [{"term": {"name": "Yale"}}]}},
        },
    )
    assert isinstance(result, SearchResult)
    assert result.total == 1
    assert result.page == 0
    assert result.per_page == 20
    assert result.results == [{"name": "Yale University", "level": "3"}]


def test_search_by_index_with_distance(data_magic, low_level_client):
    data_magic.search({"distance": "50mi", "zip": "94110"}, {"index": "places"})

    kwargs = low_level_client.search.call_args.kwargs
    assert kwargs["index"] == "test-places"
    assert kwargs["body"]["query"] == {
        "bool": {
            "filter": [
                {
                    "geo_distance": {
                        "distance": "50mi",
                        "location": {"lat": DEFAULT_LOCATION["lat"], "lon": DEFAULT_LOCATION["lon"]},
                    }
                }
            ]
        }
    }


def test_search_accepts_integer_total(data_magic, low_level_client):
    low_level_client.search.return_value = {
        "hits": {"total": 2, "hits": [{"_source": {"name": "a"}}, {"_source": {"name": "b"}}]}
    }

    result = data_magic.search({}, {"index": "colleges"})

    assert result.total == 2
    assert [doc["name"] for doc in result.results] == ["a", "b"]


def test_search_passes_pagination_through(data_magic):
    result = data_magic.search({"page": 3, "per_page": "7"}, {"api": "colleges"})

    assert result.page == 3
    assert result.per_page == 7


def test_unknown_api(data_magic, low_level_client):
    with pytest.raises(ConfigurationNotFound):
        data_magic.search({"name": "Yale"}, {"api": "unknown"})
    low_level_client.search.assert_not_called()


def test_search_engine_errors_propagate_unchanged(data_magic, low_level_client):
    error = TransportError(500, "search_phase_execution_exception")
    low_level_client.search.side_effect = error

    with pytest.raises(SearchEngineError) as excinfo:
        data_magic.search({"name": "Yale"}, {"api": "colleges"})

    assert excinfo.value is error
    assert low_level_client.search.call_count == 1


def test_scoped_index_name(data_magic):
    assert data_magic.scoped_index_name("colleges") == "test-colleges"


def test_search_without_options_uses_configured_index(data_magic, low_level_client):
    data_magic.search({"name": "Yale"})

    assert low_level_client.search.call_args.kwargs["index"] == "test-colleges"
