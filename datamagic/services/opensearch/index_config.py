# Every data index declares a single geo_point field, the rest is dynamic.
DATA_INDEX_MAPPING = {
    "mappings": {
        "properties": {
            "location": {"type": "geo_point"},
        }
    }
}

# Documents in the config index record which data.yaml version an index was built from.
CONFIG_INDEX_MAPPING = {
    "mappings": {
        "properties": {
            "version": {"type": "keyword"},
            "api": {"type": "keyword"},
        }
    }
}
