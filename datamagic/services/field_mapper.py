from enum import Enum
from typing import Any, Dict, Mapping


def canonical_key(key: Any) -> str:
    if isinstance(key, Enum):
        return str(key.value)
    return str(key)


def map_field_names(row: Mapping[Any, Any], new_fields: Mapping[Any, str]) -> Dict[str, Any]:
    """
    Rename the fields of a raw row using the configured dictionary.

    Args:
        row: raw record, keys may be strings or enum members
        new_fields: mapping of current_name -> new_name

    Returns:
        A dict (possibly a subset of row) keyed by new_name. Fields with no
        mapping are dropped. Values of fields whose new name contains
        "location" are converted to float for geo_point indexing; blank
        location values are dropped.
    """
    table = {canonical_key(k): v for k, v in new_fields.items()}
    mapped = {}
    for key, value in row.items():
        new_key = table.get(canonical_key(key))
        if new_key:
            if "location" in new_key:
                # blank coordinates are left out
                if value is None or (isinstance(value, str) and not value.strip()):
                    continue
                value = float(value)
            mapped[new_key] = value
    return mapped
