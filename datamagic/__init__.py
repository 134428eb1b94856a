from .exceptions import (
    ConfigurationError,
    ConfigurationNotFound,
    InvalidData,
    SearchEngineError,
)
from .schemas import SearchOptions, SearchResult

__all__ = [
    "ConfigurationError",
    "ConfigurationNotFound",
    "InvalidData",
    "SearchEngineError",
    "SearchOptions",
    "SearchResult",
]
