from .search import SearchOptions, SearchResult

__all__ = ["SearchOptions", "SearchResult"]
