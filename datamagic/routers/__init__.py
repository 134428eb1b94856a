from . import ping, search

__all__ = ["ping", "search"]
