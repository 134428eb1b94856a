from opensearchpy.exceptions import OpenSearchException


class DataMagicException(Exception):
    """Base exception for data-magic errors."""


class ConfigurationError(DataMagicException):
    """Exception raised when configuration is invalid or missing."""


class ConfigurationNotFound(ConfigurationError):
    """Exception raised when no configuration exists for an API endpoint."""

    def __init__(self, api: str, available: list[str]):
        self.api = api
        self.available = sorted(available)
        super().__init__(f"no configuration found for '{api}', available endpoints: {self.available}")


class InvalidData(DataMagicException):
    """Base exception for data validation failures."""


class InvalidPagination(InvalidData):
    """Exception raised when page or per_page is not a non-negative integer."""


class DataSourceError(DataMagicException):
    """Exception raised when a data file cannot be read."""


# Errors from the search engine are propagated unchanged, callers catch the
# client's own base class.
SearchEngineError = OpenSearchException
