import logging
import os
from typing import Mapping, Optional, Union

from datamagic.exceptions import ConfigurationError, ConfigurationNotFound
from datamagic.schemas.search import SearchOptions

logger = logging.getLogger(__name__)


def current_environment(variable: str, environ: Optional[Mapping[str, str]] = None) -> str:
    """
    Environment tag read from the process environment on every call.

    An unset variable yields an empty tag, so names scope to ``"-name"``.
    """
    environ = os.environ if environ is None else environ
    return environ.get(variable, "")


def scope_name(environment: str, name: str) -> str:
    return f"{environment}-{name}"


class IndexNameResolver:
    """Derives environment-scoped index names from logical names or API endpoints."""

    def __init__(self, config_store, environment_variable: str = "RACK_ENV", environ: Optional[Mapping[str, str]] = None):
        self.config_store = config_store
        self.environment_variable = environment_variable
        self.environ = environ

    def scoped_index_name(self, name: str) -> str:
        self.config_store.load_if_needed()
        return scope_name(current_environment(self.environment_variable, self.environ), name)

    def _default_index(self) -> str:
        """Index of the loaded configuration, used when neither api nor index is given."""
        self.config_store.load_if_needed()
        entry = self.config_store.default_entry
        if entry is None:
            raise ConfigurationError("search needs an api or index and no configuration is loaded")
        return entry.index

    def resolve_index_from_options(self, options: Union[SearchOptions, Mapping, None]) -> str:
        """
        Get the scoped index name for either an API endpoint or a logical index name.

        Args:
            options: ``api`` (endpoint configured in data.yaml) or ``index`` (logical name)

        Returns:
            The environment-scoped index name

        Raises:
            ConfigurationNotFound: If ``api`` names an unknown endpoint
            ConfigurationError: If neither is given and no configuration is loaded
        """
        options = SearchOptions.coerce(options)
        if options.api and options.index:
            logger.warning("search options api will override index, only one expected")

        if options.api:
            self.config_store.load_if_needed()
            index_name = self.config_store.find_index_for(options.api)
            if index_name is None:
                raise ConfigurationNotFound(options.api, self.config_store.api_endpoint_names())
        elif options.index:
            index_name = options.index
        else:
            index_name = self._default_index()
        return self.scoped_index_name(index_name)
