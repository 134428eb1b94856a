import json
import logging
import os
from typing import Any, Dict, Mapping, Optional

from datamagic.config import Settings
from datamagic.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class CredentialProvider:
    """
    Looks up service credentials either from the managed platform
    (Cloud Foundry style ``VCAP_SERVICES``) or from plain environment variables.
    """

    def __init__(self, settings: Settings, environ: Optional[Mapping[str, str]] = None):
        self.settings = settings
        self.environ = os.environ if environ is None else environ

    @property
    def on_platform(self) -> bool:
        return bool(self.environ.get(self.settings.platform_variable))

    def find_by_service_name(self, name: str) -> Dict[str, Any]:
        """
        Return the credentials block of a bound platform service.

        Args:
            name: Service instance name

        Returns:
            The service's ``credentials`` mapping

        Raises:
            ConfigurationError: If the service is not bound or VCAP_SERVICES is malformed
        """
        raw = self.environ.get("VCAP_SERVICES", "{}")
        try:
            services = json.loads(raw)
        except ValueError as e:
            raise ConfigurationError(f"VCAP_SERVICES is not valid JSON: {e}") from e

        for instances in services.values():
            for instance in instances:
                if instance.get("name") == name:
                    return instance.get("credentials", {})
        raise ConfigurationError(f"no bound service named '{name}'")

    def s3_credentials(self) -> Dict[str, Optional[str]]:
        s3 = self.settings.s3
        if self.on_platform:
            cred = self.find_by_service_name(s3.service_name)
        else:
            cred = {
                "access_key": self.environ.get(s3.access_key_variable),
                "secret_key": self.environ.get(s3.secret_key_variable),
            }
            logger.info(f"Using S3 credentials from {s3.access_key_variable}/{s3.secret_key_variable}")
        return {"access_key": cred.get("access_key"), "secret_key": cred.get("secret_key")}

    def search_engine_url(self) -> Optional[str]:
        """Engine url from the platform service, None when running off-platform."""
        if not self.on_platform:
            return None
        service = self.find_by_service_name(self.settings.opensearch.service_name)
        url = service.get("url")
        logger.info(f"Connecting to platform search service: {self.settings.opensearch.service_name}")
        return url
