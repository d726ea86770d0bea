"""Secret Manager Client - Imperative Shell.

This module reads provider credentials from Google Cloud Secret Manager
and resolves the `${secret:name}` / `${ENV_VAR}` placeholders used in
configuration files. All I/O is contained here.
"""

import logging
import os
import re
from dataclasses import dataclass
from typing import Optional

from google.api_core import exceptions as google_exceptions
from google.cloud import secretmanager


logger = logging.getLogger(__name__)


PLACEHOLDER_PATTERN = re.compile(r"^\$\{(?P<spec>[^}]+)\}$")

SECRET_PREFIX = "secret:"


@dataclass(frozen=True)
class SecretManagerConfig:
    """Where provider credentials are stored.

    Attributes:
        project_id: GCP project holding the secrets
        version: Secret version to read
    """
    project_id: Optional[str] = None
    version: str = "latest"

    def secret_path(self, secret_name: str, version: Optional[str] = None) -> str:
        """Full resource name of a secret version."""
        return (
            f"projects/{self.project_id}/secrets/{secret_name}"
            f"/versions/{version or self.version}"
        )


class SecretManagerClient:
    """Resolves credential placeholders, reading secrets on demand.

    Fetched secrets are cached for the lifetime of the client, so a key
    shared by several providers is read once per configuration load.
    """

    def __init__(self, config: Optional[SecretManagerConfig] = None) -> None:
        self.config = config or SecretManagerConfig()
        self._client: Optional[secretmanager.SecretManagerServiceClient] = None
        self._cache: dict[str, str] = {}

    @property
    def client(self) -> secretmanager.SecretManagerServiceClient:
        """Google client, created on first use."""
        if self._client is None:
            self._client = secretmanager.SecretManagerServiceClient()
        return self._client

    def get_secret(self, secret_name: str, version: Optional[str] = None) -> Optional[str]:
        """Read one secret value.

        This method performs I/O.

        Args:
            secret_name: Secret id within the configured project
            version: Version override (defaults to the configured version)

        Returns:
            The secret as text, or None if it could not be read
        """
        if not self.config.project_id:
            logger.error("Cannot read secret %s: no GCP project configured", secret_name)
            return None

        path = self.config.secret_path(secret_name, version)
        if path in self._cache:
            return self._cache[path]

        try:
            response = self.client.access_secret_version(request={"name": path})
        except google_exceptions.GoogleAPIError as e:
            logger.error("Failed to read secret %s: %s", secret_name, str(e))
            return None

        value = response.payload.data.decode("UTF-8")
        self._cache[path] = value
        logger.info("Read secret %s", secret_name)
        return value

    def resolve(self, value: str) -> str:
        """Resolve a `${secret:name}` or `${ENV_VAR}` placeholder.

        Values that are not placeholders, and placeholders that cannot be
        resolved, are returned unchanged.
        """
        match = PLACEHOLDER_PATTERN.match(value)
        if not match:
            return value

        spec = match.group("spec")
        if spec.startswith(SECRET_PREFIX):
            resolved = self.get_secret(spec[len(SECRET_PREFIX):])
            label = "Secret"
        else:
            resolved = os.environ.get(spec) or None
            label = "Environment variable"

        if resolved is None:
            logger.warning("%s %s could not be resolved", label, spec)
            return value
        return resolved
