"""Geocoder base class - Imperative Shell.

Every provider performs exactly one HTTP GET per lookup and hands the body
to a pure parser in geokit.core.parsing. Network errors, timeouts,
non-2xx statuses and undecodable bodies are logged and turned into an
unsuccessful GeoLocation; they never propagate to the caller.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any

import requests

from geokit.core.config import DEFAULT_USER_AGENT, GeoKitConfig, ProviderSettings
from geokit.core.location import GeoLocation


logger = logging.getLogger(__name__)


# Default timeout for provider requests (seconds)
DEFAULT_TIMEOUT = 10


class Geocoder(ABC):
    """Base class for single-service geocoders.

    Subclasses set `name` and `default_base_url` and implement
    `_build_params` and `_parse`.
    """

    name: str = ""
    default_base_url: str = ""

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        proxy_url: str | None = None,
        user_agent: str = DEFAULT_USER_AGENT,
        extra_params: dict[str, str] | None = None,
    ) -> None:
        """Initialize geocoder.

        Args:
            api_key: Credential for the service, if it needs one
            base_url: Endpoint override (defaults to the public service)
            timeout: Request timeout in seconds
            proxy_url: Optional proxy for HTTP and HTTPS requests
            user_agent: User-Agent header value
            extra_params: Additional query parameters sent with every request
        """
        self.api_key = api_key
        self.base_url = base_url or self.default_base_url
        self.timeout = timeout
        self.proxy_url = proxy_url
        self.user_agent = user_agent
        self.extra_params = dict(extra_params or {})

    @classmethod
    def from_config(
        cls,
        settings: ProviderSettings,
        config: GeoKitConfig,
    ) -> "Geocoder":
        """Build a geocoder from provider settings and global options."""
        return cls(
            api_key=settings.api_key,
            base_url=settings.base_url,
            timeout=config.request_timeout_seconds,
            proxy_url=config.proxy_url,
            user_agent=config.user_agent,
            extra_params=dict(settings.extra),
        )

    @property
    def proxies(self) -> dict[str, str] | None:
        if not self.proxy_url:
            return None
        return {"http": self.proxy_url, "https": self.proxy_url}

    def accepts(self, query: str) -> bool:
        """Check whether a query is worth sending to the service."""
        return bool(query and query.strip())

    def geocode(self, query: str) -> GeoLocation:
        """Geocode a query string.

        This method performs HTTP I/O.

        Args:
            query: Address (or IP address) to look up

        Returns:
            GeoLocation; success is False on any failure
        """
        if not self.accepts(query):
            logger.warning("%s rejected query %r", self.name, query)
            return GeoLocation.failed(self.name)

        params = {**self._build_params(query.strip()), **self.extra_params}

        logger.info(
            "Geocoding with %s",
            self.name,
            extra={"provider": self.name, "query": query},
        )

        try:
            response = requests.get(
                self.base_url,
                params=params,
                timeout=self.timeout,
                headers={"User-Agent": self.user_agent},
                proxies=self.proxies,
            )
        except requests.Timeout:
            logger.warning("%s request timed out after %ss", self.name, self.timeout)
            return GeoLocation.failed(self.name)
        except requests.RequestException as e:
            logger.error("%s request failed: %s", self.name, str(e))
            return GeoLocation.failed(self.name)

        if not 200 <= response.status_code < 300:
            logger.warning(
                "%s returned non-2xx: %d",
                self.name,
                response.status_code,
            )
            return GeoLocation.failed(self.name)

        try:
            location = self._parse(response)
        except ValueError as e:
            logger.error("%s returned an unreadable body: %s", self.name, str(e))
            return GeoLocation.failed(self.name)

        if location.success:
            logger.info(
                "%s geocoded to (%s, %s)",
                self.name,
                location.latitude,
                location.longitude,
            )
        else:
            logger.info("%s found no result", self.name)

        return location

    @abstractmethod
    def _build_params(self, query: str) -> dict[str, Any]:
        """Build the query parameters for one lookup."""

    @abstractmethod
    def _parse(self, response: requests.Response) -> GeoLocation:
        """Turn a 2xx response into a GeoLocation."""
