"""Configuration Loader - Imperative Shell.

This module handles loading configuration from YAML files and
environment variables. All I/O is contained here.

Models (GeoKitConfig, ProviderSettings) are defined in geokit/core/config.py
to avoid information leakage between layers.
"""

import logging
import os
from pathlib import Path
from typing import Any, Optional

import yaml

from geokit.core.config import (
    DEFAULT_PROVIDER_ORDER,
    DEFAULT_USER_AGENT,
    KNOWN_PROVIDERS,
    GeoKitConfig,
    ProviderSettings,
    validate_config,
)
from geokit.core.errors import ConfigurationError
from geokit.core.geo import DEFAULT_FORMULA, DEFAULT_UNITS, Formula, Units
from geokit.shell.secret_manager_client import SecretManagerClient, SecretManagerConfig


logger = logging.getLogger(__name__)


DEFAULT_CONFIG_PATH = "config/geokit.yaml"


def _get_secret_manager_client() -> Optional[SecretManagerClient]:
    """Get a Secret Manager client.

    Returns None if no GCP project is configured (e.g., local development).
    """
    project_id = os.environ.get("GCP_PROJECT") or os.environ.get("GOOGLE_CLOUD_PROJECT")
    if project_id:
        return SecretManagerClient(SecretManagerConfig(project_id=project_id))
    return None


def _resolve_value(value: Any, secret_client: Optional[SecretManagerClient] = None) -> Any:
    """Resolve a value that may contain secret or env var placeholders.

    Args:
        value: Value to resolve (may contain ${...} placeholders)
        secret_client: Client for resolving secrets

    Returns:
        Resolved value
    """
    if not isinstance(value, str):
        return value

    if secret_client:
        return secret_client.resolve(value)

    # No secret client - only handle env vars
    if value.startswith("${") and value.endswith("}"):
        var_spec = value[2:-1]
        if not var_spec.startswith("secret:"):
            env_value = os.environ.get(var_spec)
            if env_value:
                return env_value
            logger.warning("Environment variable %s not set", var_spec)

    return value


def _parse_provider_order(value: Any, field_name: str) -> tuple[str, ...]:
    """Parse a provider order from a list or a comma-separated string."""
    if isinstance(value, str):
        names = value.split(",")
    elif isinstance(value, (list, tuple)):
        names = [str(v) for v in value]
    else:
        raise ConfigurationError(f"{field_name} must be a list of provider ids")
    return tuple(name.strip().lower() for name in names if name.strip())


def _parse_provider(
    name: str,
    data: dict[str, Any] | None,
    secret_client: Optional[SecretManagerClient] = None,
) -> ProviderSettings:
    """Parse the settings block of one provider."""
    data = data or {}

    params = data.get("params") or {}
    if not isinstance(params, dict):
        raise ConfigurationError(f"providers.{name}.params must be a mapping")

    extra = tuple(
        (str(k), str(_resolve_value(v, secret_client)))
        for k, v in sorted(params.items())
    )

    api_key = data.get("api_key")
    if api_key is not None:
        api_key = _resolve_value(str(api_key), secret_client)

    return ProviderSettings(
        name=name,
        api_key=api_key,
        base_url=data.get("base_url"),
        extra=extra,
    )


def _parse_timeout(value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"request_timeout_seconds must be a number, got {value!r}") from e


def _check(config: GeoKitConfig) -> GeoKitConfig:
    """Log warnings and reject configurations with critical errors."""
    result = validate_config(config)

    for warning in result.warnings:
        logger.warning("Config warning in %s: %s", warning.field, warning.message)

    if not result.valid:
        details = "; ".join(f"{e.field}: {e.message}" for e in result.critical_errors)
        raise ConfigurationError(f"Invalid configuration: {details}")

    return config


def load_config_from_dict(data: dict[str, Any]) -> GeoKitConfig:
    """Load configuration from a dictionary.

    This is a pure-ish function (only placeholder expansion has side effects).

    Args:
        data: Configuration dictionary

    Returns:
        Parsed GeoKitConfig

    Raises:
        ConfigurationError: If units, formula or provider ids are invalid
    """
    secret_client = _get_secret_manager_client()

    providers_data = data.get("providers") or {}
    if not isinstance(providers_data, dict):
        raise ConfigurationError("providers must be a mapping of provider id to settings")

    providers = {
        str(name).lower(): _parse_provider(str(name).lower(), settings, secret_client)
        for name, settings in providers_data.items()
    }

    provider_order = DEFAULT_PROVIDER_ORDER
    if "provider_order" in data:
        provider_order = _parse_provider_order(data["provider_order"], "provider_order")

    config = GeoKitConfig(
        provider_order=provider_order,
        ip_provider=str(data.get("ip_provider", "ip")).strip().lower(),
        providers=providers,
        default_units=Units.parse(data.get("default_units", DEFAULT_UNITS)),
        default_formula=Formula.parse(data.get("default_formula", DEFAULT_FORMULA)),
        request_timeout_seconds=_parse_timeout(data.get("request_timeout_seconds", 10.0)),
        proxy_url=data.get("proxy_url"),
        user_agent=data.get("user_agent", DEFAULT_USER_AGENT),
    )

    return _check(config)


def load_config(config_path: str | Path | None = None) -> GeoKitConfig:
    """Load configuration from a YAML file.

    This method performs file I/O.

    Args:
        config_path: Path to YAML config file.
                    If None, uses GEOKIT_CONFIG env var or default.

    Returns:
        Parsed GeoKitConfig

    Raises:
        ConfigurationError: If the file content is invalid
        yaml.YAMLError: If config file is invalid YAML
    """
    if config_path is None:
        config_path = os.environ.get("GEOKIT_CONFIG", DEFAULT_CONFIG_PATH)

    path = Path(config_path)

    logger.info("Loading configuration from %s", path)

    if not path.exists():
        logger.warning("Config file not found: %s, using defaults", path)
        return GeoKitConfig()

    with open(path, "r") as f:
        data = yaml.safe_load(f)

    if data is None:
        logger.warning("Config file is empty, using defaults")
        return GeoKitConfig()

    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {path} must contain a mapping")

    config = load_config_from_dict(data)

    logger.info(
        "Loaded config: provider order %s, %d provider settings",
        ",".join(config.provider_order),
        len(config.providers),
    )

    return config


def load_config_from_env() -> GeoKitConfig:
    """Load configuration from environment variables.

    Useful for simple deployments without a YAML file.

    Environment variables:
        GEOKIT_PROVIDER_ORDER: Comma-separated provider ids (e.g., "google,census")
        GEOKIT_IP_PROVIDER: Provider id for IP lookups
        GEOKIT_UNITS: Default units (miles or kms)
        GEOKIT_FORMULA: Default formula (sphere or flat)
        GEOKIT_TIMEOUT: Request timeout in seconds
        GEOKIT_PROXY_URL: Proxy for provider requests
        GEOKIT_<PROVIDER>_API_KEY: Credential per provider (e.g., GEOKIT_GOOGLE_API_KEY)

    Returns:
        GeoKitConfig from environment

    Raises:
        ConfigurationError: If any variable holds an invalid value
    """
    data: dict[str, Any] = {}

    if os.environ.get("GEOKIT_PROVIDER_ORDER"):
        data["provider_order"] = os.environ["GEOKIT_PROVIDER_ORDER"]
    if os.environ.get("GEOKIT_IP_PROVIDER"):
        data["ip_provider"] = os.environ["GEOKIT_IP_PROVIDER"]
    if os.environ.get("GEOKIT_UNITS"):
        data["default_units"] = os.environ["GEOKIT_UNITS"]
    if os.environ.get("GEOKIT_FORMULA"):
        data["default_formula"] = os.environ["GEOKIT_FORMULA"]
    if os.environ.get("GEOKIT_TIMEOUT"):
        data["request_timeout_seconds"] = os.environ["GEOKIT_TIMEOUT"]
    if os.environ.get("GEOKIT_PROXY_URL"):
        data["proxy_url"] = os.environ["GEOKIT_PROXY_URL"]

    providers = {}
    for name in KNOWN_PROVIDERS:
        api_key = os.environ.get(f"GEOKIT_{name.upper()}_API_KEY")
        if api_key:
            providers[name] = {"api_key": api_key}
    data["providers"] = providers

    return load_config_from_dict(data)
