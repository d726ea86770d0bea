"""Configuration models - Pure data structures.

These are domain models for configuration. The actual loading
(I/O) is handled by the shell layer.
"""

from dataclasses import dataclass, field

from geokit.core.geo import DEFAULT_FORMULA, DEFAULT_UNITS, Formula, Units


# Provider ids understood by the provider registry
KNOWN_PROVIDERS = ("google", "yahoo", "census", "ca", "ip")

# Providers whose service refuses requests without credentials
PROVIDERS_REQUIRING_KEY = ("google", "yahoo")

DEFAULT_PROVIDER_ORDER = ("google", "yahoo", "census")

DEFAULT_USER_AGENT = "geokit/1.0"


@dataclass(frozen=True)
class ProviderSettings:
    """Per-provider connection settings.

    Attributes:
        name: Provider id (e.g., 'google', 'census')
        api_key: API key, app id or auth token for the service
        base_url: Override for the service endpoint
        extra: Additional provider-specific query parameters
    """
    name: str
    api_key: str | None = None
    base_url: str | None = None
    extra: tuple[tuple[str, str], ...] = field(default_factory=tuple)


@dataclass
class GeoKitConfig:
    """Library configuration.

    This is a pure data structure - no I/O or side effects.

    Attributes:
        provider_order: Provider ids tried in turn for physical addresses
        ip_provider: Provider id used for IP address lookups
        providers: Settings keyed by provider id
        default_units: Units used when a caller does not pass any
        default_formula: Formula used when a caller does not pass any
        request_timeout_seconds: Timeout applied to every provider request
        proxy_url: Optional HTTP(S) proxy for provider requests
        user_agent: User-Agent header sent to providers
    """
    provider_order: tuple[str, ...] = DEFAULT_PROVIDER_ORDER
    ip_provider: str = "ip"
    providers: dict[str, ProviderSettings] = field(default_factory=dict)
    default_units: Units = DEFAULT_UNITS
    default_formula: Formula = DEFAULT_FORMULA
    request_timeout_seconds: float = 10.0
    proxy_url: str | None = None
    user_agent: str = DEFAULT_USER_AGENT

    def settings_for(self, provider: str) -> ProviderSettings:
        """Settings for a provider, empty settings if none were configured."""
        return self.providers.get(provider) or ProviderSettings(name=provider)


@dataclass
class ValidationError:
    """A configuration validation error.

    Attributes:
        field: The field that has an error
        message: Human-readable error description
        severity: 'error' or 'warning'
    """
    field: str
    message: str
    severity: str = "error"


@dataclass
class ValidationResult:
    """Result of validating configuration.

    Attributes:
        valid: True if no errors (warnings are OK)
        errors: List of validation errors/warnings
    """
    valid: bool
    errors: list[ValidationError] = field(default_factory=list)

    @property
    def warnings(self) -> list[ValidationError]:
        """Get only warnings."""
        return [e for e in self.errors if e.severity == "warning"]

    @property
    def critical_errors(self) -> list[ValidationError]:
        """Get only critical errors."""
        return [e for e in self.errors if e.severity == "error"]


def validate_provider_ids(names: tuple[str, ...], field_name: str) -> list[ValidationError]:
    """Validate that provider ids are known and not repeated.

    Pure function.
    """
    errors = []
    seen: set[str] = set()

    for name in names:
        if name not in KNOWN_PROVIDERS:
            errors.append(ValidationError(
                field=field_name,
                message=f"Unknown provider '{name}', expected one of: {', '.join(KNOWN_PROVIDERS)}",
            ))
        elif name in seen:
            errors.append(ValidationError(
                field=field_name,
                message=f"Provider '{name}' listed more than once",
                severity="warning",
            ))
        seen.add(name)

    return errors


def validate_config(config: GeoKitConfig) -> ValidationResult:
    """Validate configuration for errors and warnings.

    Pure function.

    Args:
        config: Configuration to validate

    Returns:
        ValidationResult with any errors/warnings found
    """
    errors: list[ValidationError] = []

    if not config.provider_order:
        errors.append(ValidationError(
            field="provider_order",
            message="No providers configured",
        ))
    errors.extend(validate_provider_ids(config.provider_order, "provider_order"))
    errors.extend(validate_provider_ids((config.ip_provider,), "ip_provider"))

    for name in config.providers:
        if name not in KNOWN_PROVIDERS:
            errors.append(ValidationError(
                field=f"providers.{name}",
                message=f"Settings for unknown provider '{name}' are ignored",
                severity="warning",
            ))

    for name in config.provider_order:
        if name not in PROVIDERS_REQUIRING_KEY:
            continue
        api_key = config.settings_for(name).api_key
        if not api_key or api_key.startswith("${"):
            errors.append(ValidationError(
                field=f"providers.{name}.api_key",
                message="API key not set (or still contains placeholder)",
                severity="warning",
            ))

    if config.request_timeout_seconds <= 0:
        errors.append(ValidationError(
            field="request_timeout_seconds",
            message=f"Timeout must be positive, got {config.request_timeout_seconds}",
        ))

    if not isinstance(config.default_units, Units):
        errors.append(ValidationError(
            field="default_units",
            message=f"Unknown units {config.default_units!r}",
        ))

    if not isinstance(config.default_formula, Formula):
        errors.append(ValidationError(
            field="default_formula",
            message=f"Unknown formula {config.default_formula!r}",
        ))

    has_critical = any(e.severity == "error" for e in errors)

    return ValidationResult(
        valid=not has_critical,
        errors=errors,
    )
