import os
import logging
import sys
from typing import Optional, List, Dict, Any
from urllib.parse import urlparse

import yaml


# =============================================================================
# Logging Configuration
# =============================================================================
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FORMAT: str = os.getenv(
    "LOG_FORMAT",
    "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)


def setup_logging():
    """Configure application-wide logging"""
    level = getattr(logging, LOG_LEVEL, logging.INFO)
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)]
    )
    # Reduce noise from third-party libraries
    logging.getLogger("azure").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("requests").setLevel(logging.WARNING)


# =============================================================================
# Settings file (optional, merged over defaults)
# =============================================================================
DEFAULT_CONFIG: Dict[str, Any] = {
    "settings": {
        "log_analytics_endpoint": "https://api.loganalytics.io",
        "log_analytics_scope": "https://api.loganalytics.io/.default",
        "usage_query_timeout_seconds": 60,
    },
    "subscriptions": {
        "include": [],
        "exclude": [],
    },
}

CONFIG_PATH: str = os.getenv("CLUSTERIZATION_CONFIG", "clusterization.yaml")


def load_config(config_path: str) -> Dict[str, Any]:
    """Load YAML configuration file and merge with defaults.

    A missing file yields the defaults; an unreadable one raises yaml.YAMLError.
    """
    if not os.path.exists(config_path):
        loaded: Dict[str, Any] = {}
    else:
        with open(config_path, 'r') as f:
            loaded = yaml.safe_load(f) or {}
    return {
        "settings": {**DEFAULT_CONFIG["settings"], **(loaded.get("settings") or {})},
        "subscriptions": {**DEFAULT_CONFIG["subscriptions"], **(loaded.get("subscriptions") or {})},
    }


def get_config_value(config: Dict[str, Any], *keys, default=None):
    """Safely get nested config value with default fallback"""
    value = config
    for key in keys:
        if isinstance(value, dict) and key in value:
            value = value[key]
        else:
            return default
    return value


_FILE_CONFIG: Dict[str, Any] = load_config(CONFIG_PATH)


# =============================================================================
# Azure identity / Log Analytics query API
# =============================================================================
# User-assigned managed identity; None selects the system-assigned identity
AZURE_CLIENT_ID: Optional[str] = os.getenv("AZURE_CLIENT_ID") or None

LOG_ANALYTICS_ENDPOINT: str = os.getenv(
    "LOG_ANALYTICS_ENDPOINT",
    get_config_value(_FILE_CONFIG, "settings", "log_analytics_endpoint"),
)
LOG_ANALYTICS_SCOPE: str = os.getenv(
    "LOG_ANALYTICS_SCOPE",
    get_config_value(_FILE_CONFIG, "settings", "log_analytics_scope"),
)
USAGE_QUERY_TIMEOUT_SECONDS: int = int(os.getenv(
    "USAGE_QUERY_TIMEOUT_SECONDS",
    str(get_config_value(_FILE_CONFIG, "settings", "usage_query_timeout_seconds")),
))

# Subscription filters, matched against subscription id or display name
SUBSCRIPTIONS_INCLUDE: List[str] = list(get_config_value(_FILE_CONFIG, "subscriptions", "include", default=[]) or [])
SUBSCRIPTIONS_EXCLUDE: List[str] = list(get_config_value(_FILE_CONFIG, "subscriptions", "exclude", default=[]) or [])


__all__ = [
    "LOG_LEVEL",
    "LOG_FORMAT",
    "setup_logging",
    "DEFAULT_CONFIG",
    "CONFIG_PATH",
    "load_config",
    "get_config_value",
    "AZURE_CLIENT_ID",
    "LOG_ANALYTICS_ENDPOINT",
    "LOG_ANALYTICS_SCOPE",
    "USAGE_QUERY_TIMEOUT_SECONDS",
    "SUBSCRIPTIONS_INCLUDE",
    "SUBSCRIPTIONS_EXCLUDE",
    "validate_config",
    "ConfigValidationError",
]


# =============================================================================
# Configuration Validation
# =============================================================================
class ConfigValidationError(Exception):
    """Raised when configuration validation fails"""
    pass


def _validate_positive_int(name: str, value: int) -> None:
    if value <= 0:
        raise ConfigValidationError(f"{name} must be positive, got {value}")


def _validate_url(name: str, value: str) -> None:
    try:
        result = urlparse(value)
        if not all([result.scheme, result.netloc]):
            raise ValueError("Missing scheme or netloc")
        if result.scheme not in ('http', 'https'):
            raise ValueError(f"Invalid scheme: {result.scheme}")
    except Exception as e:
        raise ConfigValidationError(f"{name} is not a valid URL: {value} ({e})")


def _validate_subscription_filters(include: List[str], exclude: List[str]) -> None:
    overlap = set(include) & set(exclude)
    if overlap:
        raise ConfigValidationError(
            f"subscriptions listed in both include and exclude: {sorted(overlap)}"
        )


def validate_config() -> None:
    """Validate all configuration values on startup

    Raises:
        ConfigValidationError: If any configuration value is invalid
    """
    errors = []

    try:
        _validate_positive_int("USAGE_QUERY_TIMEOUT_SECONDS", USAGE_QUERY_TIMEOUT_SECONDS)
    except ConfigValidationError as e:
        errors.append(str(e))

    try:
        _validate_url("LOG_ANALYTICS_ENDPOINT", LOG_ANALYTICS_ENDPOINT)
    except ConfigValidationError as e:
        errors.append(str(e))

    try:
        _validate_subscription_filters(SUBSCRIPTIONS_INCLUDE, SUBSCRIPTIONS_EXCLUDE)
    except ConfigValidationError as e:
        errors.append(str(e))

    if errors:
        raise ConfigValidationError(
            "Configuration validation failed:\n  - " + "\n  - ".join(errors)
        )
