"""Page file configuration: YAML loading, validation and page providers."""

from statuspage.config.error_hints import format_validation_error, get_error_hint
from statuspage.config.loader import ConfigLoader, ConfigValidationError, load_page_file
from statuspage.config.provider import PageProvider, build_page_provider
from statuspage.config.schemas import GridfoxSourceConfig, PageFileConfig


__all__ = [
    "ConfigLoader",
    "ConfigValidationError",
    "GridfoxSourceConfig",
    "PageFileConfig",
    "PageProvider",
    "build_page_provider",
    "format_validation_error",
    "get_error_hint",
    "load_page_file",
]
