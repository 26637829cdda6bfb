"""Page providers: produce a fresh PageConfig for each render."""

from collections.abc import Callable

import structlog

from statuspage.config.constants import COMPONENT_CONFIG, ENVIRONMENT_LOCATION
from statuspage.config.loader import ConfigValidationError
from statuspage.config.schemas import PageFileConfig
from statuspage.gridfox import config_from_gridfox
from statuspage.renderer.models import PageConfig
from statuspage.settings import AppSettings, get_settings


logger = structlog.get_logger()

PageProvider = Callable[[], PageConfig]


def build_page_provider(
    page_file: PageFileConfig,
    settings: AppSettings | None = None,
) -> PageProvider:
    """Build a provider for the page a file describes.

    A static file always yields the same PageConfig. A file with a gridfox
    section queries Gridfox on every call and keeps the file's title, logo
    and custom CSS.

    Args:
        page_file: Validated page file.
        settings: Settings holding the Gridfox API key. Loaded from the
            environment when omitted and needed.

    Returns:
        Zero-argument callable returning a PageConfig.

    Raises:
        ConfigValidationError: If Gridfox is configured without an API key.
    """
    if page_file.gridfox is None:
        page = page_file.to_page_config()
        return lambda: page

    settings = settings or get_settings()
    if not settings.gridfox_api_key:
        raise ConfigValidationError(
            [
                {
                    "loc": "GRIDFOX_API_KEY",
                    "msg": "API key is required for a gridfox source",
                    "type": "missing",
                }
            ],
            ENVIRONMENT_LOCATION,
        )

    gridfox_config = page_file.gridfox.to_gridfox_config(
        settings.gridfox_api_key, settings.gridfox_api_url
    )
    branding = {
        "title": page_file.title,
        "logo": page_file.logo,
        "custom_css": page_file.custom_css or "",
    }
    log = logger.bind(component=COMPONENT_CONFIG, source="gridfox")

    def provide() -> PageConfig:
        fetched = config_from_gridfox(gridfox_config)
        log.debug("page_config_refreshed", current_status=fetched.current_status.value)
        return fetched.model_copy(update=branding)

    return provide
