"""HTML renderer using Jinja2 templates."""

import time
from dataclasses import dataclass
from datetime import datetime, timedelta
from pathlib import Path

import structlog
from jinja2 import Environment, PackageLoader, select_autoescape

from statuspage.renderer.io import AtomicWriter
from statuspage.renderer.metrics import RendererMetrics
from statuspage.renderer.models import GeneratedFile, PageConfig, StatusPageResponse
from statuspage.status import STATUS_INFO, Status, aggregate


logger = structlog.get_logger()

TEMPLATE_NAME = "status_page.html"

# Offset-zero means GMT; anything else is labelled BST.
ZERO_OFFSET_LABEL = "GMT"
NONZERO_OFFSET_LABEL = "BST"


def format_current_time(now: datetime | None = None) -> str:
    """Format a wall-clock time as ``HH:MM GMT`` or ``HH:MM BST``.

    The label only looks at whether the UTC offset is zero; it does not
    resolve the real timezone name.

    Args:
        now: Time to format. Defaults to the current local time. Naive
            values are interpreted as local time.

    Returns:
        Formatted time with timezone label.
    """
    if now is None:
        now = datetime.now().astimezone()
    elif now.tzinfo is None:
        now = now.astimezone()

    label = (
        ZERO_OFFSET_LABEL if now.utcoffset() == timedelta(0) else NONZERO_OFFSET_LABEL
    )
    return f"{now.strftime('%H:%M')} {label}"


@dataclass(frozen=True)
class _ServiceRow:
    name: str
    title: str
    icon: str


@dataclass(frozen=True)
class _EnvironmentTable:
    name: str
    icon: str
    open: bool
    services: list[_ServiceRow]


class StatusPageRenderer:
    """Renders status pages from a PageConfig.

    Templates are loaded from statuspage/renderer/templates/ with
    auto-escaping enabled. Icons, an inline SVG logo and custom CSS are
    trusted and emitted verbatim.
    """

    def __init__(self, metrics: RendererMetrics | None = None) -> None:
        """Initialize the renderer.

        Args:
            metrics: Optional metrics instance.
        """
        self._metrics = metrics or RendererMetrics.get_instance()
        self._log = logger.bind(component="renderer")

        self._env = Environment(
            loader=PackageLoader("statuspage.renderer", "templates"),
            autoescape=select_autoescape(["html", "xml"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def render(self, config: PageConfig, now: datetime | None = None) -> str:
        """Render the complete HTML document.

        Args:
            config: Page configuration.
            now: Time shown in the header. Defaults to the current time.

        Returns:
            HTML document.
        """
        start_time = time.perf_counter()

        try:
            template = self._env.get_template(TEMPLATE_NAME)
            content = template.render(**self._build_context(config, now))
        except Exception:
            self._metrics.record_failure()
            self._log.exception("page_render_failed", title=config.title)
            raise

        duration_ms = (time.perf_counter() - start_time) * 1000
        size = len(content.encode("utf-8"))
        self._metrics.record_render(duration_ms, size, config.current_status.value)

        self._log.debug(
            "page_rendered",
            template=TEMPLATE_NAME,
            current_status=config.current_status.value,
            environments=len(config.environments),
            bytes=size,
            duration_ms=round(duration_ms, 2),
        )
        return content

    def _build_context(
        self, config: PageConfig, now: datetime | None
    ) -> dict[str, object]:
        """Build template variables for a page.

        Args:
            config: Page configuration.
            now: Time shown in the header.

        Returns:
            Template context.
        """
        result = aggregate(config.environments)
        tables = [
            _EnvironmentTable(
                name=item.environment.name,
                icon=STATUS_INFO[item.status].icon,
                open=index == 0,
                services=[
                    _ServiceRow(
                        name=service.name,
                        title=STATUS_INFO[service.status].title,
                        icon=STATUS_INFO[service.status].icon,
                    )
                    for service in item.environment.services
                ],
            )
            for index, item in enumerate(result.environments)
        ]

        return {
            "title": config.title,
            "logo": config.logo,
            "logo_is_svg": config.logo_is_svg,
            "current": STATUS_INFO[config.current_status],
            "current_time": format_current_time(now),
            "legend": [STATUS_INFO[status] for status in Status],
            "environments": tables,
            "custom_css": config.custom_css,
        }


def render_html(config: PageConfig, now: datetime | None = None) -> str:
    """Render a status page to an HTML string.

    Args:
        config: Page configuration.
        now: Time shown in the header. Defaults to the current time.

    Returns:
        Complete HTML document.
    """
    return StatusPageRenderer().render(config, now)


def create_status_page(
    config: PageConfig, now: datetime | None = None
) -> StatusPageResponse:
    """Render a status page and wrap it in an HTML response.

    Args:
        config: Page configuration.
        now: Time shown in the header. Defaults to the current time.

    Returns:
        StatusPageResponse with Content-Type text/html.
    """
    return StatusPageResponse(body=render_html(config, now))


def write_status_page(
    config: PageConfig, path: Path, now: datetime | None = None
) -> GeneratedFile:
    """Render a status page and write it atomically to disk.

    Args:
        config: Page configuration.
        path: Destination file.
        now: Time shown in the header. Defaults to the current time.

    Returns:
        GeneratedFile describing the written page.
    """
    writer = AtomicWriter(path.parent)
    file_info = writer.write(path, render_html(config, now))
    logger.info(
        "page_written",
        component="renderer",
        path=file_info.absolute_path,
        bytes=file_info.bytes_written,
    )
    return file_info
