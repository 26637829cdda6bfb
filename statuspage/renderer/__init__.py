"""Status page HTML renderer module."""

from statuspage.renderer.html_renderer import (
    StatusPageRenderer,
    create_status_page,
    format_current_time,
    render_html,
    write_status_page,
)
from statuspage.renderer.io import AtomicWriter
from statuspage.renderer.metrics import RendererMetrics
from statuspage.renderer.models import (
    Environment,
    GeneratedFile,
    PageConfig,
    Service,
    StatusPageResponse,
)


__all__ = [
    "AtomicWriter",
    "Environment",
    "GeneratedFile",
    "PageConfig",
    "RendererMetrics",
    "Service",
    "StatusPageRenderer",
    "StatusPageResponse",
    "create_status_page",
    "format_current_time",
    "render_html",
    "write_status_page",
]
