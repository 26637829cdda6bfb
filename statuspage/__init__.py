"""Static HTML status page renderer."""

from statuspage.renderer import create_status_page, render_html
from statuspage.renderer.models import Environment, PageConfig, Service
from statuspage.status import Status, aggregate


__all__ = [
    "Environment",
    "PageConfig",
    "Service",
    "Status",
    "aggregate",
    "create_status_page",
    "render_html",
]
