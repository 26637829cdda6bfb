"""Data models for the status page renderer."""

from dataclasses import dataclass, field

from pydantic import BaseModel, ConfigDict, Field

from statuspage.status.models import Environment, Service, Status


__all__ = [
    "Environment",
    "GeneratedFile",
    "PageConfig",
    "Service",
    "StatusPageResponse",
]

SVG_MARKER = "<svg"
HTML_CONTENT_TYPE = "text/html"


class PageConfig(BaseModel):
    """Everything needed to render one status page.

    Attributes:
        title: Page title shown in the browser tab.
        logo: Logo URL, or inline SVG markup starting with ``<svg``.
        current_status: Overall page status shown in the header.
        environments: Environments in display order.
        custom_css: Extra CSS appended after the built-in rules.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    title: str = ""
    logo: str = ""
    current_status: Status = Status.NOISSUE
    environments: list[Environment] = Field(default_factory=list)
    custom_css: str = ""

    @property
    def logo_is_svg(self) -> bool:
        """Whether the logo is inline SVG markup rather than a URL."""
        return self.logo.startswith(SVG_MARKER)


@dataclass(frozen=True)
class StatusPageResponse:
    """Minimal HTTP response carrying a rendered page.

    Attributes:
        body: Complete HTML document.
        status_code: HTTP status code.
        headers: Response headers.
    """

    body: str
    status_code: int = 200
    headers: dict[str, str] = field(
        default_factory=lambda: {"Content-Type": HTML_CONTENT_TYPE}
    )

    @property
    def content_type(self) -> str:
        """Get the Content-Type header."""
        return self.headers.get("Content-Type", "")

    def encode(self) -> bytes:
        """Encode the body as UTF-8."""
        return self.body.encode("utf-8")


@dataclass(frozen=True)
class GeneratedFile:
    """Information about a written page.

    Attributes:
        path: Relative path from output directory.
        absolute_path: Absolute path to file.
        bytes_written: Number of bytes written.
        sha256: SHA-256 checksum of content.
    """

    path: str
    absolute_path: str
    bytes_written: int
    sha256: str
