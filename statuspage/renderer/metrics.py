"""Renderer metrics collection."""

from dataclasses import dataclass, field
from typing import ClassVar


@dataclass
class RendererMetrics:
    """Metrics for the status page renderer.

    Collects renders_total, render_failures_total, render_bytes_total and
    the duration of the most recent render.
    """

    _renders_total: int = 0
    _render_failures_total: int = 0
    _render_bytes_total: int = 0
    _last_render_ms: float = 0.0
    _status_counts: dict[str, int] = field(default_factory=dict)

    _instance: ClassVar["RendererMetrics | None"] = None

    @classmethod
    def get_instance(cls) -> "RendererMetrics":
        """Get or create the singleton instance.

        Returns:
            The singleton RendererMetrics instance.
        """
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Reset the singleton instance for testing."""
        cls._instance = None

    def record_render(self, duration_ms: float, bytes_rendered: int, status: str) -> None:
        """Record a successful render.

        Args:
            duration_ms: Duration in milliseconds.
            bytes_rendered: Size of the document in bytes.
            status: Page status value that was rendered.
        """
        self._renders_total += 1
        self._render_bytes_total += bytes_rendered
        self._last_render_ms = duration_ms
        self._status_counts[status] = self._status_counts.get(status, 0) + 1

    def record_failure(self) -> None:
        """Record a render failure."""
        self._render_failures_total += 1

    @property
    def renders_total(self) -> int:
        """Get total successful renders."""
        return self._renders_total

    @property
    def render_failures_total(self) -> int:
        """Get total render failures."""
        return self._render_failures_total

    @property
    def render_bytes_total(self) -> int:
        """Get total bytes rendered."""
        return self._render_bytes_total

    def get_summary(self) -> dict[str, object]:
        """Get metrics summary.

        Returns:
            Dictionary of metric name to value.
        """
        return {
            "renders_total": self._renders_total,
            "render_failures_total": self._render_failures_total,
            "render_bytes_total": self._render_bytes_total,
            "last_render_ms": self._last_render_ms,
            "status_counts": dict(self._status_counts),
        }
