"""Service status model and severity roll-up.

This module provides:
- Status enum with a fixed severity order
- STATUS_INFO table of severity, title, legend label and icon per status
- Service and Environment models
- Aggregation of service statuses to environment and page level
"""

from statuspage.status.aggregator import (
    AggregateResult,
    EnvironmentStatus,
    aggregate,
    environment_status,
    with_derived_status,
    worst_status,
)
from statuspage.status.models import (
    STATUS_INFO,
    Environment,
    Service,
    Status,
    StatusInfo,
    StatusTableError,
)


__all__ = [
    "STATUS_INFO",
    "AggregateResult",
    "Environment",
    "EnvironmentStatus",
    "Service",
    "Status",
    "StatusInfo",
    "StatusTableError",
    "aggregate",
    "environment_status",
    "with_derived_status",
    "worst_status",
]
