"""Status roll-up from services to environments and the whole page."""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import structlog

from statuspage.status.models import Environment, Status


if TYPE_CHECKING:
    from statuspage.renderer.models import PageConfig


logger = structlog.get_logger()


@dataclass(frozen=True)
class EnvironmentStatus:
    """An environment together with its derived status.

    Attributes:
        environment: The environment as configured.
        status: Worst status among its services.
    """

    environment: Environment
    status: Status


@dataclass(frozen=True)
class AggregateResult:
    """Result of aggregating a list of environments.

    Attributes:
        status: Worst status across every service of every environment.
        environments: Per-environment statuses, in input order.
    """

    status: Status
    environments: list[EnvironmentStatus] = field(default_factory=list)


def worst_status(statuses: Iterable[Status]) -> Status:
    """Return the most severe status, or NOISSUE when there are none.

    Args:
        statuses: Statuses to compare.

    Returns:
        The status with the highest severity.
    """
    return max(statuses, key=lambda s: s.severity, default=Status.NOISSUE)


def environment_status(environment: Environment) -> Status:
    """Derive an environment's status from its services.

    Args:
        environment: Environment to evaluate.

    Returns:
        Worst status among the environment's services.
    """
    return worst_status(service.status for service in environment.services)


def aggregate(environments: Sequence[Environment]) -> AggregateResult:
    """Roll service statuses up to environment and page level.

    Args:
        environments: Environments in display order.

    Returns:
        AggregateResult with the overall status and per-environment statuses.
    """
    derived = [
        EnvironmentStatus(environment=env, status=environment_status(env))
        for env in environments
    ]
    overall = worst_status(item.status for item in derived)

    logger.debug(
        "status_aggregated",
        component="status",
        environments=len(derived),
        overall_status=overall.value,
    )

    return AggregateResult(status=overall, environments=derived)


def with_derived_status(config: "PageConfig") -> "PageConfig":
    """Return a copy of a page config with current_status recomputed.

    Args:
        config: Page configuration.

    Returns:
        Page configuration whose current_status matches its services.
    """
    result = aggregate(config.environments)
    return config.model_copy(update={"current_status": result.status})
