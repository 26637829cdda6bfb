"""Models for service status classification and display."""

from dataclasses import dataclass
from enum import Enum
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field


class Status(str, Enum):
    """Operational status of a service, environment or page.

    Severity order: NOISSUE < INCIDENT < OUTAGE.
    """

    NOISSUE = "noissue"
    INCIDENT = "incident"
    OUTAGE = "outage"

    @property
    def severity(self) -> int:
        """Severity rank used for roll-ups."""
        return STATUS_INFO[self].severity


@dataclass(frozen=True)
class StatusInfo:
    """Display and ordering data for a single status.

    Attributes:
        severity: Rank in the severity order (higher is worse).
        title: Headline text for the status.
        label: Short label used in the legend row.
        icon: Inline SVG markup.
    """

    severity: int
    title: str
    label: str
    icon: str


class StatusTableError(Exception):
    """Raised when the status table does not cover exactly the Status members."""

    def __init__(self, missing: set[str], extra: set[str]) -> None:
        """Initialize the error.

        Args:
            missing: Status values with no table entry.
            extra: Table keys that are not Status values.
        """
        self.missing = missing
        self.extra = extra
        super().__init__(
            f"Status table mismatch: missing={sorted(missing)} extra={sorted(extra)}"
        )


NOISSUE_ICON = (
    '<svg viewBox="0 0 20 20" fill="none" xmlns="http://www.w3.org/2000/svg">'
    '<path fill-rule="evenodd" clip-rule="evenodd" d="M10 20C15.5229 20 20 15.5228 '
    "20 10C20 4.47715 15.5229 0 10 0C4.47716 0 0 4.47715 0 10C0 15.5228 4.47716 20 "
    '10 20ZM6 10L9 13L14 8L13 7L9 11L7 9L6 10Z" fill="#6FBA97"/></svg>'
)

INCIDENT_ICON = (
    '<svg viewBox="0 0 20 18" fill="none" xmlns="http://www.w3.org/2000/svg">'
    '<path fill-rule="evenodd" clip-rule="evenodd" d="M1.77512 18H10H18.2249C19.4574 '
    "18 20.2271 16.665 19.6096 15.5983L11.3847 1.39172C10.7684 0.327268 9.23158 "
    "0.327264 8.61532 1.39172L0.390434 15.5983C-0.22711 16.665 0.542584 18 1.77512 "
    '18ZM9 6H11V11H9V6ZM11 13H9V15H11V13Z" fill="#F2C661"/></svg>'
)

OUTAGE_ICON = (
    '<svg viewBox="0 0 20 20" fill="none" xmlns="http://www.w3.org/2000/svg">'
    '<path fill-rule="evenodd" clip-rule="evenodd" d="M10 20C15.5228 20 20 15.5228 '
    "20 10C20 4.47715 15.5228 0 10 0C4.47715 0 0 4.47715 0 10C0 15.5228 4.47715 20 "
    '10 20ZM5.5 9.5V10.5H14.5V9.5H5.5Z" fill="#D83D4E"/></svg>'
)


def _build_status_table(entries: dict[str, StatusInfo]) -> dict[Status, StatusInfo]:
    """Key a status table by Status, rejecting missing or unknown entries.

    Args:
        entries: Mapping of status value to its display data.

    Returns:
        Table keyed by Status member.

    Raises:
        StatusTableError: If the keys are not exactly the Status values.
    """
    expected = {status.value for status in Status}
    missing = expected - entries.keys()
    extra = entries.keys() - expected
    if missing or extra:
        raise StatusTableError(missing, extra)

    severities = [info.severity for info in entries.values()]
    if len(set(severities)) != len(severities):
        msg = "Status severities must be distinct"
        raise ValueError(msg)

    return {Status(value): info for value, info in entries.items()}


STATUS_INFO: dict[Status, StatusInfo] = _build_status_table(
    {
        "noissue": StatusInfo(
            severity=0,
            title="All Systems Operational",
            label="No issue",
            icon=NOISSUE_ICON,
        ),
        "incident": StatusInfo(
            severity=1,
            title="Some Systems Are Experiencing Issues",
            label="Incident",
            icon=INCIDENT_ICON,
        ),
        "outage": StatusInfo(
            severity=2,
            title="Service Disruption Ongoing",
            label="Outage",
            icon=OUTAGE_ICON,
        ),
    }
)


class Service(BaseModel):
    """A single service and its current status.

    Attributes:
        name: Display name of the service.
        status: Current status.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: Annotated[str, Field(min_length=1)]
    status: Status = Status.NOISSUE


class Environment(BaseModel):
    """A named group of services, in display order.

    Attributes:
        name: Display name of the environment.
        services: Services in the order they are shown.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: Annotated[str, Field(min_length=1)]
    services: list[Service] = Field(default_factory=list)
