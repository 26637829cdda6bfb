"""Unit tests for status aggregation."""

import itertools

import pytest

from statuspage.status import (
    Environment,
    Status,
    aggregate,
    environment_status,
    with_derived_status,
    worst_status,
)
from tests.helpers.pages import make_environment, make_page


class TestWorstStatus:
    """Tests for worst_status."""

    @pytest.mark.unit
    def test_empty_is_noissue(self) -> None:
        """No statuses means no issue."""
        assert worst_status([]) is Status.NOISSUE

    @pytest.mark.unit
    @pytest.mark.parametrize(
        ("statuses", "expected"),
        [
            ([Status.NOISSUE, Status.NOISSUE], Status.NOISSUE),
            ([Status.NOISSUE, Status.INCIDENT], Status.INCIDENT),
            ([Status.INCIDENT, Status.OUTAGE, Status.NOISSUE], Status.OUTAGE),
            ([Status.OUTAGE, Status.INCIDENT], Status.OUTAGE),
        ],
    )
    def test_most_severe_wins(self, statuses: list[Status], expected: Status) -> None:
        """Outage dominates incident, which dominates noissue."""
        assert worst_status(statuses) is expected

    @pytest.mark.unit
    def test_matches_max_by_severity_for_all_combinations(self) -> None:
        """Result equals the max by severity for every small combination."""
        for size in range(1, 4):
            for combo in itertools.product(list(Status), repeat=size):
                expected = max(combo, key=lambda s: s.severity)
                assert worst_status(combo) is expected

    @pytest.mark.unit
    def test_accepts_generator(self) -> None:
        """Any iterable is accepted."""
        assert worst_status(s for s in [Status.INCIDENT]) is Status.INCIDENT


class TestEnvironmentStatus:
    """Tests for environment_status."""

    @pytest.mark.unit
    def test_environment_without_services(self) -> None:
        """An empty environment has no issue."""
        assert environment_status(Environment(name="Empty")) is Status.NOISSUE

    @pytest.mark.unit
    def test_environment_with_outage(self) -> None:
        """One outage makes the environment an outage."""
        env = make_environment("Prod", Status.NOISSUE, Status.INCIDENT, Status.OUTAGE)

        assert environment_status(env) is Status.OUTAGE


class TestAggregate:
    """Tests for aggregate."""

    @pytest.mark.unit
    def test_empty_environments(self) -> None:
        """No environments means an overall status of noissue."""
        result = aggregate([])

        assert result.status is Status.NOISSUE
        assert result.environments == []

    @pytest.mark.unit
    def test_incident_in_first_environment(self) -> None:
        """An incident in one environment sets the overall status."""
        first = make_environment("Production", Status.INCIDENT)
        second = make_environment("Staging", Status.NOISSUE, Status.NOISSUE)

        result = aggregate([first, second])

        assert result.status is Status.INCIDENT
        assert [item.status for item in result.environments] == [
            Status.INCIDENT,
            Status.NOISSUE,
        ]

    @pytest.mark.unit
    def test_preserves_input_order(self) -> None:
        """Per-environment results follow input order, not severity."""
        envs = [
            make_environment("a", Status.NOISSUE),
            make_environment("b", Status.OUTAGE),
            make_environment("c", Status.INCIDENT),
        ]

        result = aggregate(envs)

        assert [item.environment.name for item in result.environments] == [
            "a",
            "b",
            "c",
        ]
        assert result.status is Status.OUTAGE

    @pytest.mark.unit
    def test_overall_equals_max_over_all_services(self) -> None:
        """Page status is the worst status of every service everywhere."""
        envs = [
            make_environment("a", Status.INCIDENT, Status.NOISSUE),
            make_environment("b"),
            make_environment("c", Status.NOISSUE, Status.OUTAGE),
        ]
        all_statuses = [s.status for env in envs for s in env.services]

        result = aggregate(envs)

        assert result.status is max(all_statuses, key=lambda s: s.severity)


class TestWithDerivedStatus:
    """Tests for with_derived_status."""

    @pytest.mark.unit
    def test_recomputes_current_status(self) -> None:
        """current_status is replaced by the derived value."""
        page = make_page(
            make_environment("Production", Status.OUTAGE),
            current_status=Status.NOISSUE,
        )

        derived = with_derived_status(page)

        assert derived.current_status is Status.OUTAGE
        assert page.current_status is Status.NOISSUE
        assert derived.environments == page.environments
