"""Unit tests for error hints system."""

import pytest

from statuspage.config.error_hints import (
    DEFAULT_HINT,
    ERROR_HINTS,
    FIELD_HINTS,
    format_validation_error,
    get_error_hint,
)


class TestGetErrorHint:
    """Tests for get_error_hint function."""

    @pytest.mark.unit
    def test_returns_hint_for_known_error_type(self) -> None:
        """Test that known error types return their hints."""
        hint = get_error_hint("missing")
        assert hint == ERROR_HINTS["missing"]
        assert "no default" in hint

    @pytest.mark.unit
    def test_returns_default_for_unknown_error_type(self) -> None:
        """Test that unknown error types return default hint."""
        hint = get_error_hint("some_unknown_error_type")
        assert hint == DEFAULT_HINT

    @pytest.mark.unit
    def test_field_specific_hint_takes_precedence(self) -> None:
        """Test that field-specific hints override error type hints."""
        hint = get_error_hint("enum", field_name="environments.0.services.1.status")
        assert hint == FIELD_HINTS["status"]
        assert "noissue" in hint and "incident" in hint and "outage" in hint

    @pytest.mark.unit
    def test_api_key_hint(self) -> None:
        """Test the hint for a missing Gridfox API key."""
        hint = get_error_hint("missing", field_name="GRIDFOX_API_KEY")
        assert "GRIDFOX_API_KEY" in hint

    @pytest.mark.unit
    def test_unhinted_field_falls_back_to_type(self) -> None:
        """Test that fields without hints use the error type hint."""
        hint = get_error_hint("extra_forbidden", field_name="theme")
        assert hint == ERROR_HINTS["extra_forbidden"]


class TestFormatValidationError:
    """Tests for format_validation_error function."""

    @pytest.mark.unit
    def test_includes_hint(self) -> None:
        """Test formatted output includes location, message and hint."""
        formatted = format_validation_error(
            location="current_status",
            message="Input should be 'noissue', 'incident' or 'outage'",
            error_type="enum",
        )

        first_line, hint_line = formatted.split("\n")
        assert first_line.startswith("current_status: Input should be")
        assert hint_line == f"    Hint: {FIELD_HINTS['current_status']}"

    @pytest.mark.unit
    def test_without_hint(self) -> None:
        """Test that hints can be disabled."""
        formatted = format_validation_error(
            location="title",
            message="Input should be a valid string",
            error_type="string_type",
            include_hint=False,
        )

        assert formatted == "title: Input should be a valid string"
