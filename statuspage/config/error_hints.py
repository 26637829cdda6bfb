"""Remediation hints shown next to page file validation errors.

A hint is picked by the last segment of the error location first (so every
``status`` field gets the list of valid statuses), then by the Pydantic
error type.
"""

from typing import Final


STATUS_CHOICES: Final = "noissue, incident, outage"

ERROR_HINTS: Final[dict[str, str]] = {
    "missing": "Add this key; it has no default.",
    "enum": "Use one of the listed values.",
    "float_type": "Give a number, e.g. 30 or 12.5.",
    "string_type": "Give a text value; quote it if YAML reads it as something else.",
    "list_type": "Give a YAML list (lines starting with '- ').",
    "dict_type": "Give a YAML mapping of keys to values.",
    "model_type": "This section must be a mapping of keys to values.",
    "extra_forbidden": "Unknown key. Check the spelling against the example config.",
    "greater_than": "The value must be above zero.",
    "less_than_equal": "The value is above the allowed maximum.",
    "string_too_short": "The text must not be empty.",
    "too_short": "The list must have at least one entry.",
    "value_error": "Check the value; URLs must start with http:// or https://.",
    "file_not_found": "No file at this path. Check the --config argument.",
    "file_read_error": "The path could not be read as a file. Point --config at a YAML file.",
    "encoding_error": "The file is not UTF-8 text. Re-save it with UTF-8 encoding.",
    "yaml_parse_error": "The file is not valid YAML. Check indentation and quoting.",
}

FIELD_HINTS: Final[dict[str, str]] = {
    "status": f"Must be one of: {STATUS_CHOICES}.",
    "current_status": f"Must be one of: {STATUS_CHOICES}, or omitted to derive it.",
    "default_status": f"Must be one of: {STATUS_CHOICES}.",
    "logo": "Use an image URL or inline SVG markup starting with '<svg'.",
    "api_url": "Must be an http(s) URL, e.g. 'https://api.gridfox.com'.",
    "open_issue_statuses": "List the issue status values that count as open, e.g. [Open].",
    "GRIDFOX_API_KEY": "Set the GRIDFOX_API_KEY environment variable or add it to .env.",
}

DEFAULT_HINT: Final = "See config/status.example.yaml for a valid page file."


def get_error_hint(error_type: str, field_name: str | None = None) -> str:
    """Pick the hint for one validation error.

    Args:
        error_type: Pydantic error type, or one of the loader's own types.
        field_name: Dotted error location, if known.

    Returns:
        Hint text.
    """
    if field_name:
        # 'environments.0.services.1.status' -> 'status'
        leaf = field_name.rsplit(".", 1)[-1]
        if leaf in FIELD_HINTS:
            return FIELD_HINTS[leaf]
    return ERROR_HINTS.get(error_type, DEFAULT_HINT)


def format_validation_error(
    location: str,
    message: str,
    error_type: str,
    *,
    include_hint: bool = True,
) -> str:
    """Format a validation error for the terminal.

    Args:
        location: Dotted error location (e.g., 'environments.0.name').
        message: Validation message.
        error_type: Error type used to pick a hint.
        include_hint: Whether to add an indented hint line.

    Returns:
        One line, or two when a hint is included.
    """
    line = f"{location}: {message}"
    if not include_hint:
        return line
    return f"{line}\n    Hint: {get_error_hint(error_type, location)}"
