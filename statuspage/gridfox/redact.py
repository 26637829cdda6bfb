"""Header redaction utilities for logging."""

# Headers that must never appear in logs
SENSITIVE_HEADERS = frozenset(
    {
        "authorization",
        "cookie",
        "gridfox-api-key",
        "x-api-key",
        "proxy-authorization",
    }
)

REDACTED_VALUE = "[REDACTED]"


def redact_headers(headers: dict[str, str]) -> dict[str, str]:
    """Redact sensitive headers for logging.

    Args:
        headers: Original headers dictionary.

    Returns:
        New dictionary with sensitive values redacted.
    """
    return {
        key: REDACTED_VALUE if is_sensitive_header(key) else value
        for key, value in headers.items()
    }


def is_sensitive_header(header_name: str) -> bool:
    """Check if a header name is sensitive."""
    return header_name.lower() in SENSITIVE_HEADERS
