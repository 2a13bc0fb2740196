"""Structlog processors applied before rendering.

Chat payloads and bearer credentials flow through most of the core, so
both are scrubbed from log entries before they leave the process.
"""

from typing import Any

# Keys whose values are never written to logs
SENSITIVE_PATTERNS = frozenset(
    {
        "password",
        "secret",
        "token",
        "authorization",
        "credential",
        "cookie",
        "jwt",
        "bearer",
    }
)

# Message bodies are user content; only their length is kept
CONTENT_KEYS = frozenset({"content", "message_content"})


def mask_sensitive_data(
    mask_value: str = "***REDACTED***",
    additional_patterns: frozenset[str] | None = None,
):
    """Create a processor that masks values of credential-like keys.

    Matching is a case-insensitive substring test on the key name.

    Args:
        mask_value: Replacement for sensitive values.
        additional_patterns: Extra key fragments to treat as sensitive.

    Returns:
        A structlog processor function.
    """
    patterns = SENSITIVE_PATTERNS
    if additional_patterns:
        patterns = patterns | additional_patterns

    def processor(
        logger: Any, method_name: str, event_dict: dict[str, Any]
    ) -> dict[str, Any]:
        masked = {}
        for key, value in event_dict.items():
            key_lower = key.lower()
            if value is not None and any(p in key_lower for p in patterns):
                masked[key] = mask_value
            else:
                masked[key] = value
        return masked

    return processor


def redact_message_content(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Replace message bodies with their length."""
    for key in CONTENT_KEYS:
        value = event_dict.get(key)
        if isinstance(value, str):
            event_dict[key] = f"<{len(value)} chars>"
    return event_dict


def add_app_info(app_name: str, app_version: str = "unknown"):
    """Create a processor that stamps the application name and version.

    Args:
        app_name: Name of the application.
        app_version: Version string (typically the git SHA).

    Returns:
        A structlog processor function.
    """

    def processor(
        logger: Any, method_name: str, event_dict: dict[str, Any]
    ) -> dict[str, Any]:
        event_dict["app_name"] = app_name
        event_dict["app_version"] = app_version
        return event_dict

    return processor
