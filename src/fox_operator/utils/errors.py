"""Error sanitization utilities to prevent information leakage."""

from __future__ import annotations

import re

# Patterns that might expose sensitive information, with their replacement
SENSITIVE_PATTERNS = [
    # Env var values echoed back in API server error bodies
    (r'("value"\s*:\s*)"(?:[^"\\]|\\.)*"', r'\1"[REDACTED]"'),
    (r"('value'\s*:\s*)'(?:[^'\\]|\\.)*'", r"\1'[REDACTED]'"),
    (r"(Bearer\s+)[A-Za-z0-9\-\._~\+/]+=*", r"\1[REDACTED]"),
    (r"(Authorization[:\s]+)\S+", r"\1[REDACTED]"),
]

# Keywords whose following value is redacted
SENSITIVE_FIELDS = ("password", "secret", "token", "credentials")


def sanitize_error_message(message: str) -> str:
    """Sanitize error message to remove sensitive information.

    Args:
        message: Original error message

    Returns:
        Sanitized error message with sensitive data redacted
    """
    sanitized = message

    for pattern, replacement in SENSITIVE_PATTERNS:
        sanitized = re.sub(pattern, replacement, sanitized, flags=re.IGNORECASE)

    for field in SENSITIVE_FIELDS:
        sanitized = re.sub(
            rf"\b{field}[:=\s]+([^\s,;\)]+)",
            rf"{field}: [REDACTED]",
            sanitized,
            flags=re.IGNORECASE,
        )

    return sanitized


def sanitize_exception(error: Exception) -> str:
    """Sanitize exception message.

    Args:
        error: Exception object

    Returns:
        Sanitized error message
    """
    return sanitize_error_message(str(error))

