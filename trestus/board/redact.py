"""Credential redaction for request logging."""

import httpx


# Query parameters that must never appear in logs
SENSITIVE_PARAMS = frozenset({"key", "token"})

REDACTED_VALUE = "[REDACTED]"


def redact_url(url: httpx.URL | str) -> str:
    """Replace credential query parameters in a URL.

    Args:
        url: Request URL, possibly carrying ``key`` and ``token``.

    Returns:
        The URL as text with sensitive parameter values redacted.
    """
    url = httpx.URL(str(url))
    params = [
        (name, REDACTED_VALUE if name.lower() in SENSITIVE_PARAMS else value)
        for name, value in url.params.multi_items()
    ]
    return str(url.copy_with(params=params))
