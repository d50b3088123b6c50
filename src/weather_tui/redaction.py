"""Keep the Open-Meteo API key out of logs, errors and the status line."""

from __future__ import annotations

import re
from typing import Any

REDACTED = "[REDACTED]"

_SECRET_NAMES = ("apikey", "api_key", "api-key", "token")

# httpx error strings embed the full request URL, query string included.
_URL_PARAM_RE = re.compile(r"(?i)([?&](?:apikey|api_key|token)=)[^&#\s]+")
_ASSIGNMENT_RE = re.compile(r"(?i)\b(apikey|api[_-]key|token)\s*[:=]\s*([^\s,;&'\"]+)")


def _is_secret_name(name: Any) -> bool:
    return str(name).strip().lower() in _SECRET_NAMES


def sanitize_text(text: str) -> str:
    """Mask API key values in URLs and `key=value` fragments."""
    masked = _URL_PARAM_RE.sub(r"\1" + REDACTED, text)

    def _mask_assignment(match: re.Match[str]) -> str:
        if match.group(2) == REDACTED:
            return match.group(0)
        return f"{match.group(1)}={REDACTED}"

    return _ASSIGNMENT_RE.sub(_mask_assignment, masked)


def sanitize_for_logging(value: Any) -> Any:
    """Copy request params or payloads with secret entries masked."""
    if isinstance(value, dict):
        return {
            key: REDACTED if _is_secret_name(key) else sanitize_for_logging(child)
            for key, child in value.items()
        }
    if isinstance(value, (list, tuple)):
        return type(value)(sanitize_for_logging(item) for item in value)
    if isinstance(value, str):
        return sanitize_text(value)
    return value
