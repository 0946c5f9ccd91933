"""Helpers for redacting API keys from logged text."""

from __future__ import annotations

import re

REDACTED = "[REDACTED]"

_KEY_VALUE_SECRET_RE = re.compile(
    r"""(?ix)
    \b
    (
      appid|
      api[_-]?key|
      key|
      token|
      secret|
      authorization
    )
    \s*[:=]\s*
    ([^\s,;&"']+)
    """
)


def sanitize_text(text: str) -> str:
    """Redact credential values embedded in plain text or query strings."""
    return _KEY_VALUE_SECRET_RE.sub(lambda m: f"{m.group(1)}={REDACTED}", text)
