"""Turning outside text into lookup terms (deep links, paste, drag and drop)."""

from __future__ import annotations

from typing import Optional
from urllib.parse import parse_qsl, urlsplit

from benedict.config import Settings, settings as default_settings


def parse_deep_link(url: str, config: Settings = default_settings) -> Optional[str]:
    """Return the term from ``benedict://lookup?term=...``, else None.

    Only the first ``term`` query item counts. The value is returned as-is;
    trimming is left to the lookup itself.
    """
    try:
        parts = urlsplit(url.strip())
    except ValueError:
        return None
    if parts.scheme.lower() != config.URL_SCHEME or parts.netloc.lower() != config.DEEP_LINK_HOST:
        return None
    for name, value in parse_qsl(parts.query, keep_blank_values=True):
        if name == "term":
            return value
    return None


def clean_dropped_text(text: str, config: Settings = default_settings) -> str:
    """Cut pasted or dropped text down to a lookup term."""
    return text[: config.INTAKE_MAX_CHARS].strip()
