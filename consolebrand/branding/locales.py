"""Locale normalization and bundle fallback chains."""

from __future__ import annotations

import re

from consolebrand.branding.constants import DEFAULT_LOCALE

_LOCALE_PART_RE = re.compile(r"^[A-Za-z0-9]+$")


def normalize_locale(locale: str | None) -> str:
    """Normalize ``fr-fr``, ``fr_FR`` or ``FR`` style tags to ``fr_FR`` / ``fr``.

    Unusable values fall back to the default locale.
    """
    raw = (locale or "").strip().replace("-", "_")
    # Drop encodings and modifiers such as en_US.UTF-8 or de_DE@euro.
    raw = raw.split(".", 1)[0].split("@", 1)[0]
    parts = [part for part in raw.split("_") if part]
    if not parts or not all(_LOCALE_PART_RE.match(part) for part in parts):
        return DEFAULT_LOCALE
    language = parts[0].lower()
    rest = parts[1:]
    if rest:
        rest[0] = rest[0].upper()
    return "_".join([language, *rest])


def candidate_suffixes(locale: str | None) -> list[str]:
    """Return bundle name suffixes from least to most specific.

    ``fr_FR`` gives ``["", "_fr", "_fr_FR"]``; the empty suffix is the base
    bundle.
    """
    parts = normalize_locale(locale).split("_")
    suffixes = [""]
    for index in range(1, len(parts) + 1):
        suffixes.append("_" + "_".join(parts[:index]))
    return suffixes
