"""Message key parsing."""

from __future__ import annotations

from consolebrand.branding.constants import BRAND_PREFIX, COMMON_PREFIX
from consolebrand.branding.models import MessageKey


def parse_message_key(key: str | None) -> MessageKey | None:
    """Split ``obrand.<scope>.<name>`` into its scope and local name.

    Returns None for anything that is not a branding key: a missing key, a
    key without the ``obrand.`` prefix, or an empty scope or name segment.
    """
    if not key or not key.startswith(BRAND_PREFIX + "."):
        return None
    scope, sep, name = key[len(BRAND_PREFIX) + 1 :].partition(".")
    if not scope or not sep or not name:
        return None
    return MessageKey(scope=scope, name=name)


def strip_scope_prefix(bundle_key: str, scope: str) -> str | None:
    """Return the bare name of a bundle key visible from ``scope``.

    Keys under ``obrand.<scope>.`` and ``obrand.common.`` are visible; any
    other key yields None.
    """
    for prefix in (f"{BRAND_PREFIX}.{scope}.", COMMON_PREFIX + "."):
        if bundle_key.startswith(prefix):
            name = bundle_key[len(prefix) :]
            return name or None
    return None
