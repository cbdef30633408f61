"""Runtime path helpers for locating the branding root."""

from __future__ import annotations

import logging
from pathlib import Path

from consolebrand.branding.constants import BRANDING_DIR_NAME
from consolebrand.config.settings import EngineSettings
from consolebrand.errors import ConsoleBrandError

logger = logging.getLogger(__name__)


def branding_root(etc_dir: Path) -> Path:
    """Return the branding directory under an engine etc directory."""
    return etc_dir / BRANDING_DIR_NAME


def resolve_branding_root(settings: EngineSettings) -> Path | None:
    """Resolve the configured branding root.

    Returns None, meaning "no branding installed", when the etc directory
    cannot be determined.
    """
    try:
        etc_dir = settings.etc_dir
    except ConsoleBrandError as exc:
        logger.warning("branding disabled: %s", exc)
        return None
    return branding_root(etc_dir)
