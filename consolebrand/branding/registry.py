"""Branding package discovery and registry."""

from __future__ import annotations

import logging
import threading
from pathlib import Path

from consolebrand.branding.constants import CURRENT_BRANDING_VERSION, THEME_DIR_RE
from consolebrand.branding.loader import try_load_theme
from consolebrand.branding.models import BrandingTheme, ThemeLoadResult

logger = logging.getLogger(__name__)

_MAX_THEME_DIR_CANDIDATES = 512


class BrandingRegistry:
    """Scans the branding root once and keeps the valid themes in precedence order."""

    def __init__(self, root: Path | None, *, supported_version: int = CURRENT_BRANDING_VERSION) -> None:
        self._root = root
        self._supported_version = supported_version
        self._themes: tuple[BrandingTheme, ...] | None = None
        self._load_errors: list[str] = []
        self._scan_lock = threading.Lock()
        self._scan_count = 0

    @property
    def root(self) -> Path | None:
        return self._root

    @property
    def scan_count(self) -> int:
        return self._scan_count

    def list_themes(self) -> tuple[BrandingTheme, ...]:
        themes = self._themes
        if themes is not None:
            return themes
        with self._scan_lock:
            if self._themes is not None:
                return self._themes
            themes = self._scan()
            if themes is None:
                # Root missing or unreadable: report no branding, try again next call.
                return ()
            self._themes = themes
            self._scan_count += 1
            return themes

    def load_errors(self) -> list[str]:
        self.list_themes()
        return list(self._load_errors)

    def _scan(self) -> tuple[BrandingTheme, ...] | None:
        self._load_errors = []
        candidates = self._candidate_dirs()
        if candidates is None:
            return None
        results = [
            try_load_theme(theme_dir, supported_version=self._supported_version)
            for theme_dir in candidates
        ]
        return tuple(self._accept(results))

    def _candidate_dirs(self) -> list[Path] | None:
        root = self._root
        if root is None:
            return None
        try:
            if not root.is_dir():
                logger.debug("no branding installed at %s", root)
                return None
            entries = sorted(root.iterdir(), key=lambda path: path.name)
            candidates = [
                path for path in entries if THEME_DIR_RE.match(path.name) and path.is_dir()
            ]
        except OSError as exc:
            self._load_errors.append(f"Failed to list branding themes in {root}: {exc}")
            return None

        if len(candidates) > _MAX_THEME_DIR_CANDIDATES:
            self._load_errors.append(
                f"Branding directory limit exceeded in {root}; "
                f"only first {_MAX_THEME_DIR_CANDIDATES} folders were scanned."
            )
            candidates = candidates[:_MAX_THEME_DIR_CANDIDATES]
        return candidates

    def _accept(self, results: list[ThemeLoadResult]) -> list[BrandingTheme]:
        themes: list[BrandingTheme] = []
        for result in results:
            if result.theme is None:
                self._load_errors.append(result.error)
                logger.debug("skipping branding theme %s: %s", result.source_dir, result.error)
                continue
            themes.append(result.theme)
        return themes
