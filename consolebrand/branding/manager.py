"""Branding message lookup service."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from consolebrand.branding.constants import CURRENT_BRANDING_VERSION, DEFAULT_LOCALE
from consolebrand.branding.keys import parse_message_key, strip_scope_prefix
from consolebrand.branding.models import BrandingTheme
from consolebrand.branding.registry import BrandingRegistry

logger = logging.getLogger(__name__)


class BrandingManager:
    """Resolves branding messages and assets across the installed themes.

    Themes are applied in directory-name order, so when two themes define
    the same key the one whose directory sorts last wins. Nothing here
    raises for a missing root, a broken theme or a malformed key; those
    degrade to fewer (or no) messages.
    """

    def __init__(
        self,
        root: Path | None,
        *,
        supported_version: int = CURRENT_BRANDING_VERSION,
        registry: BrandingRegistry | None = None,
    ) -> None:
        self._registry = registry or BrandingRegistry(root, supported_version=supported_version)

    @property
    def root_path(self) -> Path | None:
        """Branding root; collaborators serve images and stylesheets from here."""
        return self._registry.root

    @property
    def registry(self) -> BrandingRegistry:
        return self._registry

    def list_themes(self) -> tuple[BrandingTheme, ...]:
        return self._registry.list_themes()

    def get_message(self, key: str | None, locale: str = DEFAULT_LOCALE) -> str:
        """Return the message for ``obrand.<scope>.<name>``, or "" when there is none."""
        parsed = parse_message_key(key)
        if parsed is None:
            return ""
        return self.build_message_map(parsed.scope, locale).get(parsed.name, "")

    def build_message_map(self, scope: str, locale: str = DEFAULT_LOCALE) -> dict[str, str]:
        """Merge the ``common`` and ``scope`` messages of every theme for a locale."""
        key_values: dict[str, str] = {}
        if not scope:
            return key_values
        for theme in self.list_themes():
            for bundle_key, value in theme.messages(locale).items():
                name = strip_scope_prefix(bundle_key, scope)
                if name is not None:
                    # Later themes override earlier ones.
                    key_values[name] = value
        return key_values

    def render_messages_json(self, scope: str, locale: str = DEFAULT_LOCALE) -> str | None:
        """Return the merged messages as a flat JSON object, or None if there are none."""
        key_values = self.build_message_map(scope, locale)
        if not key_values:
            return None
        return json.dumps(key_values, ensure_ascii=False, separators=(",", ":"))

    def stylesheets(self, application: str) -> list[Path]:
        """Stylesheets the themes declare for ``application``, in precedence order."""
        paths: list[Path] = []
        for theme in self.list_themes():
            path = theme.stylesheet(application)
            if path is None:
                continue
            if not _is_file(path):
                logger.debug("stylesheet %s of theme %s is missing", path, theme.name)
                continue
            paths.append(path)
        return paths

    def resolve_resource(self, name: str) -> Path | None:
        """Return the file for a named resource from the last theme that provides it."""
        for theme in reversed(self.list_themes()):
            path = theme.resource(name)
            if path is not None and _is_file(path):
                return path
        return None


def _is_file(path: Path) -> bool:
    try:
        return path.is_file()
    except OSError:
        return False
