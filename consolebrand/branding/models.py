"""Branding framework models."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable


class BrandingValidationError(ValueError):
    """Raised when a branding package fails validation."""


@dataclass(frozen=True, slots=True)
class ThemeMetadata:
    """Theme metadata parsed from branding.yaml."""

    version: int
    messages_bundle: str
    stylesheets: dict[str, str] = field(default_factory=dict)
    resources_bundle: str | None = None


@dataclass(frozen=True, slots=True)
class BrandingTheme:
    """A loaded branding package.

    ``bundle_loader`` returns the flattened message bundle for a locale and
    is expected to cache its results.
    """

    name: str
    path: Path
    metadata: ThemeMetadata
    bundle_loader: Callable[[str], dict[str, str]] = field(repr=False, compare=False)
    resources: dict[str, str] = field(default_factory=dict)

    @property
    def version(self) -> int:
        return self.metadata.version

    def messages(self, locale: str) -> dict[str, str]:
        return self.bundle_loader(locale)

    def stylesheet(self, application: str) -> Path | None:
        relative = self.metadata.stylesheets.get(application)
        if not relative:
            return None
        return self.path / relative

    def resource(self, name: str) -> Path | None:
        relative = self.resources.get(name)
        if not relative:
            return None
        return self.path / relative


@dataclass(frozen=True, slots=True)
class ThemeLoadResult:
    """Outcome of loading one candidate directory."""

    source_dir: Path
    theme: BrandingTheme | None = None
    error: str = ""

    @property
    def ok(self) -> bool:
        return self.theme is not None


@dataclass(frozen=True, slots=True)
class MessageKey:
    """A parsed ``obrand.<scope>.<name>`` key."""

    scope: str
    name: str
