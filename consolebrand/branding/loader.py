"""Branding package parsing and message bundle loading."""

from __future__ import annotations

import logging
import re
import threading
from pathlib import Path
from typing import Mapping

import yaml

from consolebrand.branding.constants import (
    BUNDLE_SUFFIX,
    CURRENT_BRANDING_VERSION,
    DEFAULT_MESSAGES_BUNDLE,
    METADATA_FILE_NAME,
)
from consolebrand.branding.locales import candidate_suffixes, normalize_locale
from consolebrand.branding.models import (
    BrandingTheme,
    BrandingValidationError,
    ThemeLoadResult,
    ThemeMetadata,
)

logger = logging.getLogger(__name__)

_BUNDLE_NAME_RE = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_-]*$")
_APPLICATION_RE = re.compile(r"^[a-z0-9][a-z0-9_-]*$")

_MAX_METADATA_BYTES = 32 * 1024
_MAX_BUNDLE_BYTES = 512 * 1024
_MAX_RESOURCES_BYTES = 64 * 1024
_MAX_VALUE_LEN = 16 * 1024


def load_theme_package(
    theme_dir: Path,
    *,
    supported_version: int = CURRENT_BRANDING_VERSION,
) -> BrandingTheme:
    """Load and validate a single branding package directory."""
    if not theme_dir.exists() or not theme_dir.is_dir():
        raise BrandingValidationError(f"Branding path is not a directory: {theme_dir}")

    theme_dir = theme_dir.absolute()
    metadata = _parse_metadata(
        _load_yaml_mapping(theme_dir / METADATA_FILE_NAME, max_bytes=_MAX_METADATA_BYTES),
        theme_dir,
    )
    if metadata.version != supported_version:
        raise BrandingValidationError(
            f"{theme_dir}: unsupported branding version {metadata.version}; "
            f"expected {supported_version}"
        )

    resources: dict[str, str] = {}
    if metadata.resources_bundle:
        resources_path = theme_dir / metadata.resources_bundle
        if resources_path.exists():
            resources = _parse_resources(
                _load_yaml_mapping(resources_path, max_bytes=_MAX_RESOURCES_BYTES),
                theme_dir,
            )

    return BrandingTheme(
        name=theme_dir.name,
        path=theme_dir,
        metadata=metadata,
        bundle_loader=MessageBundleLoader(theme_dir, metadata.messages_bundle),
        resources=resources,
    )


def try_load_theme(
    theme_dir: Path,
    *,
    supported_version: int = CURRENT_BRANDING_VERSION,
) -> ThemeLoadResult:
    """Load a branding package, reporting failure in the result instead of raising."""
    try:
        theme = load_theme_package(theme_dir, supported_version=supported_version)
    except (BrandingValidationError, OSError) as exc:
        return ThemeLoadResult(source_dir=theme_dir, error=str(exc))
    return ThemeLoadResult(source_dir=theme_dir, theme=theme)


class MessageBundleLoader:
    """Reads and caches the locale bundles of one theme.

    Bundles resolve like resource bundles: ``messages.yaml`` is overlaid by
    ``messages_fr.yaml`` and then ``messages_fr_FR.yaml``. If any file in
    the chain is unreadable the theme contributes nothing for that locale.
    """

    def __init__(self, theme_dir: Path, bundle_name: str) -> None:
        self._theme_dir = theme_dir
        self._bundle_name = bundle_name
        self._cache: dict[str, dict[str, str]] = {}
        self._lock = threading.Lock()

    def __call__(self, locale: str) -> dict[str, str]:
        normalized = normalize_locale(locale)
        with self._lock:
            cached = self._cache.get(normalized)
            if cached is None:
                cached = self._read_chain(normalized)
                self._cache[normalized] = cached
        return dict(cached)

    def bundle_path(self, suffix: str) -> Path:
        return self._theme_dir / f"{self._bundle_name}{suffix}{BUNDLE_SUFFIX}"

    def _read_chain(self, locale: str) -> dict[str, str]:
        merged: dict[str, str] = {}
        for suffix in candidate_suffixes(locale):
            path = self.bundle_path(suffix)
            try:
                if not path.is_file():
                    continue
                data = _load_yaml_mapping(path, max_bytes=_MAX_BUNDLE_BYTES, loader=yaml.BaseLoader)
                merged.update(_parse_bundle(data, path))
            except (BrandingValidationError, OSError) as exc:
                logger.warning("ignoring messages of %s for %s: %s", self._theme_dir.name, locale, exc)
                return {}
        return merged


def _parse_metadata(data: Mapping[str, object], theme_dir: Path) -> ThemeMetadata:
    _reject_unknown_keys(
        data,
        allowed={"version", "messages", "stylesheets", "resources"},
        context=f"{theme_dir}/{METADATA_FILE_NAME}",
    )

    version = data.get("version")
    if isinstance(version, bool) or not isinstance(version, int):
        raise BrandingValidationError(f"{theme_dir}: field 'version' must be an integer")

    messages_bundle = data.get("messages", DEFAULT_MESSAGES_BUNDLE)
    if not isinstance(messages_bundle, str) or not _BUNDLE_NAME_RE.match(messages_bundle):
        raise BrandingValidationError(f"{theme_dir}: field 'messages' must be a plain bundle name")

    stylesheets: dict[str, str] = {}
    raw_stylesheets = data.get("stylesheets") or {}
    if not isinstance(raw_stylesheets, Mapping):
        raise BrandingValidationError(f"{theme_dir}: field 'stylesheets' must be a mapping")
    for application, relative in raw_stylesheets.items():
        if not isinstance(application, str) or not _APPLICATION_RE.match(application):
            raise BrandingValidationError(f"{theme_dir}: invalid stylesheet application {application!r}")
        stylesheets[application] = _relative_file(relative, theme_dir, field_name=f"stylesheets.{application}")

    resources_bundle = data.get("resources")
    if resources_bundle is not None:
        resources_bundle = _relative_file(resources_bundle, theme_dir, field_name="resources")

    return ThemeMetadata(
        version=version,
        messages_bundle=messages_bundle,
        stylesheets=stylesheets,
        resources_bundle=resources_bundle,
    )


def _parse_resources(data: Mapping[str, object], theme_dir: Path) -> dict[str, str]:
    resources: dict[str, str] = {}
    for name, relative in data.items():
        if not isinstance(name, str) or not name.strip():
            raise BrandingValidationError(f"{theme_dir}: resource names must be non-empty strings")
        resources[name.strip()] = _relative_file(relative, theme_dir, field_name=f"resources.{name}")
    return resources


def _parse_bundle(data: Mapping[str, object], path: Path) -> dict[str, str]:
    messages: dict[str, str] = {}
    for key, value in data.items():
        if not isinstance(key, str):
            raise BrandingValidationError(f"{path}: message keys must be strings, got {key!r}")
        if not isinstance(value, str):
            raise BrandingValidationError(f"{path}: message {key!r} must be a scalar value")
        if len(value) > _MAX_VALUE_LEN:
            raise BrandingValidationError(f"{path}: message {key!r} value is too long")
        messages[key] = value
    return messages


def _relative_file(value: object, theme_dir: Path, *, field_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise BrandingValidationError(f"{theme_dir}: field {field_name!r} must be a non-empty string")
    cleaned = value.strip()
    candidate = Path(cleaned)
    if candidate.is_absolute() or ".." in candidate.parts:
        raise BrandingValidationError(
            f"{theme_dir}: field {field_name!r} must stay inside the branding directory"
        )
    return cleaned


def _load_yaml_mapping(
    path: Path,
    *,
    max_bytes: int,
    loader: type = yaml.SafeLoader,
) -> Mapping[str, object]:
    content = _read_text_limited(path, max_bytes=max_bytes)
    try:
        data = yaml.load(content, Loader=loader)
    except yaml.YAMLError as exc:
        raise BrandingValidationError(f"Invalid YAML in {path}: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise BrandingValidationError(f"Expected YAML mapping in {path}")
    return data


def _reject_unknown_keys(
    data: Mapping[str, object],
    *,
    allowed: set[str],
    context: str,
) -> None:
    unknown = sorted(str(key) for key in data.keys() if key not in allowed)
    if unknown:
        joined = ", ".join(unknown)
        raise BrandingValidationError(f"{context}: unsupported keys found: {joined}")


def _read_text_limited(path: Path, *, max_bytes: int) -> str:
    try:
        size = path.stat().st_size
    except OSError as exc:
        raise BrandingValidationError(f"Unable to stat {path}: {exc}") from exc
    if size > max_bytes:
        raise BrandingValidationError(f"{path}: file exceeds max size ({max_bytes} bytes)")
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise BrandingValidationError(f"Unable to read {path}: {exc}") from exc
