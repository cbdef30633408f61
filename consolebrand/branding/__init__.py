"""Branding theme framework exports."""

from consolebrand.branding.constants import CURRENT_BRANDING_VERSION, DEFAULT_LOCALE
from consolebrand.branding.manager import BrandingManager
from consolebrand.branding.models import BrandingTheme, BrandingValidationError, ThemeLoadResult
from consolebrand.branding.registry import BrandingRegistry

__all__ = [
    "CURRENT_BRANDING_VERSION",
    "DEFAULT_LOCALE",
    "BrandingManager",
    "BrandingTheme",
    "BrandingValidationError",
    "ThemeLoadResult",
    "BrandingRegistry",
]
