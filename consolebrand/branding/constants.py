"""Branding framework constants."""

from __future__ import annotations

import re

BRANDING_DIR_NAME = "branding"
BRAND_PREFIX = "obrand"
COMMON_SCOPE = "common"
COMMON_PREFIX = f"{BRAND_PREFIX}.{COMMON_SCOPE}"

# Anything ending in '.brand' is a branding package directory.
THEME_DIR_RE = re.compile(r"^.+\.brand$")

# Only one branding version is valid at a time; there is no backwards compatibility.
CURRENT_BRANDING_VERSION = 1

METADATA_FILE_NAME = "branding.yaml"
DEFAULT_MESSAGES_BUNDLE = "messages"
BUNDLE_SUFFIX = ".yaml"

DEFAULT_LOCALE = "en_US"
