"""Branding service bootstrap."""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler

from consolebrand.branding.manager import BrandingManager
from consolebrand.config.settings import EngineSettings
from consolebrand.errors import ConsoleBrandError, ErrorCode
from consolebrand.runtime_paths import resolve_branding_root


def configure_logger(settings: EngineSettings) -> logging.Logger:
    logger = logging.getLogger("consolebrand")
    if logger.handlers:
        return logger

    logger.setLevel(logging.INFO)
    handler: logging.Handler | None = None
    problem: dict[str, object] | None = None
    try:
        log_dir = settings.log_dir
        if log_dir is not None:
            log_dir.mkdir(parents=True, exist_ok=True)
            handler = RotatingFileHandler(
                log_dir / "branding.log",
                maxBytes=512_000,
                backupCount=3,
                encoding="utf-8",
            )
    except ConsoleBrandError as exc:
        problem = exc.to_dict()
    except OSError as exc:
        problem = ConsoleBrandError(
            ErrorCode.LOG_DIR_UNWRITABLE, details={"original": str(exc)}
        ).to_dict()
    if handler is None:
        handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(message)s"))
    logger.addHandler(handler)
    logger.propagate = False
    if problem is not None:
        logger.warning("log directory unavailable, logging to stderr: %s", problem)
    return logger


def create_branding_manager(settings: EngineSettings | None = None) -> BrandingManager:
    """Build the branding manager once at startup and scan the installed themes."""
    settings = settings or EngineSettings()
    logger = logging.getLogger("consolebrand.startup")

    root = resolve_branding_root(settings)
    manager = BrandingManager(root)
    themes = manager.list_themes()
    logger.info("branding root=%s themes=%d", root, len(themes))

    errors = manager.registry.load_errors()
    if errors:
        logger.warning("branding load warnings: %s", " | ".join(errors[:6]))
    return manager
