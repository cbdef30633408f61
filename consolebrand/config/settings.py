"""Engine settings from the environment and a YAML config file."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Mapping

import yaml

from consolebrand.errors import ConsoleBrandError, ErrorCode

DEFAULT_CONFIG_PATH = Path("/etc/consolebrand/consolebrand.yaml")

ENV_ETC_DIR = "CONSOLEBRAND_ETC_DIR"
ENV_CONFIG = "CONSOLEBRAND_CONFIG"
ENV_LOG_DIR = "CONSOLEBRAND_LOG_DIR"


class EngineSettings:
    """Engine configuration; environment variables win over the config file."""

    def __init__(
        self,
        config_path: Path | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        self._environ = os.environ if environ is None else environ
        if config_path is None:
            raw = (self._environ.get(ENV_CONFIG) or "").strip()
            config_path = Path(raw) if raw else DEFAULT_CONFIG_PATH
        self._config_path = config_path
        self._values: dict[str, object] | None = None

    @property
    def config_path(self) -> Path:
        return self._config_path

    # -- directories --

    @property
    def etc_dir(self) -> Path:
        """Engine etc directory; raises ConsoleBrandError when not configured."""
        value = self._lookup(ENV_ETC_DIR, "etc_dir")
        if not value:
            raise ConsoleBrandError(
                ErrorCode.CONFIG_MISSING,
                path=self._config_path,
                details={"env": ENV_ETC_DIR},
            )
        return Path(value)

    @property
    def log_dir(self) -> Path | None:
        value = self._lookup(ENV_LOG_DIR, "log_dir")
        return Path(value) if value else None

    # -- helpers --

    def _lookup(self, env_name: str, file_key: str) -> str:
        raw = self._environ.get(env_name)
        if raw and raw.strip():
            return raw.strip()
        value = self._file_values().get(file_key)
        if value is None:
            return ""
        if not isinstance(value, str):
            raise ConsoleBrandError(
                ErrorCode.CONFIG_INVALID,
                message=f"Setting {file_key!r} must be a string.",
                path=self._config_path,
            )
        return value.strip()

    def _file_values(self) -> dict[str, object]:
        if self._values is not None:
            return self._values
        path = self._config_path
        if not path.is_file():
            self._values = {}
            return self._values
        try:
            data = yaml.safe_load(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError) as exc:
            raise ConsoleBrandError(
                ErrorCode.CONFIG_UNREADABLE, path=path, details={"original": str(exc)}
            ) from exc
        except yaml.YAMLError as exc:
            raise ConsoleBrandError(
                ErrorCode.CONFIG_INVALID, path=path, details={"original": str(exc)}
            ) from exc
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConsoleBrandError(ErrorCode.CONFIG_INVALID, path=path)
        self._values = data
        return self._values
