"""Settings resolver.

Resolves solvehash settings from multiple sources. Later sources win:
1. Built-in defaults
2. ``solvehash.yaml`` in the project directory
3. ``SOLVEHASH_*`` environment variables
4. Explicit keyword overrides
"""

import logging
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from solvehash.primitives.errors import ConfigurationError

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "solvehash.yaml"
ENV_PREFIX = "SOLVEHASH_"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class HashSettings:
    """Resolved settings.

    Attributes:
        log_level: Level name for the package logger.
        log_dir: Directory for rotating log files, or None for console only.
        analyzer_name: Analyzer identity used when a snapshot has none.
        analyzer_version: Analyzer version used when a snapshot has none.
    """

    log_level: str = "WARNING"
    log_dir: Optional[Path] = None
    analyzer_name: str = "solvehash"
    analyzer_version: str = "1"


_FIELD_NAMES = tuple(f.name for f in fields(HashSettings))


class SettingsResolver:
    """Pure settings resolver; reads files and environment, writes nothing."""

    def __init__(
        self,
        project_path: Optional[Path] = None,
        environ: Optional[Mapping[str, str]] = None,
    ):
        """Initialize resolver.

        Args:
            project_path: Directory holding solvehash.yaml. Defaults to cwd.
            environ: Environment mapping. Defaults to os.environ.
        """
        self.project_path = Path(project_path) if project_path else Path.cwd()
        self.environ = os.environ if environ is None else environ

    def resolve(self, **overrides: Any) -> HashSettings:
        """Resolve settings from all sources.

        Raises:
            ConfigurationError: Unknown keys, bad values, unreadable config file.
        """
        values: Dict[str, Any] = {}
        values.update(self._load_file())
        values.update(self._load_env())
        values.update({k: v for k, v in overrides.items() if v is not None})

        unknown = sorted(set(values) - set(_FIELD_NAMES))
        if unknown:
            raise ConfigurationError(
                f"Unknown setting(s): {', '.join(unknown)}", field=unknown[0]
            )

        return self._validate(replace(HashSettings(), **values))

    def _load_file(self) -> Dict[str, Any]:
        config_file = self.project_path / CONFIG_FILENAME
        if not config_file.exists():
            return {}

        try:
            data = yaml.safe_load(config_file.read_text(encoding="utf-8"))
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {config_file}: {e}")

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigurationError(f"{config_file} must contain a mapping")

        logger.debug(f"Loaded settings from {config_file}")
        return dict(data)

    def _load_env(self) -> Dict[str, Any]:
        values = {}
        for name in _FIELD_NAMES:
            raw = self.environ.get(ENV_PREFIX + name.upper())
            if raw:
                values[name] = raw
        return values

    def _validate(self, settings: HashSettings) -> HashSettings:
        level = str(settings.log_level).upper()
        if level not in LOG_LEVELS:
            raise ConfigurationError(
                f"log_level must be one of {', '.join(LOG_LEVELS)} "
                f"(got {settings.log_level!r})",
                field="log_level",
            )

        log_dir = settings.log_dir
        if log_dir is not None and not isinstance(log_dir, Path):
            log_dir = Path(str(log_dir)).expanduser()

        for name in ("analyzer_name", "analyzer_version"):
            value = getattr(settings, name)
            if value is None or str(value) == "":
                raise ConfigurationError(f"{name} must not be empty", field=name)

        return replace(
            settings,
            log_level=level,
            log_dir=log_dir,
            analyzer_name=str(settings.analyzer_name),
            analyzer_version=str(settings.analyzer_version),
        )


def load_settings(project_path: Optional[Path] = None, **overrides: Any) -> HashSettings:
    """Resolve settings for ``project_path`` using the process environment."""
    return SettingsResolver(project_path).resolve(**overrides)
