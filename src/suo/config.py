"""
suo Configuration

Loads configuration from a YAML file or environment variables.
Controls the lexer's keyword tables and the default generator target.
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from suo.log_types import DEFAULT_KEYWORDS, LOG_LINE_TYPES
from suo.parser.generator import GeneratorOptions

logger = logging.getLogger(__name__)


# Default configuration file locations (checked in order)
CONFIG_SEARCH_PATHS = [
    Path.home() / ".suo" / "config.yaml",
]


DEFAULT_CONFIG = {
    "target": "cactbot",
    "keywords": list(DEFAULT_KEYWORDS),
    "log_types": list(LOG_LINE_TYPES),
    "extra_log_types": [],          # Appended to log_types
    "log_level": "WARNING",
}


def _as_list(value: Any, key: str = "", default=()) -> List[str]:
    """Accept a YAML list or a comma-separated string; any other type yields default."""
    if value is None:
        return []
    if isinstance(value, str):
        return [v.strip() for v in value.split(",") if v.strip()]
    if not isinstance(value, (list, tuple)):
        logger.warning(f"Ignoring config value for {key!r}: expected a list, got {type(value).__name__}")
        return list(default)
    return [str(v) for v in value]


class SuoConfig:
    """Configuration for the timeline pipeline."""

    def __init__(self, config_path: Optional[Path] = None, use_env: bool = True):
        self._config: Dict[str, Any] = dict(DEFAULT_CONFIG)
        self._config_path: Optional[Path] = None

        # Load from file if found
        self._load_config(config_path)

        # Override with environment variables
        if use_env:
            self._apply_env_overrides()

    def _load_config(self, explicit_path: Optional[Path] = None) -> None:
        """Load configuration from YAML file."""
        search_paths = [Path(explicit_path)] if explicit_path else CONFIG_SEARCH_PATHS

        for config_path in search_paths:
            if config_path and config_path.exists():
                try:
                    with open(config_path, 'r', encoding='utf-8') as f:
                        user_config = yaml.safe_load(f) or {}
                except (OSError, yaml.YAMLError) as e:
                    logger.warning(f"Failed to load config from {config_path}: {e}")
                    continue
                if not isinstance(user_config, dict):
                    logger.warning(f"Ignoring config {config_path}: top level is not a mapping")
                    continue
                self._config.update(user_config)
                self._config_path = config_path
                logger.debug(f"Loaded config from {config_path}")
                return

    def _apply_env_overrides(self) -> None:
        """Apply environment variable overrides."""
        env_mappings = {
            "SUO_TARGET": "target",
            "SUO_EXTRA_LOG_TYPES": "extra_log_types",
            "SUO_LOG_LEVEL": "log_level",
        }

        for env_var, config_key in env_mappings.items():
            if env_var in os.environ:
                self._config[config_key] = os.environ[env_var]

    @property
    def config_path(self) -> Optional[Path]:
        """Path to loaded config file, or None if using defaults."""
        return self._config_path

    @property
    def target(self) -> str:
        """Default generator target."""
        return str(self._config.get("target", "cactbot"))

    @property
    def keywords(self) -> List[str]:
        return _as_list(self._config.get("keywords"), "keywords") or list(DEFAULT_KEYWORDS)

    @property
    def log_types(self) -> List[str]:
        """Log line types recognized as structured sync keywords."""
        types = _as_list(self._config.get("log_types"), "log_types", LOG_LINE_TYPES)
        for extra in _as_list(self._config.get("extra_log_types"), "extra_log_types"):
            if extra not in types:
                types.append(extra)
        return types

    @property
    def log_level(self) -> str:
        return str(self._config.get("log_level", "WARNING")).upper()

    def lexer_kwargs(self) -> Dict[str, Any]:
        """Keyword arguments for Lexer / parse_source."""
        return {"keywords": self.keywords, "log_types": self.log_types}

    def generator_options(self) -> GeneratorOptions:
        return GeneratorOptions(target=self.target)

    def to_dict(self) -> Dict[str, Any]:
        return dict(self._config)
