"""Application settings: config.yaml, .env overrides and logging bootstrap."""
import os
from pathlib import Path
from typing import Any, Dict, Optional
import yaml
from dotenv import load_dotenv
from finmood.analytics.config import AnalyticsConfig
from finmood.utils.errors import ConfigurationError
from finmood.utils.logging import setup_logging
from finmood.utils.paths import resolve_config_path
import logging

logger = logging.getLogger(__name__)

ENV_PREFIX = "FINMOOD_"
DEFAULT_DATABASE_URL = "sqlite:///data/finmood.db"
REQUIRED_SECTIONS = ("app", "database")


class Config:
    """Settings for one finmood deployment.

    Values come from ``config.yaml``; a few are overridable from the
    environment (or a ``.env`` file): ``FINMOOD_DATABASE_URL``,
    ``FINMOOD_LOG_LEVEL`` and ``FINMOOD_DEBUG``.
    """

    def __init__(self, config_path: str = "config.yaml"):
        self.config_path: Path = resolve_config_path(config_path)
        self._data: Dict[str, Any] = {}
        self._analytics: Optional[AnalyticsConfig] = None
        self._load()

    def _load(self) -> None:
        load_dotenv()

        if not self.config_path.is_file():
            raise ConfigurationError(f"Config file not found: {self.config_path}")

        with open(self.config_path, "r") as f:
            data = yaml.safe_load(f)

        if not data:
            raise ConfigurationError(f"Empty configuration file: {self.config_path}")
        if not isinstance(data, dict):
            raise ConfigurationError(f"Config root must be a mapping: {self.config_path}")

        self._data = data
        self._check_sections()
        self._configure_logging()

        logger.info(f"Configuration loaded from {self.config_path}")

    def _check_sections(self) -> None:
        for section in REQUIRED_SECTIONS:
            if section not in self._data:
                raise ConfigurationError(f"Missing required config section: {section}")

        if not isinstance(self._data["database"], dict):
            raise ConfigurationError("database section must be a mapping")

        analytics = self._data.get("analytics")
        if analytics is not None and not isinstance(analytics, dict):
            raise ConfigurationError("analytics section must be a mapping")

    def _configure_logging(self) -> None:
        log_cfg = self._data.get("logging") or {}
        setup_logging(
            level=self.env("LOG_LEVEL") or log_cfg.get("level", "INFO"),
            log_file=log_cfg.get("file"),
            format_type=log_cfg.get("format", "json"),
            enabled=log_cfg.get("enabled", True),
            sql_echo=self.database_echo,
        )

    def get(self, key: str, default: Any = None) -> Any:
        """
        Look up a value by dot-separated path.

        Args:
            key: Path such as "analytics.health.window_days"
            default: Returned when any segment is missing or null

        Returns:
            The configured value or ``default``
        """
        node: Any = self._data
        for part in key.split("."):
            if not isinstance(node, dict) or node.get(part) is None:
                return default
            node = node[part]
        return node

    def env(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Read ``FINMOOD_<name>`` from the environment."""
        return os.getenv(f"{ENV_PREFIX}{name}", default)

    @property
    def app_name(self) -> str:
        return self.get("app.name", "finmood")

    @property
    def app_version(self) -> str:
        return str(self.get("app.version", "0.1.0"))

    @property
    def debug(self) -> bool:
        """Debug flag; FINMOOD_DEBUG=1/true/yes turns it on."""
        override = self.env("DEBUG")
        if override is not None:
            return override.strip().lower() in ("1", "true", "yes")
        return bool(self.get("app.debug", False))

    @property
    def database_url(self) -> str:
        return self.env("DATABASE_URL") or self.get("database.url", DEFAULT_DATABASE_URL)

    @property
    def database_echo(self) -> bool:
        return bool(self.get("database.echo", False))

    @property
    def analytics(self) -> AnalyticsConfig:
        """Rule constants from the ``analytics`` section, coded defaults otherwise."""
        if self._analytics is None:
            self._analytics = AnalyticsConfig.from_dict(self.get("analytics", {}))
        return self._analytics


_config: Optional[Config] = None


def load_config(config_path: str = "config.yaml") -> Config:
    """Load the process-wide Config once and return it."""
    global _config
    if _config is None:
        _config = Config(config_path)
    return _config


def get_config() -> Config:
    """Return the loaded Config; load_config() must have run first."""
    if _config is None:
        raise ConfigurationError("Configuration not loaded. Call load_config() first.")
    return _config


def reset_config() -> None:
    """Forget the process-wide Config."""
    global _config
    _config = None
