# strategic_performance/config.py
"""
Centralized Configuration Management

Version: 1.0.0
Features:
- Local .env support via python-dotenv
- Singleton pattern for efficiency
- Type-safe getters with defaults

Only presentation and diagnostics settings live here. Scoring constants are
in constants.py and do not depend on the environment.
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() == 'true'


class Config:
    """
    Centralized configuration management

    Usage:
        from strategic_performance.config import config

        decimals = config.get_app_setting("DISPLAY_DECIMALS", 2)
        if config.is_feature_enabled("DEBUG_TIMING"):
            ...
    """

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        if self._initialized:
            return

        self._load_env_file()
        self._load_app_config()
        self._initialized = True

    @classmethod
    def reset(cls) -> 'Config':
        """Reload settings from the environment into the shared instance."""
        instance = cls()
        instance._load_env_file()
        instance._load_app_config()
        return instance

    def _load_env_file(self):
        """Load the first .env file found (cwd, then project root)"""
        env_paths = [
            Path.cwd() / ".env",
            Path(__file__).parent.parent / ".env",
        ]

        for env_path in env_paths:
            if env_path.exists():
                load_dotenv(env_path)
                logger.info(f"Loaded .env from: {env_path}")
                break

    def _load_app_config(self):
        """Load application-specific settings"""
        try:
            decimals = int(os.getenv("DISPLAY_DECIMALS", "2"))
        except ValueError:
            logger.warning("Invalid DISPLAY_DECIMALS, using 2")
            decimals = 2

        self._app_config = {
            # Logging
            "LOG_LEVEL": os.getenv("LOG_LEVEL", "INFO").upper(),

            # Presentation (DataProcessor output frames only)
            "DISPLAY_DECIMALS": decimals,
            "DEFAULT_MEASUREMENT_FREQUENCY": os.getenv("DEFAULT_MEASUREMENT_FREQUENCY", "quarterly"),

            # Feature flags
            "ENABLE_DEBUG_TIMING": _env_bool("ENABLE_DEBUG_TIMING", "false"),
        }

    # ==================== PUBLIC GETTERS ====================

    def get_app_setting(self, key: str, default: Any = None) -> Any:
        """Get application setting with default"""
        return self._app_config.get(key, default)

    def is_feature_enabled(self, feature: str) -> bool:
        """Check if feature is enabled"""
        key = f"ENABLE_{feature.upper()}"
        return self._app_config.get(key, False)

    @property
    def app_config(self) -> Dict[str, Any]:
        return self._app_config.copy()


def configure_logging(level: str = None):
    """Configure root logging for scripts and notebooks using the engine."""
    level_name = (level or config.get_app_setting("LOG_LEVEL", "INFO")).upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format=LOG_FORMAT,
    )


# ==================== SINGLETON INSTANCE ====================

config = Config()

__all__ = [
    'config',
    'Config',
    'configure_logging',
    'LOG_FORMAT',
]
