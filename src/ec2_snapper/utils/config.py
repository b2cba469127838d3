#!/usr/bin/env python3
"""
utils/config.py

Simple configuration management utilities.
Provides centralized configuration loading.
"""

import os
import yaml
from pathlib import Path
from typing import Dict, Any, Optional

from ec2_snapper.core.constants import (
    DEFAULT_METRIC_UNIT,
    DEFAULT_METRIC_VALUE,
    DEFAULT_POLL_INTERVAL_SECONDS,
    DEFAULT_POLL_TIMEOUT_SECONDS,
)
from ec2_snapper.utils.logger import setup_logger

logger = setup_logger(__name__, "config.log")

CONFIG_DIR_ENV_VAR = "EC2_SNAPPER_CONFIG_DIR"


class ConfigManager:
    """
    Simple configuration manager.

    Features:
    - YAML configuration loading
    - Environment variable override support
    """

    def __init__(self, config_dir: Optional[Path] = None):
        """
        Initialize ConfigManager.

        Args:
            config_dir: Custom config directory path (defaults to
                $EC2_SNAPPER_CONFIG_DIR, then ./configs)
        """
        env_dir = os.environ.get(CONFIG_DIR_ENV_VAR)
        if config_dir is not None:
            self.config_dir = Path(config_dir)
        elif env_dir:
            self.config_dir = Path(env_dir)
        else:
            self.config_dir = Path.cwd() / "configs"

        # Try both .yml and .yaml extensions
        yml_file = self.config_dir / "settings.yml"
        yaml_file = self.config_dir / "settings.yaml"

        if yml_file.exists():
            self.settings_file = yml_file
        else:
            self.settings_file = yaml_file  # Default to .yaml for error messages

    def _load_yaml_file(self, file_path: Path) -> Dict[str, Any]:
        """
        Load a YAML file safely.
        """
        if not file_path.exists():
            logger.debug(f"Config file not found: {file_path}, using defaults")
            return {}

        try:
            with open(file_path, "r", encoding="utf-8") as f:
                content = yaml.safe_load(f)
                return content or {}
        except (OSError, yaml.YAMLError) as e:
            logger.error(f"Error loading {file_path}: {e}")
            return {}

    def load_settings(self) -> Dict[str, Any]:
        """
        Load application settings.
        """
        return self._load_yaml_file(self.settings_file)

    def get_value(
        self, key_path: str, default: Any = None, env_var: Optional[str] = None
    ) -> Any:
        """
        Get configuration value with dot notation support and environment variable override.
        """
        # Check environment variable first
        if env_var and env_var in os.environ:
            return os.environ[env_var]

        keys = key_path.split(".")
        current = self.config

        try:
            for key in keys:
                current = current[key]
            return current
        except (KeyError, TypeError):
            return default

    def get_aws_region(self) -> Optional[str]:
        """Get AWS region with environment variable override support."""
        return self.get_value("aws.region", None, env_var="AWS_REGION")

    def get_role(self) -> str:
        """Get the role name to assume, if any."""
        return self.get_value("aws.role", "")

    def get_account_id(self) -> str:
        """Get the account the role lives in."""
        return str(self.get_value("aws.account_id", ""))

    def get_poll_interval(self) -> float:
        return float(self.get_value("create.poll_interval", DEFAULT_POLL_INTERVAL_SECONDS))

    def get_poll_timeout(self) -> float:
        return float(self.get_value("create.poll_timeout", DEFAULT_POLL_TIMEOUT_SECONDS))

    def get_default_metric_unit(self) -> str:
        return self.get_value("report.default_unit", DEFAULT_METRIC_UNIT)

    def get_default_metric_value(self) -> float:
        return float(self.get_value("report.default_value", DEFAULT_METRIC_VALUE))

    def get_logging_level(self) -> str:
        """Get logging level."""
        return self.get_value("logging.level", "INFO", env_var="LOG_LEVEL")

    def get_logging_path(self) -> str:
        """Get logging file path."""
        return self.get_value("logging.path", "logs", env_var="LOG_PATH")

    @property
    def config(self) -> Dict[str, Any]:
        """Get the full configuration as a cached property."""
        if not hasattr(self, "_cached_config"):
            self._cached_config = self.load_settings()
        return self._cached_config

    def reload_config(self) -> None:
        """Force reload of configuration from file."""
        if hasattr(self, "_cached_config"):
            delattr(self, "_cached_config")
