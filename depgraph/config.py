"""Configuration Management with Pydantic.

This module implements configuration models using Pydantic for parsing and
validation of YAML configuration files with environment variable overrides.
"""

import os
import threading
from pathlib import Path

import structlog
import yaml
from pydantic import BaseModel, Field

from depgraph.log_config import configure_logging

logger = structlog.get_logger(__name__)

DEFAULT_CONFIG_NAMES = ("depgraph.yaml", "depgraph.yml")


class GraphConfig(BaseModel):
    """Dependency graph settings.

    Attributes:
        allow_cyclic: Whether graphs built from this config accept cycles
    """

    allow_cyclic: bool = Field(
        default=True,
        description="Allow elements to transitively depend on themselves",
    )


class LoggingConfig(BaseModel):
    """Logging settings.

    Attributes:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_logs: Render JSON instead of colored console output
    """

    level: str = Field(
        default="INFO",
        description="Logging level",
        pattern=r"^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
    )
    json_logs: bool = Field(
        default=True,
        description="Use JSON log rendering",
    )

    model_config = {"str_strip_whitespace": True}


class DepGraphConfig(BaseModel):
    """Top-level configuration combining all settings.

    Attributes:
        graph: Dependency graph configuration
        logging: Logging configuration
    """

    graph: GraphConfig = Field(default_factory=GraphConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def from_yaml(cls, path: str | Path) -> "DepGraphConfig":
        """Load configuration from a YAML file.

        Args:
            path: Path to the YAML configuration file

        Returns:
            Parsed and validated DepGraphConfig instance

        Raises:
            FileNotFoundError: If configuration file doesn't exist
            ValueError: If the file is empty or is not valid YAML
            pydantic.ValidationError: If a setting has an invalid value
        """
        config_path = Path(path)

        if not config_path.exists():
            msg = f"Configuration file not found: {config_path}"
            raise FileNotFoundError(msg)

        logger.info("loading_configuration", path=str(config_path))

        try:
            with config_path.open() as f:
                config_data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            logger.exception("yaml_parse_error", error=str(e), path=str(config_path))
            msg = f"Invalid YAML in configuration file: {e}"
            raise ValueError(msg) from e

        if not config_data:
            msg = "Configuration file is empty"
            raise ValueError(msg)
        if not isinstance(config_data, dict):
            msg = "Configuration file must contain a mapping"
            raise ValueError(msg)

        config_data = cls._apply_env_overrides(config_data)
        config = cls(**config_data)

        logger.info(
            "configuration_loaded",
            allow_cyclic=config.graph.allow_cyclic,
            logging_level=config.logging.level,
        )

        return config

    @classmethod
    def _apply_env_overrides(cls, config_data: dict) -> dict:
        """Apply environment variable overrides to configuration.

        Environment variables follow the pattern: DEPGRAPH_<KEY>
        Example: DEPGRAPH_ALLOW_CYCLIC=false, DEPGRAPH_LOGGING_LEVEL=DEBUG

        Values are passed through as strings and validated by the models, so
        a misspelled boolean such as "ture" is rejected rather than read as
        False.

        Args:
            config_data: Base configuration dictionary from file

        Returns:
            Configuration dictionary with environment overrides applied
        """
        env_overrides = {
            ("graph", "allow_cyclic"): "DEPGRAPH_ALLOW_CYCLIC",
            ("logging", "level"): "DEPGRAPH_LOGGING_LEVEL",
            ("logging", "json_logs"): "DEPGRAPH_JSON_LOGS",
        }

        for path, env_var in env_overrides.items():
            value = os.environ.get(env_var)
            if value is None:
                continue

            current = config_data
            for key in path[:-1]:
                if not isinstance(current.get(key), dict):
                    current[key] = {}
                current = current[key]

            current[path[-1]] = value
            logger.debug(
                "env_override_applied",
                env_var=env_var,
                config_path=".".join(path),
            )

        return config_data

    def validate_config(self) -> list[str]:
        """Validate configuration and return list of warnings.

        Returns:
            List of validation warning messages (empty if no warnings)
        """
        warnings = []

        if self.graph.allow_cyclic:
            warnings.append(
                "Cyclic dependencies are allowed - edges closing a cycle will not be rejected",
            )

        if self.logging.level == "DEBUG" and self.logging.json_logs:
            warnings.append(
                "DEBUG logging with JSON output logs every graph construction and copy",
            )

        return warnings


def configure_logging_from(config: DepGraphConfig) -> None:
    """Apply the logging section of a configuration."""
    configure_logging(level=config.logging.level, json_logs=config.logging.json_logs)


class ConfigManager:
    """Configuration manager using singleton pattern."""

    _instance: DepGraphConfig | None = None
    _init_lock: threading.Lock = threading.Lock()

    @classmethod
    def load_config(cls, config_path: str | Path | None = None) -> DepGraphConfig:
        """Load configuration from file.

        Args:
            config_path: Path to configuration file. If None, looks for
                depgraph.yaml or depgraph.yml in the current directory.

        Raises:
            FileNotFoundError: If config file not found
            ValueError: If config file is invalid
        """
        if config_path is None:
            for default_name in DEFAULT_CONFIG_NAMES:
                default_path = Path(default_name)
                if default_path.exists():
                    config_path = default_path
                    break
            else:
                msg = "No configuration file found. Expected depgraph.yaml or depgraph.yml"
                raise FileNotFoundError(msg)

        return DepGraphConfig.from_yaml(config_path)

    @classmethod
    def get_config(
        cls,
        config_path: str | Path | None = None,
        reload: bool = False,
    ) -> DepGraphConfig:
        """Get configuration instance (singleton pattern).

        Uses double-checked locking so concurrent first calls load the file once.

        Args:
            config_path: Path to configuration file. Only used on first call or when reload=True.
            reload: If True, force reload configuration from file.
        """
        if cls._instance is not None and not reload:
            return cls._instance

        with cls._init_lock:
            if cls._instance is None or reload:
                cls._instance = cls.load_config(config_path)

            return cls._instance

    @classmethod
    def reset_config(cls) -> None:
        """Reset the configuration instance."""
        cls._instance = None


def load_config(config_path: str | Path | None = None) -> DepGraphConfig:
    """Load configuration from file."""
    return ConfigManager.load_config(config_path)


def get_config(config_path: str | Path | None = None, reload: bool = False) -> DepGraphConfig:
    """Get configuration instance (singleton pattern)."""
    return ConfigManager.get_config(config_path, reload)


def reset_config() -> None:
    """Reset the configuration instance."""
    ConfigManager.reset_config()


__all__ = [
    "ConfigManager",
    "DepGraphConfig",
    "GraphConfig",
    "LoggingConfig",
    "configure_logging_from",
    "get_config",
    "load_config",
    "reset_config",
]
