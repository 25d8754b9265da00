"""
Configuration management for pagecard.

Supports both global (~/.config/pagecard/config.toml) and local
(pagecard.toml) configurations, overridable through PAGECARD_* environment
variables.
"""
import os
import logging
import tomli
import tomli_w
from pathlib import Path
from typing import Dict, Any, Optional
from dataclasses import dataclass, field, asdict

from pagecard.constants import (
    DEFAULT_JSON_INDENT,
    DEFAULT_OUTPUT_FORMAT,
    DEFAULT_REQUEST_TIMEOUT,
    DEFAULT_USER_AGENT,
)
from pagecard.errors import ConfigError

logger = logging.getLogger(__name__)


@dataclass
class PagecardConfig:
    """
    pagecard configuration with sensible defaults.

    Configuration hierarchy (highest to lowest priority):
    1. Command-line arguments
    2. Environment variables (PAGECARD_*)
    3. Local config file (./pagecard.toml or ./.pagecardrc)
    4. User config file (~/.config/pagecard/config.toml)
    5. System defaults
    """

    # Network settings
    timeout: int = field(default=DEFAULT_REQUEST_TIMEOUT)  # Request timeout in seconds
    user_agent: str = field(default=DEFAULT_USER_AGENT)
    verify_ssl: bool = field(default=True)

    # Display settings
    output_format: str = field(default=DEFAULT_OUTPUT_FORMAT)  # json, table
    json_indent: int = field(default=DEFAULT_JSON_INDENT)

    log_level: str = field(default="WARNING")

    @classmethod
    def load(cls, config_file: Optional[Path] = None) -> "PagecardConfig":
        """
        Load configuration from files and environment.

        Args:
            config_file: Specific config file to load (overrides search)

        Returns:
            Merged configuration object
        """
        config = cls()

        user_config_path = Path.home() / ".config" / "pagecard" / "config.toml"
        if user_config_path.exists():
            config._merge(cls._load_toml(user_config_path))

        local_paths = [
            Path.cwd() / "pagecard.toml",
            Path.cwd() / ".pagecardrc",
        ]

        for path in local_paths:
            if path.exists():
                config._merge(cls._load_toml(path))
                break

        if config_file:
            if config_file.exists():
                config._merge(cls._load_toml(config_file))
            else:
                logger.warning(f"Config file not found: {config_file}")

        config._apply_env_vars()

        return config

    @staticmethod
    def _load_toml(path: Path) -> Dict[str, Any]:
        """
        Load TOML configuration file.

        Raises:
            ConfigError: If the file is not valid TOML
        """
        with open(path, "rb") as f:
            try:
                return tomli.load(f)
            except tomli.TOMLDecodeError as e:
                raise ConfigError(f"invalid config file {path}: {e}") from e

    def _merge(self, data: Dict[str, Any]):
        """Merge configuration data into this instance."""
        for key, value in data.items():
            if hasattr(self, key):
                setattr(self, key, value)

    def _apply_env_vars(self):
        """Apply environment variables with PAGECARD_ prefix."""
        prefix = "PAGECARD_"
        for key, value in os.environ.items():
            if key.startswith(prefix):
                config_key = key[len(prefix):].lower()
                if hasattr(self, config_key):
                    # bool before int: bool is a subclass of int
                    current_value = getattr(self, config_key)
                    if isinstance(current_value, bool):
                        setattr(self, config_key, value.lower() in ("true", "1", "yes"))
                    elif isinstance(current_value, int):
                        try:
                            setattr(self, config_key, int(value))
                        except ValueError:
                            raise ConfigError(f"{key} must be an integer, got {value!r}") from None
                    else:
                        setattr(self, config_key, value)

    def save(self, path: Optional[Path] = None) -> Path:
        """
        Save current configuration to TOML file.

        Args:
            path: Path to save to (defaults to user config)

        Returns:
            The path written
        """
        if path is None:
            path = Path.home() / ".config" / "pagecard" / "config.toml"

        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "wb") as f:
            tomli_w.dump(asdict(self), f)
        return path

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)


# Global configuration instance
_config: Optional[PagecardConfig] = None


def get_config(reload: bool = False, config_file: Optional[Path] = None) -> PagecardConfig:
    """
    Get the global configuration instance.

    Args:
        reload: Force reload configuration from files
        config_file: Specific config file to load

    Returns:
        Global configuration instance
    """
    global _config
    if _config is None or reload:
        _config = PagecardConfig.load(config_file)
    return _config


def init_config(config_file: Optional[Path] = None, **kwargs) -> PagecardConfig:
    """
    Initialize configuration with command-line overrides.

    Args:
        config_file: Config file to load before applying overrides
        **kwargs: Configuration overrides; None values are skipped

    Returns:
        Configured instance
    """
    config = get_config(reload=config_file is not None, config_file=config_file)

    for key, value in kwargs.items():
        if hasattr(config, key) and value is not None:
            setattr(config, key, value)

    return config
