"""Configuration management for rerost."""

import logging
import yaml
from pathlib import Path
from typing import Dict, Any, List, Optional
from dataclasses import dataclass, asdict

from .interfaces import IConfigManager


logger = logging.getLogger(__name__)

LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR']


@dataclass
class RegistryConfig:
    """Where fork directories live."""
    root: Optional[str] = None  # None means the system temp directory


@dataclass
class CloneConfig:
    """How source trees are copied into forks."""
    strategy: str = "auto"
    cp_command: str = "cp"


@dataclass
class LoggingConfig:
    """Logging configuration."""
    level: str = "WARNING"


@dataclass
class ForkConfig:
    """Complete configuration for rerost."""
    registry: RegistryConfig
    clone: CloneConfig
    logging: LoggingConfig

    def __init__(self):
        self.registry = RegistryConfig()
        self.clone = CloneConfig()
        self.logging = LoggingConfig()


class ConfigManager(IConfigManager):
    """Manages configuration loading, saving, and validation."""

    DEFAULT_CONFIG_NAME = "config.yml"

    def __init__(self, config_dir: Optional[Path] = None):
        self.config_dir = config_dir or Path.home() / ".rerost"
        self.config_path = self.config_dir / self.DEFAULT_CONFIG_NAME

    def load_config(self, config_path: Optional[Path] = None) -> Dict[str, Any]:
        """Load configuration from YAML file."""
        path = config_path or self.config_path

        if not path.exists():
            return self.get_default_config()

        try:
            with open(path, 'r', encoding='utf-8') as f:
                config_data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.warning(f"Failed to load config from {path}: {e}")
            return self.get_default_config()

        if not isinstance(config_data, dict):
            logger.warning(f"Ignoring config at {path}: top level must be a mapping")
            return self.get_default_config()

        # Merge with defaults to ensure all keys are present
        return self._merge_configs(self.get_default_config(), config_data)

    def save_config(self, config: Dict[str, Any], config_path: Optional[Path] = None) -> bool:
        """Save configuration to YAML file."""
        path = config_path or self.config_path

        try:
            path.parent.mkdir(parents=True, exist_ok=True)

            with open(path, 'w', encoding='utf-8') as f:
                yaml.dump(config, f, default_flow_style=False, indent=2)

            return True
        except (OSError, yaml.YAMLError) as e:
            logger.error(f"Failed to save config to {path}: {e}")
            return False

    def get_default_config(self) -> Dict[str, Any]:
        """Get default configuration values."""
        default_config = ForkConfig()
        return {
            'registry': asdict(default_config.registry),
            'clone': asdict(default_config.clone),
            'logging': asdict(default_config.logging)
        }

    def validate_config(self, config: Dict[str, Any]) -> List[str]:
        """Validate configuration and return any errors."""
        errors = []

        for section in ['registry', 'clone', 'logging']:
            if not isinstance(config.get(section, {}), dict):
                errors.append(f"{section} must be a mapping")
        if errors:
            return errors

        registry = config.get('registry', {})
        root = registry.get('root')
        if root is not None:
            if not isinstance(root, str) or not root:
                errors.append("registry.root must be a non-empty path or null")
            elif Path(root).exists() and not Path(root).is_dir():
                errors.append(f"registry.root is not a directory: {root}")

        clone = config.get('clone', {})
        strategy = clone.get('strategy', 'auto')
        if strategy not in ['auto', 'cow', 'copy']:
            errors.append("clone.strategy must be 'auto', 'cow', or 'copy'")

        cp_command = clone.get('cp_command', 'cp')
        if not isinstance(cp_command, str) or not cp_command:
            errors.append("clone.cp_command must be a non-empty string")

        level = config.get('logging', {}).get('level', 'WARNING')
        if not isinstance(level, str) or level.upper() not in LOG_LEVELS:
            errors.append(f"logging.level must be one of {', '.join(LOG_LEVELS)}")

        return errors

    def _merge_configs(self, default: Dict[str, Any], user: Dict[str, Any]) -> Dict[str, Any]:
        """Recursively merge user config with default config."""
        result = default.copy()

        for key, value in user.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._merge_configs(result[key], value)
            else:
                result[key] = value

        return result

    def create_default_config_file(self) -> bool:
        """Create a default configuration file."""
        return self.save_config(self.get_default_config())

    def get_config_path(self) -> Path:
        """Get the path to the configuration file."""
        return self.config_path
