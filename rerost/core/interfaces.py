"""Core interfaces and abstract base classes for rerost."""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List, Optional


class ITreeCloner(ABC):
    """Interface for copying a directory tree into a fork directory."""

    @abstractmethod
    def clone(self, source: Path, destination: Path) -> Path:
        """Copy ``source`` into the existing directory ``destination``.

        The copied tree lands at ``destination / source.name``, which is
        returned.
        """
        pass


class IConfigManager(ABC):
    """Interface for configuration management."""

    @abstractmethod
    def load_config(self, config_path: Optional[Path] = None) -> Dict[str, Any]:
        """Load configuration from file."""
        pass

    @abstractmethod
    def save_config(self, config: Dict[str, Any], config_path: Optional[Path] = None) -> bool:
        """Save configuration to file."""
        pass

    @abstractmethod
    def get_default_config(self) -> Dict[str, Any]:
        """Get default configuration values."""
        pass

    @abstractmethod
    def validate_config(self, config: Dict[str, Any]) -> List[str]:
        """Validate configuration and return any errors."""
        pass
