"""Exception hierarchy for rerost."""

from typing import Optional, Sequence


class ForkError(Exception):
    """Base exception for fork-dir operations."""
    pass


class ResolveError(ForkError):
    """Raised when the source directory cannot be determined."""
    pass


class RegistryIOError(ForkError):
    """Raised when a registry directory cannot be created, read or removed."""
    pass


class CopyError(ForkError):
    """Raised when cloning a source tree into a fork directory fails."""

    def __init__(self, message: str, command: Optional[Sequence[str]] = None,
                 returncode: Optional[int] = None):
        super().__init__(message)
        self.command = list(command) if command else None
        self.returncode = returncode


class NameFormatError(ForkError):
    """Base exception for fork directory names that cannot be parsed."""
    pass


class DecodeError(NameFormatError):
    """Raised when an encoded source path token is malformed."""
    pass


class InvalidNameError(NameFormatError):
    """Raised when a fork directory name does not have enough fields."""
    pass


class CommandNotFoundError(ForkError):
    """Raised when an unknown top-level command is requested."""

    def __init__(self, command: str):
        super().__init__(f"command not found: {command}")
        self.command = command
