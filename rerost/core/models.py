"""Core data models and type definitions for rerost."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional


# Type aliases for better readability
SourcePath = str
ForkListing = Dict[SourcePath, List[str]]


class DeletionStatus(Enum):
    """Outcome of removing a single fork directory."""
    DELETED = "deleted"
    MISSING = "missing"
    FAILED = "failed"


@dataclass
class ForkRecord:
    """A fork directory discovered in, or added to, the registry."""
    path: Path
    name: str
    base_name: str
    source_path: Optional[SourcePath] = None

    @property
    def clone_path(self) -> Path:
        """Location of the copied tree inside the fork directory."""
        return self.path / self.base_name


@dataclass
class DeletionResult:
    """Result of deleting one fork directory."""
    path: Path
    status: DeletionStatus
    error: Optional[str] = None


@dataclass
class CleanReport:
    """Per-entry log of a clean pass."""
    results: List[DeletionResult] = field(default_factory=list)

    @property
    def found_count(self) -> int:
        return len(self.results)

    @property
    def deleted_count(self) -> int:
        return sum(1 for r in self.results if r.status is DeletionStatus.DELETED)

    @property
    def failures(self) -> List[DeletionResult]:
        return [r for r in self.results if r.status is DeletionStatus.FAILED]
