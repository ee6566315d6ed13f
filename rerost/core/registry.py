"""Fork registry: the fork directories living under a shared root."""

import json
import logging
import os
import shutil
import tempfile
import time
from pathlib import Path
from typing import Callable, Dict, Iterator, List, Optional

from .exceptions import NameFormatError, RegistryIOError, ResolveError
from .interfaces import ITreeCloner
from .models import CleanReport, DeletionResult, DeletionStatus, ForkListing, ForkRecord
from .naming import build_fork_name, is_fork_name, parse_source_path


logger = logging.getLogger(__name__)

NO_FORKS_MESSAGE = "No fork directories found.\n"
NO_FORKS_FOR_CWD_MESSAGE = "No fork directories found for the current directory.\n"


def default_registry_root() -> Path:
    """Platform temp directory that holds fork directories by default."""
    return Path(tempfile.gettempdir())


def resolve_current_directory() -> Path:
    """Return the current working directory.

    Raises:
        ResolveError: If the working directory is unavailable (e.g. deleted)
    """
    try:
        return Path(os.getcwd())
    except OSError as e:
        raise ResolveError(f"cannot determine current directory: {e}") from e


class ForkRegistry:
    """Creates, lists and removes fork directories under a registry root.

    The directory names are the only record of which source a fork belongs
    to; no index file is kept.
    """

    def __init__(self,
                 cloner: ITreeCloner,
                 root: Optional[Path] = None,
                 clock: Callable[[], int] = time.time_ns):
        """Initialize fork registry.

        Args:
            cloner: Tree cloner used to populate new forks
            root: Directory holding fork directories (default: system temp)
            clock: Nanosecond clock used to stamp fork names
        """
        self.cloner = cloner
        self.root = Path(root) if root is not None else default_registry_root()
        self.clock = clock

        logger.debug(f"ForkRegistry initialized at {self.root}")

    def create(self, source: Optional[Path] = None) -> ForkRecord:
        """Fork a directory tree into a new fork directory.

        Args:
            source: Directory to fork (default: current working directory)

        Returns:
            Record of the new fork; its ``clone_path`` holds the copied tree

        Raises:
            ResolveError: If the current directory cannot be determined
            RegistryIOError: If the fork directory cannot be created
            CopyError: If cloning the tree fails
        """
        if source is not None:
            source_path = Path(os.path.abspath(source))
        else:
            source_path = resolve_current_directory()
        base_name = source_path.name

        name = build_fork_name(base_name, str(source_path), self.clock())
        fork_path = self.root / name

        try:
            fork_path.mkdir(parents=True, exist_ok=False)
        except OSError as e:
            raise RegistryIOError(f"failed to create fork directory {fork_path}: {e}") from e

        self.cloner.clone(source_path, fork_path)

        logger.info(f"Created fork of {source_path} at {fork_path}")
        return ForkRecord(
            path=fork_path,
            name=name,
            base_name=base_name,
            source_path=str(source_path)
        )

    def _scan(self) -> Iterator[Path]:
        """Yield fork directories under the root, sorted by name."""
        try:
            with os.scandir(self.root) as it:
                entries = sorted(it, key=lambda e: e.name)
        except FileNotFoundError:
            logger.debug(f"Registry root {self.root} does not exist")
            return
        except OSError as e:
            raise RegistryIOError(f"failed to read registry root {self.root}: {e}") from e

        for entry in entries:
            if not is_fork_name(entry.name):
                continue
            try:
                is_dir = entry.is_dir(follow_symlinks=False)
            except OSError:
                is_dir = False
            if is_dir:
                yield self.root / entry.name

    def list_all(self) -> List[Path]:
        """List every fork directory regardless of source."""
        return list(self._scan())

    def list_for_source(self, source: Optional[Path] = None) -> ForkListing:
        """Group fork directories of one source directory.

        Entries whose names cannot be decoded are skipped.

        Args:
            source: Source directory to match (default: current working directory)

        Returns:
            Mapping of source path to fork directory paths, in name order
        """
        if source is not None:
            source_path = os.path.abspath(source)
        else:
            source_path = str(resolve_current_directory())
        listing: Dict[str, List[str]] = {}

        for fork_path in self._scan():
            try:
                decoded = parse_source_path(fork_path.name)
            except NameFormatError as e:
                logger.debug(f"Skipping {fork_path.name}: {e}")
                continue

            if decoded != source_path:
                continue

            listing.setdefault(decoded, []).append(str(fork_path))

        return listing

    def clean(self) -> CleanReport:
        """Remove every fork directory, best effort.

        Failures are recorded in the report rather than raised.
        """
        report = CleanReport()

        for fork_path in self._scan():
            report.results.append(self._remove(fork_path))

        if report.failures:
            logger.warning(f"Failed to delete {len(report.failures)} fork directories")

        return report

    def _remove(self, fork_path: Path) -> DeletionResult:
        try:
            shutil.rmtree(fork_path)
        except FileNotFoundError:
            return DeletionResult(path=fork_path, status=DeletionStatus.MISSING)
        except OSError as e:
            logger.warning(f"Failed to delete {fork_path}: {e}")
            return DeletionResult(path=fork_path, status=DeletionStatus.FAILED, error=str(e))

        logger.debug(f"Deleted {fork_path}")
        return DeletionResult(path=fork_path, status=DeletionStatus.DELETED)


def format_listing(listing: ForkListing) -> str:
    if not listing:
        return NO_FORKS_FOR_CWD_MESSAGE
    return json.dumps(listing, indent=2, ensure_ascii=False) + "\n"


def format_all(fork_paths: List[Path]) -> str:
    if not fork_paths:
        return NO_FORKS_MESSAGE
    return "".join(f"{path}\n" for path in fork_paths)


def format_clean_report(report: CleanReport) -> str:
    if report.found_count == 0:
        return NO_FORKS_MESSAGE
    return f"Deleted {report.deleted_count} fork directories.\n"
