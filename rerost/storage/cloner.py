"""Tree cloners that populate fork directories."""

import logging
import shlex
import shutil
import subprocess
import sys
from pathlib import Path
from typing import List, Optional

from ..core.exceptions import CopyError
from ..core.interfaces import ITreeCloner


logger = logging.getLogger(__name__)

CLONE_STRATEGIES = ("auto", "cow", "copy")


class CopyOnWriteCloner(ITreeCloner):
    """Clones trees with the system ``cp`` using copy-on-write where available.

    On macOS ``cp -c`` clones files with clonefile(2). Elsewhere GNU
    ``cp --reflink=auto`` shares blocks on filesystems that support reflinks
    and falls back to a regular copy on those that do not.
    """

    def __init__(self, cp_command: str = "cp", platform: Optional[str] = None):
        self.cp_command = cp_command
        self.platform = platform or sys.platform

    def build_command(self, source: Path, destination: Path) -> List[str]:
        if self.platform == "darwin":
            flags = ["-R", "-c"]
        else:
            flags = ["-R", "--reflink=auto"]
        return [self.cp_command, *flags, str(source), str(destination)]

    def clone(self, source: Path, destination: Path) -> Path:
        command = self.build_command(source, destination)
        logger.debug(f"Running {shlex.join(command)}")

        # stdout/stderr are inherited so cp diagnostics reach the user directly
        try:
            completed = subprocess.run(command, check=False)
        except OSError as e:
            raise CopyError(f"failed to run {command[0]}: {e}", command=command) from e

        if completed.returncode != 0:
            raise CopyError(
                f"{shlex.join(command)} exited with status {completed.returncode}",
                command=command,
                returncode=completed.returncode
            )

        return destination / source.name


class PortableCloner(ITreeCloner):
    """Deep-copies trees with :func:`shutil.copytree`."""

    def clone(self, source: Path, destination: Path) -> Path:
        target = destination / source.name
        logger.debug(f"Copying {source} to {target}")

        try:
            shutil.copytree(source, target, symlinks=True)
        except (shutil.Error, OSError) as e:
            raise CopyError(f"failed to copy {source} to {target}: {e}") from e

        return target


def create_cloner(strategy: str = "auto", cp_command: str = "cp") -> ITreeCloner:
    """Create the tree cloner for a configured strategy.

    Args:
        strategy: ``cow`` for the external ``cp``, ``copy`` for a portable deep
            copy, or ``auto`` to use ``cp`` when it is on ``PATH``
        cp_command: Name or path of the ``cp`` binary

    Returns:
        Tree cloner instance

    Raises:
        ValueError: If the strategy is unknown
    """
    if strategy not in CLONE_STRATEGIES:
        raise ValueError(f"unknown clone strategy: {strategy}")

    if strategy == "cow":
        return CopyOnWriteCloner(cp_command)
    if strategy == "copy":
        return PortableCloner()

    if shutil.which(cp_command):
        return CopyOnWriteCloner(cp_command)

    logger.info(f"{cp_command} not found on PATH, falling back to portable copy")
    return PortableCloner()
