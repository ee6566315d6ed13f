"""Test configuration and fixtures."""

import pytest
import tempfile
import shutil
from pathlib import Path


@pytest.fixture
def temp_dir():
    """Create a temporary directory, resolved so it matches os.getcwd()."""
    temp_dir = Path(tempfile.mkdtemp()).resolve()

    try:
        yield temp_dir
    finally:
        shutil.rmtree(temp_dir, ignore_errors=True)


@pytest.fixture
def temp_project(temp_dir):
    """Create a source project tree including hidden files."""
    project = temp_dir / "proj"
    (project / "src").mkdir(parents=True)
    (project / ".config").mkdir()

    (project / "README.md").write_text("# proj\n")
    (project / ".env").write_text("SECRET=1\n")
    (project / "src" / "main.py").write_text("print('hello')\n")
    (project / ".config" / "settings.yml").write_text("debug: true\n")

    return project


@pytest.fixture
def registry_root(temp_dir):
    """Registry root kept apart from the source project."""
    root = temp_dir / "registry"
    root.mkdir()
    return root
