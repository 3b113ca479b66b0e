"""Pytest fixtures for filetagger tests."""

import io
import os
import platform
import tempfile
from pathlib import Path
from typing import Generator

import pytest
from flask.testing import FlaskClient
from rich.console import Console

from filetagger.config import AppConfig
from filetagger.orchestration import TagService
from filetagger.ui import ConsoleView
from filetagger.web import create_app


def pytest_configure(config) -> None:
    config.addinivalue_line("markers", "unit: fast tests of a single component")
    config.addinivalue_line("markers", "integration: tests exercising several components together")


@pytest.fixture
def enforced_permissions() -> None:
    """Skip the test where chmod cannot lock the test user out."""
    if platform.system() == "Windows" or (hasattr(os, "geteuid") and os.geteuid() == 0):
        pytest.skip("Directory permissions are not enforced for this user/platform")


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for isolated test environments.

    Yields:
        Resolved path to the temporary directory.
    """
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir).resolve()


@pytest.fixture
def root_folder(temp_dir: Path) -> Path:
    """Create a root folder with loose files and a small filing tree.

    Creates:
        root/
        ├── Invoice_ACME_20230415.pdf
        ├── notes.txt
        ├── Invoices/
        │   ├── 2023/
        │   │   └── acme-march.pdf
        │   └── 2024/
        ├── Taxes/
        │   ├── 2023/
        │   │   └── return.pdf
        │   └── Archive/
        └── Travel/

    Args:
        temp_dir: Temporary directory fixture.

    Returns:
        Path to the root folder.
    """
    root = temp_dir / "root"
    root.mkdir()

    (root / "Invoice_ACME_20230415.pdf").write_bytes(b"%PDF invoice")
    (root / "notes.txt").write_text("loose notes")

    (root / "Invoices" / "2023").mkdir(parents=True)
    (root / "Invoices" / "2024").mkdir()
    (root / "Invoices" / "2023" / "acme-march.pdf").write_bytes(b"%PDF march")

    (root / "Taxes" / "2023").mkdir(parents=True)
    (root / "Taxes" / "Archive").mkdir()
    (root / "Taxes" / "2023" / "return.pdf").write_bytes(b"%PDF return")

    (root / "Travel").mkdir()

    return root


@pytest.fixture
def app_config(root_folder: Path) -> AppConfig:
    return AppConfig(root_folder=root_folder)


@pytest.fixture
def service(app_config: AppConfig) -> TagService:
    return TagService(app_config)


@pytest.fixture
def client(app_config: AppConfig) -> FlaskClient:
    """Flask test client bound to the root_folder tree."""
    app = create_app(app_config)
    app.config["TESTING"] = True
    return app.test_client()


@pytest.fixture
def restricted_dir(root_folder: Path, enforced_permissions: None) -> Generator[Path, None, None]:
    """Create a subfolder of root with no read permissions.

    Yields:
        Path to root/Locked (containing a Secret subfolder and a file).
    """
    locked = root_folder / "Locked"
    locked.mkdir()
    (locked / "Secret").mkdir()
    (locked / "hidden.txt").write_text("hidden")

    original_mode = locked.stat().st_mode
    os.chmod(locked, 0o000)

    try:
        yield locked
    finally:
        # Restore permissions for cleanup
        os.chmod(locked, original_mode)


@pytest.fixture
def view_with_captured_output() -> ConsoleView:
    """ConsoleView writing to StringIO; read it via view.console.file.getvalue()."""
    output = io.StringIO()
    console = Console(file=output, force_terminal=False, width=200)
    return ConsoleView(console=console)


@pytest.fixture
def undecodable_file(root_folder: Path) -> str:
    """Create root/scan_<0xff>.pdf, a file name that is not valid UTF-8.

    Returns:
        The name as Python sees it, with the stray byte as a lone surrogate.
    """
    name = os.fsdecode(b"scan_\xff.pdf")
    if "\udcff" not in name:
        pytest.skip("File system encoding is not UTF-8")
    try:
        (root_folder / name).write_bytes(b"%PDF scan")
    except OSError:
        pytest.skip("File system rejects file names that are not valid UTF-8")
    return name
