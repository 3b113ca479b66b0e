"""
Runtime configuration for filetagger.

Configuration comes from environment variables, optionally seeded from a
``.env`` file in the working directory:

    ROOT_FOLDER_TO_SCAN   Folder that scopes every scan and file operation (required)
    HOST                  Interface the web server binds to (default 127.0.0.1)
    PORT                  Port the web server listens on (default 3000)
    FILETAGGER_LOG_FILE   Optional path of the activity log

Variables already present in the environment win over the ``.env`` file.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from dotenv import find_dotenv, load_dotenv

ROOT_ENV_VAR = "ROOT_FOLDER_TO_SCAN"
HOST_ENV_VAR = "HOST"
PORT_ENV_VAR = "PORT"
LOG_FILE_ENV_VAR = "FILETAGGER_LOG_FILE"

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 3000


class ConfigError(Exception):
    """Raised when the configuration cannot be used to start filetagger."""


@dataclass(frozen=True)
class AppConfig:
    """Validated runtime configuration."""
    root_folder: Path                 # Resolved root folder
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    log_file: Optional[Path] = None   # Activity log path, if enabled


def validate_root_folder(root: Path) -> Path:
    """
    Validate that the root folder exists, is a directory and is readable.

    Args:
        root: Path to validate.

    Returns:
        The resolved root path.

    Raises:
        ConfigError: If validation fails, with a descriptive message.
    """
    resolved = Path(root).expanduser().resolve()

    if not resolved.exists():
        raise ConfigError(f"Root folder does not exist: {root}")

    if not resolved.is_dir():
        raise ConfigError(f"Root folder is not a directory: {root}")

    if not os.access(resolved, os.R_OK):
        raise ConfigError(f"Permission denied - cannot read: {root}")

    return resolved


def load_config(
    root_folder: Optional[Path] = None,
    host: Optional[str] = None,
    port: Optional[int] = None,
    log_file: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> AppConfig:
    """
    Build an AppConfig from explicit values, falling back to the environment.

    Args:
        root_folder: Overrides ROOT_FOLDER_TO_SCAN when given.
        host: Overrides HOST when given.
        port: Overrides PORT when given.
        log_file: Overrides FILETAGGER_LOG_FILE when given.
        environ: Mapping to read instead of os.environ. When omitted, a
            ``.env`` file is loaded into os.environ first.

    Returns:
        Validated AppConfig.

    Raises:
        ConfigError: If the root folder is unset or invalid, or PORT is not
            a valid port number.
    """
    if environ is None:
        load_dotenv(find_dotenv(usecwd=True), override=False)
        environ = os.environ

    if root_folder is None:
        raw_root = environ.get(ROOT_ENV_VAR, "").strip()
        if not raw_root:
            raise ConfigError(
                f"{ROOT_ENV_VAR} is not set. Set it to the folder you want to scan."
            )
        root_folder = Path(raw_root)

    resolved_root = validate_root_folder(root_folder)

    if host is None:
        host = environ.get(HOST_ENV_VAR, "").strip() or DEFAULT_HOST

    if port is None:
        raw_port = environ.get(PORT_ENV_VAR, "").strip()
        if raw_port:
            try:
                port = int(raw_port)
            except ValueError:
                raise ConfigError(f"{PORT_ENV_VAR} must be an integer, got {raw_port!r}")
        else:
            port = DEFAULT_PORT
    if not 0 < port < 65536:
        raise ConfigError(f"Port must be between 1 and 65535, got {port}")

    if log_file is None:
        raw_log = environ.get(LOG_FILE_ENV_VAR, "").strip()
        log_file = Path(raw_log) if raw_log else None

    return AppConfig(
        root_folder=resolved_root,
        host=host,
        port=port,
        log_file=log_file,
    )
