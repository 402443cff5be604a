"""
Port-file registry for Vibe Kanban.

The backend records the port it bound to in a well-known file under the
system temp directory so that sibling processes can discover it without
configuration: ``<tempdir>/<app_name>/<app_name>.port``.
"""

from __future__ import annotations

import asyncio
import tempfile
from pathlib import Path

import structlog

logger = structlog.get_logger()

DEFAULT_APP_NAME = "vibe-kanban"


class PortFileError(Exception):
    """Raised when a port file is missing, unreadable or malformed."""


def port_file_path(app_name: str = DEFAULT_APP_NAME) -> Path:
    """Return the port-file location for *app_name*."""
    return Path(tempfile.gettempdir()) / app_name / f"{app_name}.port"


def _write(path: Path, port: int) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(str(port), encoding="utf-8")


def _read(path: Path) -> int:
    try:
        raw = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise PortFileError(f"Cannot read port file {path}: {exc}") from exc
    try:
        port = int(raw.strip())
    except ValueError as exc:
        raise PortFileError(f"Port file {path} does not contain a port: {raw!r}") from exc
    if not 0 <= port <= 65535:
        raise PortFileError(f"Port file {path} holds an out-of-range port: {port}")
    return port


async def write_port_file(port: int, app_name: str = DEFAULT_APP_NAME) -> Path:
    """Record *port* for *app_name* and return the file path.

    Raises:
        ValueError: If *port* is not a valid TCP port.
    """
    if not 0 <= port <= 65535:
        raise ValueError(f"Invalid port: {port}")
    path = port_file_path(app_name)
    await asyncio.to_thread(_write, path, port)
    logger.debug("port_file_written", path=str(path), port=port)
    return path


async def read_port_file(app_name: str = DEFAULT_APP_NAME) -> int:
    """Return the port recorded for *app_name*.

    Raises:
        PortFileError: If the file is missing, unreadable or malformed.
    """
    return await asyncio.to_thread(_read, port_file_path(app_name))
