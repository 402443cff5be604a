"""
WSL → Windows path translation.

``powershell.exe`` launched from WSL cannot open Linux paths directly; it
needs the UNC root of the distribution (``\\\\wsl.localhost\\Ubuntu``)
prepended. The root is discovered by asking PowerShell for its working
directory while started from ``/``. That probe is slow, so its result,
including failure, is computed at most once per process.
"""

from __future__ import annotations

import asyncio
import threading
from collections.abc import Callable
from pathlib import PurePath
from typing import Generic, TypeVar

import structlog

from .environment import Environment

logger = structlog.get_logger()

T = TypeVar("T")

# Strips the ``Microsoft.PowerShell.Core\FileSystem::`` provider prefix.
WSL_ROOT_PROBE: list[str] = [
    "powershell.exe",
    "-c",
    "(Get-Location).Path -replace '^.*::', ''",
]


class OnceCell(Generic[T]):
    """Single-assignment cell initialised by exactly one caller.

    The first :meth:`get_or_init` runs *factory* under a lock; callers
    arriving meanwhile block and then read the stored value. Once set the
    value never changes.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._initialised = False
        self._value: T | None = None

    @property
    def initialised(self) -> bool:
        return self._initialised

    def get(self) -> T | None:
        """Return the stored value, or ``None`` if not yet initialised."""
        return self._value

    def get_or_init(self, factory: Callable[[], T]) -> T:
        if self._initialised:
            return self._value  # type: ignore[return-value]
        with self._lock:
            if not self._initialised:
                self._value = factory()
                self._initialised = True
        return self._value  # type: ignore[return-value]


_WSL_ROOT_PATH: OnceCell[str | None] = OnceCell()


def probe_wsl_root_path(environment: Environment) -> str | None:
    """Ask PowerShell for the UNC path of the WSL root.

    Returns:
        The trimmed path, or ``None`` if PowerShell could not be run or
        its output was not valid UTF-8.
    """
    try:
        output = environment.run_capture(WSL_ROOT_PROBE, cwd="/")
    except OSError as exc:
        logger.error("wsl_root_probe_failed", error=str(exc))
        return None

    try:
        root = output.stdout.decode("utf-8").strip()
    except UnicodeDecodeError as exc:
        logger.error("wsl_root_probe_bad_output", error=str(exc))
        return None

    logger.info("wsl_root_path_detected", root=root)
    return root


async def get_wsl_root_path(
    environment: Environment,
    *,
    cell: OnceCell[str | None] | None = None,
    probe: Callable[[Environment], str | None] = probe_wsl_root_path,
) -> str | None:
    """Return the cached WSL root path, probing on first use.

    Args:
        environment: Host environment used to run the probe.
        cell: Cache to use (defaults to the process-wide cell).
        probe: Callable performing the actual lookup.
    """
    target = cell if cell is not None else _WSL_ROOT_PATH
    if target.initialised:
        return target.get()
    return await asyncio.to_thread(target.get_or_init, lambda: probe(environment))


async def wsl_to_windows_path(
    path: PurePath | str,
    environment: Environment,
    *,
    cell: OnceCell[str | None] | None = None,
    probe: Callable[[Environment], str | None] = probe_wsl_root_path,
) -> str | None:
    """Convert a WSL path into one ``powershell.exe`` can open.

    Relative paths are returned unchanged. Absolute paths get the WSL root
    prepended as-is; PowerShell accepts the forward slashes.

    Returns:
        The translated path, or ``None`` if the WSL root is unknown.
    """
    path_str = str(path)
    if not path_str.startswith("/"):
        logger.debug("wsl_relative_path_kept", path=path_str)
        return path_str

    root = await get_wsl_root_path(environment, cell=cell, probe=probe)
    if root is None:
        logger.error("wsl_path_translation_failed", path=path_str)
        return None

    windows_path = f"{root}{path_str}"
    logger.debug("wsl_path_translated", path=path_str, windows_path=windows_path)
    return windows_path
