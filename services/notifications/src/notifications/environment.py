"""
Host environment access for the notification service.

Everything the channels and resolvers need from the operating system
(environment variables, files, the platform identity, process launches)
goes through :class:`Environment`, so tests can substitute a fake and
exercise every platform branch on any machine.
"""

from __future__ import annotations

import asyncio
import os
import platform
import subprocess
from dataclasses import dataclass
from pathlib import Path

import structlog

from vk_common.utils import is_wsl2

from .background import spawn_detached

logger = structlog.get_logger()


@dataclass(frozen=True)
class CapturedOutput:
    """Result of a synchronous process run."""

    returncode: int
    stdout: bytes


class Environment:
    """Real host environment backed by ``os``, ``platform`` and asyncio."""

    def getenv(self, name: str) -> str | None:
        """Return the environment variable *name* or ``None`` if unset."""
        return os.environ.get(name)

    def cwd(self) -> Path:
        """Return the current working directory."""
        return Path.cwd()

    def system(self) -> str:
        """Return the OS identity as reported by :func:`platform.system`."""
        return platform.system()

    def is_wsl(self) -> bool:
        """Return ``True`` under a WSL Linux distribution."""
        return is_wsl2()

    async def read_text(self, path: Path) -> str:
        """Read *path* as UTF-8 text.

        Raises:
            OSError: If the file cannot be read.
            UnicodeDecodeError: If the file is not valid UTF-8.
        """
        return await asyncio.to_thread(path.read_text, encoding="utf-8")

    async def spawn(self, *argv: str, inherit_output: bool = False) -> None:
        """Launch *argv* without waiting for it to exit.

        The exit status is never observed; a detached task reaps the child.

        Raises:
            OSError: If the process could not be started.
        """
        output = None if inherit_output else asyncio.subprocess.DEVNULL
        proc = await asyncio.create_subprocess_exec(
            *argv,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=output,
            stderr=output,
        )
        logger.debug("process_spawned", program=argv[0], pid=proc.pid)
        spawn_detached(proc.wait(), name=f"reap-{argv[0]}-{proc.pid}")

    def run_capture(self, argv: list[str], *, cwd: str | None = None) -> CapturedOutput:
        """Run *argv* to completion and capture its stdout.

        Blocking; callers on an event loop should use a worker thread.

        Raises:
            OSError: If the process could not be started.
        """
        completed = subprocess.run(
            argv,
            cwd=cwd,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            check=False,
        )
        return CapturedOutput(returncode=completed.returncode, stdout=completed.stdout)
