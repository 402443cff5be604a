"""Shared fixtures for notification service tests."""

from __future__ import annotations

from pathlib import Path

import pytest
import structlog

from vk_common.config import Settings

from notifications.environment import CapturedOutput, Environment


class FakeEnvironment(Environment):
    """In-memory stand-in for the host environment.

    Records every spawned command in ``spawned``; programs listed in
    ``missing`` fail to launch with ``FileNotFoundError``.
    """

    def __init__(
        self,
        *,
        system: str = "Linux",
        wsl: bool = False,
        env: dict[str, str] | None = None,
        files: dict[Path, str] | None = None,
        cwd: Path = Path("/work"),
        missing: set[str] | None = None,
        probe_stdout: bytes = b"\\\\wsl.localhost\\Ubuntu\r\n",
    ) -> None:
        self._system = system
        self._wsl = wsl
        self.env = dict(env or {})
        self.files = dict(files or {})
        self._cwd = cwd
        self.missing = set(missing or ())
        self.probe_stdout = probe_stdout
        self.spawned: list[tuple[str, ...]] = []
        self.captured: list[list[str]] = []

    def getenv(self, name: str) -> str | None:
        return self.env.get(name)

    def cwd(self) -> Path:
        return self._cwd

    def system(self) -> str:
        return self._system

    def is_wsl(self) -> bool:
        return self._wsl

    async def read_text(self, path: Path) -> str:
        try:
            return self.files[path]
        except KeyError:
            raise FileNotFoundError(str(path)) from None

    async def spawn(self, *argv: str, inherit_output: bool = False) -> None:
        if argv[0] in self.missing:
            raise FileNotFoundError(argv[0])
        self.spawned.append(argv)

    def run_capture(self, argv: list[str], *, cwd: str | None = None) -> CapturedOutput:
        if argv[0] in self.missing:
            raise FileNotFoundError(argv[0])
        self.captured.append(argv)
        return CapturedOutput(returncode=0, stdout=self.probe_stdout)


@pytest.fixture()
def fake_env_factory():
    """Return the ``FakeEnvironment`` class for per-test construction."""
    return FakeEnvironment


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    return Settings(_env_file=None, cache_dir=tmp_path / "cache", sounds_dir=tmp_path / "sounds")


@pytest.fixture()
def log_events():
    """Capture structlog events emitted during the test."""
    with structlog.testing.capture_logs() as captured:
        yield captured

