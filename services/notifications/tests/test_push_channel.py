"""
Tests for the desktop push notification channel.
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

from vk_common.assets import AssetNotFoundError
from vk_common.models.notification import NotificationConfig

from notifications import background
from notifications.channels.push import PushChannel, macos_script

_CONFIG = NotificationConfig(push_enabled=True)
_SCRIPT = Path("/home/u/.cache/vibe-kanban/toast-notification.ps1")


def _channel(env, settings, **kwargs) -> PushChannel:
    kwargs.setdefault("script_locator", AsyncMock(return_value=_SCRIPT))
    kwargs.setdefault("native_notify", MagicMock())
    return PushChannel(env, settings, **kwargs)


# ── AppleScript ──


class TestMacosScript:
    def test_script_shape(self) -> None:
        assert macos_script("Done", "Task finished") == (
            'display notification "Task finished" with title "Done" sound name "Glass"'
        )

    def test_quotes_escaped(self) -> None:
        script = macos_script('say "hi"', 'msg "x"')
        assert 'with title "say \\"hi\\""' in script
        assert 'display notification "msg \\"x\\""' in script


# ── platform dispatch ──


class TestPushPlatforms:
    async def test_macos_runs_osascript(self, fake_env_factory, settings) -> None:
        env = fake_env_factory(system="Darwin")
        await _channel(env, settings).send(_CONFIG, "Done", "ok")
        assert env.spawned == [("osascript", "-e", macos_script("Done", "ok"))]

    async def test_macos_launch_failure_swallowed(self, fake_env_factory, settings) -> None:
        env = fake_env_factory(system="Darwin", missing={"osascript"})
        await _channel(env, settings).send(_CONFIG, "Done", "ok")
        assert env.spawned == []

    async def test_linux_uses_native_notify_in_background(self, fake_env_factory, settings) -> None:
        env = fake_env_factory(system="Linux")
        native = MagicMock()
        await _channel(env, settings, native_notify=native).send(_CONFIG, "Done", "ok")
        await background.drain(timeout=2.0)

        native.assert_called_once_with(
            title="Done", message="ok", app_name=settings.app_name, timeout=10
        )
        assert env.spawned == []

    async def test_linux_native_failure_logged(self, fake_env_factory, settings, log_events) -> None:
        env = fake_env_factory(system="Linux")
        native = MagicMock(side_effect=RuntimeError("no dbus"))
        await _channel(env, settings, native_notify=native).send(_CONFIG, "Done", "ok")
        await background.drain(timeout=2.0)

        errors = [e for e in log_events if e["event"] == "linux_notification_failed"]
        assert errors and errors[0]["error"] == "no dbus"

    async def test_windows_runs_toast_script(self, fake_env_factory, settings) -> None:
        env = fake_env_factory(system="Windows")
        await _channel(env, settings).send(_CONFIG, "Done", "ok")
        assert env.spawned == [
            (
                "powershell.exe",
                "-NoProfile",
                "-ExecutionPolicy",
                "Bypass",
                "-File",
                str(_SCRIPT),
                "-Title",
                "Done",
                "-Message",
                "ok",
            )
        ]

    async def test_wsl_translates_script_path(self, fake_env_factory, settings) -> None:
        env = fake_env_factory(system="Linux", wsl=True)
        translated = "\\\\wsl.localhost\\Ubuntu" + str(_SCRIPT)
        with patch(
            "notifications.channels.push.wsl_to_windows_path",
            AsyncMock(return_value=translated),
        ):
            await _channel(env, settings).send(_CONFIG, "Done", "ok")
        assert env.spawned[0][5] == translated

    async def test_missing_script_aborts(self, fake_env_factory, settings, log_events) -> None:
        env = fake_env_factory(system="Windows")
        locator = AsyncMock(side_effect=AssetNotFoundError("no script"))
        assert await _channel(env, settings, script_locator=locator).send(_CONFIG, "Done", "ok") is False

        assert env.spawned == []
        errors = [e for e in log_events if e["event"] == "toast_script_unavailable"]
        assert errors and errors[0]["log_level"] == "error"

    async def test_windows_launch_failure_swallowed(self, fake_env_factory, settings) -> None:
        env = fake_env_factory(system="Windows", missing={"powershell.exe"})
        assert await _channel(env, settings).send(_CONFIG, "Done", "ok") is False
        assert env.spawned == []

    async def test_default_locator_materialises_script(self, fake_env_factory, settings) -> None:
        env = fake_env_factory(system="Windows")
        await PushChannel(env, settings).send(_CONFIG, "Done", "ok")
        script = Path(env.spawned[0][5])
        assert script == settings.cache_dir / "toast-notification.ps1"
        assert script.is_file()

    async def test_unknown_platform_no_op(self, fake_env_factory, settings) -> None:
        env = fake_env_factory(system="Haiku")
        native = MagicMock()
        assert await _channel(env, settings, native_notify=native).send(_CONFIG, "Done", "ok") is False
        await background.drain(timeout=2.0)
        assert env.spawned == []
        native.assert_not_called()
