"""
Tests for platform classification.
"""

from __future__ import annotations

import pytest

from notifications.platforms import PlatformCategory, classify


class TestClassify:
    @pytest.mark.parametrize(
        ("system", "is_wsl", "expected"),
        [
            ("Darwin", False, PlatformCategory.MACOS),
            ("Linux", False, PlatformCategory.LINUX),
            ("Linux", True, PlatformCategory.WSL),
            ("Windows", False, PlatformCategory.WINDOWS),
            ("FreeBSD", False, PlatformCategory.OTHER),
            ("", False, PlatformCategory.OTHER),
        ],
    )
    def test_categories(self, system: str, is_wsl: bool, expected: PlatformCategory) -> None:
        assert classify(system, is_wsl) is expected

    def test_wsl_flag_ignored_off_linux(self) -> None:
        assert classify("Darwin", True) is PlatformCategory.MACOS

    def test_windows_host_categories(self) -> None:
        hosted = {c for c in PlatformCategory if c.uses_windows_host}
        assert hosted == {PlatformCategory.WINDOWS, PlatformCategory.WSL}
