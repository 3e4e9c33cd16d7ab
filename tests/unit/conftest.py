"""Shared fixtures for environment report unit tests."""

from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Optional

import pytest

from models.context import ProbeContext

TEST_USERNAME = "jdoe"
TEST_HOSTNAME = "devbox"

ContextFactory = Callable[..., ProbeContext]


@pytest.fixture(name="make_context")
def make_context_fixture(tmp_path: Path) -> ContextFactory:
    """Build ProbeContext instances rooted in a temporary working directory.

    Parameters:
        tmp_path: Temporary directory used as the default working directory.

    Returns:
        A factory accepting env, cwd, platform, username and hostname
        keyword arguments.
    """

    def _make(
        env: Optional[Mapping[str, str]] = None,
        cwd: Optional[Path] = None,
        platform: str = "linux",
        username: Optional[str] = TEST_USERNAME,
        hostname: Optional[str] = TEST_HOSTNAME,
    ) -> ProbeContext:
        return ProbeContext(
            env=dict(env or {}),
            cwd=cwd or tmp_path,
            platform=platform,
            username=username,
            hostname=hostname,
        )

    return _make
