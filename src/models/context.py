"""Context objects for environment probes."""

import getpass
import os
import socket
import sys
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from constants import CI_ENV_VAR
from log import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class ProbeContext:
    """
    Read-only view of the host that every probe reads from.

    Probes never touch os.environ or the working directory directly; they
    receive a ProbeContext instead, so tests can substitute a fabricated one.

    Attributes:
        env: Environment variables visible to the process.
        cwd: Working directory the report is collected for.
        platform: Platform identifier in sys.platform form (e.g. "linux").
        username: Name of the current OS user, or None if unknown.
        hostname: Name of the current machine, or None if unknown.
    """

    env: Mapping[str, str] = field(default_factory=dict)
    cwd: Path = field(default_factory=Path.cwd)
    platform: str = sys.platform
    username: Optional[str] = None
    hostname: Optional[str] = None

    @property
    def is_ci(self) -> bool:
        """Return True when the CI indicator variable is set to a non-empty value."""
        return bool(self.env.get(CI_ENV_VAR))

    def getenv(self, *names: str) -> Optional[str]:
        """
        Return the value of the first of the given variables that is set and non-empty.

        Parameters:
            names: Variable names, checked in order.

        Returns:
            Optional[str]: The first truthy value, or None.
        """
        for name in names:
            value = self.env.get(name)
            if value:
                return value
        return None

    @classmethod
    def from_host(cls) -> "ProbeContext":
        """
        Capture the context of the running process.

        Returns:
            ProbeContext: Snapshot of the current environment, working
            directory, platform, username and hostname.
        """
        return cls(
            env=dict(os.environ),
            cwd=Path.cwd(),
            platform=sys.platform,
            username=_current_username(),
            hostname=_current_hostname(),
        )


def _current_username() -> Optional[str]:
    """
    Return the name of the account the process runs as, or None if unknown.

    On POSIX this is the password database entry of the real user id;
    LOGNAME and USER are not consulted unless the uid has no entry.
    """
    if hasattr(os, "getuid"):
        import pwd  # pylint: disable=import-outside-toplevel

        try:
            return pwd.getpwuid(os.getuid()).pw_name
        except KeyError:
            logger.debug("uid %d has no password database entry", os.getuid())
    try:
        return getpass.getuser()
    except (OSError, KeyError):
        return None


def _current_hostname() -> Optional[str]:
    """Return the name of the current machine, or None if it cannot be determined."""
    try:
        return socket.gethostname() or None
    except OSError:
        return None
