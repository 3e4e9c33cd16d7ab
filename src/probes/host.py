"""Operating system, process and stream probes."""

import os
import platform
import socket
import sys
import sysconfig
import tempfile
from pathlib import Path
from typing import Any, Optional, TextIO

from constants import PROCESS_ATTRIBUTE_EXCLUDES
from models.context import ProbeContext
from utils.records import filter_items
from utils.safe_call import optional

PRIMITIVE_TYPES = (str, int, float, bool)


def is_reportable_attribute(name: str, value: Any) -> bool:
    """
    Decide whether an interpreter attribute belongs in the "process" section.

    Primitive values and lists or tuples of primitives qualify; callables,
    modules, objects, private names and the excluded attributes do not.

    Parameters:
        name: Attribute name.
        value: Attribute value.

    Returns:
        bool: True if the attribute should be reported.
    """
    if name.startswith("_") or name in PROCESS_ATTRIBUTE_EXCLUDES:
        return False
    if isinstance(value, PRIMITIVE_TYPES):
        return True
    if isinstance(value, (list, tuple)):
        return all(isinstance(item, PRIMITIVE_TYPES) for item in value)
    return False


def user_info() -> dict[str, Any]:
    """
    Return the password database entry of the current user.

    Raises:
        ImportError: The platform has no pwd module (Windows).
        KeyError: The current uid has no entry.
    """
    import pwd  # pylint: disable=import-outside-toplevel

    entry = pwd.getpwuid(os.getuid())
    return {
        "uid": entry.pw_uid,
        "gid": entry.pw_gid,
        "username": entry.pw_name,
        "homedir": entry.pw_dir,
        "shell": entry.pw_shell or None,
    }


def os_info() -> dict[str, Any]:
    """
    Describe the operating system.

    Every field is probed on its own so that one unsupported call only
    blanks that field.

    Returns:
        dict[str, Any]: type, release, version, hostname, tmpdir, homedir and
        userInfo of the host.
    """
    return {
        "type": optional(platform.system),
        "release": optional(platform.release),
        "version": optional(platform.version),
        "hostname": optional(socket.gethostname),
        "tmpdir": optional(tempfile.gettempdir),
        "homedir": optional(lambda: str(Path.home()), name="homedir"),
        "userInfo": optional(user_info if hasattr(os, "getuid") else None),
    }


def build_config() -> dict[str, Any]:
    """Return the build configuration of the Python runtime."""
    return {
        "platform": sysconfig.get_platform(),
        "python_version": sysconfig.get_python_version(),
        "paths": sysconfig.get_paths(),
    }


def process_info(context: ProbeContext, versions: dict[str, Any]) -> dict[str, Any]:
    """
    Describe the running process.

    Parameters:
        context: The probe context.
        versions: Runtime component versions to report.

    Returns:
        dict[str, Any]: Reportable interpreter attributes plus working
        directory, ids, build configuration and versions.
    """
    return {
        **filter_items(vars(sys), is_reportable_attribute),
        "cwd": str(context.cwd),
        "pid": os.getpid(),
        "ppid": optional(getattr(os, "getppid", None), name="getppid"),
        "config": optional(build_config),
        "versions": versions,
        "uid": optional(getattr(os, "getuid", None), name="getuid"),
        "gid": optional(getattr(os, "getgid", None), name="getgid"),
        "egid": optional(getattr(os, "getegid", None), name="getegid"),
        "euid": optional(getattr(os, "geteuid", None), name="geteuid"),
        "groups": optional(getattr(os, "getgroups", None), name="getgroups"),
    }


def _is_tty(stream: Optional[TextIO]) -> Optional[bool]:
    """Return whether a standard stream is attached to a terminal."""
    if stream is None:
        return None
    return optional(stream.isatty, name="isatty")


def streams_info() -> dict[str, dict[str, Optional[bool]]]:
    """Report which standard streams are attached to a terminal."""
    return {
        "stdin": {"isTTY": _is_tty(sys.stdin)},
        "stdout": {"isTTY": _is_tty(sys.stdout)},
        "stderr": {"isTTY": _is_tty(sys.stderr)},
    }
