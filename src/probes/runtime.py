"""Runtime probes: Node.js versions, libc and bundling flags."""

import glob
import json
import os
import platform
import re
import shutil
import subprocess
import sys
from typing import Any, Optional

from constants import ALPINE_RELEASE_FILE, ELECTRON_RUN_AS_NODE_ENV_VAR
from log import get_logger
from models.context import ProbeContext
from models.snapshot import LibcInfo

logger = get_logger(__name__)

NODE_VERSIONS_SCRIPT = "process.stdout.write(JSON.stringify(process.versions))"
MUSL_LOADER_GLOB = "/lib/ld-musl-*.so.1"
MUSL_VERSION_RE = re.compile(r"^Version\s+(\S+)", re.MULTILINE)


def _which(context: ProbeContext, command: str) -> Optional[str]:
    """Resolve an executable on the context's search path."""
    return shutil.which(command, path=context.getenv("PATH", "Path", "path"))


def node_versions(context: ProbeContext) -> Optional[dict[str, Any]]:
    """
    Return process.versions of the Node.js runtime on the search path.

    Parameters:
        context: The probe context.

    Returns:
        Optional[dict[str, Any]]: Component versions reported by node, or
        None when no node executable is found.

    Raises:
        subprocess.CalledProcessError: node exited with a failure.
        ValueError: node printed something other than a JSON object.
    """
    node = _which(context, "node")
    if node is None:
        logger.debug("node executable not found")
        return None

    completed = subprocess.run(
        [node, "-e", NODE_VERSIONS_SCRIPT],
        cwd=context.cwd,
        capture_output=True,
        text=True,
        check=True,
    )
    versions = json.loads(completed.stdout)
    if not isinstance(versions, dict):
        raise ValueError(f"unexpected node versions output: {completed.stdout!r}")
    return versions


def python_versions() -> dict[str, str]:
    """Return the versions of the Python runtime running the report."""
    return {
        "python": platform.python_version(),
        "implementation": sys.implementation.name,
        "compiler": platform.python_compiler(),
    }


def napi_version(versions: Optional[dict[str, Any]]) -> Optional[str]:
    """Return the Node-API version from Node.js process.versions, if present."""
    if not versions:
        return None
    return versions.get("napi") or None


def is_bundled() -> bool:
    """
    Return True when running from a bundled executable.

    Bundlers such as PyInstaller and cx_Freeze set sys.frozen on the
    executables they build.
    """
    return bool(getattr(sys, "frozen", False))


def is_electron(context: ProbeContext, versions: Optional[dict[str, Any]]) -> bool:
    """Return True when Node.js runs inside Electron."""
    return bool(
        (versions and versions.get("electron"))
        or context.env.get(ELECTRON_RUN_AS_NODE_ENV_VAR)
    )


def is_alpine(context: ProbeContext) -> bool:
    """Return True on Alpine Linux."""
    return context.platform.startswith("linux") and os.path.exists(
        ALPINE_RELEASE_FILE
    )


def _musl_version(context: ProbeContext) -> Optional[str]:
    """Return the musl version printed by ldd, which musl's ldd writes to stderr."""
    ldd = _which(context, "ldd")
    if ldd is None:
        return None
    completed = subprocess.run(
        [ldd, "--version"], capture_output=True, text=True, check=False
    )
    match = MUSL_VERSION_RE.search(completed.stderr or completed.stdout)
    return match.group(1) if match else None


def libc_info(context: ProbeContext) -> LibcInfo:
    """
    Identify the C standard library of a Linux host.

    Parameters:
        context: The probe context.

    Returns:
        LibcInfo: "glibc" or "musl" with its version; both fields are None
        on other platforms or when the library is not recognized.
    """
    if not context.platform.startswith("linux"):
        return LibcInfo()

    family, version = platform.libc_ver()
    if family == "glibc":
        return LibcInfo(family=family, version=version or None)

    if glob.glob(MUSL_LOADER_GLOB):
        return LibcInfo(family="musl", version=_musl_version(context))

    return LibcInfo()
