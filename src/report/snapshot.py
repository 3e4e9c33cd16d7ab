"""Assemble the environment snapshot from the individual probes.

The snapshot is a plain, JSON-serializable dict built once per run. Each
section is collected through the safe-call wrapper, so a probe that fails
leaves null in its own section and never aborts the rest of the snapshot.
Redaction is not applied here; see report.redaction.
"""

import re
from collections.abc import Callable
from typing import Any, Optional

from pydantic import BaseModel

from constants import (
    HTTP_PROXY_ENV_VARS,
    HTTPS_PROXY_ENV_VARS,
    NPM_ENV_EXCLUDE_PATTERN,
    NPM_ENV_PATTERN,
    PATH_ENV_VARS,
)
from log import get_logger
from models.config import ReportConfiguration
from models.context import ProbeContext
from models.snapshot import PathInfo, ProxyInfo
from probes.ci import ci_info
from probes.git import git_info
from probes.host import os_info, process_info, streams_info
from probes.package import package_info
from probes.package_manager import package_manager_info
from probes.runtime import (
    is_alpine,
    is_bundled,
    is_electron,
    libc_info,
    napi_version,
    node_versions,
    python_versions,
)
from utils.records import filter_items, mask, uniq
from utils.safe_call import optional

logger = get_logger(__name__)

NPM_ENV_RE = re.compile(NPM_ENV_PATTERN, re.IGNORECASE)
NPM_ENV_EXCLUDE_RE = re.compile(NPM_ENV_EXCLUDE_PATTERN, re.IGNORECASE)


def _section(name: str, probe: Callable[[], Any]) -> Any:
    """Run a section probe, dumping pydantic models to plain dicts."""
    value = optional(probe, name=name)
    if isinstance(value, BaseModel):
        return value.model_dump()
    return value


# =============================================================================
# Sections built from the environment
# =============================================================================


def npm_env(context: ProbeContext, config: ReportConfiguration) -> dict[str, Any]:
    """
    Return the npm_* variables, masking the ones that identify the user.

    npm_config__* variables carry registry credentials and are left out.

    Parameters:
        context: The probe context.
        config: The report configuration.

    Returns:
        dict[str, Any]: npm variables, masked unless running in CI.
    """
    variables = filter_items(
        context.env,
        lambda key, _: bool(NPM_ENV_RE.match(key))
        and not NPM_ENV_EXCLUDE_RE.match(key),
    )
    return mask(variables, config.npm_env_masks, ci=context.is_ci)


def proxy_info(context: ProbeContext) -> ProxyInfo:
    """Return the proxies configured through the environment."""
    return ProxyInfo(
        http=context.getenv(*HTTP_PROXY_ENV_VARS),
        https=context.getenv(*HTTPS_PROXY_ENV_VARS),
    )


def path_info(context: ProbeContext) -> PathInfo:
    """Return the path separator and search path delimiter of the platform."""
    if context.platform == "win32":
        return PathInfo(sep="\\", delimiter=";")
    return PathInfo(sep="/", delimiter=":")


def search_path(context: ProbeContext) -> list[str]:
    """
    Return the executable search path as a deduplicated list.

    The first of path, PATH and Path that is set is used.

    Parameters:
        context: The probe context.

    Returns:
        list[str]: Non-empty, unique search path entries in original order.
    """
    raw = context.getenv(*PATH_ENV_VARS)
    if raw is None:
        return []
    return uniq(raw.split(path_info(context).delimiter))


def environment(context: ProbeContext, config: ReportConfiguration) -> dict[str, Any]:
    """
    Return the environment without denylisted variables.

    The case variants of the search path variable are folded into a single
    deduplicated PATH entry.

    Parameters:
        context: The probe context.
        config: The report configuration.

    Returns:
        dict[str, Any]: Reported environment variables.
    """
    variables = filter_items(
        context.env,
        lambda key, _: not config.env_denylist_re.match(key)
        and key not in PATH_ENV_VARS,
    )
    variables["PATH"] = search_path(context)
    return variables


# =============================================================================
# Public API
# =============================================================================


def build_snapshot(
    context: ProbeContext, config: Optional[ReportConfiguration] = None
) -> dict[str, Any]:
    """
    Collect the complete environment snapshot.

    Parameters:
        context: The probe context to collect the snapshot for.
        config: The report configuration; defaults are used when omitted.

    Returns:
        dict[str, Any]: The unredacted snapshot, ready for emission.
    """
    config = config or ReportConfiguration()
    logger.debug("Collecting environment snapshot for %s", context.cwd)

    node = optional(lambda: node_versions(context), name="node versions")
    versions = {**python_versions(), "node": node}

    return {
        "pm": _section("pm", lambda: package_manager_info(context)),
        "npm": {"env": _section("npm.env", lambda: npm_env(context, config))},
        "pkg": _section("pkg", lambda: package_info(context)),
        "git": _section("git", lambda: git_info(context)),
        "ci": _section("ci", lambda: ci_info(context)),
        "bundled": _section("bundled", is_bundled),
        "electron": _section("electron", lambda: is_electron(context, node)),
        "alpine": _section("alpine", lambda: is_alpine(context)),
        "proxy": _section("proxy", lambda: proxy_info(context)),
        "process": _section("process", lambda: process_info(context, versions)),
        "streams": _section("streams", streams_info),
        "os": _section("os", os_info),
        "libc": _section("libc", lambda: libc_info(context)),
        "napi": _section("napi", lambda: napi_version(node)),
        "path": _section("path", lambda: path_info(context)),
        "env": _section("env", lambda: environment(context, config)),
    }
