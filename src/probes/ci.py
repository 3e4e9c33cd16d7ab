"""Continuous integration vendor and pull request detection."""

import json
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Optional

from constants import TRAVIS_SECURE_ENV_VARS_ENV_VAR
from log import get_logger
from models.context import ProbeContext
from models.snapshot import CIInfo

logger = get_logger(__name__)

GITHUB_PULL_REQUEST_EVENTS = ("pull_request", "pull_request_target")


@dataclass(frozen=True)
class CIVendor:
    """
    Recognition rule for a CI vendor.

    Attributes:
        name: Canonical vendor name.
        env: Variables that must all be set for the vendor to match.
        env_values: Variables that must hold exactly the given value.
        is_fork_pr: Vendor-specific fork pull request check, if known.
    """

    name: str
    env: tuple[str, ...] = ()
    env_values: tuple[tuple[str, str], ...] = ()
    is_fork_pr: Optional[Callable[[ProbeContext], bool]] = None

    def matches(self, context: ProbeContext) -> bool:
        """Return True when the environment identifies this vendor."""
        return all(context.env.get(name) for name in self.env) and all(
            context.env.get(name) == value for name, value in self.env_values
        )


# =============================================================================
# Fork pull request checks
# =============================================================================


def _read_github_event(context: ProbeContext) -> dict[str, Any]:
    """Read the GitHub Actions event payload, or return an empty dict."""
    event_path = context.env.get("GITHUB_EVENT_PATH")
    if not event_path:
        return {}
    try:
        with open(event_path, "r", encoding="utf-8") as f:
            event = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning("Failed to read GitHub event payload %s: %s", event_path, e)
        return {}
    return event if isinstance(event, dict) else {}


def _repo_full_name(event: dict[str, Any], side: str) -> Optional[str]:
    """Return pull_request.<side>.repo.full_name of a GitHub event payload."""
    pull_request = event.get("pull_request") or {}
    return ((pull_request.get(side) or {}).get("repo") or {}).get("full_name")


def github_actions_is_fork_pr(context: ProbeContext) -> bool:
    """Pull request events whose head repository differs from the base."""
    if context.env.get("GITHUB_EVENT_NAME") not in GITHUB_PULL_REQUEST_EVENTS:
        return False
    event = _read_github_event(context)
    head = _repo_full_name(event, "head")
    base = _repo_full_name(event, "base")
    return head is not None and base is not None and head != base


def travis_is_fork_pr(context: ProbeContext) -> bool:
    """Pull requests whose slug differs from the repository slug."""
    pull_request = context.env.get("TRAVIS_PULL_REQUEST")
    if not pull_request or pull_request == "false":
        return False
    return context.env.get("TRAVIS_PULL_REQUEST_SLUG") != context.env.get(
        "TRAVIS_REPO_SLUG"
    )


def circleci_is_fork_pr(context: ProbeContext) -> bool:
    """CircleCI only sets CIRCLE_PR_NUMBER for pull requests from forks."""
    return bool(context.env.get("CIRCLE_PR_NUMBER"))


def appveyor_is_fork_pr(context: ProbeContext) -> bool:
    """Pull requests whose head repository differs from the built repository."""
    if not context.env.get("APPVEYOR_PULL_REQUEST_NUMBER"):
        return False
    return context.env.get("APPVEYOR_PULL_REQUEST_HEAD_REPO_NAME") != context.env.get(
        "APPVEYOR_REPO_NAME"
    )


def azure_pipelines_is_fork_pr(context: ProbeContext) -> bool:
    """Azure Pipelines flags fork pull requests explicitly."""
    return context.env.get("SYSTEM_PULLREQUEST_ISFORK", "").lower() == "true"


# =============================================================================
# Vendor registry
# =============================================================================

# Checked in order; the first match wins.
CI_VENDORS: tuple[CIVendor, ...] = (
    CIVendor(
        "GitHub Actions",
        env=("GITHUB_ACTIONS",),
        is_fork_pr=github_actions_is_fork_pr,
    ),
    CIVendor("Travis CI", env=("TRAVIS",), is_fork_pr=travis_is_fork_pr),
    CIVendor("CircleCI", env=("CIRCLECI",), is_fork_pr=circleci_is_fork_pr),
    CIVendor("AppVeyor", env=("APPVEYOR",), is_fork_pr=appveyor_is_fork_pr),
    CIVendor("GitLab CI", env=("GITLAB_CI",)),
    CIVendor(
        "Azure Pipelines",
        env=("TF_BUILD",),
        is_fork_pr=azure_pipelines_is_fork_pr,
    ),
    CIVendor("Buildkite", env=("BUILDKITE",)),
    CIVendor("Bitbucket Pipelines", env=("BITBUCKET_COMMIT",)),
    CIVendor("Jenkins", env=("JENKINS_URL", "BUILD_ID")),
    CIVendor("TeamCity", env=("TEAMCITY_VERSION",)),
    CIVendor("Drone", env=("DRONE",)),
    CIVendor("Semaphore", env=("SEMAPHORE",)),
    CIVendor("Cirrus CI", env=("CIRRUS_CI",)),
    CIVendor("Netlify CI", env=("NETLIFY",)),
    CIVendor("Vercel", env=("VERCEL",)),
    CIVendor("Codeship", env_values=(("CI_NAME", "codeship"),)),
)


def detect_vendor(context: ProbeContext) -> Optional[CIVendor]:
    """
    Return the first registered vendor matching the environment.

    Parameters:
        context: The probe context.

    Returns:
        Optional[CIVendor]: The detected vendor, or None if unrecognized.
    """
    for vendor in CI_VENDORS:
        if vendor.matches(context):
            return vendor
    return None


def ci_info(context: ProbeContext) -> Optional[CIInfo]:
    """
    Describe the CI environment, if the report runs in one.

    Parameters:
        context: The probe context.

    Returns:
        Optional[CIInfo]: Vendor name, fork pull request flag and availability
        of secure environment variables, or None outside of CI.
    """
    if not context.is_ci:
        return None

    vendor = detect_vendor(context)
    is_fork_pr = bool(vendor and vendor.is_fork_pr and vendor.is_fork_pr(context))
    secure_env = (
        not is_fork_pr and context.env.get(TRAVIS_SECURE_ENV_VARS_ENV_VAR) != "false"
    )

    return CIInfo(
        name=vendor.name if vendor else None,
        is_fork_pr=is_fork_pr,
        secure_env=secure_env,
    )
