"""Unit tests for the CI probe."""

import json
from collections.abc import Callable
from pathlib import Path

import pytest

from models.context import ProbeContext
from probes.ci import CI_VENDORS, ci_info, detect_vendor

ContextFactory = Callable[..., ProbeContext]


def _github_event(path: Path, head: str, base: str) -> str:
    """Write a GitHub pull_request event payload and return its path."""
    event = {
        "pull_request": {
            "head": {"repo": {"full_name": head}},
            "base": {"repo": {"full_name": base}},
        }
    }
    path.write_text(json.dumps(event), encoding="utf-8")
    return str(path)


# =============================================================================
# Tests: detect_vendor
# =============================================================================


@pytest.mark.parametrize(
    "env,name",
    [
        ({"GITHUB_ACTIONS": "true"}, "GitHub Actions"),
        ({"TRAVIS": "true"}, "Travis CI"),
        ({"CIRCLECI": "true"}, "CircleCI"),
        ({"APPVEYOR": "True"}, "AppVeyor"),
        ({"GITLAB_CI": "true"}, "GitLab CI"),
        ({"TF_BUILD": "True"}, "Azure Pipelines"),
        ({"BUILDKITE": "true"}, "Buildkite"),
        ({"BITBUCKET_COMMIT": "abc123"}, "Bitbucket Pipelines"),
        ({"JENKINS_URL": "https://ci", "BUILD_ID": "7"}, "Jenkins"),
        ({"TEAMCITY_VERSION": "2023.05"}, "TeamCity"),
        ({"DRONE": "true"}, "Drone"),
        ({"SEMAPHORE": "true"}, "Semaphore"),
        ({"CIRRUS_CI": "true"}, "Cirrus CI"),
        ({"NETLIFY": "true"}, "Netlify CI"),
        ({"VERCEL": "1"}, "Vercel"),
        ({"CI_NAME": "codeship"}, "Codeship"),
    ],
)
def test_detect_vendor(
    make_context: ContextFactory, env: dict[str, str], name: str
) -> None:
    """Test each registered vendor is recognized by its variables."""
    vendor = detect_vendor(make_context(env={"CI": "true", **env}))
    assert vendor is not None
    assert vendor.name == name


def test_detect_vendor_requires_all_variables(make_context: ContextFactory) -> None:
    """Test a vendor needing several variables is not matched by one."""
    assert detect_vendor(make_context(env={"JENKINS_URL": "https://ci"})) is None


def test_detect_vendor_unknown(make_context: ContextFactory) -> None:
    """Test an unrecognized CI yields None."""
    assert detect_vendor(make_context(env={"CI": "true"})) is None


def test_vendor_names_unique() -> None:
    """Test every vendor is registered once."""
    names = [vendor.name for vendor in CI_VENDORS]
    assert len(names) == len(set(names))


# =============================================================================
# Tests: ci_info
# =============================================================================


class TestCIInfo:
    """Tests for ci_info function."""

    def test_not_in_ci(self, make_context: ContextFactory) -> None:
        """Test the section is None without the CI indicator."""
        assert ci_info(make_context(env={"GITHUB_ACTIONS": "true"})) is None

    def test_unknown_vendor(self, make_context: ContextFactory) -> None:
        """Test an unknown CI still reports all fields."""
        info = ci_info(make_context(env={"CI": "true"}))
        assert info is not None
        assert info.model_dump() == {
            "name": None,
            "is_fork_pr": False,
            "secure_env": True,
        }

    def test_travis_fork_pr(self, make_context: ContextFactory) -> None:
        """Test a Travis pull request from another slug is a fork PR."""
        env = {
            "CI": "true",
            "TRAVIS": "true",
            "TRAVIS_PULL_REQUEST": "42",
            "TRAVIS_PULL_REQUEST_SLUG": "fork/repo",
            "TRAVIS_REPO_SLUG": "owner/repo",
            "TRAVIS_SECURE_ENV_VARS": "false",
        }
        info = ci_info(make_context(env=env))
        assert info is not None
        assert info.name == "Travis CI"
        assert info.is_fork_pr is True
        assert info.secure_env is False

    def test_travis_same_repo_pr(self, make_context: ContextFactory) -> None:
        """Test a Travis pull request from the same repository is not a fork PR."""
        env = {
            "CI": "true",
            "TRAVIS": "true",
            "TRAVIS_PULL_REQUEST": "42",
            "TRAVIS_PULL_REQUEST_SLUG": "owner/repo",
            "TRAVIS_REPO_SLUG": "owner/repo",
        }
        info = ci_info(make_context(env=env))
        assert info is not None
        assert info.is_fork_pr is False
        assert info.secure_env is True

    def test_travis_push_build(self, make_context: ContextFactory) -> None:
        """Test a Travis push build is not a fork PR."""
        env = {"CI": "true", "TRAVIS": "true", "TRAVIS_PULL_REQUEST": "false"}
        info = ci_info(make_context(env=env))
        assert info is not None
        assert info.is_fork_pr is False

    def test_secure_env_marked_unavailable(self, make_context: ContextFactory) -> None:
        """Test secure variables marked unavailable disable secure_env."""
        env = {"CI": "true", "TRAVIS": "true", "TRAVIS_SECURE_ENV_VARS": "false"}
        info = ci_info(make_context(env=env))
        assert info is not None
        assert info.is_fork_pr is False
        assert info.secure_env is False

    def test_circleci_fork_pr(self, make_context: ContextFactory) -> None:
        """Test CIRCLE_PR_NUMBER marks a fork PR."""
        env = {"CI": "true", "CIRCLECI": "true", "CIRCLE_PR_NUMBER": "5"}
        info = ci_info(make_context(env=env))
        assert info is not None
        assert info.is_fork_pr is True
        assert info.secure_env is False

    def test_appveyor_fork_pr(self, make_context: ContextFactory) -> None:
        """Test an AppVeyor pull request from another repository is a fork PR."""
        env = {
            "CI": "True",
            "APPVEYOR": "True",
            "APPVEYOR_PULL_REQUEST_NUMBER": "3",
            "APPVEYOR_PULL_REQUEST_HEAD_REPO_NAME": "fork/repo",
            "APPVEYOR_REPO_NAME": "owner/repo",
        }
        info = ci_info(make_context(env=env))
        assert info is not None
        assert info.is_fork_pr is True

    def test_azure_fork_pr(self, make_context: ContextFactory) -> None:
        """Test Azure Pipelines' explicit fork flag is honored."""
        env = {"CI": "true", "TF_BUILD": "True", "SYSTEM_PULLREQUEST_ISFORK": "True"}
        info = ci_info(make_context(env=env))
        assert info is not None
        assert info.is_fork_pr is True

    def test_github_fork_pr(self, make_context: ContextFactory, tmp_path: Path) -> None:
        """Test a GitHub pull request with a different head repository."""
        env = {
            "CI": "true",
            "GITHUB_ACTIONS": "true",
            "GITHUB_EVENT_NAME": "pull_request",
            "GITHUB_EVENT_PATH": _github_event(
                tmp_path / "event.json", "fork/repo", "owner/repo"
            ),
        }
        info = ci_info(make_context(env=env))
        assert info is not None
        assert info.name == "GitHub Actions"
        assert info.is_fork_pr is True

    def test_github_same_repo_pr(
        self, make_context: ContextFactory, tmp_path: Path
    ) -> None:
        """Test a GitHub pull request from a branch of the same repository."""
        env = {
            "CI": "true",
            "GITHUB_ACTIONS": "true",
            "GITHUB_EVENT_NAME": "pull_request",
            "GITHUB_EVENT_PATH": _github_event(
                tmp_path / "event.json", "owner/repo", "owner/repo"
            ),
        }
        info = ci_info(make_context(env=env))
        assert info is not None
        assert info.is_fork_pr is False

    def test_github_push_event(self, make_context: ContextFactory) -> None:
        """Test a GitHub push build is not a fork PR."""
        env = {"CI": "true", "GITHUB_ACTIONS": "true", "GITHUB_EVENT_NAME": "push"}
        info = ci_info(make_context(env=env))
        assert info is not None
        assert info.is_fork_pr is False

    def test_github_unreadable_event(
        self, make_context: ContextFactory, tmp_path: Path
    ) -> None:
        """Test a missing event payload is not a fork PR."""
        env = {
            "CI": "true",
            "GITHUB_ACTIONS": "true",
            "GITHUB_EVENT_NAME": "pull_request",
            "GITHUB_EVENT_PATH": str(tmp_path / "missing.json"),
        }
        info = ci_info(make_context(env=env))
        assert info is not None
        assert info.is_fork_pr is False
