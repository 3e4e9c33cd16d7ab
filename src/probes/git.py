"""Git repository information for the working directory."""

import re
import shutil
import subprocess
from typing import Optional

from constants import GIT_DIR_NAME
from log import get_logger
from models.context import ProbeContext
from models.snapshot import GitInfo
from utils.safe_call import optional

logger = get_logger(__name__)

GITHUB_REMOTE_RE = re.compile(
    r"^(?:https?://|git://|git\+ssh://|git\+https://|ssh://)?"
    r"(?:[^@/]+@)?"
    r"(?:www\.)?github\.com"
    r"(?::\d+)?[:/]"
    r"(?P<slug>[^/]+/[^/]+?)"
    r"(?:\.git)?/?$"
)


def remote_origin_url(context: ProbeContext) -> Optional[str]:
    """
    Return the URL of the "origin" remote of the working directory's repository.

    Parameters:
        context: The probe context.

    Returns:
        Optional[str]: The configured URL, or None when git is not installed,
        the directory is not a repository or no origin is configured.

    Raises:
        subprocess.CalledProcessError: git failed for another reason.
    """
    git = shutil.which("git", path=context.getenv("PATH", "Path", "path"))
    if git is None:
        logger.debug("git executable not found")
        return None

    completed = subprocess.run(
        [git, "config", "--get", "remote.origin.url"],
        cwd=context.cwd,
        capture_output=True,
        text=True,
        check=False,
    )
    # exit status 1 means the key is not set
    if completed.returncode == 1:
        return None
    completed.check_returncode()
    return completed.stdout.strip() or None


def github_url_from_git(url: str) -> Optional[str]:
    """
    Convert a GitHub remote URL into the repository's web URL.

    Parameters:
        url: Remote URL in any of the https, ssh, scp-like or git:// forms.

    Returns:
        Optional[str]: "https://github.com/<owner>/<repo>", or None when the
        URL does not point to GitHub.
    """
    match = GITHUB_REMOTE_RE.match(url.strip())
    if match is None:
        return None
    return f"https://github.com/{match.group('slug')}"


def git_info(context: ProbeContext) -> dict:
    """
    Describe the git repository of the working directory.

    Parameters:
        context: The probe context.

    Returns:
        dict: "gitdir" and "origin", plus "github_url" when an origin is set.
    """
    gitdir = context.cwd / GIT_DIR_NAME
    info = GitInfo(
        gitdir=str(gitdir.resolve()) if gitdir.exists() else None,
        origin=optional(lambda: remote_origin_url(context), name="git origin"),
    )

    if info.origin:
        info.github_url = github_url_from_git(info.origin)

    return info.model_dump(exclude_unset=True)
