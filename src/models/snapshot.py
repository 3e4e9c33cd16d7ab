"""Typed sections of the environment snapshot."""

from typing import Any, Optional

from pydantic import BaseModel


class PackageManagerInfo(BaseModel):
    """Package manager that launched the current process."""

    name: str
    version: str


class CIInfo(BaseModel):
    """
    Continuous integration context.

    Attributes:
        name: Canonical vendor name, or None for an unrecognized CI.
        is_fork_pr: Whether the build runs for a pull request from a fork.
        secure_env: Whether secret environment variables are available.
    """

    name: Optional[str] = None
    is_fork_pr: bool = False
    secure_env: bool = True


class LibcInfo(BaseModel):
    """C standard library family and version (Linux only)."""

    family: Optional[str] = None
    version: Optional[str] = None


class ProxyInfo(BaseModel):
    """Proxy servers configured through the environment."""

    http: Optional[str] = None
    https: Optional[str] = None


class PathInfo(BaseModel):
    """Path separators of the platform."""

    sep: str
    delimiter: str


class PackageInfo(BaseModel):
    """
    Project manifest information.

    Attributes:
        path: Resolved path of the manifest that was looked up.
        root: Directory holding the manifest, or None if it does not exist.
        gitdir: Version control directory next to the manifest, if any.
        pkg: Parsed manifest content, or None if missing or unparsable.
    """

    path: Optional[str] = None
    root: Optional[str] = None
    gitdir: Optional[str] = None
    pkg: Optional[Any] = None


class GitInfo(BaseModel):
    """
    Git repository information for the working directory.

    Attributes:
        gitdir: Path of the .git directory, or None if there is none.
        origin: URL of the "origin" remote, or None.
        github_url: Web URL derived from a GitHub origin; unset without origin.
    """

    gitdir: Optional[str] = None
    origin: Optional[str] = None
    github_url: Optional[str] = None
