"""Locate and read the project manifest."""

import json
from pathlib import Path
from typing import Any

import yaml

from constants import GIT_DIR_NAME, MANIFEST_FILE_NAMES, NPM_PACKAGE_JSON_ENV_VAR
from log import get_logger
from models.context import ProbeContext
from models.snapshot import PackageInfo

logger = get_logger(__name__)


def find_manifest(context: ProbeContext) -> Path:
    """
    Return the path of the project manifest to report.

    npm 7 and later export the manifest path to scripts as npm_package_json;
    that path wins when set. Otherwise the first manifest file present in the
    working directory is used, defaulting to package.json.

    Parameters:
        context: The probe context.

    Returns:
        Path: Absolute path of the manifest (which may not exist).
    """
    explicit = context.env.get(NPM_PACKAGE_JSON_ENV_VAR)
    if explicit:
        return (context.cwd / explicit).resolve()

    for file_name in MANIFEST_FILE_NAMES:
        candidate = context.cwd / file_name
        if candidate.is_file():
            return candidate.resolve()
    return (context.cwd / MANIFEST_FILE_NAMES[0]).resolve()


def read_manifest(path: Path) -> Any:
    """
    Read and parse a manifest file.

    Files with a .yaml or .yml suffix are parsed as YAML (pnpm's
    package.yaml), everything else as JSON.

    Parameters:
        path: Path to the manifest.

    Returns:
        The parsed content, or None when the file is missing or unparsable.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            if path.suffix in (".yaml", ".yml"):
                return yaml.safe_load(f)
            return json.load(f)
    except FileNotFoundError:
        logger.debug("No manifest at %s", path)
        return None
    except (OSError, ValueError, yaml.YAMLError) as e:
        logger.warning("Failed to read manifest %s: %s", path, e)
        return None


def package_info(context: ProbeContext) -> PackageInfo:
    """
    Describe the project manifest of the working directory.

    Parameters:
        context: The probe context.

    Returns:
        PackageInfo: Manifest path, project root, co-located .git directory
        and parsed content.
    """
    path = find_manifest(context)
    info = PackageInfo(path=str(path))

    if path.is_file():
        root = path.parent
        gitdir = root / GIT_DIR_NAME
        info.root = str(root)
        info.gitdir = str(gitdir) if gitdir.exists() else None
        info.pkg = read_manifest(path)

    return info
