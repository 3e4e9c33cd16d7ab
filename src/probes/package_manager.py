"""Identify the package manager that launched the current process."""

from typing import Optional

from constants import NPM_USER_AGENT_ENV_VAR
from models.context import ProbeContext
from models.snapshot import PackageManagerInfo

# cnpm reports itself under the name of its installer
PACKAGE_MANAGER_ALIASES: dict[str, str] = {"npminstall": "cnpm"}


def package_manager_from_user_agent(user_agent: str) -> PackageManagerInfo:
    """
    Parse the leading "name/version" token of an npm user agent string.

    Parameters:
        user_agent: Value such as "pnpm/8.6.0 npm/? node/v18.16.0 linux x64".

    Returns:
        PackageManagerInfo: Name and version of the package manager.
    """
    pm_spec = user_agent.split(" ")[0]
    name, _, version = pm_spec.rpartition("/")
    if not name:
        # no separator: the whole token is the name
        name, version = version, ""
    return PackageManagerInfo(
        name=PACKAGE_MANAGER_ALIASES.get(name, name), version=version
    )


def package_manager_info(context: ProbeContext) -> Optional[PackageManagerInfo]:
    """
    Return the package manager running the current script, if any.

    npm, yarn, pnpm and bun all export npm_config_user_agent to the scripts
    they run.

    Parameters:
        context: The probe context.

    Returns:
        Optional[PackageManagerInfo]: The package manager, or None when the
        process was not started by one.
    """
    user_agent = context.env.get(NPM_USER_AGENT_ENV_VAR)
    if not user_agent:
        return None
    return package_manager_from_user_agent(user_agent)
