"""Constants used in the environment report."""

from typing import Final

# Logging
ENVIRONMENT_REPORT_LOG_LEVEL_ENV_VAR: Final[str] = "ENVIRONMENT_REPORT_LOG_LEVEL"
DEFAULT_LOG_LEVEL: Final[str] = "WARNING"

# Output
JSON_INDENT: Final[int] = 2

# Redaction
MASK: Final[str] = "***"
USERNAME_PLACEHOLDER: Final[str] = "USERNAME"
HOSTNAME_PLACEHOLDER: Final[str] = "HOSTNAME"
SENSITIVE_KEY_PATTERN: Final[str] = "token|password|secret"

# npm configuration values that identify the user, masked outside of CI
NPM_ENV_MASKS: Final[dict[str, str]] = {
    "npm_config_email": MASK,
    "npm_config_init.author.name": MASK,
    "npm_config_init.author.url": MASK,
}

# Environment variables
CI_ENV_VAR: Final[str] = "CI"
NPM_PACKAGE_JSON_ENV_VAR: Final[str] = "npm_package_json"
NPM_USER_AGENT_ENV_VAR: Final[str] = "npm_config_user_agent"
ELECTRON_RUN_AS_NODE_ENV_VAR: Final[str] = "ELECTRON_RUN_AS_NODE"
TRAVIS_SECURE_ENV_VARS_ENV_VAR: Final[str] = "TRAVIS_SECURE_ENV_VARS"
HTTP_PROXY_ENV_VARS: Final[tuple[str, ...]] = ("http_proxy", "HTTP_PROXY")
HTTPS_PROXY_ENV_VARS: Final[tuple[str, ...]] = ("https_proxy", "HTTPS_PROXY")
PATH_ENV_VARS: Final[tuple[str, ...]] = ("path", "PATH", "Path")

# npm_config__* entries are npm internals (auth tokens keyed by registry)
NPM_ENV_PATTERN: Final[str] = r"^npm_"
NPM_ENV_EXCLUDE_PATTERN: Final[str] = r"^npm_config__"

# Environment variables left out of the "env" section
ENV_DENYLIST_PREFIXES: Final[tuple[str, ...]] = ("npm_", "ConEmu", "java_", "vbox_")

# Interpreter attributes left out of the "process" section
PROCESS_ATTRIBUTE_EXCLUDES: Final[frozenset[str]] = frozenset(
    {"builtin_module_names"}
)

# Manifest discovery
MANIFEST_FILE_NAMES: Final[tuple[str, ...]] = ("package.json", "package.yaml")
GIT_DIR_NAME: Final[str] = ".git"
ALPINE_RELEASE_FILE: Final[str] = "/etc/alpine-release"
