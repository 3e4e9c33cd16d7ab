"""Configuration of the environment report."""

import re
from functools import cached_property

from pydantic import BaseModel, ConfigDict, Field, field_validator

import constants


class ReportConfiguration(BaseModel):
    """
    Masking policy and redaction constants for the environment report.

    Attributes:
        mask: Replacement for values of sensitive keys.
        username_placeholder: Replacement for the current username.
        hostname_placeholder: Replacement for the current hostname.
        sensitive_key_pattern: Regular expression matched case-insensitively
            against keys; matching keys always have their value masked.
        npm_env_masks: npm variables replaced (when truthy) outside of CI.
        env_denylist_prefixes: Environment variable prefixes, compared
            case-insensitively, left out of the "env" section.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    mask: str = constants.MASK
    username_placeholder: str = constants.USERNAME_PLACEHOLDER
    hostname_placeholder: str = constants.HOSTNAME_PLACEHOLDER
    sensitive_key_pattern: str = constants.SENSITIVE_KEY_PATTERN
    npm_env_masks: dict[str, str] = Field(
        default_factory=lambda: dict(constants.NPM_ENV_MASKS)
    )
    env_denylist_prefixes: tuple[str, ...] = constants.ENV_DENYLIST_PREFIXES

    @field_validator("sensitive_key_pattern")
    @classmethod
    def check_sensitive_key_pattern(cls, value: str) -> str:
        """Reject empty or invalid regular expressions."""
        if not value:
            raise ValueError("sensitive_key_pattern must not be empty")
        try:
            re.compile(value)
        except re.error as e:
            raise ValueError(f"sensitive_key_pattern is not a valid regex: {e}") from e
        return value

    @cached_property
    def sensitive_key_re(self) -> re.Pattern[str]:
        """Compiled, case-insensitive form of sensitive_key_pattern."""
        return re.compile(self.sensitive_key_pattern, re.IGNORECASE)

    @cached_property
    def env_denylist_re(self) -> re.Pattern[str]:
        """Compiled, case-insensitive matcher for env_denylist_prefixes."""
        prefixes = "|".join(re.escape(p) for p in self.env_denylist_prefixes if p)
        if not prefixes:
            return re.compile(r"(?!)")
        return re.compile(f"^({prefixes})", re.IGNORECASE)
