"""Redaction of the environment snapshot before it is printed.

Every key/value pair of the snapshot goes through the Redactor while the
snapshot is serialized. The rules apply in this order:

1. Values of keys that look like credentials ("token", "password" or
   "secret" anywhere in the key, case-insensitively) are always replaced
   with the mask string, in CI or not.
2. In CI, all other values are left as they are.
3. Outside of CI, string values have every occurrence of the current
   username and hostname replaced with fixed placeholders.

Records and lists are walked recursively; list items have no key of their
own, so only rules 2 and 3 apply to them. Values JSON has no type for are
converted to strings before the rules run, and text that cannot be encoded
as UTF-8 (undecodable bytes from the environment) is backslash-escaped.
"""

import re
from typing import Any, Optional

from log import get_logger
from models.config import ReportConfiguration
from models.context import ProbeContext

logger = get_logger(__name__)

JSON_SCALAR_TYPES = (str, int, float, bool, type(None))


def _literal_re(text: Optional[str]) -> Optional[re.Pattern[str]]:
    """Compile a case-insensitive matcher for a literal string, or None if empty."""
    if not text:
        return None
    return re.compile(re.escape(text), re.IGNORECASE)


def printable(text: str) -> str:
    """
    Return text that can be encoded as UTF-8.

    Undecodable bytes in environment variables reach Python as lone
    surrogates, which no UTF-8 stream accepts; they are replaced with
    backslash escapes such as ``\\udce9``.

    Parameters:
        text: The string to check.

    Returns:
        str: The string unchanged, or its escaped form.
    """
    try:
        text.encode("utf-8")
    except UnicodeEncodeError:
        return text.encode("utf-8", "backslashreplace").decode("utf-8")
    return text


def to_json_value(value: Any) -> Any:
    """
    Convert a snapshot value to a type JSON can represent.

    Records and lists are returned as they are; other values without a JSON
    type (such as dates parsed from a YAML manifest) become strings.

    Parameters:
        value: The value to convert.

    Returns:
        The value, or its printable string form.
    """
    if isinstance(value, str):
        return printable(value)
    if isinstance(value, (JSON_SCALAR_TYPES, dict, list, tuple)):
        return value
    logger.warning("Serializing unexpected type %s as string", type(value).__name__)
    return printable(str(value))


class Redactor:
    """Masks secrets and scrubs user identity from snapshot values."""

    def __init__(self, context: ProbeContext, config: ReportConfiguration) -> None:
        """
        Prepare the matchers for the given host.

        Parameters:
            context: The probe context; provides the CI flag, username and
                hostname.
            config: Masking policy and placeholders.
        """
        self.config = config
        self.ci = context.is_ci
        self.username_re = _literal_re(context.username)
        self.hostname_re = _literal_re(context.hostname)

    def is_sensitive(self, key: Optional[str]) -> bool:
        """Return True if values stored under the key must always be masked."""
        return key is not None and bool(self.config.sensitive_key_re.search(key))

    def scrub(self, value: str) -> str:
        """Replace the username and hostname in a string with placeholders."""
        if self.username_re is not None:
            value = self.username_re.sub(self.config.username_placeholder, value)
        if self.hostname_re is not None:
            value = self.hostname_re.sub(self.config.hostname_placeholder, value)
        return value

    def redact_value(self, key: Optional[str], value: Any) -> Any:
        """
        Apply the redaction rules to a single key/value pair.

        Records and lists are returned as they are; use redact() to walk them.

        Parameters:
            key: Key the value is stored under, or None for list items and
                the root.
            value: The value to redact.

        Returns:
            The redacted value.
        """
        if self.is_sensitive(key):
            return self.config.mask
        if self.ci:
            return value
        if isinstance(value, str):
            return self.scrub(value)
        return value

    def redact(self, value: Any, key: Optional[str] = None) -> Any:
        """
        Return a redacted copy of a snapshot tree.

        Parameters:
            value: The snapshot, or any part of it.
            key: Key the value is stored under, None for the root.

        Returns:
            The redacted copy; the input is not modified.
        """
        value = self.redact_value(key, to_json_value(value))
        if isinstance(value, dict):
            redacted = {}
            for k, v in value.items():
                name = printable(str(k))
                redacted[name] = self.redact(v, name)
            return redacted
        if isinstance(value, (list, tuple)):
            return [self.redact(item) for item in value]
        return value
