"""Serialize the environment snapshot as JSON."""

import json
import sys
from typing import Any, Optional, TextIO

from constants import JSON_INDENT
from report.redaction import Redactor


def dumps_snapshot(snapshot: dict[str, Any], redactor: Redactor) -> str:
    """
    Redact a snapshot and render it as indented JSON.

    The redactor also converts values the json module cannot encode to
    strings, under their own keys, so every value is masked and scrubbed.

    Parameters:
        snapshot: The assembled snapshot.
        redactor: Redactor applied to every key/value pair.

    Returns:
        str: The JSON document, without a trailing newline.
    """
    return json.dumps(
        redactor.redact(snapshot),
        indent=JSON_INDENT,
        ensure_ascii=False,
    )


def emit_snapshot(
    snapshot: dict[str, Any],
    redactor: Redactor,
    stream: Optional[TextIO] = None,
) -> None:
    """
    Print the redacted snapshot as JSON followed by a newline.

    Parameters:
        snapshot: The assembled snapshot.
        redactor: Redactor applied to every key/value pair.
        stream: Output stream, standard output by default.
    """
    print(dumps_snapshot(snapshot, redactor), file=stream or sys.stdout)
