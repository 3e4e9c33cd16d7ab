"""Print diagnostic information about the current environment as JSON.

Usage: `environment-report > report.json`

The report is meant to be attached to bug reports. Values that look like
credentials are masked, and outside of CI the current username and hostname
are replaced with placeholders.
"""

from argparse import ArgumentParser
from typing import Optional

from log import get_logger
from models.config import ReportConfiguration
from models.context import ProbeContext
from report.emitter import emit_snapshot
from report.redaction import Redactor
from report.snapshot import build_snapshot

logger = get_logger(__name__)


def main(argv: Optional[list[str]] = None) -> None:
    """CLI entry point."""
    parser = ArgumentParser(
        description=(
            "Print npm/Node.js environment diagnostics as JSON for bug reports. "
            "Behavior is controlled by environment variables only."
        ),
    )
    parser.parse_args(argv)

    context = ProbeContext.from_host()
    config = ReportConfiguration()
    snapshot = build_snapshot(context, config)
    logger.debug("Collected %d snapshot sections", len(snapshot))
    emit_snapshot(snapshot, Redactor(context, config))


if __name__ == "__main__":
    main()
