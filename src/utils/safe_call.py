"""Failure-tolerant execution of environment probes."""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, Optional, TypeVar

from log import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

FailureSink = Callable[[str, BaseException], None]


@dataclass(frozen=True)
class ProbeResult(Generic[T]):
    """
    Outcome of running a probe: either a value or the error that prevented it.

    Attributes:
        value: The probe's return value (None when the probe failed).
        error: The exception raised by the probe, or None on success.
    """

    value: Optional[T] = None
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        """Return True when the probe completed without raising."""
        return self.error is None

    def or_none(self) -> Optional[T]:
        """Return the value on success and None on failure."""
        return self.value if self.ok else None


def probe_name(probe: Any) -> str:
    """Return a readable name for a probe, used in failure reports."""
    name = getattr(probe, "__qualname__", None) or getattr(probe, "__name__", None)
    return name if isinstance(name, str) else repr(probe)


def attempt(probe: Optional[Callable[[], T]]) -> ProbeResult[T]:
    """
    Run a zero-argument probe and capture its outcome.

    A probe that is not callable at all (for example ``getattr(os, "getuid",
    None)`` on Windows) is treated the same way as a probe that raised.

    Parameters:
        probe: The probe to run.

    Returns:
        ProbeResult: The probe's value, or the error it raised.
    """
    if not callable(probe):
        return ProbeResult(error=TypeError(f"{probe!r} is not callable"))
    try:
        return ProbeResult(value=probe())
    except Exception as e:  # pylint: disable=broad-exception-caught
        return ProbeResult(error=e)


def log_failure(name: str, error: BaseException) -> None:
    """Report a failed probe on the error channel."""
    logger.error("Probe %s failed: %s", name, error)
    logger.debug("Probe %s traceback", name, exc_info=error)


def optional(
    probe: Optional[Callable[[], T]],
    sink: Optional[FailureSink] = log_failure,
    name: Optional[str] = None,
) -> Optional[T]:
    """
    Run a probe, returning its value or None if it failed.

    Parameters:
        probe: The probe to run; None or any non-callable counts as a failure.
        sink: Receives the probe name and error of a probe that raised. The
            default reports it through the module logger; pass None to
            discard failures silently. Probes that are not callable (the
            host lacks the function) are not reported.
        name: Name reported to the sink instead of the probe's own name.

    Returns:
        Optional[T]: The probe's value, or None if it raised or was not callable.
    """
    result = attempt(probe)
    if result.error is not None and sink is not None and callable(probe):
        sink(name or probe_name(probe), result.error)
    return result.or_none()
