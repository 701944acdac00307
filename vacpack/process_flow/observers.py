"""
Host-side presentation of controller events as operator log lines.
"""
import logging
from typing import Optional

from vacpack.abstractions.events import (
    PackagingFinishedEvent,
    PackagingRejectedEvent,
    PackagingStartedEvent,
    StageCompletedEvent,
    StageFailedEvent,
    StageStartedEvent,
)
from vacpack.abstractions.interfaces import IStageObserver
from vacpack.log_setup import FAIL_MARK, OK_MARK, WARN_MARK, logger as default_logger


class LoggingStageObserver(IStageObserver):
    """Writes one human-readable line per controller event."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or default_logger

    def on_event(self, event) -> None:
        if isinstance(event, PackagingRejectedEvent):
            self.logger.warning(
                f"{WARN_MARK} Settings rejected for '{event.product_name}': {'; '.join(event.violations)}"
            )
        elif isinstance(event, PackagingStartedEvent):
            self.logger.info(f"Packaging '{event.product_name}': {' -> '.join(event.stage_names)}")
        elif isinstance(event, StageStartedEvent):
            details = ", ".join(f"{k}={v}" for k, v in event.details.items())
            suffix = f" [{details}]" if details else ""
            self.logger.info(
                f"[{event.stage_number}] {event.stage_name} started ({event.duration_ms}ms){suffix}"
            )
        elif isinstance(event, StageCompletedEvent):
            self.logger.info(
                f"{OK_MARK} [{event.stage_number}] {event.stage_name} done in {event.elapsed_seconds:.2f}s"
            )
        elif isinstance(event, StageFailedEvent):
            self.logger.error(f"{FAIL_MARK} [{event.stage_number}] {event.stage_name} failed: {event.error}")
        elif isinstance(event, PackagingFinishedEvent):
            mark = OK_MARK if event.status == "success" else FAIL_MARK
            self.logger.info(f"{mark} Packaging finished: {event.status} ({event.elapsed_seconds:.2f}s)")
