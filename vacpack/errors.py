"""
Error taxonomy for the packaging controller.
"""
from typing import List, Optional, Sequence


class PackagingError(Exception):
    """Base class for packaging controller errors"""
    pass


class ConfigurationRejectedError(PackagingError):
    """Raised when product/settings fail validation; no physical action was taken."""

    def __init__(self, violations: Optional[Sequence[str]] = None):
        self.violations: List[str] = list(violations or [])
        detail = "; ".join(self.violations) if self.violations else "settings not compatible with product"
        super().__init__(f"Packaging configuration rejected: {detail}")


class MachineBusyError(PackagingError):
    """Raised when a run is requested while another run is in flight."""

    def __init__(self, machine_id: Optional[str] = None):
        self.machine_id = machine_id
        target = f"Machine {machine_id}" if machine_id else "Machine"
        super().__init__(f"{target} is busy with another packaging run")


class StageExecutionError(PackagingError):
    """
    Raised when a stage fails after physical action began.

    Partial effects are not rolled back; the package needs manual inspection.
    """

    def __init__(self, stage_name: str, cause: Optional[BaseException] = None):
        self.stage_name = stage_name
        self.cause = cause
        message = f"Stage '{stage_name}' failed"
        if cause is not None:
            message += f": {cause}"
        super().__init__(message)
