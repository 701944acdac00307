"""
Vacuum packaging machine control core.

Validates product/settings compatibility and drives the staged packaging
sequence (preheat, evacuate, optional nitrogen flush, seal, cool down).
"""
from vacpack.domain import (
    MATERIAL_THICKNESS_MM,
    PackagingMaterial,
    PackagingSettings,
    Product,
    VacuumLevel,
)
from vacpack.errors import (
    ConfigurationRejectedError,
    MachineBusyError,
    PackagingError,
    StageExecutionError,
)
from vacpack.packaging_validation import (
    PackagingValidator,
    recommended_sealing_time,
    validate_settings,
)
from vacpack.process_flow.controller import (
    MachineState,
    OutcomeStatus,
    PackagingMachine,
    PackagingOutcome,
)

__version__ = "0.1.0"

__all__ = [
    "MATERIAL_THICKNESS_MM",
    "ConfigurationRejectedError",
    "MachineBusyError",
    "MachineState",
    "OutcomeStatus",
    "PackagingError",
    "PackagingMachine",
    "PackagingMaterial",
    "PackagingOutcome",
    "PackagingSettings",
    "PackagingValidator",
    "Product",
    "StageExecutionError",
    "VacuumLevel",
    "recommended_sealing_time",
    "validate_settings",
]
