# File: vacpack/domain/value_objects.py
"""
Value objects for the vacuum packaging domain.
Immutable objects that represent concepts without identity.
"""
from dataclasses import dataclass
from enum import Enum, IntEnum
from types import MappingProxyType
from typing import Mapping


class PackagingMaterial(Enum):
    """Packaging film compositions supported by the sealer."""
    PA_PE = "PA_PE"                 # nylon / polyethylene laminate
    PET_PE = "PET_PE"               # PET / polyethylene laminate
    PVDC = "PVDC"                   # polyvinylidene chloride
    AL_PE = "AL_PE"                 # aluminium foil / polyethylene laminate
    HIGH_BARRIER = "HighBarrier"    # high barrier co-extruded film


class VacuumLevel(IntEnum):
    """Target vacuum, valued as the percentage of atmosphere evacuated."""
    LIGHT = 80
    MEDIUM = 90
    HIGH = 95
    ULTRA = 99

    @property
    def percentage(self) -> int:
        return int(self.value)


# Film thickness in millimetres; only used for seal time recommendation.
MATERIAL_THICKNESS_MM: Mapping[PackagingMaterial, float] = MappingProxyType({
    PackagingMaterial.PA_PE: 0.09,
    PackagingMaterial.PET_PE: 0.12,
    PackagingMaterial.PVDC: 0.08,
    PackagingMaterial.AL_PE: 0.15,
    PackagingMaterial.HIGH_BARRIER: 0.18,
})


@dataclass(frozen=True)
class ValueObject:
    """Base class for value objects"""

    def __post_init__(self):
        self.validate()

    def validate(self):
        """Validate value object state - override in subclasses"""
        pass
