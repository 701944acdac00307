# File: vacpack/domain/entities.py
"""
Per-run inputs: the product being packed and the machine settings.

Both are created by the caller for a single packaging run and are read-only
for its duration.
"""
from dataclasses import dataclass
from datetime import datetime

from vacpack.domain.value_objects import PackagingMaterial, ValueObject, VacuumLevel


@dataclass(frozen=True)
class Product(ValueObject):
    """Product to be vacuum packed"""
    name: str
    weight: float
    moisture: float
    requires_refrigeration: bool
    packaging_date: datetime
    expiry_date: datetime

    def validate(self):
        if not isinstance(self.name, str) or len(self.name.strip()) == 0:
            raise ValueError("Product name cannot be empty")
        if not isinstance(self.weight, (int, float)) or self.weight <= 0:
            raise ValueError("Product weight must be a positive number")
        if not isinstance(self.moisture, (int, float)) or not 0 <= self.moisture <= 100:
            raise ValueError("Product moisture must be a percentage between 0 and 100")
        if self.expiry_date < self.packaging_date:
            raise ValueError("Product expiry date cannot be earlier than its packaging date")

    @property
    def shelf_life_days(self) -> int:
        return (self.expiry_date - self.packaging_date).days


@dataclass(frozen=True)
class PackagingSettings(ValueObject):
    """Machine settings for one packaging run"""
    material: PackagingMaterial
    vacuum_level: VacuumLevel
    sealing_temperature: float
    sealing_time_ms: int
    use_nitrogen_flushing: bool = False

    def validate(self):
        if not isinstance(self.material, PackagingMaterial):
            raise ValueError(f"Unknown packaging material: {self.material!r}")
        if not isinstance(self.vacuum_level, VacuumLevel):
            raise ValueError(f"Unknown vacuum level: {self.vacuum_level!r}")
        if not isinstance(self.sealing_temperature, (int, float)):
            raise ValueError("Sealing temperature must be numeric")
        if isinstance(self.sealing_time_ms, bool) or not isinstance(self.sealing_time_ms, int) \
                or self.sealing_time_ms <= 0:
            raise ValueError("Sealing time must be a positive number of milliseconds")
