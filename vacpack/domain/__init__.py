from vacpack.domain.entities import PackagingSettings, Product
from vacpack.domain.value_objects import (
    MATERIAL_THICKNESS_MM,
    PackagingMaterial,
    VacuumLevel,
)

__all__ = [
    "MATERIAL_THICKNESS_MM",
    "PackagingMaterial",
    "PackagingSettings",
    "Product",
    "VacuumLevel",
]
