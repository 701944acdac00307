"""
Tests for the packaging domain types: enums, thickness table, and the
construction invariants of Product and PackagingSettings.
"""
from datetime import datetime, timedelta

import pytest

from vacpack.domain import (
    MATERIAL_THICKNESS_MM,
    PackagingMaterial,
    PackagingSettings,
    VacuumLevel,
)
from tests.factories import create_product, create_settings


class TestEnumerations:

    def test_vacuum_levels_are_target_percentages(self):
        assert [level.percentage for level in VacuumLevel] == [80, 90, 95, 99]
        assert VacuumLevel.ULTRA == 99

    def test_material_set_is_closed(self):
        assert {m.name for m in PackagingMaterial} == {
            "PA_PE", "PET_PE", "PVDC", "AL_PE", "HIGH_BARRIER"
        }

    def test_thickness_table_covers_every_material(self):
        assert set(MATERIAL_THICKNESS_MM) == set(PackagingMaterial)
        assert MATERIAL_THICKNESS_MM[PackagingMaterial.PA_PE] == 0.09
        assert MATERIAL_THICKNESS_MM[PackagingMaterial.HIGH_BARRIER] == 0.18

    def test_thickness_table_is_read_only(self):
        with pytest.raises(TypeError):
            MATERIAL_THICKNESS_MM[PackagingMaterial.PVDC] = 1.0


class TestProduct:

    def test_valid_product(self):
        product = create_product(name="Smoked salmon", moisture=65.0)
        assert product.name == "Smoked salmon"
        assert product.shelf_life_days >= 7

    def test_product_is_immutable(self):
        product = create_product()
        with pytest.raises(AttributeError):
            product.moisture = 10.0

    def test_expiry_before_packaging_rejected(self):
        packaged = datetime(2026, 1, 10)
        with pytest.raises(ValueError, match="expiry"):
            create_product(packaging_date=packaged, expiry_date=packaged - timedelta(days=1))

    def test_expiry_equal_to_packaging_allowed(self):
        packaged = datetime(2026, 1, 10)
        product = create_product(packaging_date=packaged, expiry_date=packaged)
        assert product.shelf_life_days == 0

    @pytest.mark.parametrize("weight", [0, -1.5])
    def test_non_positive_weight_rejected(self, weight):
        with pytest.raises(ValueError, match="weight"):
            create_product(weight=weight)

    @pytest.mark.parametrize("moisture", [-0.1, 100.1])
    def test_moisture_outside_percentage_rejected(self, moisture):
        with pytest.raises(ValueError, match="moisture"):
            create_product(moisture=moisture)

    @pytest.mark.parametrize("moisture", [0, 100])
    def test_moisture_bounds_accepted(self, moisture):
        assert create_product(moisture=moisture).moisture == moisture

    def test_empty_name_rejected(self):
        with pytest.raises(ValueError, match="name"):
            create_product(name="  ")


class TestPackagingSettings:

    def test_defaults(self):
        settings = PackagingSettings(
            material=PackagingMaterial.AL_PE,
            vacuum_level=VacuumLevel.MEDIUM,
            sealing_temperature=130,
            sealing_time_ms=150,
        )
        assert settings.use_nitrogen_flushing is False

    @pytest.mark.parametrize("sealing_time_ms", [0, -100, 1.5, True])
    def test_invalid_sealing_time_rejected(self, sealing_time_ms):
        with pytest.raises(ValueError, match="Sealing time"):
            create_settings(sealing_time_ms=sealing_time_ms)

    def test_unknown_material_rejected(self):
        with pytest.raises(ValueError, match="material"):
            create_settings(material="PA_PE")

    def test_unknown_vacuum_level_rejected(self):
        with pytest.raises(ValueError, match="vacuum"):
            create_settings(vacuum_level=95)

    def test_out_of_range_temperature_is_constructible(self):
        # The thermal range is a validation rule, not a construction invariant
        settings = create_settings(sealing_temperature=250.0)
        assert settings.sealing_temperature == 250.0
