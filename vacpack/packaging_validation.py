"""
Packaging Safety Validation Module

Decides whether a product/settings combination is safe to run before any
physical action begins. Enforces:
- Sealing temperature within the thermal safety range
- No ultra vacuum on high-moisture products (violent moisture boil-off)
- Barrier films only for products that require refrigeration

Also hosts the seal time recommendation derived from film thickness.
"""
from typing import Dict, List, Tuple

from vacpack.domain import MATERIAL_THICKNESS_MM, PackagingMaterial, VacuumLevel
from vacpack.log_setup import FAIL_MARK, OK_MARK, get_validation_logger

logger = get_validation_logger()

MIN_SEALING_TEMPERATURE = 120.0
MAX_SEALING_TEMPERATURE = 180.0
MAX_MOISTURE_FOR_ULTRA_VACUUM = 80.0
REFRIGERATION_MATERIALS = frozenset({PackagingMaterial.HIGH_BARRIER, PackagingMaterial.AL_PE})


class PackagingValidator:
    """
    Validates product/settings compatibility.

    Rules are independent conjunctions: every rule must pass and evaluation
    order does not change the outcome. Validation never raises.
    """

    def __init__(self):
        self.validation_failures: Dict[str, int] = {}
        self.total_validations = 0

    def validate_settings(self, product, settings) -> bool:
        """Return True when the settings are safe to run for this product."""
        is_valid, _ = self.check_settings(product, settings)
        return is_valid

    def check_settings(self, product, settings) -> Tuple[bool, List[str]]:
        """
        Evaluate every rule and collect the violations.

        Args:
            product: Product to be packed
            settings: Proposed packaging settings

        Returns:
            Tuple of (is_valid, violations)
            - (True, []) if all rules pass
            - (False, ["reason", ...]) otherwise
        """
        self.total_validations += 1
        try:
            violations = []

            temperature_error = self._check_sealing_temperature(settings.sealing_temperature)
            if temperature_error:
                self._track_failure("sealing_temperature")
                violations.append(temperature_error)

            vacuum_error = self._check_vacuum_for_moisture(product.moisture, settings.vacuum_level)
            if vacuum_error:
                self._track_failure("vacuum_moisture")
                violations.append(vacuum_error)

            material_error = self._check_refrigeration_material(
                product.requires_refrigeration, settings.material
            )
            if material_error:
                self._track_failure("refrigeration_material")
                violations.append(material_error)

        except Exception as e:
            error_msg = f"Unexpected validation error: {str(e)}"
            logger.error(f"{FAIL_MARK} [VALIDATION ERROR] {error_msg}", exc_info=True)
            self._track_failure("validation_exception")
            return (False, [error_msg])

        if violations:
            for violation in violations:
                logger.warning(f"{FAIL_MARK} [VALIDATION FAILED] {violation}")
            return (False, violations)

        logger.debug(f"{OK_MARK} [VALIDATION PASSED] '{getattr(product, 'name', '?')}' with {settings.material.name}")
        return (True, [])

    def _check_sealing_temperature(self, temperature: float):
        if not (MIN_SEALING_TEMPERATURE <= temperature <= MAX_SEALING_TEMPERATURE):
            return (
                f"Sealing temperature {temperature}°C outside safe range "
                f"[{MIN_SEALING_TEMPERATURE:g}, {MAX_SEALING_TEMPERATURE:g}]°C"
            )
        return None

    def _check_vacuum_for_moisture(self, moisture: float, level: VacuumLevel):
        if moisture > MAX_MOISTURE_FOR_ULTRA_VACUUM and level == VacuumLevel.ULTRA:
            return (
                f"Ultra vacuum not allowed for moisture {moisture}% "
                f"(> {MAX_MOISTURE_FOR_ULTRA_VACUUM:g}%)"
            )
        return None

    def _check_refrigeration_material(self, requires_refrigeration: bool, material: PackagingMaterial):
        if requires_refrigeration and material not in REFRIGERATION_MATERIALS:
            allowed = ", ".join(sorted(m.name for m in REFRIGERATION_MATERIALS))
            return (
                f"Material {material.name} lacks barrier properties for refrigerated "
                f"products (allowed: {allowed})"
            )
        return None

    def _track_failure(self, rule: str):
        self.validation_failures[rule] = self.validation_failures.get(rule, 0) + 1

    def get_validation_stats(self) -> Dict[str, object]:
        """Return validation counters for monitoring."""
        return {
            "total_validations": self.total_validations,
            "total_failures": sum(self.validation_failures.values()),
            "failures_by_rule": dict(self.validation_failures),
        }

    def reset_stats(self):
        self.validation_failures.clear()
        self.total_validations = 0


def recommended_sealing_time(material: PackagingMaterial) -> int:
    """
    Suggested seal time in milliseconds for a packaging film.

    Thicker films need the sealing bar applied longer: one millisecond per
    micrometre of film, i.e. round(thickness_mm * 1000).
    """
    if not isinstance(material, PackagingMaterial):
        raise ValueError(f"Unknown packaging material: {material!r}")
    return int(round(MATERIAL_THICKNESS_MM[material] * 1000))


# Global validator instance
_validator = PackagingValidator()


def validate_settings(product, settings) -> bool:
    """Validate settings using the global validator."""
    return _validator.validate_settings(product, settings)


def get_validation_stats() -> Dict[str, object]:
    """Get statistics from the global validator."""
    return _validator.get_validation_stats()
