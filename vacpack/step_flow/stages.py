"""
Stage executors for the packaging sequence.

Each stage is one timed physical operation. A stage suspends the calling task
for its duration; it has no return value and no undo: once vacuum is drawn a
later failure does not re-pressurize the chamber.

PreHeat and CreateVacuum run for fixed durations regardless of their
temperature / level argument. The argument is reported only.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict

from vacpack.config import (
    DEFAULT_COOLDOWN_DURATION_MS,
    DEFAULT_NITROGEN_FLUSH_DURATION_MS,
    DEFAULT_PREHEAT_DURATION_MS,
    DEFAULT_VACUUM_DURATION_MS,
)
from vacpack.domain import PackagingSettings, VacuumLevel
from vacpack.log_setup import get_step_flow_logger

logger = get_step_flow_logger()


@dataclass(frozen=True)
class StageTimings:
    """Fixed durations (ms) of the stages whose timing is not caller-controlled"""
    preheat_ms: int = DEFAULT_PREHEAT_DURATION_MS
    vacuum_ms: int = DEFAULT_VACUUM_DURATION_MS
    nitrogen_flush_ms: int = DEFAULT_NITROGEN_FLUSH_DURATION_MS
    cooldown_ms: int = DEFAULT_COOLDOWN_DURATION_MS

    def __post_init__(self):
        for name in ("preheat_ms", "vacuum_ms", "nitrogen_flush_ms", "cooldown_ms"):
            value = getattr(self, name)
            if not isinstance(value, int) or value < 0:
                raise ValueError(f"{name} must be a non-negative integer, got {value!r}")


class Stage(ABC):
    """One ordered, timed physical operation"""

    name: str = "stage"

    @property
    @abstractmethod
    def duration_ms(self) -> int:
        """How long the stage holds the equipment, in milliseconds."""
        pass

    def details(self) -> Dict[str, Any]:
        """Observed values reported with stage events."""
        return {}

    def describe(self) -> str:
        return self.name

    async def execute(self, clock) -> None:
        """
        Perform the stage.

        Args:
            clock: IClock used to wait for the equipment
        """
        logger.info(f"{self.describe()} ({self.duration_ms}ms)")
        await clock.sleep_ms(self.duration_ms)

    def __repr__(self):
        return f"{self.__class__.__name__}(duration_ms={self.duration_ms})"


class PreHeatStage(Stage):
    """Bring the sealing bar up to temperature"""

    name = "preheat"

    def __init__(self, temperature: float, duration_ms: int = DEFAULT_PREHEAT_DURATION_MS):
        self.temperature = temperature
        self._duration_ms = duration_ms

    @property
    def duration_ms(self) -> int:
        return self._duration_ms

    def details(self) -> Dict[str, Any]:
        return {"temperature": self.temperature}

    def describe(self) -> str:
        return f"Preheating sealer to {self.temperature}°C"


class CreateVacuumStage(Stage):
    """Evacuate the chamber to the target vacuum"""

    name = "vacuum"

    def __init__(self, level: VacuumLevel, duration_ms: int = DEFAULT_VACUUM_DURATION_MS):
        self.level = level
        self._duration_ms = duration_ms

    @property
    def duration_ms(self) -> int:
        return self._duration_ms

    def details(self) -> Dict[str, Any]:
        return {"vacuum_level": self.level.name, "percentage": self.level.percentage}

    def describe(self) -> str:
        return f"Drawing vacuum to {self.level.percentage}%"


class FlushNitrogenStage(Stage):
    """Displace residual air with nitrogen"""

    name = "nitrogen_flush"

    def __init__(self, duration_ms: int = DEFAULT_NITROGEN_FLUSH_DURATION_MS):
        self._duration_ms = duration_ms

    @property
    def duration_ms(self) -> int:
        return self._duration_ms

    def describe(self) -> str:
        return "Flushing with nitrogen"


class SealPackageStage(Stage):
    """Apply the heated bar; the only caller-timed stage"""

    name = "seal"

    def __init__(self, settings: PackagingSettings):
        self.settings = settings

    @property
    def duration_ms(self) -> int:
        return self.settings.sealing_time_ms

    def details(self) -> Dict[str, Any]:
        return {
            "temperature": self.settings.sealing_temperature,
            "material": self.settings.material.name,
        }

    def describe(self) -> str:
        return f"Heat sealing at {self.settings.sealing_temperature}°C"


class CoolDownStage(Stage):
    """Let the seal set before releasing the package"""

    name = "cooldown"

    def __init__(self, duration_ms: int = DEFAULT_COOLDOWN_DURATION_MS):
        self._duration_ms = duration_ms

    @property
    def duration_ms(self) -> int:
        return self._duration_ms

    def describe(self) -> str:
        return "Cooling down"
