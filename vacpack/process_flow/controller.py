"""
Runs a packaging cycle: validation gate, then the stages in strict order.

The machine holds a single state token (IDLE / RUNNING). Entering RUNNING is
an atomic check-and-set, so a second concurrent start is rejected as busy
instead of interleaving two physical processes. Every exit path returns the
token to IDLE.
"""
import asyncio
import threading
import uuid
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence, Tuple

from vacpack.abstractions.events import (
    PackagingFinishedEvent,
    PackagingRejectedEvent,
    PackagingStartedEvent,
    StageCompletedEvent,
    StageFailedEvent,
    StageStartedEvent,
)
from vacpack.abstractions.interfaces import AsyncioClock, IClock, IStageObserver
from vacpack.config import MACHINE_ID, load_stage_timings
from vacpack.domain import PackagingMaterial, PackagingSettings, Product
from vacpack.errors import ConfigurationRejectedError, MachineBusyError, StageExecutionError
from vacpack.log_setup import FAIL_MARK, OK_MARK, WARN_MARK, get_process_flow_logger
from vacpack.packaging_validation import PackagingValidator, recommended_sealing_time
from vacpack.step_flow.executor import build_stage_plan, execute_stage
from vacpack.step_flow.stages import StageTimings

logger = get_process_flow_logger()


class MachineState(Enum):
    IDLE = "idle"
    RUNNING = "running"


class OutcomeStatus(Enum):
    SUCCESS = "success"
    CONFIGURATION_REJECTED = "configuration_rejected"
    STAGE_FAILURE = "stage_failure"
    MACHINE_BUSY = "machine_busy"


@dataclass(frozen=True)
class PackagingOutcome:
    """Result of start_packaging; truthy only on success"""
    status: OutcomeStatus
    run_id: Optional[str] = None
    completed_stages: Tuple[str, ...] = ()
    failed_stage: Optional[str] = None
    cause: Optional[BaseException] = None
    violations: Tuple[str, ...] = ()
    machine_id: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.status is OutcomeStatus.SUCCESS

    def __bool__(self):
        return self.succeeded

    def raise_for_status(self) -> None:
        """Raise the error matching a non-success outcome."""
        if self.status is OutcomeStatus.CONFIGURATION_REJECTED:
            raise ConfigurationRejectedError(self.violations)
        if self.status is OutcomeStatus.MACHINE_BUSY:
            raise MachineBusyError(self.machine_id)
        if self.status is OutcomeStatus.STAGE_FAILURE:
            if isinstance(self.cause, StageExecutionError):
                raise self.cause
            raise StageExecutionError(self.failed_stage or "unknown", self.cause)


class PackagingMachine:
    """
    Vacuum packaging machine controller.

    Args:
        machine_id: Identifier used in logs and busy errors
        validator: PackagingValidator (a fresh one by default)
        clock: IClock the stages wait on (real asyncio time by default)
        timings: StageTimings (loaded from the environment by default)
        observers: IStageObserver instances receiving controller events
    """

    def __init__(
        self,
        machine_id: Optional[str] = None,
        validator: Optional[PackagingValidator] = None,
        clock: Optional[IClock] = None,
        timings: Optional[StageTimings] = None,
        observers: Optional[Sequence[IStageObserver]] = None,
    ):
        self.machine_id = machine_id or MACHINE_ID
        self._validator = validator or PackagingValidator()
        self._clock = clock or AsyncioClock()
        self._timings = timings or load_stage_timings()
        self._observers: List[IStageObserver] = list(observers or [])
        self._state = MachineState.IDLE
        self._state_lock = threading.Lock()

    @property
    def state(self) -> MachineState:
        return self._state

    @property
    def is_running(self) -> bool:
        return self._state is MachineState.RUNNING

    @property
    def timings(self) -> StageTimings:
        return self._timings

    def add_observer(self, observer: IStageObserver) -> None:
        self._observers.append(observer)

    def remove_observer(self, observer: IStageObserver) -> None:
        self._observers.remove(observer)

    def validate_settings(self, product: Product, settings: PackagingSettings) -> bool:
        return self._validator.validate_settings(product, settings)

    def recommended_sealing_time(self, material: PackagingMaterial) -> int:
        return recommended_sealing_time(material)

    async def start_packaging(self, product: Product, settings: PackagingSettings) -> PackagingOutcome:
        """
        Validate and run one packaging cycle.

        Returns:
            PackagingOutcome with status:
            - CONFIGURATION_REJECTED: validation failed, nothing ran
            - MACHINE_BUSY: another run holds the machine, nothing ran
            - STAGE_FAILURE: a stage raised; later stages were skipped
            - SUCCESS: every stage completed

        Raises:
            asyncio.CancelledError: If the calling task is cancelled; the
                machine is back to IDLE before it propagates
        """
        run_id = str(uuid.uuid4())
        product_name = getattr(product, "name", "?")

        is_valid, violations = self._validator.check_settings(product, settings)
        if not is_valid:
            logger.warning(
                f"{WARN_MARK} Run {run_id} rejected for '{product_name}': {'; '.join(violations)}"
            )
            self._emit(PackagingRejectedEvent(run_id, product_name=product_name, violations=list(violations)))
            return PackagingOutcome(
                OutcomeStatus.CONFIGURATION_REJECTED, run_id=run_id, violations=tuple(violations)
            )

        if not self._try_begin():
            logger.warning(f"{WARN_MARK} Run {run_id} rejected: machine {self.machine_id} is busy")
            return PackagingOutcome(OutcomeStatus.MACHINE_BUSY, run_id=run_id, machine_id=self.machine_id)

        completed: List[str] = []
        started_at = self._clock.monotonic()
        finished_status = "cancelled"
        try:
            plan = build_stage_plan(settings, self._timings)
            logger.info(
                f"Starting run {run_id} on {self.machine_id}: '{product_name}' "
                f"({', '.join(stage.name for stage in plan)})"
            )
            self._emit(PackagingStartedEvent(
                run_id, product_name=product_name, stage_names=[stage.name for stage in plan]
            ))

            for number, stage in enumerate(plan, start=1):
                self._emit(StageStartedEvent(
                    run_id,
                    stage_name=stage.name,
                    stage_number=number,
                    duration_ms=stage.duration_ms,
                    details=stage.details(),
                ))
                stage_started = self._clock.monotonic()
                try:
                    await execute_stage(stage, self._clock)
                except StageExecutionError as e:
                    logger.error(f"{FAIL_MARK} Run {run_id} aborted at stage '{stage.name}': {e}")
                    self._emit(StageFailedEvent(
                        run_id, stage_name=stage.name, stage_number=number, error=str(e)
                    ))
                    finished_status = OutcomeStatus.STAGE_FAILURE.value
                    return PackagingOutcome(
                        OutcomeStatus.STAGE_FAILURE,
                        run_id=run_id,
                        completed_stages=tuple(completed),
                        failed_stage=stage.name,
                        cause=e,
                    )
                completed.append(stage.name)
                self._emit(StageCompletedEvent(
                    run_id,
                    stage_name=stage.name,
                    stage_number=number,
                    elapsed_seconds=self._clock.monotonic() - stage_started,
                ))

            finished_status = OutcomeStatus.SUCCESS.value
            logger.info(f"{OK_MARK} Run {run_id} completed for '{product_name}'")
            return PackagingOutcome(OutcomeStatus.SUCCESS, run_id=run_id, completed_stages=tuple(completed))
        except asyncio.CancelledError:
            logger.warning(f"{WARN_MARK} Run {run_id} cancelled after {len(completed)} stage(s)")
            raise
        except Exception as e:
            logger.error(f"{FAIL_MARK} Run {run_id} aborted by unexpected fault: {str(e)}", exc_info=True)
            finished_status = OutcomeStatus.STAGE_FAILURE.value
            return PackagingOutcome(
                OutcomeStatus.STAGE_FAILURE,
                run_id=run_id,
                completed_stages=tuple(completed),
                cause=e,
            )
        finally:
            self._finish()
            self._emit(PackagingFinishedEvent(
                run_id,
                status=finished_status,
                completed_stages=list(completed),
                elapsed_seconds=self._clock.monotonic() - started_at,
            ))

    def _try_begin(self) -> bool:
        """Atomically move IDLE -> RUNNING; False if already running."""
        with self._state_lock:
            if self._state is MachineState.RUNNING:
                return False
            self._state = MachineState.RUNNING
            return True

    def _finish(self) -> None:
        with self._state_lock:
            self._state = MachineState.IDLE

    def _emit(self, event) -> None:
        event.metadata.source = self.machine_id
        for observer in list(self._observers):
            try:
                observer.on_event(event)
            except Exception as e:
                logger.error(
                    f"Observer {observer!r} failed on {type(event).__name__}: {str(e)}",
                    exc_info=True,
                )
