"""
Builds the stage plan for a run and executes single stages.
"""
import asyncio
from typing import List, Optional

from vacpack.domain import PackagingSettings
from vacpack.errors import StageExecutionError
from vacpack.log_setup import get_step_flow_logger
from vacpack.step_flow.stages import (
    CoolDownStage,
    CreateVacuumStage,
    FlushNitrogenStage,
    PreHeatStage,
    SealPackageStage,
    Stage,
    StageTimings,
)

logger = get_step_flow_logger()


def build_stage_plan(settings: PackagingSettings, timings: Optional[StageTimings] = None) -> List[Stage]:
    """
    Build the ordered stage list for a run.

    Order is fixed: preheat, vacuum, [nitrogen flush], seal, cool down.
    The flush stage is included only when the settings request it.
    """
    timings = timings or StageTimings()

    plan: List[Stage] = [
        PreHeatStage(settings.sealing_temperature, timings.preheat_ms),
        CreateVacuumStage(settings.vacuum_level, timings.vacuum_ms),
    ]
    if settings.use_nitrogen_flushing:
        plan.append(FlushNitrogenStage(timings.nitrogen_flush_ms))
    plan.append(SealPackageStage(settings))
    plan.append(CoolDownStage(timings.cooldown_ms))
    return plan


async def execute_stage(stage: Stage, clock) -> None:
    """
    Execute a single stage.

    Args:
        stage: Stage to run
        clock: IClock the stage waits on

    Raises:
        StageExecutionError: If the stage raised for any reason other than
            task cancellation
    """
    logger.debug(f"Executing stage '{stage.name}'")
    try:
        await stage.execute(clock)
    except asyncio.CancelledError:
        logger.warning(f"Stage '{stage.name}' cancelled")
        raise
    except StageExecutionError as e:
        logger.error(f"Stage '{stage.name}' reported failure: {str(e)}")
        raise
    except Exception as e:
        logger.error(f"Error executing stage '{stage.name}': {str(e)}", exc_info=True)
        raise StageExecutionError(stage.name, e) from e
    logger.debug(f"Stage '{stage.name}' executed successfully")
