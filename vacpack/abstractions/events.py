# File: vacpack/abstractions/events.py
"""
Structured events emitted by the packaging controller.

Presentation lives with the observers; the controller only emits.
"""
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional


@dataclass
class EventMetadata:
    """Metadata for all controller events"""
    event_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    correlation_id: Optional[str] = None
    source: Optional[str] = None


@dataclass
class PackagingEvent:
    """Base class for all packaging events"""
    run_id: str
    metadata: EventMetadata = field(default_factory=EventMetadata, kw_only=True)

    def __post_init__(self):
        if self.metadata.correlation_id is None:
            self.metadata.correlation_id = self.run_id

    @property
    def event_id(self) -> str:
        return self.metadata.event_id

    @property
    def timestamp(self) -> datetime:
        return self.metadata.timestamp


@dataclass
class PackagingRejectedEvent(PackagingEvent):
    """Settings failed validation; the machine never left IDLE"""
    product_name: str
    violations: List[str] = field(default_factory=list)


@dataclass
class PackagingStartedEvent(PackagingEvent):
    """Machine entered RUNNING for a validated run"""
    product_name: str
    stage_names: List[str] = field(default_factory=list)


@dataclass
class StageStartedEvent(PackagingEvent):
    """A stage is about to execute"""
    stage_name: str
    stage_number: int
    duration_ms: int
    details: Dict[str, Any] = field(default_factory=dict)


@dataclass
class StageCompletedEvent(PackagingEvent):
    """A stage finished without error"""
    stage_name: str
    stage_number: int
    elapsed_seconds: float


@dataclass
class StageFailedEvent(PackagingEvent):
    """A stage raised; remaining stages are aborted"""
    stage_name: str
    stage_number: int
    error: str


@dataclass
class PackagingFinishedEvent(PackagingEvent):
    """Machine returned to IDLE after a run"""
    status: str
    completed_stages: List[str] = field(default_factory=list)
    elapsed_seconds: float = 0.0
