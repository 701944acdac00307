# File: vacpack/abstractions/interfaces.py
"""
Abstract interfaces for the controller's external collaborators.
Enables dependency injection and deterministic testing.
"""
import asyncio
import time
from abc import ABC, abstractmethod


class IClock(ABC):
    """Duration source used by stages to suspend for equipment timing"""

    @abstractmethod
    async def sleep_ms(self, milliseconds: int) -> None:
        """
        Suspend the calling task for the given duration.

        Args:
            milliseconds: Time to wait, in milliseconds
        """
        pass

    @abstractmethod
    def monotonic(self) -> float:
        """Current monotonic time in seconds."""
        pass


class AsyncioClock(IClock):
    """Real-time clock backed by asyncio.sleep."""

    def __init__(self, time_scale: float = 1.0):
        if time_scale <= 0:
            raise ValueError("time_scale must be positive")
        self.time_scale = time_scale

    async def sleep_ms(self, milliseconds: int) -> None:
        await asyncio.sleep(max(0, milliseconds) / 1000.0 * self.time_scale)

    def monotonic(self) -> float:
        return time.monotonic()


class IStageObserver(ABC):
    """Receives packaging and stage transition events from the controller"""

    @abstractmethod
    def on_event(self, event) -> None:
        """
        Handle a controller event.

        Args:
            event: One of the events in vacpack.abstractions.events
        """
        pass
