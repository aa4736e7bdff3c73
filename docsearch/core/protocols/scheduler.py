"""Scheduler protocol for dependency injection."""
from typing import Callable, Protocol, runtime_checkable


@runtime_checkable
class TimerHandle(Protocol):
    """Handle of a scheduled callback."""

    def cancel(self) -> None:
        ...


@runtime_checkable
class SchedulerProtocol(Protocol):
    """Protocol for delayed callbacks on the event loop."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        """Run callback once after delay seconds.

        Args:
            delay: Delay in seconds.
            callback: Zero-argument callable.

        Returns:
            Handle that cancels the callback if it has not run yet.
        """
        ...
