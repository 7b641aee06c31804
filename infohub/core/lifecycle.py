# infohub/core/lifecycle.py
"""Ordered startup and shutdown of background components.

Components are started in registration order and stopped in reverse. If a
component fails to start, the ones already running are stopped again before
the error propagates, so a failed boot leaves no scheduler threads behind.

Example:
    >>> lifecycle = LifecycleManager()
    >>> lifecycle.register("delivery-sweep", SweepScheduler(store, interval=60))
    >>> await lifecycle.startup()
    >>> ...
    >>> await lifecycle.shutdown()
"""

import logging
from typing import Protocol, runtime_checkable

logger = logging.getLogger(__name__)


@runtime_checkable
class LifecycleComponent(Protocol):
    def start(self) -> None: ...

    def shutdown(self) -> None: ...


class LifecycleManager:
    """Starts and stops registered components as one unit."""

    def __init__(self) -> None:
        self._registered: list[tuple[str, LifecycleComponent]] = []
        self._running: list[tuple[str, LifecycleComponent]] = []

    def register(self, name: str, component: LifecycleComponent) -> None:
        self._registered.append((name, component))
        logger.debug("Component %s registered", name)

    async def startup(self) -> None:
        """Start every registered component.

        Raises:
            Exception: Whatever the failing component raised, after the
                components started before it have been stopped.
        """
        if self._running:
            return

        for name, component in self._registered:
            try:
                component.start()
            except Exception:
                logger.exception("Component %s failed to start", name)
                await self.shutdown()
                raise
            self._running.append((name, component))
            logger.info("Component %s started", name)

    async def shutdown(self) -> None:
        """Stop running components, newest first. Errors are logged, not raised."""
        while self._running:
            name, component = self._running.pop()
            try:
                component.shutdown()
            except Exception as e:
                logger.error("Component %s failed to stop: %s", name, e)
            else:
                logger.info("Component %s stopped", name)

    @property
    def is_started(self) -> bool:
        return bool(self._running)

    @property
    def component_count(self) -> int:
        return len(self._registered)
