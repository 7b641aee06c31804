# infohub/core/sweeper.py
"""Background expiry of delivery receipts using APScheduler.

Runs DeliveryStore.sweep() on a fixed interval so that no request pays
the cost of expiring old receipts.
"""

import logging

from apscheduler.schedulers.asyncio import AsyncIOScheduler

from infohub.core.delivery import DeliveryStore

logger = logging.getLogger(__name__)

SWEEP_JOB_ID = "delivery-sweep"


class SweepScheduler:
    """Owns an AsyncIOScheduler with a single interval sweep job.

    Registered with the LifecycleManager, which calls start() on startup
    and shutdown() on exit.
    """

    def __init__(self, store: DeliveryStore, interval: float = 60.0) -> None:
        self._store = store
        self._interval = interval
        self._started = False
        self._scheduler = AsyncIOScheduler(
            job_defaults={
                "coalesce": True,  # Combine missed runs into one
                "max_instances": 1,
            },
        )
        self._scheduler.add_job(
            self.run_once,
            "interval",
            seconds=interval,
            id=SWEEP_JOB_ID,
            replace_existing=True,
        )

    def run_once(self) -> int:
        """Sweep the store immediately.

        Returns:
            Number of receipts removed.
        """
        try:
            return self._store.sweep()
        except Exception:
            logger.exception("Delivery sweep failed")
            return 0

    @property
    def running(self) -> bool:
        return self._started

    def start(self) -> None:
        """Start the scheduler."""
        if not self._started:
            self._scheduler.start()
            self._started = True
            logger.info("Delivery sweep scheduled every %.0fs", self._interval)

    def shutdown(self, wait: bool = False) -> None:
        """Shutdown the scheduler.

        AsyncIOScheduler finishes stopping on the next event loop iteration,
        so `running` is tracked here rather than read from the scheduler.
        """
        if self._started:
            self._scheduler.shutdown(wait=wait)
            self._started = False
            logger.info("Delivery sweep stopped")
