import logging
import os
import time
from typing import Callable, Optional

from tornado.ioloop import PeriodicCallback

from relay.models import MotionUpdate
from relay.repositories import RoomRegistry
from relay.services.delivery import send

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL_MS = 150
DEFAULT_VALID_MS = 500


class AngleAggregator:
    """
    Periodically averages fresh controller angles per room and pushes the
    result to the room's presenter.

    One PeriodicCallback runs per room; the registry keeps its handle and
    stops it when the room is torn down.
    """

    def __init__(
        self,
        registry: RoomRegistry,
        clock: Callable[[], float] = time.monotonic,
        interval_ms: Optional[float] = None,
        valid_ms: Optional[float] = None,
    ):
        self.registry = registry
        self.clock = clock
        if interval_ms is None:
            interval_ms = float(os.getenv("ANGLE_INTERVAL_MS", DEFAULT_INTERVAL_MS))
        if valid_ms is None:
            valid_ms = float(os.getenv("ANGLE_VALID_MS", DEFAULT_VALID_MS))
        self.interval_ms = interval_ms
        self.valid_ms = valid_ms

    @property
    def window(self) -> float:
        """Validity window in clock units (seconds)."""
        return self.valid_ms / 1000.0

    def start(self, code: int) -> PeriodicCallback:
        ticker = PeriodicCallback(lambda: self.tick(code), self.interval_ms)
        ticker.start()
        return ticker

    def tick(self, code: int) -> Optional[float]:
        # The room may have been torn down since this tick was scheduled.
        room = self.registry.get(code)
        if room is None or room.presenter is None:
            return None

        angles = self.registry.fresh_angles(code, self.clock(), self.window)
        if not angles:
            return None

        average = sum(angles) / len(angles)
        send(room.presenter, MotionUpdate(angle=average))
        logger.debug("averaged angle %.2f for room %s", average, code)
        return average
