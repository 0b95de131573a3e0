import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, Hashable, List, Optional, Protocol, Set

from relay.models import CommandForward, SlideUpdate
from relay.services.delivery import send

logger = logging.getLogger(__name__)


class Ticker(Protocol):
    def stop(self) -> None: ...


class RoomError(Exception):
    """Base class for protocol violations; the message is sent back to the client."""


class RoomAlreadyExists(RoomError):
    def __init__(self, code: int):
        super().__init__("Room already exists")
        self.code = code


class RoomNotFound(RoomError):
    def __init__(self, code: int):
        super().__init__("Room does not exist")
        self.code = code


class AlreadyJoined(RoomError):
    def __init__(self, code: int):
        super().__init__("already in")
        self.code = code


class InvalidRole(RoomError):
    def __init__(self, role: str):
        super().__init__("Invalid client type")
        self.role = role


@dataclass
class AngleSample:
    angle: float
    last_updated: float


@dataclass(eq=False)
class Room:
    code: int
    presenter: Optional[Hashable] = None
    controllers: Set[Hashable] = field(default_factory=set)
    voices: Set[Hashable] = field(default_factory=set)
    controller_angles: Dict[Hashable, AngleSample] = field(default_factory=dict)
    ticker: Optional[Ticker] = None

    def is_member(self, conn: Hashable) -> bool:
        return conn == self.presenter or conn in self.controllers or conn in self.voices

    def is_empty(self) -> bool:
        return self.presenter is None and not self.controllers and not self.voices


class RoomRegistry:
    """
    Authoritative in-memory table of rooms keyed by room code.

    Every mutation of room membership or angle samples goes through this
    class. The registry is driven from a single IOLoop thread, so each call
    runs to completion before any other handler or ticker touches a room.
    """

    def __init__(self, scheduler: Optional[Callable[[int], Ticker]] = None):
        self._rooms: Dict[int, Room] = {}
        self._scheduler = scheduler

    def set_scheduler(self, scheduler: Callable[[int], Ticker]) -> None:
        self._scheduler = scheduler

    def __contains__(self, code: int) -> bool:
        return code in self._rooms

    def __len__(self) -> int:
        return len(self._rooms)

    def get(self, code: int) -> Optional[Room]:
        return self._rooms.get(code)

    def create_room(self, code: int, presenter: Hashable) -> Room:
        if code in self._rooms:
            raise RoomAlreadyExists(code)
        room = Room(code=code, presenter=presenter)
        self._rooms[code] = room
        if self._scheduler is not None:
            room.ticker = self._scheduler(code)
        logger.info("Room %s created", code)
        return room

    def join_room(self, code: int, conn: Hashable, role: str) -> Room:
        room = self._rooms.get(code)
        if room is None:
            raise RoomNotFound(code)
        if room.is_member(conn):
            raise AlreadyJoined(code)
        if role == "controller":
            room.controllers.add(conn)
        elif role == "voice":
            room.voices.add(conn)
        else:
            raise InvalidRole(role)
        logger.info("%s joined room %s", role, code)
        return room

    def record_angle(self, code: int, conn: Hashable, angle: float, now: float) -> bool:
        # Samples are accepted from any connection, joined as controller or not.
        room = self._rooms.get(code)
        if room is None or room.presenter is None:
            return False
        room.controller_angles[conn] = AngleSample(angle=angle, last_updated=now)
        return True

    def fresh_angles(self, code: int, now: float, window: float) -> List[float]:
        room = self._rooms.get(code)
        if room is None:
            return []
        return [
            sample.angle
            for sample in room.controller_angles.values()
            if now - sample.last_updated < window
        ]

    def forward_command(self, code: int, change: str) -> bool:
        room = self._rooms.get(code)
        if room is None or room.presenter is None:
            return False
        send(room.presenter, CommandForward(change=change))
        logger.info("voice command %s sent to presenter of room %s", change, code)
        return True

    def broadcast_slide(self, code: int, slide_number: float) -> int:
        """Send the slide number to every voice in the room; returns how many were sent."""
        room = self._rooms.get(code)
        if room is None:
            return 0
        update = SlideUpdate(slide_number=slide_number)
        delivered = sum(1 for voice in list(room.voices) if send(voice, update))
        logger.info("presenter of room %s changed slide to %s", code, slide_number)
        return delivered

    def remove_connection(self, conn: Hashable) -> List[int]:
        """Drop `conn` from every room and return the codes of rooms torn down."""
        closed: List[int] = []
        for code, room in list(self._rooms.items()):
            if room.presenter is not None and room.presenter == conn:
                self._teardown(code)
                logger.info("presenter left so room %s closed", code)
                closed.append(code)
                continue

            room.controllers.discard(conn)
            room.voices.discard(conn)
            room.controller_angles.pop(conn, None)

            if room.is_empty():
                self._teardown(code)
                logger.info("room %s removed, no members left", code)
                closed.append(code)
        return closed

    def close_all(self) -> None:
        for code in list(self._rooms):
            self._teardown(code)

    def _teardown(self, code: int) -> None:
        room = self._rooms.pop(code)
        if room.ticker is not None:
            ticker, room.ticker = room.ticker, None
            ticker.stop()
