import logging
import time
from typing import Callable, Hashable

from relay.models import (
    BaseInboundMessage,
    CommandMessage,
    CreateMessage,
    DataMessage,
    ErrorMessage,
    JoinAck,
    JoinMessage,
    MessageParseError,
    MotionMessage,
    parse_message,
)
from relay.repositories import RoomError, RoomRegistry
from relay.services.delivery import send

logger = logging.getLogger(__name__)


class MessageRouter:
    """Dispatches parsed messages from one connection against the room registry."""

    def __init__(self, registry: RoomRegistry, clock: Callable[[], float] = time.monotonic):
        self.registry = registry
        self.clock = clock

    def on_message(self, connection: Hashable, raw: str | bytes) -> None:
        try:
            msg = parse_message(raw)
        except MessageParseError as exc:
            logger.info("Dropping message: %s", exc)
            return
        self.dispatch(connection, msg)

    def on_close(self, connection: Hashable) -> None:
        self.registry.remove_connection(connection)

    def dispatch(self, connection: Hashable, msg: BaseInboundMessage) -> None:
        # Any other (event, source) pair is ignored.
        if isinstance(msg, CreateMessage) and msg.source == "presenter":
            self._handle_create(connection, msg)
        elif isinstance(msg, JoinMessage):
            self._handle_join(connection, msg)
        elif isinstance(msg, MotionMessage) and msg.source == "controller":
            self.registry.record_angle(msg.code, connection, msg.angle, self.clock())
        elif isinstance(msg, CommandMessage) and msg.source == "voice":
            self.registry.forward_command(msg.code, msg.change)
        elif isinstance(msg, DataMessage) and msg.source == "presenter":
            self.registry.broadcast_slide(msg.code, msg.slide_number)

    def _handle_create(self, connection: Hashable, msg: CreateMessage) -> None:
        try:
            self.registry.create_room(msg.code, connection)
        except RoomError as exc:
            send(connection, ErrorMessage(message=str(exc)))
            return
        send(connection, JoinAck(message="Room created"))

    def _handle_join(self, connection: Hashable, msg: JoinMessage) -> None:
        try:
            self.registry.join_room(msg.code, connection, msg.source)
        except RoomError as exc:
            send(connection, ErrorMessage(message=str(exc)))
            return
        send(connection, JoinAck(message="Joined room"))
