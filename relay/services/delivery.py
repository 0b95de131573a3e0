import logging
from typing import Any

import tornado.iostream
import tornado.websocket

from relay.models import ServerMessage

logger = logging.getLogger(__name__)

_SEND_ERRORS = (tornado.websocket.WebSocketClosedError, tornado.iostream.StreamClosedError)


def send(connection: Any, message: ServerMessage) -> bool:
    """
    Write `message` to `connection` without waiting for delivery.

    Returns False when the write is refused straight away. Failures are only
    logged; callers never retry and never roll back state because of them.
    """
    try:
        result = connection.write_message(message.to_json())
    except _SEND_ERRORS as exc:
        logger.warning("Failed to send %s message: %r", message.event, exc)
        return False
    if result is not None:
        result.add_done_callback(_log_write_failure)
    return True


def _log_write_failure(future) -> None:
    if future.cancelled():
        return
    exc = future.exception()
    if exc is not None:
        logger.warning("Failed to deliver message: %r", exc)
