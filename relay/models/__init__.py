"""Pydantic models for relay WebSocket message schemas."""

from .messages import (
    BaseInboundMessage,
    CommandForward,
    CommandMessage,
    CreateMessage,
    DataMessage,
    ErrorMessage,
    InboundMessage,
    JoinAck,
    JoinMessage,
    LeaveMessage,
    MessageParseError,
    MotionMessage,
    MotionUpdate,
    SchemaDocument,
    ServerMessage,
    SlideUpdate,
    parse_message,
)

__all__ = [
    "BaseInboundMessage",
    "CommandForward",
    "CommandMessage",
    "CreateMessage",
    "DataMessage",
    "ErrorMessage",
    "InboundMessage",
    "JoinAck",
    "JoinMessage",
    "LeaveMessage",
    "MessageParseError",
    "MotionMessage",
    "MotionUpdate",
    "SchemaDocument",
    "ServerMessage",
    "SlideUpdate",
    "parse_message",
]
