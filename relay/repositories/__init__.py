from .room_registry import (
    AlreadyJoined,
    AngleSample,
    InvalidRole,
    Room,
    RoomAlreadyExists,
    RoomError,
    RoomNotFound,
    RoomRegistry,
)

__all__ = [
    "AlreadyJoined",
    "AngleSample",
    "InvalidRole",
    "Room",
    "RoomAlreadyExists",
    "RoomError",
    "RoomNotFound",
    "RoomRegistry",
]
