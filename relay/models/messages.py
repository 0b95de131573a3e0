import json
import math
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictInt, TypeAdapter, ValidationError, field_validator

MIN_ROOM_CODE = 100_000_000
MAX_ROOM_CODE = 999_999_999
FLOAT32_MAX = 3.4028234663852886e38

Source = Literal["server", "controller", "voice", "presenter"]
Change = Literal["forward", "backward"]


class MessageParseError(ValueError):
    """Raised when raw input is not a well-formed relay message."""


class BaseInboundMessage(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    code: int = Field(
        ...,
        strict=True,
        ge=MIN_ROOM_CODE,
        le=MAX_ROOM_CODE,
        description="Room code shared by every member of the room.",
    )
    source: Source = Field(..., description="Role of the sending client.")


class CreateMessage(BaseInboundMessage):
    """Presenter -> server: open a room under `code`."""

    event: Literal["create"] = "create"
    slide_data: Any = Field(..., alias="slideData", description="Opaque presentation payload.")


class JoinMessage(BaseInboundMessage):
    """Controller/voice -> server: join the room under `code`."""

    event: Literal["join"] = "join"


class LeaveMessage(BaseInboundMessage):
    event: Literal["leave"] = "leave"


class DataMessage(BaseInboundMessage):
    """Presenter -> server: the presenter moved to another slide."""

    event: Literal["data"] = "data"
    slide_number: Union[StrictInt, StrictFloat] = Field(..., alias="slideNumber")

    @field_validator("slide_number")
    @classmethod
    def validate_slide_number(cls, value):
        if isinstance(value, float) and not math.isfinite(value):
            raise ValueError("slideNumber must be a finite number")
        return value


class CommandMessage(BaseInboundMessage):
    """Voice -> server: navigate the presentation."""

    event: Literal["command"] = "command"
    change: Change


class MotionMessage(BaseInboundMessage):
    """Controller -> server: current orientation sample."""

    event: Literal["motion"] = "motion"
    angle: Union[StrictInt, StrictFloat] = Field(..., description="Orientation angle in degrees.")

    @field_validator("angle")
    @classmethod
    def validate_angle(cls, value):
        value = float(value)
        if not math.isfinite(value) or abs(value) > FLOAT32_MAX:
            raise ValueError("angle must be a finite single-precision float")
        return value


InboundMessage = Annotated[
    Union[CreateMessage, JoinMessage, LeaveMessage, DataMessage, CommandMessage, MotionMessage],
    Field(discriminator="event"),
]

_inbound_adapter: TypeAdapter = TypeAdapter(InboundMessage)


def parse_message(raw: str | bytes) -> BaseInboundMessage:
    """
    Decode one WebSocket frame into a typed inbound message.

    Raises MessageParseError when the frame is not JSON or does not match
    any message shape; there is no partial acceptance.
    """
    try:
        payload = json.loads(raw)
    except (ValueError, RecursionError) as exc:
        raise MessageParseError(f"not proper json: {exc}") from exc

    try:
        return _inbound_adapter.validate_python(payload)
    except ValidationError as exc:
        raise MessageParseError(f"not correct types for json data: {exc}") from exc


class ServerMessage(BaseModel):
    """Common base for server -> client messages."""

    model_config = ConfigDict(populate_by_name=True)

    source: Literal["server"] = "server"

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True)


class JoinAck(ServerMessage):
    event: Literal["join"] = "join"
    status: Literal["ok"] = "ok"
    message: str


class ErrorMessage(ServerMessage):
    event: Literal["error"] = "error"
    message: str = Field(..., description="Human-readable reason for the rejection.")


class MotionUpdate(ServerMessage):
    """Averaged controller angle pushed to the presenter."""

    event: Literal["motion"] = "motion"
    angle: float


class CommandForward(ServerMessage):
    event: Literal["command"] = "command"
    change: Change


class SlideUpdate(ServerMessage):
    """Slide change broadcast to every voice client of a room."""

    event: Literal["data"] = "data"
    slide_number: Union[StrictInt, StrictFloat] = Field(..., alias="slideNumber")


class SchemaDocument(BaseModel):
    """Documentation payload served at /docs for quick reference."""

    websocket_endpoints: dict[str, str]
    inbound_messages: dict[str, dict[str, Any]]
    outbound_messages: dict[str, dict[str, Any]]
    examples: dict[str, Any] = Field(default_factory=dict)
    notes: list[str] = []
