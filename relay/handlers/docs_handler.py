import tornado.web

from relay.models import (
    CommandForward,
    CommandMessage,
    CreateMessage,
    DataMessage,
    ErrorMessage,
    JoinAck,
    JoinMessage,
    LeaveMessage,
    MotionMessage,
    MotionUpdate,
    SchemaDocument,
    SlideUpdate,
)


class DocsHandler(tornado.web.RequestHandler):
    def get(self):
        schema = SchemaDocument(
            websocket_endpoints={"relay": "/"},
            inbound_messages={
                "CreateMessage": CreateMessage.model_json_schema(by_alias=True),
                "JoinMessage": JoinMessage.model_json_schema(by_alias=True),
                "LeaveMessage": LeaveMessage.model_json_schema(by_alias=True),
                "DataMessage": DataMessage.model_json_schema(by_alias=True),
                "CommandMessage": CommandMessage.model_json_schema(by_alias=True),
                "MotionMessage": MotionMessage.model_json_schema(by_alias=True),
            },
            outbound_messages={
                "JoinAck": JoinAck.model_json_schema(by_alias=True),
                "ErrorMessage": ErrorMessage.model_json_schema(by_alias=True),
                "MotionUpdate": MotionUpdate.model_json_schema(by_alias=True),
                "CommandForward": CommandForward.model_json_schema(by_alias=True),
                "SlideUpdate": SlideUpdate.model_json_schema(by_alias=True),
            },
            examples={
                "create": {"code": 123456789, "source": "presenter", "event": "create", "slideData": {}},
                "join": {"code": 123456789, "source": "controller", "event": "join"},
                "motion": {"code": 123456789, "source": "controller", "event": "motion", "angle": 12.5},
                "command": {"code": 123456789, "source": "voice", "event": "command", "change": "forward"},
                "data": {"code": 123456789, "source": "presenter", "event": "data", "slideNumber": 3},
            },
            notes=[
                "All WebSocket messages are JSON.",
                "Room codes are integers between 100000000 and 999999999.",
                "Malformed messages are dropped without a reply.",
                "The presenter receives the average of controller angles reported in the last 500 ms, every 150 ms.",
                "When the presenter disconnects the room is closed.",
            ],
        )
        self.set_header("Content-Type", "application/json")
        self.write(schema.model_dump(mode="json"))
