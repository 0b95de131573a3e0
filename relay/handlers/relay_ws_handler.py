import logging

import tornado.websocket

from relay.services.message_router import MessageRouter

logger = logging.getLogger(__name__)


class RelayWebSocketHandler(tornado.websocket.WebSocketHandler):
    def initialize(self, router: MessageRouter):
        self.router = router

    def check_origin(self, origin: str) -> bool:
        # Phones and presenter pages are served from other origins.
        return True

    def open(self):
        logger.info("New connection to socket from %s", self.request.remote_ip)

    def on_message(self, message: str | bytes):
        self.router.on_message(self, message)

    def on_close(self):
        self.router.on_close(self)
