import tornado.web

from relay.repositories import RoomRegistry


class HealthHandler(tornado.web.RequestHandler):
    def initialize(self, registry: RoomRegistry):
        self.registry = registry

    def get(self):
        self.write({"status": "ok", "rooms": len(self.registry)})
