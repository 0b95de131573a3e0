import asyncio
import logging
import os

import tornado.web
from dotenv import load_dotenv

from relay.handlers import DocsHandler, HealthHandler, RelayWebSocketHandler
from relay.repositories import RoomRegistry
from relay.services.angle_aggregator import AngleAggregator
from relay.services.message_router import MessageRouter


def make_app() -> tornado.web.Application:
    registry = RoomRegistry()
    aggregator = AngleAggregator(registry)
    registry.set_scheduler(aggregator.start)
    router = MessageRouter(registry)

    app = tornado.web.Application(
        [
            (r"/health", HealthHandler, dict(registry=registry)),
            (r"/docs", DocsHandler),
            (r"/", RelayWebSocketHandler, dict(router=router)),
        ]
    )
    app.registry = registry
    return app


def setup_logger(name):
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
        logger.addHandler(handler)
        logger.setLevel(os.environ.get("LOG_LEVEL", "INFO").upper())
    return logger


async def serve(address: str, port: int) -> None:
    logger = logging.getLogger("relay")
    app = make_app()
    logger.info("Waiting for application startup...")
    app.listen(port=port, address=address)
    logger.info("Application startup complete.")
    logger.info(f"Tornado running on ws://{address}:{port} (Press Ctrl+C to quit)")
    try:
        await asyncio.Event().wait()
    finally:
        app.registry.close_all()


def main() -> None:
    load_dotenv()
    logger = setup_logger("relay")
    logger.info(f"Started server process {os.getpid()}")
    port = int(os.environ.get("PORT", "3000"))
    address = os.environ.get("ADDRESS", "127.0.0.1")
    try:
        asyncio.run(serve(address, port))
    except KeyboardInterrupt:
        logger.info("Shutting down.")


if __name__ == "__main__":
    main()
