from .health_handler import HealthHandler
from .docs_handler import DocsHandler
from .relay_ws_handler import RelayWebSocketHandler

__all__ = [
    "HealthHandler",
    "DocsHandler",
    "RelayWebSocketHandler",
]
