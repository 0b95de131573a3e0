"""
Presentation remote-control relay service package.

This service is responsible for:
- Keeping the in-memory table of rooms (presenter, controllers, voices).
- Relaying slide changes and voice commands between room members.
- Averaging controller orientation samples and pushing them to the presenter.

The HTTP/WebSocket server is implemented with Tornado.
"""
