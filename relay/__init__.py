"""In-memory WebSocket session relay."""

__version__ = "1.0.0"
