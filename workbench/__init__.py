"""Route planning on OpenStreetMap data, a /proc system monitor and a cost calculator demo."""

__version__ = "0.1.0"