"""OpenStreetMap loading, A* route planning and map rendering to images."""

__version__ = "0.1.0"