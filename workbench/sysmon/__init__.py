"""Terminal system monitor that reads /proc and /etc."""

__version__ = "0.1.0"