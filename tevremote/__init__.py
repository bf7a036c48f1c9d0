"""Client for remotely controlling the tev image viewer: messages, vector graphics and a demo."""

__version__ = "0.1.0"
__all__ = ["client", "protocol", "vg", "example"]