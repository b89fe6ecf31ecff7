"""Live reload support for development mode."""

from sohodemo.live.reload import LiveReloadManager

__all__ = ["LiveReloadManager"]
