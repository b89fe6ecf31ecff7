"""WebSocket-based live reload for development mode.

Monitors page templates for changes and notifies connected clients
via WebSocket to trigger page reloads.
"""

import asyncio
import json
import logging
import weakref
from pathlib import Path

from aiohttp import WSMsgType, web
from watchfiles import Change, awatch

from sohodemo.core.content import TEMPLATE_SUFFIX

logger = logging.getLogger(__name__)

DEFAULT_WATCH_PATTERNS = ["**/*.html"]


class LiveReloadManager:
    """Manages WebSocket connections and file watching for live reload.

    Coordinates between file system watcher and connected WebSocket clients
    to provide automatic page refresh on template changes.
    """

    def __init__(self, views_dir: Path, watch_patterns: list[str] | None = None) -> None:
        """Initialize the live reload manager.

        Args:
            views_dir: Directory to watch for changes
            watch_patterns: Glob patterns to watch (default: ["**/*.html"])
        """
        self._views_dir = views_dir
        self._watch_patterns = watch_patterns or DEFAULT_WATCH_PATTERNS
        self._connections: weakref.WeakSet[web.WebSocketResponse] = weakref.WeakSet()
        self._watch_task: asyncio.Task[None] | None = None

    async def start(self) -> None:
        """Start the file watcher."""
        if self._watch_task is not None:
            return
        if not self._views_dir.is_dir():
            logger.warning("Views directory %s not found, live reload disabled", self._views_dir)
            return
        self._watch_task = asyncio.create_task(self._watch_files())

    async def stop(self) -> None:
        """Stop the file watcher and close all connections."""
        if self._watch_task is not None:
            self._watch_task.cancel()
            try:
                await self._watch_task
            except asyncio.CancelledError:
                pass
            self._watch_task = None

        for ws in list(self._connections):
            await ws.close()

    async def handle_websocket(self, request: web.Request) -> web.WebSocketResponse:
        """Handle WebSocket connection for live reload.

        Args:
            request: aiohttp request

        Returns:
            WebSocket response
        """
        ws = web.WebSocketResponse()
        await ws.prepare(request)

        self._connections.add(ws)

        try:
            async for msg in ws:
                if msg.type == WSMsgType.ERROR:
                    break
        finally:
            self._connections.discard(ws)

        return ws

    async def _watch_files(self) -> None:
        """Watch for file changes and broadcast reload events."""
        async for changes in awatch(self._views_dir):
            for change_type, path_str in changes:
                if change_type == Change.deleted:
                    continue

                path = Path(path_str)
                if not self._matches_patterns(path):
                    continue

                page_path = self._to_page_path(path)
                logger.debug("Template changed: %s", page_path)
                await self._broadcast_reload(page_path)

    def _matches_patterns(self, path: Path) -> bool:
        """Check if a path matches any watch pattern.

        Args:
            path: Path to check

        Returns:
            True if path matches any pattern
        """
        try:
            relative = path.relative_to(self._views_dir)
        except ValueError:
            return False

        for pattern in self._watch_patterns:
            if relative.match(pattern):
                return True
            # "**/" also matches top-level files
            if pattern.startswith("**/") and relative.match(pattern[3:]):
                return True
        return False

    def _to_page_path(self, file_path: Path) -> str:
        """Convert a template path to the URL path of the page.

        Args:
            file_path: Absolute template path

        Returns:
            URL path (e.g., "/controls/dropdown")
        """
        relative = file_path.relative_to(self._views_dir).as_posix()
        if relative.endswith(TEMPLATE_SUFFIX):
            relative = relative[: -len(TEMPLATE_SUFFIX)]

        if relative.endswith("/index") or relative == "index":
            relative = relative.rsplit("index", 1)[0]

        return f"/{relative}"

    async def _broadcast_reload(self, path: str) -> None:
        """Broadcast reload event to all connected clients.

        Args:
            path: Page path that changed
        """
        if not self._connections:
            return

        message = json.dumps({"type": "reload", "path": path})

        for ws in list(self._connections):
            if ws.closed:
                continue
            try:
                await ws.send_str(message)
            except ConnectionResetError:
                # Client disconnected mid-send, will be cleaned up by WeakSet
                pass


def create_live_reload_routes(manager: LiveReloadManager) -> list[web.RouteDef]:
    """Create routes for live reload WebSocket.

    Args:
        manager: LiveReloadManager instance

    Returns:
        List of route definitions
    """
    return [web.get("/ws/live-reload", manager.handle_websocket)]
