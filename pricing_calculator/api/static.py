"""
Static file serving for the single-page frontend.

Unknown paths fall back to index.html so client-side routing works. Hashed
build assets are cached for a year; index.html is never cached.
"""
from pathlib import Path
import logging

from fastapi import FastAPI, HTTPException
from fastapi.responses import FileResponse


logger = logging.getLogger(__name__)

INDEX_FILE = "index.html"

NO_CACHE_HEADERS = {
    "Cache-Control": "no-cache, no-store, must-revalidate",
    "Pragma": "no-cache",
    "Expires": "0",
}

LONG_LIVED_EXTENSIONS = {".js", ".css", ".woff", ".woff2", ".ttf", ".eot"}
IMAGE_EXTENSIONS = {".png", ".jpg", ".jpeg", ".gif", ".svg", ".ico", ".webp"}


def cache_control_for(relative_path: str) -> str:
    """
    Return the Cache-Control value for a static file.

    Args:
        relative_path: Path relative to the static root, using '/' separators

    Returns:
        Cache-Control header value
    """
    # Build assets carry a content hash in their name
    if "assets/" in relative_path:
        return "public, max-age=31536000, immutable"

    suffix = Path(relative_path).suffix.lower()
    if suffix in LONG_LIVED_EXTENSIONS:
        return "public, max-age=86400"
    if suffix in IMAGE_EXTENSIONS:
        return "public, max-age=604800"
    return "public, max-age=3600"


class SPAFiles:
    """Resolves request paths against the SPA build directory."""

    def __init__(self, static_dir: Path):
        self.static_dir = Path(static_dir).resolve()

    def index_response(self) -> FileResponse:
        index_path = self.static_dir / INDEX_FILE
        if not index_path.is_file():
            raise HTTPException(status_code=404, detail="Not Found")
        return FileResponse(index_path, media_type="text/html; charset=utf-8", headers=NO_CACHE_HEADERS)

    def response_for(self, request_path: str) -> FileResponse:
        """Serve the file at request_path, or index.html when there is none."""
        relative = request_path.strip("/")
        if not relative or relative == INDEX_FILE:
            return self.index_response()

        candidate = (self.static_dir / relative).resolve()
        # Never serve anything outside the build directory
        if self.static_dir not in candidate.parents:
            return self.index_response()

        if candidate.is_dir():
            if not (candidate / INDEX_FILE).is_file():
                return self.index_response()
            candidate = candidate / INDEX_FILE
            relative = f"{relative}/{INDEX_FILE}"

        if not candidate.is_file():
            return self.index_response()

        return FileResponse(candidate, headers={"Cache-Control": cache_control_for(relative)})


def register_spa(app: FastAPI, static_dir: Path) -> None:
    """
    Mount the SPA catch-all route.

    Must be called after the API routers are included so that API routes
    take precedence.
    """
    static_dir = Path(static_dir)
    if not static_dir.is_dir():
        logger.warning("Static directory %s not found, frontend will not be served", static_dir)
        return

    spa_files = SPAFiles(static_dir)

    @app.get("/{full_path:path}", include_in_schema=False)
    async def serve_spa(full_path: str) -> FileResponse:
        if full_path == "api" or full_path.startswith("api/"):
            raise HTTPException(status_code=404, detail="Not Found")
        return spa_files.response_for(full_path)
