"""
Routes serving the bundled web client.

The client is a single page application compiled into ``WEB_DIR``.
Existing files are returned as is; any other path under ``/web``
falls back to ``index.html`` so that client side routing works on
reload.  The site root redirects to the client.
"""

from pathlib import Path

from fastapi import APIRouter, HTTPException, status
from fastapi.responses import FileResponse, RedirectResponse


def build_web_router(web_dir: str) -> APIRouter:
    """Create the router serving files from ``web_dir``."""
    root = Path(web_dir).resolve()
    router = APIRouter(include_in_schema=False)

    @router.get("/")
    async def redirect_to_client() -> RedirectResponse:
        return RedirectResponse(url="/web/")

    @router.get("/web")
    @router.get("/web/{path:path}")
    async def serve_client(path: str = "") -> FileResponse:
        if path:
            candidate = (root / path).resolve()
            if candidate.is_relative_to(root) and candidate.is_file():
                return FileResponse(candidate)
        index = root / "index.html"
        if not index.is_file():
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Web client is not available")
        return FileResponse(index)

    return router
