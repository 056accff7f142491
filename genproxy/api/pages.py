"""
Purpose:
- Render the index page listing the bundled sample images.
- Unmatched GET paths fall through here (registered last).
"""

import logging
from fastapi import APIRouter, Request, Response
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from ..core.settings import Settings
from .generate import ALL_METHODS
from ..pages.samples import list_sample_images

logger = logging.getLogger(__name__)

INDEX_TEMPLATE = "index.html"

def create_pages_router(cfg: Settings, templates: Jinja2Templates) -> APIRouter:
    router = APIRouter(tags=["pages"])

    @router.get("/", response_class=HTMLResponse)
    def index(request: Request):
        images = list_sample_images(cfg.images_dir, cfg.sample_image_pattern)
        return templates.TemplateResponse(request, INDEX_TEMPLATE, {"images": images})

    # every method, so POST /foo falls through like GET /foo
    @router.api_route("/{path:path}", methods=ALL_METHODS, include_in_schema=False)
    def fallthrough(path: str):
        # any other path: 200 with nothing written, unless index_fallthrough is off
        if not cfg.index_fallthrough:
            return Response("404 page not found", status_code=404, media_type="text/plain")
        logger.debug("Unmatched path /%s served empty", path)
        return Response(status_code=200)

    return router
