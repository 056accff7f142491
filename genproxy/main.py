"""
Purpose:
- FastAPI application factory and router mounts.
- Static assets under /static, generation proxy under /api, index page at /.
- Served by `genproxy --addr host:port` (see cli.py) or `uvicorn genproxy.main:create_app --factory`.
"""

from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates

from .core.settings import Settings, get_settings
from .llm.streamer import ContentStreamer, GeminiStreamer
from .api.generate import create_generate_router
from .api.health import create_health_router
from .api.pages import INDEX_TEMPLATE, create_pages_router

def create_app(cfg: Optional[Settings] = None, streamer: Optional[ContentStreamer] = None) -> FastAPI:
    cfg = cfg or get_settings()
    if streamer is None:
        streamer = GeminiStreamer(
            api_key=cfg.api_key,
            model=cfg.model_name,
            harassment_threshold=cfg.harassment_threshold,
        )

    templates = Jinja2Templates(directory=str(cfg.static_dir))
    # fail at startup, not on the first request, if the page template is missing
    templates.get_template(INDEX_TEMPLATE)

    app = FastAPI(title="genproxy", version="0.1.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cfg.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.mount("/static", StaticFiles(directory=str(cfg.static_dir)), name="static")
    app.include_router(create_generate_router(cfg, streamer))
    app.include_router(create_health_router(cfg, streamer.provider_name))
    # catch-all GET route; must stay last
    app.include_router(create_pages_router(cfg, templates))
    return app
