# Common language: Environment/ops probe that surfaces library versions and non-secret config.
# Use this after deploys or upgrades to confirm the key is set and samples are visible.

from fastapi import APIRouter
from ..core.settings import Settings, api_key_configured
from ..pages.samples import list_sample_images
import sys, importlib

def _ver(modname: str) -> str:
    try:
        m = importlib.import_module(modname)
        return getattr(m, "__version__", "unknown")
    except ImportError:
        return "not-installed"

def create_health_router(cfg: Settings, provider_name: str) -> APIRouter:
    router = APIRouter(tags=["health"])

    @router.get("/healthz")
    def healthz():
        return {
            "status": "ok",
            "python": sys.version.split()[0],
            "versions": {
                "fastapi": _ver("fastapi"),
                "uvicorn": _ver("uvicorn"),
                "pydantic_settings": _ver("pydantic_settings"),
                "jinja2": _ver("jinja2"),
                "google.genai": _ver("google.genai"),
            },
            "config": {
                "provider": provider_name,
                "model": cfg.model_name,
                # never the key itself
                "api_key_configured": api_key_configured(cfg.api_key),
                "max_upload_bytes": cfg.max_upload_bytes,
                "images_dir": str(cfg.images_dir),
                "sample_images": len(list_sample_images(cfg.images_dir, cfg.sample_image_pattern)),
            },
        }

    return router
