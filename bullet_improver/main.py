from __future__ import annotations

import os
import logging
from typing import Any, List, Optional

from fastapi import APIRouter, Depends, FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse, PlainTextResponse, Response
from fastapi.staticfiles import StaticFiles
from jinja2 import Template
from pydantic import BaseModel, field_validator
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import Settings, build_client
from .generator import BulletImprover
from .middleware import BodyLimitMiddleware
from .model import Style

# -------------------------------------------------
# Setup
# -------------------------------------------------

logger = logging.getLogger("uvicorn.error")

INVALID_BULLET = 'Invalid "bullet". Provide a non-empty string.'

SITEMAP_TEMPLATE = Template(
    """<?xml version="1.0" encoding="UTF-8"?>
<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">
  <url>
    <loc>{{ origin }}/</loc>
    <changefreq>weekly</changefreq>
    <priority>0.8</priority>
  </url>
</urlset>"""
)


# -------------------------------------------------
# Schemas
# -------------------------------------------------

class ImproveIn(BaseModel):
    bullet: str
    style: Optional[Any] = None

    @field_validator("bullet")
    @classmethod
    def bullet_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError(INVALID_BULLET)
        return v


class ImproveOut(BaseModel):
    results: List[str]


def get_improver(request: Request) -> BulletImprover:
    return request.app.state.improver


def _origin(request: Request) -> str:
    return str(request.base_url).rstrip("/")


# -------------------------------------------------
# Routes
# -------------------------------------------------

router = APIRouter()


@router.get("/")
def index(improver: BulletImprover = Depends(get_improver)):
    static_dir = improver.settings.static_dir
    if static_dir:
        page = os.path.join(static_dir, "index.html")
        if os.path.isfile(page):
            return FileResponse(page)
    return {"ok": True, "routes": ["/healthz", "/api/improve", "/robots.txt", "/sitemap.xml", "/docs"]}


@router.get("/healthz")
async def healthz(improver: BulletImprover = Depends(get_improver)):
    return {"ok": True, "mode": improver.mode}


@router.get("/robots.txt", response_class=PlainTextResponse)
async def robots(request: Request):
    return f"User-agent: *\nAllow: /\nSitemap: {_origin(request)}/sitemap.xml\n"


@router.get("/sitemap.xml")
async def sitemap(request: Request):
    return Response(SITEMAP_TEMPLATE.render(origin=_origin(request)), media_type="application/xml")


@router.post("/api/improve", response_model=ImproveOut)
async def improve(data: ImproveIn, improver: BulletImprover = Depends(get_improver)):
    """
    Rewrite one resume bullet into 3 variations.

    - With OPENAI_API_KEY set → LLM mode.
    - Otherwise → local rule-based rewrites.
    """
    style = Style.resolve(data.style)
    try:
        results = await improver.generate(data.bullet, style)
    except Exception as e:
        logger.exception("improve() failed")
        raise HTTPException(status_code=500, detail=str(e) or "Unexpected server error")
    return {"results": results}


# -------------------------------------------------
# App factory
# -------------------------------------------------

def create_app(settings: Optional[Settings] = None, improver: Optional[BulletImprover] = None) -> FastAPI:
    """
    Build the API. Pass ``improver`` to inject a prebuilt orchestrator
    (and its client); otherwise one is built from ``settings`` or the env.
    """
    if improver is None:
        settings = settings or Settings.from_env()
        improver = BulletImprover(settings, build_client(settings))
    settings = improver.settings

    app = FastAPI(title="Bullet Improver API", version="0.1.0")
    app.state.improver = improver

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials="*" not in settings.allowed_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_middleware(BodyLimitMiddleware, max_bytes=settings.max_body_bytes)

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException):
        return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})

    @app.exception_handler(RequestValidationError)
    async def invalid_request(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=400, content={"error": INVALID_BULLET})

    app.include_router(router)

    if settings.static_dir and os.path.isdir(settings.static_dir):
        app.mount("/", StaticFiles(directory=settings.static_dir), name="static")

    logger.info("Bullet Improver ready (mode=%s, model=%s)", improver.mode, improver.model)
    return app


app = create_app()


def run() -> None:
    import uvicorn

    settings = app.state.improver.settings
    uvicorn.run(app, host=settings.host, port=settings.port)
