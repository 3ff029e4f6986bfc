# edutube/app/main.py
from __future__ import annotations
import logging
import sys
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from edutube.app.config import settings
from edutube.app.deps import close_youtube_client
from edutube.app.errors import register_exception_handlers
from edutube.app.routers.categories import router as categories_router
from edutube.app.routers.channel_lists import router as channel_lists_router
from edutube.app.routers.history import router as history_router
from edutube.app.routers.videos import router as videos_router
from edutube.app.routers.whitelist_requests import router as whitelist_requests_router

# Plain stdout logging (dev and containers)
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)

app = FastAPI(title="EduTube Proxy API", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.FRONTEND_CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(videos_router)
app.include_router(categories_router)
app.include_router(channel_lists_router)
app.include_router(history_router)
app.include_router(whitelist_requests_router)


@app.on_event("shutdown")
async def shutdown() -> None:
    await close_youtube_client()


@app.get("/", response_class=PlainTextResponse)
def root() -> str:
    return "Hello World"


@app.get("/health")
def health():
    return {"ok": True}
