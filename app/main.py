# app/main.py
from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Depends, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.middleware.gzip import GZipMiddleware
from starlette.middleware.trustedhost import TrustedHostMiddleware

from app.api.errors import register_error_handlers
from app.api.routers import auth
from app.core.container import Container
from app.core.settings import get_settings
from app.infrastructure.db.database import db_ping, get_db
from app.infrastructure.db.init_db import init as init_db

settings = get_settings()

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
log = logging.getLogger("auth")


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.INIT_DB_ON_START or settings.TESTING:
        await init_db()
    log.info("%s %s started", settings.APP_NAME, settings.APP_VERSION)
    yield


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    root_path=settings.ROOT_PATH,
    lifespan=lifespan,
)
app.state.container = Container(settings)

# CORS
allow_origins = [o.strip() for o in settings.CORS_ALLOW_ORIGINS.split(",") if o.strip()]
app.add_middleware(
    CORSMiddleware,
    allow_origins=allow_origins if allow_origins != ["*"] else [settings.CLIENT_URL],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
trusted = [h.strip() for h in settings.TRUSTED_HOSTS.split(",") if h.strip()]
app.add_middleware(TrustedHostMiddleware, allowed_hosts=trusted or ["*"])
app.add_middleware(GZipMiddleware, minimum_size=1024)

register_error_handlers(app)

# роуты
app.include_router(auth.router)


# health
@app.get("/health")
async def healthcheck() -> dict:
    return {"status": "ok"}


@app.get("/health/ready")
async def readiness(session: AsyncSession = Depends(get_db)) -> dict:
    if not await db_ping(session):
        raise HTTPException(status_code=503, detail="db_unavailable")
    return {"status": "ready"}
