# app/main.py
import time
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from core.config import settings
from core.db import engine, session_scope
from core.errors import register_error_handlers
from core.logger import get_logger
from domain.seed import create_schema, seed_demo_data
from api.v1.auth import router as auth_router
from api.v1.products import router as products_router

log = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.SEED_DEMO_DATA:
        create_schema(engine)
        with session_scope() as db:
            seed_demo_data(db)
    log.info("MultiTenant API started")
    yield
    engine.dispose()


app = FastAPI(
    title="MultiTenant API",
    version="1.0",
    description="RESTful API with JWT authentication and per-tenant data isolation.",
    lifespan=lifespan,
)

origins = [o.strip() for o in settings.CORS_ORIGINS.split(",") if o.strip()]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins or ["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """One log line per request: method, path, status and elapsed time."""
    started = time.perf_counter()
    status = 500
    try:
        response = await call_next(request)
        status = response.status_code
        return response
    finally:
        log.info(
            "HTTP %s %s responded %s",
            request.method,
            request.url.path,
            status,
            extra={
                "action": "http_request",
                "result": status,
                "meta": {
                    "method": request.method,
                    "path": request.url.path,
                    "status": status,
                    "elapsed_ms": round((time.perf_counter() - started) * 1000, 2),
                },
            },
        )


@app.get("/health")
def health(): return {"ok": True}

app.include_router(auth_router)
app.include_router(products_router)
