# main.py
"""
FastAPI entry point for the SuperCook recipe API.

Startup/readiness checks against Supabase, request-id middleware with
structured request logging, and graceful shutdown of the Supabase client
(if it supports close/shutdown).
"""
import asyncio
import logging
import uuid
from contextlib import asynccontextmanager
from typing import Dict, Optional

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.recipes import router as recipes_router
from app.config.settings import settings
from app.config import supabase as supabase_config

logger = logging.getLogger("uvicorn.error")


async def _run_sync_in_executor(fn, *args, timeout: float = settings.health_check_timeout):
    """
    Run a blocking sync function in the default threadpool with a timeout.
    Returns the function's result or raises TimeoutError.
    """
    loop = asyncio.get_running_loop()
    return await asyncio.wait_for(loop.run_in_executor(None, fn, *args), timeout=timeout)


async def _supabase_healthy(timeout: float = settings.health_check_timeout) -> bool:
    try:
        return bool(
            await _run_sync_in_executor(
                supabase_config.supabase_client.health_check, timeout=timeout
            )
        )
    except asyncio.TimeoutError:
        logger.warning("⚠️ Supabase health_check timed out after %.1fs", timeout)
        return False
    except Exception as exc:
        logger.exception("❌ Unexpected error calling supabase health_check: %s", exc)
        return False


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("🚀 Starting SuperCook API...")

    app.state.supabase_healthy = await _supabase_healthy()
    logger.info("Supabase health: %s", app.state.supabase_healthy)

    if not app.state.supabase_healthy and settings.fail_on_db_startup:
        logger.error("FAIL_ON_DB_STARTUP enabled and Supabase unhealthy. Aborting startup.")
        raise RuntimeError("Supabase unhealthy on startup")

    try:
        yield
    finally:
        logger.info("Shutting down SuperCook API...")
        try:
            client = supabase_config.supabase_client
            close_fn = getattr(client, "close", None) or getattr(client, "shutdown", None)
            if callable(close_fn):
                loop = asyncio.get_running_loop()
                await loop.run_in_executor(None, close_fn)
                logger.info("Supabase client closed gracefully")
        except Exception:
            logger.exception("Error while closing supabase client during shutdown")


app = FastAPI(
    title="SuperCook - Recipe Search API",
    description="Recipe search with structured filters, serving scaling and AI recipe generation",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)


@app.middleware("http")
async def add_request_id_and_log(request: Request, call_next):
    request_id = request.headers.get("X-Request-Id") or str(uuid.uuid4())
    request.state.request_id = request_id
    logger.info("→ Incoming request %s %s id=%s from=%s", request.method, request.url.path, request_id, request.client)
    try:
        response: Response = await call_next(request)
    except Exception as exc:
        logger.exception("Handler error for request id=%s: %s", request_id, exc)
        return JSONResponse({"error": "Internal server error", "detail": str(exc)}, status_code=500)
    logger.info("← Completed request id=%s status=%s", request_id, getattr(response, "status_code", None))
    response.headers["X-Request-Id"] = request_id
    return response


# Routes at the root, and the same routes under /api for the web client
app.include_router(recipes_router, tags=["recipes"])
app.include_router(recipes_router, prefix="/api", include_in_schema=False)


@app.get("/")
async def root() -> Dict[str, str]:
    return {"message": "SuperCook recipe API is running!", "status": "healthy"}


@app.get("/health")
async def health_check():
    """
    Liveness style check. Runs a bounded Supabase health check but returns
    degraded rather than failing if the DB is down.
    """
    db_ok = await _supabase_healthy()
    return JSONResponse(
        {
            "status": "healthy" if db_ok else "degraded",
            "service": "supercook-api",
            "database": "connected" if db_ok else "disconnected",
        },
        status_code=200 if db_ok else 503,
    )


@app.get("/ready")
async def readiness_check():
    """
    Readiness: uses cached state from startup when available, otherwise a
    one-shot bounded check.
    """
    supabase_state: Optional[bool] = getattr(app.state, "supabase_healthy", None)
    if supabase_state is None:
        supabase_state = await _supabase_healthy(timeout=2.0)

    if supabase_state:
        return JSONResponse({"ready": True, "database": "connected"}, status_code=200)
    return JSONResponse({"ready": False, "database": "disconnected"}, status_code=503)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host=settings.host, port=settings.port, reload=True)
