from __future__ import annotations

import logging
import os
import random
import time
from dataclasses import asdict
from typing import Any, Dict, Optional

from fastapi import Body, FastAPI, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from services.errors import LogServiceError
from services.log_service import LogService
from services.storage import LogStore
from utils.helpers import utc_now_iso

# ──────────────────────────────────────────────────────────────────────────────
# Config
# ──────────────────────────────────────────────────────────────────────────────

LOG_FILE_PATH = os.getenv("LOG_FILE", "./data/logs.json")  # stored as one JSON array
SERVICE_NAME = os.getenv("SERVICE_NAME", "express-app")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
PORT = int(os.getenv("PORT", "3000"))

ENDPOINTS = [
    "GET /",
    "GET /health",
    "GET /users",
    "POST /users",
    "GET /data",
    "POST /logs",
    "GET /logs?limit=N",
]

DEMO_USERS = [
    {"id": 1, "name": "John Doe", "email": "john@example.com"},
    {"id": 2, "name": "Jane Smith", "email": "jane@example.com"},
    {"id": 3, "name": "Bob Johnson", "email": "bob@example.com"},
]

logger = logging.getLogger(__name__)


def configure_logging(level: str = LOG_LEVEL) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s - %(message)s",
    )


# ──────────────────────────────────────────────────────────────────────────────
# App
# ──────────────────────────────────────────────────────────────────────────────


def create_app(store=None, service_name: Optional[str] = None) -> FastAPI:
    """
    Build the application around a log store.
    Defaults to the file store at LOG_FILE_PATH.
    """
    service = service_name or SERVICE_NAME
    log_service = LogService(store if store is not None else LogStore(LOG_FILE_PATH))
    started = time.monotonic()

    app = FastAPI(title="Gateway Log Service")
    app.state.log_service = log_service

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # dev OK; lock down in prod
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ── Error handlers ───────────────────────────────────────────────────────

    @app.exception_handler(LogServiceError)
    async def log_service_error_handler(request: Request, exc: LogServiceError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message, "service": service})

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"error": "Request body must be a JSON object", "service": service})

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        if exc.status_code in (404, 405):
            return JSONResponse(
                status_code=404,
                content={
                    "error": "Endpoint not found",
                    "service": service,
                    "path": request.url.path,
                    "method": request.method,
                },
            )
        return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail), "service": service})

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=500,
            content={"error": "Internal server error", "details": str(exc), "service": service},
        )

    # ── Demo endpoints ───────────────────────────────────────────────────────

    @app.get("/")
    def root() -> Dict[str, Any]:
        return {
            "message": "Hello from Gateway Log Service!",
            "service": service,
            "timestamp": utc_now_iso(),
            "endpoints": ENDPOINTS,
        }

    @app.get("/health")
    def health() -> Dict[str, Any]:
        return {
            "status": "healthy",
            "service": service,
            "uptime": time.monotonic() - started,
            "timestamp": utc_now_iso(),
            "log_file": asdict(log_service.store.stat()),
        }

    @app.get("/users")
    def list_users() -> Dict[str, Any]:
        return {"users": DEMO_USERS, "total": len(DEMO_USERS), "service": service}

    @app.post("/users", status_code=201)
    def create_user(payload: Optional[Dict[str, Any]] = Body(None)) -> Dict[str, Any]:
        payload = payload or {}
        return {
            "message": "User created successfully",
            "user": {
                "id": random.randrange(1000),
                "name": payload.get("name") or "Unknown",
                "email": payload.get("email") or "unknown@example.com",
                "created": utc_now_iso(),
            },
            "service": service,
        }

    @app.get("/data")
    def data(request: Request) -> Dict[str, Any]:
        return {
            "data": {
                "random": random.random(),
                "timestamp": int(time.time() * 1000),
                "message": "Sample data from Gateway Log Service",
            },
            "service": service,
            "headers": dict(request.headers),
        }

    # ── Logs ─────────────────────────────────────────────────────────────────

    @app.post("/logs", status_code=201)
    def add_log(payload: Dict[str, Any] = Body(...)) -> Dict[str, Any]:
        entry, total = log_service.ingest(payload)
        return {
            "success": True,
            "message": "Log entry added successfully",
            "logEntry": entry.to_dict(),
            "totalLogs": total,
            "service": service,
        }

    @app.get("/logs")
    def get_logs(limit: Optional[str] = Query(None)) -> Dict[str, Any]:
        result = log_service.retrieve(limit)
        return {
            "logs": result.logs,
            "totalLogs": result.total_logs,
            "returnedLogs": result.returned_logs,
            "limit": result.limit,
            "service": service,
        }

    return app


configure_logging()
app = create_app()


if __name__ == "__main__":
    import uvicorn

    logger.info("Gateway log service listening at http://0.0.0.0:%d", PORT)
    uvicorn.run(app, host="0.0.0.0", port=PORT)
