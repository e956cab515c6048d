"""FastAPI application entrypoint for the school data collection report service."""
import time
import uuid

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware

from app.api.routes import router
from app.core.logging import get_logger, setup_logging
from app.core.config import settings

setup_logging(level=settings.log_level, json_format=settings.environment == "production")
logger = get_logger(__name__)

APP_VERSION = "1.0.0"
APP_NAME = "School Data Collection Report Service"

app = FastAPI(
    title=APP_NAME,
    description="Aggregated reports, insights and comparisons over school form responses",
    version=APP_VERSION,
    docs_url="/docs" if settings.environment != "production" else None,
    redoc_url="/redoc" if settings.environment != "production" else None,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Tag each request with an id and log its outcome and duration."""
    request_id = str(uuid.uuid4())
    request.state.request_id = request_id
    context = {"request_id": request_id, "method": request.method, "path": request.url.path}
    started = time.perf_counter()

    def elapsed_ms() -> float:
        return round((time.perf_counter() - started) * 1000, 2)

    try:
        response = await call_next(request)
    except Exception as e:
        logger.error(
            f"{request.method} {request.url.path} failed",
            extra={**context, "duration_ms": elapsed_ms(), "error_type": type(e).__name__},
            exc_info=True,
        )
        return JSONResponse(
            status_code=500,
            content={"error": "Internal server error", "request_id": request_id},
        )

    logger.info(
        f"{request.method} {request.url.path} -> {response.status_code}",
        extra={**context, "status_code": response.status_code, "duration_ms": elapsed_ms()},
    )
    response.headers["X-Request-ID"] = request_id
    return response


app.include_router(router, prefix=settings.api_prefix)


@app.get("/")
def root():
    return {
        "service": APP_NAME,
        "version": APP_VERSION,
        "status": "running",
        "environment": settings.environment,
    }


@app.get("/health")
def health_check():
    """Liveness probe; also reports whether the data directory is reachable."""
    return {
        "status": "healthy",
        "version": APP_VERSION,
        "checks": {
            "api": "ok",
            "data_dir": "ok" if settings.data_path.is_dir() else "missing",
        },
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=settings.debug)
