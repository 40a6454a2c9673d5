# app/main.py
"""
FastAPI application entry point.
Includes API key middleware, domain/global error handlers, and all routers.
"""

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware
from app.routers import customers, products, orders, stats, health
from app.core.exceptions import (
    AutoPartsError, CustomerNotFoundError, EmptyOrderError, MissingVehicleError,
    OrderNotFoundError, ProductNotFoundError, SpreadsheetReadError, VehicleNotFoundError,
)
from app.database import create_tables
from app.config import settings
from app.utils.logger import get_logger
import time

logger = get_logger(__name__)

app = FastAPI(
    title="Auto Parts Shop API",
    description="Customers, vehicles, product catalog and orders for a parts & tire shop.",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

# ── CORS (the shop front-end runs on another origin) ─────────────────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ── API Key Middleware ───────────────────────────────────────────────────────
class APIKeyMiddleware(BaseHTTPMiddleware):
    """
    Optional lightweight API key auth.
    Set API_KEY in .env. Leave empty to disable auth.
    """
    async def dispatch(self, request: Request, call_next):
        open_paths = {"/api/v1/health", "/docs", "/redoc", "/openapi.json"}
        if request.url.path in open_paths or not settings.API_KEY:
            return await call_next(request)

        api_key = request.headers.get("X-API-Key") or request.query_params.get("api_key")
        if api_key != settings.API_KEY:
            return JSONResponse(
                status_code=status.HTTP_401_UNAUTHORIZED,
                content={"detail": "Invalid or missing API key"},
            )
        return await call_next(request)


if settings.API_KEY:
    app.add_middleware(APIKeyMiddleware)


# ── Request Timing Middleware ────────────────────────────────────────────────
@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.time()
    response = await call_next(request)
    duration = round((time.time() - start) * 1000, 2)
    logger.debug(f"{request.method} {request.url.path} → {response.status_code} ({duration}ms)")
    return response


# ── Domain Exception Handler ─────────────────────────────────────────────────
ERROR_STATUS = {
    CustomerNotFoundError: status.HTTP_404_NOT_FOUND,
    VehicleNotFoundError: status.HTTP_404_NOT_FOUND,
    ProductNotFoundError: status.HTTP_404_NOT_FOUND,
    OrderNotFoundError: status.HTTP_404_NOT_FOUND,
    MissingVehicleError: status.HTTP_409_CONFLICT,
    EmptyOrderError: status.HTTP_422_UNPROCESSABLE_ENTITY,
    SpreadsheetReadError: status.HTTP_422_UNPROCESSABLE_ENTITY,
}


@app.exception_handler(AutoPartsError)
async def domain_exception_handler(request: Request, exc: AutoPartsError):
    code = ERROR_STATUS.get(type(exc), status.HTTP_400_BAD_REQUEST)
    logger.info(f"{request.method} {request.url.path} refused ({code}): {exc.message}")
    return JSONResponse(status_code=code, content={"detail": exc.message, **exc.details})


# ── Global Exception Handler ─────────────────────────────────────────────────
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled exception on {request.url.path}: {exc}", exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


# ── Routers ──────────────────────────────────────────────────────────────────
app.include_router(customers.router, prefix="/api/v1", tags=["Customers"])
app.include_router(products.router,  prefix="/api/v1", tags=["Products"])
app.include_router(orders.router,    prefix="/api/v1", tags=["Orders"])
app.include_router(stats.router,     prefix="/api/v1", tags=["Statistics"])
app.include_router(health.router,    prefix="/api/v1", tags=["Health"])


# ── Startup ───────────────────────────────────────────────────────────────────
@app.on_event("startup")
async def startup():
    logger.info("Auto parts backend starting up...")
    create_tables()
    logger.info("Database tables ready")
    logger.info(f"Listening on http://{settings.BACKEND_IP}:{settings.BACKEND_PORT}")
    logger.info("API docs at /docs")


@app.on_event("shutdown")
async def shutdown():
    logger.info("Auto parts backend shutting down...")
