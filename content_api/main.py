import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from content_api.cache import cache
from content_api.config import settings
from content_api.errors import ContentError, InvalidModelError
from content_api.middleware import RequestLogMiddleware
from content_api.routers import asset_types, news, products

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    try:
        await cache.connect()
    except Exception as exc:
        logger.warning("Cache unavailable, serving from the database only: %s", exc)
    yield
    await cache.disconnect()


app = FastAPI(
    title="Content API",
    description="Asset types, news publishing and a product catalog with release history",
    version="1.0.0",
    lifespan=lifespan,
)

# Middleware
app.add_middleware(RequestLogMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routers
app.include_router(asset_types.router)
app.include_router(news.router)
app.include_router(products.router)


@app.exception_handler(ContentError)
async def content_error_handler(request: Request, exc: ContentError):
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "error": type(exc).__name__},
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=InvalidModelError.status_code,
        content={
            "detail": "Invalid Model Received",
            "error": InvalidModelError.__name__,
            "errors": jsonable_encoder(exc.errors()),
        },
    )


@app.get("/health")
async def health():
    return {"status": "healthy", "version": "1.0.0", "cache": cache.stats}
