"""FastAPI backend for the product query assistant."""

import asyncio
import logging
import sys
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from pqa.cache.tiers import get_cache_tier
from pqa.config import get_settings
from pqa.store.attribute_store import get_attribute_store

logger = logging.getLogger(__name__)
logging.basicConfig(level=logging.INFO)

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Build the index and pick the cache backend before the first request.
    store = get_attribute_store()
    await asyncio.to_thread(store.build)
    logger.info("Cache backend: %s", get_cache_tier().backend_name)
    yield


app = FastAPI(
    title="Product Query Assistant API",
    description="Answers free-text questions about product datasheet attributes.",
    version="0.1.0",
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    lifespan=lifespan,
)


# ---------------------------------------------------------------------------
# CORS
# ---------------------------------------------------------------------------
cors_origins = settings.cors_origin_list
logger.info("CORS configured for origins: %s", cors_origins)
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---------------------------------------------------------------------------
# Health & root
# ---------------------------------------------------------------------------
class HealthResponse(BaseModel):
    status: str
    data_dir: str
    products: int


@app.get("/health", response_model=HealthResponse)
@app.get("/api/health", response_model=HealthResponse)
async def health():
    """Health check endpoint."""
    return HealthResponse(
        status="ok",
        data_dir=str(settings.data_dir),
        products=len(get_attribute_store().products()),
    )


@app.get("/api/")
async def root():
    """API root."""
    return {"message": "Product Query Assistant API", "version": "0.1.0"}


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------
from backend.routes import ask  # noqa: E402

app.include_router(ask.router, prefix="/api", tags=["ask"])
