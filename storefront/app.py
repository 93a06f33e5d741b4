"""
Storefront Cart - FastAPI Application

Single entry point for the cart API used by the storefront frontend.
"""
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI

from storefront import __version__
from storefront.cart.storage import CART_STORAGE
from storefront.logging import get_logger
from storefront.routers.cart import router as cart_router

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Carts rehydrate lazily, one per shopper, on their first request
    logger.info(f"Cart API starting (storage: {CART_STORAGE})")
    yield


app = FastAPI(title="Storefront Cart API", version=__version__, lifespan=lifespan)
app.include_router(cart_router)


@app.get("/api/health")
async def health_check():
    return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}
