"""
Cart Router

JSON endpoints behind the storefront's cart surfaces. Every endpoint works on
the requesting browser's own CartStore (see deps.get_shopper_store);
responses are the same projections the in-process views render.

Storage calls are synchronous and run on the event loop, which keeps each
cart's mutations serialized. FileStorage and MemoryStorage return quickly;
with CART_STORAGE=redis every Upstash round-trip blocks other requests on
the same worker, so run several workers when using Redis.
"""
from fastapi import APIRouter, Depends, HTTPException

from storefront.auth import Session, get_session
from storefront.cart.checkout import build_checkout
from storefront.cart.pricing import Fulfillment
from storefront.cart.schemas import (
    AddToCartRequest,
    BadgeView,
    CartPageView,
    CheckoutPayload,
    CheckoutRequest,
    OrderSummaryView,
    PanelStateRequest,
    SidebarView,
    UpdateCartItemRequest,
)
from storefront.cart.store import CartStore
from storefront.cart.views import project_badge, project_page, project_sidebar, project_summary
from storefront.errors import CheckoutError
from storefront.logging import get_logger
from storefront.routers.deps import get_shopper_store

logger = get_logger(__name__)

router = APIRouter(prefix="/api/cart", tags=["cart"])


@router.get("", response_model=CartPageView)
async def get_cart(store: CartStore = Depends(get_shopper_store)):
    """Full cart page view."""
    return project_page(store.snapshot())


@router.get("/badge", response_model=BadgeView)
async def get_badge(store: CartStore = Depends(get_shopper_store)):
    return project_badge(store.snapshot())


@router.get("/sidebar", response_model=SidebarView)
async def get_sidebar(store: CartStore = Depends(get_shopper_store)):
    return project_sidebar(store.snapshot())


@router.get("/summary", response_model=OrderSummaryView)
async def get_summary(
    fulfillment: Fulfillment = Fulfillment.DELIVERY,
    store: CartStore = Depends(get_shopper_store),
):
    return project_summary(store.snapshot(), fulfillment)


@router.post("/items", response_model=CartPageView)
async def add_item(request: AddToCartRequest, store: CartStore = Depends(get_shopper_store)):
    """Add one unit of a product. The panel stays as it was."""
    store.add(request.model_dump())
    return project_page(store.snapshot())


@router.patch("/items/{item_id}", response_model=CartPageView)
async def update_item(
    item_id: str,
    request: UpdateCartItemRequest,
    store: CartStore = Depends(get_shopper_store),
):
    """Set a line's quantity (below 1 = remove)."""
    store.set_quantity(item_id, request.quantity)
    return project_page(store.snapshot())


@router.delete("/items/{item_id}", response_model=CartPageView)
async def remove_item(item_id: str, store: CartStore = Depends(get_shopper_store)):
    store.remove(item_id)
    return project_page(store.snapshot())


@router.delete("", response_model=CartPageView)
async def clear_cart(store: CartStore = Depends(get_shopper_store)):
    store.clear()
    return project_page(store.snapshot())


@router.post("/panel", response_model=SidebarView)
async def set_panel(request: PanelStateRequest, store: CartStore = Depends(get_shopper_store)):
    store.set_panel_open(request.is_open)
    return project_sidebar(store.snapshot())


@router.post("/checkout", response_model=CheckoutPayload)
async def checkout(
    request: CheckoutRequest,
    store: CartStore = Depends(get_shopper_store),
    session: Session = Depends(get_session),
):
    """Hand the finalized cart to the checkout flow."""
    try:
        return build_checkout(store, session, request.fulfillment)
    except CheckoutError as e:
        logger.info(f"Checkout blocked: {e.reason}")
        status_code = 401 if e.reason == CheckoutError.UNAUTHENTICATED else 400
        raise HTTPException(status_code=status_code, detail=e.message)
