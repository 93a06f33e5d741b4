"""
Shared Dependencies for Routers

Each browser gets its own cart, keyed by an opaque id kept in a cookie.
"""
import re
from uuid import uuid4

from fastapi import Request, Response

from storefront.cart.store import CartStore, get_cart_store
from storefront.db import TTL

CART_COOKIE = "cart_id"

_CART_ID_PATTERN = re.compile(r"[0-9a-f]{32}")


def resolve_cart_id(request: Request, response: Response) -> str:
    """Cart id from the request cookie, issuing a fresh one when missing or malformed."""
    cart_id = request.cookies.get(CART_COOKIE, "")
    if _CART_ID_PATTERN.fullmatch(cart_id):
        return cart_id

    cart_id = uuid4().hex
    response.set_cookie(
        CART_COOKIE,
        cart_id,
        max_age=TTL.CART,
        httponly=True,
        samesite="lax",
    )
    return cart_id


def get_shopper_store(request: Request, response: Response) -> CartStore:
    """CartStore owned by the requesting browser."""
    return get_cart_store(resolve_cart_id(request, response))
