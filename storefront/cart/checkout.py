"""
Checkout hand-off.

Packages the cart for the external order flow. Nothing here talks to order
or payment endpoints; the payload is all the checkout flow receives.
"""
from storefront.auth import Session
from storefront.errors import CheckoutError, ERROR_CART_EMPTY, ERROR_UNAUTHENTICATED
from storefront.logging import get_logger
from storefront.services.money import to_float
from .pricing import Fulfillment
from .schemas import CheckoutLine, CheckoutPayload
from .store import CartStore

logger = get_logger(__name__)


def build_checkout(
    store: CartStore,
    session: Session,
    fulfillment: Fulfillment = Fulfillment.DELIVERY,
) -> CheckoutPayload:
    """
    Snapshot the cart for checkout.

    Args:
        store: Cart store to read from (never mutated here)
        session: Current shopper session; must be authenticated
        fulfillment: Delivery or in-store pickup

    Returns:
        CheckoutPayload with line items, pricing figures and the amount in kobo

    Raises:
        CheckoutError: shopper is signed out or the cart is empty
    """
    if not session.is_authenticated:
        raise CheckoutError(CheckoutError.UNAUTHENTICATED, ERROR_UNAUTHENTICATED)

    snapshot = store.snapshot()
    if snapshot.is_empty:
        raise CheckoutError(CheckoutError.EMPTY_CART, ERROR_CART_EMPTY)

    pricing = snapshot.pricing(fulfillment)
    payload = CheckoutPayload(
        items=[
            CheckoutLine(
                product_id=item.id,
                name=item.name,
                quantity=item.quantity,
                price=to_float(item.unit_price),
                notes=item.notes,
            )
            for item in snapshot.items
        ],
        fulfillment=fulfillment,
        subtotal=to_float(pricing.subtotal),
        delivery_fee=to_float(pricing.delivery_fee),
        tax=to_float(pricing.tax),
        grand_total=to_float(pricing.grand_total),
        amount_kobo=pricing.grand_total_kobo,
    )
    logger.info(f"Checkout prepared: {len(payload.items)} lines, {payload.amount_kobo} kobo")
    return payload
