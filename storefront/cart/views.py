"""
Cart view consumers.

Each surface (header badge, slide-over sidebar, cart page, order summary)
renders a projection of the store's latest snapshot and routes shopper
actions back through the store. No view keeps cart data of its own beyond
the last snapshot it was handed.
"""
from typing import Callable, Generic, Optional, TypeVar

from storefront.services.money import to_float
from .models import CartItem
from .pricing import (
    Fulfillment,
    PricingSnapshot,
    TAX_LABEL,
    format_delivery,
    format_price,
)
from .schemas import (
    BadgeView,
    CartLineView,
    CartPageView,
    OrderSummaryView,
    PricingView,
    SidebarView,
    SummaryLineView,
)
from .store import CartSnapshot, CartStore

V = TypeVar("V")


# ==================== PROJECTIONS ====================

def project_line(item: CartItem) -> CartLineView:
    return CartLineView(
        id=item.id,
        name=item.name,
        quantity=item.quantity,
        unit_price=to_float(item.unit_price),
        line_total=to_float(item.line_total),
        unit_price_display=format_price(item.unit_price),
        line_total_display=format_price(item.line_total),
        image=item.image,
        notes=item.notes,
    )


def project_pricing(pricing: PricingSnapshot) -> PricingView:
    return PricingView(
        subtotal=to_float(pricing.subtotal),
        delivery_fee=to_float(pricing.delivery_fee),
        tax=to_float(pricing.tax),
        grand_total=to_float(pricing.grand_total),
        subtotal_display=format_price(pricing.subtotal),
        delivery_fee_display=format_delivery(pricing.delivery_fee),
        tax_display=format_price(pricing.tax),
        grand_total_display=format_price(pricing.grand_total),
        tax_label=TAX_LABEL,
        free_delivery=pricing.free_delivery,
    )


def project_badge(snapshot: CartSnapshot) -> BadgeView:
    count = snapshot.item_count
    return BadgeView(item_count=count, visible=count > 0)


def project_sidebar(snapshot: CartSnapshot) -> SidebarView:
    if not snapshot.is_panel_open:
        return SidebarView(is_open=False, is_empty=snapshot.is_empty, item_count=snapshot.item_count)
    return SidebarView(
        is_open=True,
        is_empty=snapshot.is_empty,
        item_count=snapshot.item_count,
        lines=[project_line(item) for item in snapshot.items],
        pricing=None if snapshot.is_empty else project_pricing(snapshot.pricing()),
    )


def project_page(snapshot: CartSnapshot) -> CartPageView:
    lines = len(snapshot.items)
    return CartPageView(
        is_empty=snapshot.is_empty,
        heading=f"{lines} {'Item' if lines == 1 else 'Items'} in Cart",
        item_count=snapshot.item_count,
        lines=[project_line(item) for item in snapshot.items],
        pricing=project_pricing(snapshot.pricing()),
    )


def project_summary(
    snapshot: CartSnapshot, fulfillment: Fulfillment = Fulfillment.DELIVERY
) -> OrderSummaryView:
    pricing = snapshot.pricing(fulfillment)
    return OrderSummaryView(
        lines=[
            SummaryLineView(
                name=item.name,
                quantity_label=f"×{item.quantity}",
                line_total_display=format_price(item.line_total),
            )
            for item in snapshot.items
        ],
        pricing=project_pricing(pricing),
        free_delivery_applied=not snapshot.is_empty and pricing.delivery_fee == 0,
        fulfillment=fulfillment,
    )


# ==================== SUBSCRIBED VIEWS ====================

class CartView(Generic[V]):
    """Base for a surface that re-renders whenever the store changes."""

    def __init__(self, store: CartStore):
        self.store = store
        self._snapshot = store.snapshot()
        self.renders = 0
        self._unsubscribe: Optional[Callable[[], None]] = store.subscribe(self._on_change)

    def _on_change(self, snapshot: CartSnapshot) -> None:
        self._snapshot = snapshot
        self.renders += 1

    @property
    def snapshot(self) -> CartSnapshot:
        return self._snapshot

    def render(self) -> V:
        raise NotImplementedError

    def detach(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None


class LineActionsMixin:
    """Quantity controls shared by the sidebar and the cart page."""

    store: CartStore

    def increment(self, item_id: str) -> None:
        item = self.store.ledger.get(item_id)
        if item is not None:
            self.store.set_quantity(item_id, item.quantity + 1)

    def decrement(self, item_id: str) -> None:
        """One unit less; the last unit removes the line."""
        item = self.store.ledger.get(item_id)
        if item is not None:
            self.store.set_quantity(item_id, item.quantity - 1)

    def remove(self, item_id: str) -> None:
        self.store.remove(item_id)


class CartBadge(CartView[BadgeView]):
    """Header badge with the unit count; clicking it opens the panel."""

    def render(self) -> BadgeView:
        return project_badge(self._snapshot)

    def click(self) -> None:
        self.store.open_panel()


class CartSidebar(LineActionsMixin, CartView[SidebarView]):
    """Slide-over panel, rendered only while the panel is open."""

    def render(self) -> SidebarView:
        return project_sidebar(self._snapshot)

    def close(self) -> None:
        self.store.close_panel()

    def checkout(self) -> None:
        """Leave the panel for the checkout flow."""
        self.store.close_panel()


class CartPage(LineActionsMixin, CartView[CartPageView]):
    """Dedicated cart page."""

    def render(self) -> CartPageView:
        return project_page(self._snapshot)

    def clear(self) -> None:
        self.store.clear()


class OrderSummary(CartView[OrderSummaryView]):
    """Compact order summary panel used on the cart and checkout pages."""

    def __init__(self, store: CartStore, fulfillment: Fulfillment = Fulfillment.DELIVERY):
        self.fulfillment = fulfillment
        super().__init__(store)

    def render(self) -> OrderSummaryView:
        return project_summary(self._snapshot, self.fulfillment)
