"""
Cart Pydantic Models

View projections rendered by the cart surfaces and request bodies accepted
by the cart router.
"""
from typing import List, Optional, Union

from pydantic import BaseModel, Field

from .pricing import Fulfillment


# ==================== VIEW MODELS ====================

class CartLineView(BaseModel):
    id: str
    name: str
    quantity: int
    unit_price: float
    line_total: float
    # Display values (for UI)
    unit_price_display: str
    line_total_display: str
    image: Optional[str] = None  # None renders the placeholder
    notes: Optional[str] = None


class PricingView(BaseModel):
    subtotal: float
    delivery_fee: float
    tax: float
    grand_total: float
    subtotal_display: str
    delivery_fee_display: str
    tax_display: str
    grand_total_display: str
    tax_label: str
    free_delivery: bool


class BadgeView(BaseModel):
    item_count: int
    visible: bool


class SidebarView(BaseModel):
    is_open: bool
    is_empty: bool
    item_count: int
    lines: List[CartLineView] = Field(default_factory=list)
    pricing: Optional[PricingView] = None


class CartPageView(BaseModel):
    is_empty: bool
    heading: str
    item_count: int
    lines: List[CartLineView] = Field(default_factory=list)
    pricing: PricingView


class SummaryLineView(BaseModel):
    name: str
    quantity_label: str
    line_total_display: str


class OrderSummaryView(BaseModel):
    lines: List[SummaryLineView] = Field(default_factory=list)
    pricing: PricingView
    free_delivery_applied: bool
    fulfillment: Fulfillment = Fulfillment.DELIVERY


# ==================== REQUEST MODELS ====================

class AddToCartRequest(BaseModel):
    id: str
    name: str = ""
    price: Union[float, str, None] = None
    image: Optional[str] = None
    notes: Optional[str] = None


class UpdateCartItemRequest(BaseModel):
    quantity: Union[float, str, None] = None


class PanelStateRequest(BaseModel):
    is_open: bool


class CheckoutRequest(BaseModel):
    fulfillment: Fulfillment = Fulfillment.DELIVERY


# ==================== CHECKOUT MODELS ====================

class CheckoutLine(BaseModel):
    product_id: str
    name: str
    quantity: int
    price: float
    notes: Optional[str] = None


class CheckoutPayload(BaseModel):
    items: List[CheckoutLine]
    fulfillment: Fulfillment
    subtotal: float
    delivery_fee: float
    tax: float
    grand_total: float
    amount_kobo: int
