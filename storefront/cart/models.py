"""Cart models with Decimal-based pricing."""
from dataclasses import dataclass
from decimal import Decimal, ROUND_FLOOR
from typing import Any, Mapping, Optional, Union

from storefront.services.money import parse_decimal, to_price, multiply, to_json_number

# Largest quantity a single line can hold
MAX_QUANTITY = 9999


def parse_quantity(value: Any) -> Optional[int]:
    """
    Parse a requested quantity, flooring fractions.

    Returns None when the value is not a finite number or its magnitude is
    above MAX_QUANTITY. The result may be zero or negative; callers decide
    whether that means removal.
    """
    if isinstance(value, int) and not isinstance(value, bool):
        return value if abs(value) <= MAX_QUANTITY else None
    parsed = parse_decimal(value)
    if parsed is None:
        return None
    # Checked on the exponent so "1e200000000" never becomes a huge int
    if parsed.adjusted() >= len(str(MAX_QUANTITY)) or abs(parsed) >= MAX_QUANTITY + 1:
        return None
    return int(parsed.to_integral_value(rounding=ROUND_FLOOR))


def normalize_quantity(value: Any) -> int:
    """Coerce a stored quantity to a positive integer, defaulting to 1."""
    quantity = parse_quantity(value)
    if quantity is None or quantity < 1:
        return 1
    return quantity


def _optional_text(value: Any) -> Optional[str]:
    if value is None or value == "":
        return None
    return str(value)


@dataclass(frozen=True)
class CartItem:
    """Single line in the cart."""
    id: str
    name: str
    unit_price: Decimal
    quantity: int = 1
    image: Optional[str] = None  # Placeholder is rendered when absent
    notes: Optional[str] = None

    def __post_init__(self):
        # Normalize numeric fields
        object.__setattr__(self, "unit_price", to_price(self.unit_price))
        object.__setattr__(self, "quantity", normalize_quantity(self.quantity))

    @property
    def line_total(self) -> Decimal:
        """Total price for all units, at full precision."""
        return multiply(self.unit_price, self.quantity)

    def to_dict(self) -> dict:
        """Convert to the persisted/hand-off dictionary shape."""
        data = {
            "id": self.id,
            "name": self.name,
            "price": to_json_number(self.unit_price),
            "quantity": self.quantity,
        }
        if self.image is not None:
            data["image"] = self.image
        if self.notes is not None:
            data["notes"] = self.notes
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CartItem":
        """Create from dictionary. Raises KeyError when `id` is missing."""
        item_id = data["id"]
        if item_id is None or str(item_id) == "":
            raise KeyError("id")
        return cls(
            id=str(item_id),
            name=str(data.get("name") or ""),
            unit_price=to_price(data.get("price")),
            quantity=normalize_quantity(data.get("quantity")),
            image=_optional_text(data.get("image")),
            notes=_optional_text(data.get("notes")),
        )


@dataclass(frozen=True)
class CartItemInput:
    """A product selection passed to the cart's add operation."""
    id: str
    name: str = ""
    price: Any = None
    image: Optional[str] = None
    notes: Optional[str] = None

    @property
    def usable_price(self) -> Optional[Decimal]:
        """Candidate price when it is a positive, in-range number, else None."""
        price = to_price(self.price)
        return price if price > 0 else None

    def to_item(self) -> CartItem:
        return CartItem(
            id=self.id,
            name=self.name,
            unit_price=to_price(self.price),
            quantity=1,
            image=self.image,
            notes=self.notes,
        )

    @classmethod
    def coerce(cls, candidate: Union["CartItemInput", Mapping[str, Any]]) -> Optional["CartItemInput"]:
        """
        Build an input from a dataclass instance or a mapping.

        Accepts `unit_price` and `image_ref` as aliases. Returns None when the
        candidate carries no usable id.
        """
        if isinstance(candidate, CartItemInput):
            return candidate if candidate.id else None
        if not isinstance(candidate, Mapping):
            return None

        item_id = candidate.get("id")
        if item_id is None or str(item_id) == "":
            return None

        price = candidate.get("price", candidate.get("unit_price"))
        image = candidate.get("image", candidate.get("image_ref"))
        return cls(
            id=str(item_id),
            name=str(candidate.get("name") or ""),
            price=price,
            image=_optional_text(image),
            notes=_optional_text(candidate.get("notes")),
        )
