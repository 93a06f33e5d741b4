"""
Item Ledger

Immutable, ordered, unique-by-id collection of cart lines. Every operation
returns a new ledger; the store decides when to commit and persist it.
"""
from dataclasses import replace
from typing import Any, Iterable, Iterator, Mapping, Optional, Tuple, Union

from .models import MAX_QUANTITY, CartItem, CartItemInput, parse_quantity


class Ledger:
    """Ordered set of CartItem keyed by id."""

    __slots__ = ("_items",)

    def __init__(self, items: Iterable[CartItem] = ()):
        unique = {}
        for item in items:
            # First occurrence of an id wins
            unique.setdefault(item.id, item)
        self._items: Tuple[CartItem, ...] = tuple(unique.values())

    @property
    def items(self) -> Tuple[CartItem, ...]:
        return self._items

    @property
    def ids(self) -> Tuple[str, ...]:
        return tuple(item.id for item in self._items)

    def get(self, item_id: str) -> Optional[CartItem]:
        return next((item for item in self._items if item.id == item_id), None)

    def __iter__(self) -> Iterator[CartItem]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, item_id: object) -> bool:
        return any(item.id == item_id for item in self._items)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Ledger):
            return NotImplemented
        return self._items == other._items

    def __hash__(self) -> int:
        return hash(self._items)

    def __repr__(self) -> str:
        return f"Ledger({list(self._items)!r})"

    def upsert_increment(self, candidate: Union[CartItemInput, Mapping[str, Any]]) -> "Ledger":
        """
        Add one unit of `candidate`.

        An existing line gains one unit and takes the candidate's price when it
        is a positive number; its name, image and notes are kept. Quantity stops
        at MAX_QUANTITY. A new line is appended with quantity 1. Candidates
        without an id are ignored.
        """
        selection = CartItemInput.coerce(candidate)
        if selection is None:
            return self

        existing = self.get(selection.id)
        if existing is None:
            return Ledger(self._items + (selection.to_item(),))

        price = selection.usable_price
        updated = replace(
            existing,
            quantity=min(existing.quantity + 1, MAX_QUANTITY),
            unit_price=price if price is not None else existing.unit_price,
        )
        return self._replace_line(updated)

    def remove(self, item_id: str) -> "Ledger":
        """Drop the line for `item_id`; unknown ids are a no-op."""
        if item_id not in self:
            return self
        return Ledger(item for item in self._items if item.id != item_id)

    def set_quantity(self, item_id: str, quantity: Any) -> "Ledger":
        """
        Replace a line's quantity.

        Quantities below 1 remove the line, fractions are floored, and
        non-numeric values or unknown ids leave the ledger unchanged.
        """
        existing = self.get(item_id)
        if existing is None:
            return self

        requested = parse_quantity(quantity)
        if requested is None:
            return self
        if requested < 1:
            return self.remove(item_id)

        return self._replace_line(replace(existing, quantity=requested))

    def clear(self) -> "Ledger":
        return EMPTY_LEDGER

    def _replace_line(self, updated: CartItem) -> "Ledger":
        return Ledger(updated if item.id == updated.id else item for item in self._items)


EMPTY_LEDGER = Ledger()
