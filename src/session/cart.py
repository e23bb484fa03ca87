"""Marketplace cart.

Lines are keyed by project; adding an existing project merges quantities,
and setting a quantity to zero or below drops the line.
"""

from __future__ import annotations

from src.models.registry import CartItem


class Cart:
    def __init__(self) -> None:
        self._items: list[CartItem] = []

    @property
    def items(self) -> list[CartItem]:
        return list(self._items)

    def add_item(self, item: CartItem) -> None:
        for i, existing in enumerate(self._items):
            if existing.project_id == item.project_id:
                self._items[i] = existing.model_copy(
                    update={"quantity": existing.quantity + item.quantity}
                )
                return
        self._items.append(item)

    def remove_item(self, project_id: str) -> None:
        self._items = [i for i in self._items if i.project_id != project_id]

    def update_quantity(self, project_id: str, quantity: int) -> None:
        if quantity <= 0:
            self.remove_item(project_id)
            return
        self._items = [
            i.model_copy(update={"quantity": quantity})
            if i.project_id == project_id
            else i
            for i in self._items
        ]

    def clear(self) -> None:
        self._items = []

    @property
    def total_items(self) -> int:
        return sum(i.quantity for i in self._items)

    @property
    def total_value(self) -> int:
        return sum(i.quantity * i.price_per_credit for i in self._items)
