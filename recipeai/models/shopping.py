"""Shopping list models."""

from typing import List

from pydantic import BaseModel, Field


class ShoppingItem(BaseModel):
    """Single shopping list entry."""

    item: str
    checked: bool = False


class ShoppingList(BaseModel):
    """Ordered shopping list with check-off state."""

    items: List[ShoppingItem] = Field(default_factory=list)

    @classmethod
    def from_items(cls, items: List[str]) -> "ShoppingList":
        """Build a list with every entry unchecked."""
        return cls(items=[ShoppingItem(item=i) for i in items])

    def toggle(self, index: int) -> None:
        """Flip the checked state of the entry at ``index``."""
        entry = self.items[index]
        self.items[index] = entry.model_copy(update={"checked": not entry.checked})

    def clear_checked(self) -> None:
        self.items = [i for i in self.items if not i.checked]

    def clear_all(self) -> None:
        self.items = []

    def to_text(self) -> str:
        """Plain-text export, one line per entry with a check marker."""
        return "\n".join(f"{'✓' if i.checked else '☐'} {i.item}" for i in self.items)
