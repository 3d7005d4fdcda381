"""Purchasable items and the relationships between them."""

from typing import Literal

from pydantic import BaseModel, Field

ItemCategory = Literal[
    "spirits", "beer", "wine", "mixers", "ice",
    "supplies", "meat", "sides", "condiments", "other",
]

ALCOHOLIC_CATEGORIES: frozenset[str] = frozenset({"spirits", "beer", "wine"})


class PurchasableItem(BaseModel):
    """One catalog entry.  Owned by the host; the engine only reads it.

    ``servings_per_unit`` carries no range constraint on purpose: a bad
    catalog row must fail ``simulate`` with ``DivisionByZeroError``.
    """

    id: str = Field(description="Unique identifier")
    name: str = Field(default="", description="Display name (used by suggestion keywords)")
    category: ItemCategory = Field(default="other")
    servings_per_unit: float = Field(
        default=1.0,
        description="Consumption units provided by one purchased unit "
                    "(e.g. 15 drinks per 750 ml bottle)",
    )
    unit_cost: float = Field(default=0.0, ge=0, description="Price per purchased unit")
    units: int = Field(default=0, ge=0, description="Units currently on the shopping list")

    @property
    def is_alcoholic(self) -> bool:
        return self.category in ALCOHOLIC_CATEGORIES


class ComplementaryRelationship(BaseModel):
    """Consuming one primary serving implies ``ratio`` secondary servings."""

    primary_item_id: str
    secondary_item_id: str
    ratio: float = Field(default=1.0, ge=0, description="Secondary per primary")
