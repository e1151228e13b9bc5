"""
Possessions

Items a player owns: food, clothes, appliances and stock certificates.
Effects are plain data; they are applied to measures only by the game
orchestrator, never by the possession itself.
"""

import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from measures import MeasureType


class PossessionType(str, Enum):
    FOOD = "FOOD"
    CLOTHES = "CLOTHES"
    APPLIANCE = "APPLIANCE"
    STOCK = "STOCK"


@dataclass(frozen=True, slots=True)
class PossessionEffect:
    measure: MeasureType
    delta: float
    duration: Optional[int] = None  # Time units; None means permanent

    def to_dict(self) -> Dict[str, object]:
        data = {"measure": self.measure.value, "delta": self.delta}
        if self.duration is not None:
            data["duration"] = self.duration
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, object]) -> "PossessionEffect":
        return cls(MeasureType(data["measure"]), data["delta"], data.get("duration"))


@dataclass(slots=True)
class Possession:
    """
    An owned item.

    Type-specific fields are optional: spoil_time for food, clothes_level
    for clothes, shares/price_per_share for stock.
    """

    id: str
    type: PossessionType
    name: str
    value: float
    purchase_price: float
    effects: List[PossessionEffect] = field(default_factory=list)
    spoil_time: Optional[int] = None  # Week the food spoils
    clothes_level: Optional[int] = None
    shares: Optional[int] = None
    price_per_share: Optional[float] = None

    def __post_init__(self):
        """Validate invariants after initialization."""
        if self.value < 0:
            raise ValueError(f"possession value cannot be negative, got {self.value}")
        if self.clothes_level is not None and self.clothes_level < 0:
            raise ValueError(f"clothes_level cannot be negative, got {self.clothes_level}")

    def is_spoiled(self, current_week: int) -> bool:
        if self.spoil_time is None:
            return False
        return current_week >= self.spoil_time

    def weeks_until_spoilage(self, current_week: int) -> float:
        if self.spoil_time is None:
            return float("inf")
        return max(0, self.spoil_time - current_week)

    def to_dict(self) -> Dict[str, object]:
        data = {
            "id": self.id,
            "type": self.type.value,
            "name": self.name,
            "value": self.value,
            "purchasePrice": self.purchase_price,
            "effects": [effect.to_dict() for effect in self.effects],
        }
        # Optional fields are omitted rather than written as null
        for key, attr in (
            ("spoilTime", self.spoil_time),
            ("clothesLevel", self.clothes_level),
            ("shares", self.shares),
            ("pricePerShare", self.price_per_share),
        ):
            if attr is not None:
                data[key] = attr
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, object]) -> "Possession":
        return cls(
            id=data["id"],
            type=PossessionType(data["type"]),
            name=data["name"],
            value=data["value"],
            purchase_price=data.get("purchasePrice", data["value"]),
            effects=[PossessionEffect.from_dict(e) for e in data.get("effects", [])],
            spoil_time=data.get("spoilTime"),
            clothes_level=data.get("clothesLevel"),
            shares=data.get("shares"),
            price_per_share=data.get("pricePerShare"),
        )


def _slug(name: str) -> str:
    return "-".join(name.lower().split())


def _unique_id(prefix: str, name: str) -> str:
    return f"{prefix}-{_slug(name)}-{uuid.uuid4().hex[:8]}"


def make_food(
    name: str,
    price: float,
    health_effect: float = 0,
    spoil_time: Optional[int] = None,
) -> Possession:
    effects = [PossessionEffect(MeasureType.HEALTH, health_effect)] if health_effect else []
    return Possession(
        id=_unique_id("food", name),
        type=PossessionType.FOOD,
        name=name,
        value=price,
        purchase_price=price,
        effects=effects,
        spoil_time=spoil_time,
    )


def make_clothes(name: str, price: float, level: int) -> Possession:
    return Possession(
        id=_unique_id("clothes", name),
        type=PossessionType.CLOTHES,
        name=name,
        value=price,
        purchase_price=price,
        clothes_level=level,
    )


def make_appliance(name: str, price: float, happiness_effect: float = 0) -> Possession:
    effects = [PossessionEffect(MeasureType.HAPPINESS, happiness_effect)] if happiness_effect else []
    return Possession(
        id=_unique_id("appliance", name),
        type=PossessionType.APPLIANCE,
        name=name,
        value=price,
        purchase_price=price,
        effects=effects,
    )


def make_stock(company_name: str, shares: int, price_per_share: float) -> Possession:
    if shares <= 0:
        raise ValueError(f"shares must be positive, got {shares}")
    value = shares * price_per_share
    return Possession(
        id=_unique_id("stock", company_name),
        type=PossessionType.STOCK,
        name=company_name,
        value=value,
        purchase_price=value,
        shares=shares,
        price_per_share=price_per_share,
    )
