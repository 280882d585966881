from dataclasses import dataclass, field
from typing import Dict, Optional

from tilecrush.components.effect_shape import POWER_UP_SHAPES, EffectShape


def _empty_inventory() -> Dict[EffectShape, int]:
    return {shape: 0 for shape in POWER_UP_SHAPES}


@dataclass(slots=True)
class PlayerProgress:
    """In-memory player progress: unlocked levels and owned power-ups.

    armed: power-up waiting for a target click, if any.
    """
    unlocked_level: int = 1
    inventory: Dict[EffectShape, int] = field(default_factory=_empty_inventory)
    armed: Optional[EffectShape] = None

    def count(self, shape: EffectShape) -> int:
        return self.inventory.get(shape, 0)

    def add(self, shape: EffectShape, amount: int = 1) -> None:
        if amount <= 0:
            return
        self.inventory[shape] = self.inventory.get(shape, 0) + amount

    def spend(self, shape: EffectShape) -> bool:
        if self.inventory.get(shape, 0) <= 0:
            return False
        self.inventory[shape] -= 1
        return True
