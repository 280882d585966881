from dataclasses import dataclass
from typing import Dict, List

from tilecrush.components.effect_shape import POWER_UP_SHAPES, EffectShape


@dataclass(frozen=True, slots=True)
class PowerUpInfo:
    shape: EffectShape
    name: str
    description: str


_CATALOG: Dict[EffectShape, PowerUpInfo] = {
    EffectShape.LINE: PowerUpInfo(EffectShape.LINE, "Silencer", "Clears a horizontal row."),
    EffectShape.AREA: PowerUpInfo(EffectShape.AREA, "Time Bomb", "Blasts a 3x3 area."),
    EffectShape.CROSS: PowerUpInfo(EffectShape.CROSS, "Molotov", "Clears a cross (row & col)."),
    EffectShape.MATCH_ALL: PowerUpInfo(EffectShape.MATCH_ALL, "Don's Order", "Clears all matching items."),
}


def power_up_info(shape: EffectShape) -> PowerUpInfo:
    try:
        return _CATALOG[shape]
    except KeyError as exc:
        raise ValueError(f"Unknown power-up '{shape}'") from exc


def reward_choices() -> List[EffectShape]:
    return list(POWER_UP_SHAPES)
