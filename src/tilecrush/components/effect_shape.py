from enum import Enum

from tilecrush.components.tile import SpecialKind


class EffectShape(Enum):
    """Area shapes shared by special tiles and player power-ups."""
    NONE = "none"
    LINE = "line"            # the whole target row
    AREA = "area"            # 3x3 around the target
    CROSS = "cross"          # target row and target column
    MATCH_ALL = "match_all"  # every tile of the target's kind


POWER_UP_SHAPES = (EffectShape.LINE, EffectShape.AREA, EffectShape.CROSS, EffectShape.MATCH_ALL)


def shape_for_special(special: SpecialKind) -> EffectShape:
    if special is SpecialKind.LINE_CLEAR:
        return EffectShape.LINE
    if special is SpecialKind.COLOR_CLEAR:
        return EffectShape.MATCH_ALL
    return EffectShape.NONE
