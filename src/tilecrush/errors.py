class TileCrushError(Exception):
    """Base class for board simulation errors."""


class OutOfBoundsError(TileCrushError, IndexError):
    """A swap or power-up target lies outside the board."""

    def __init__(self, row: int, col: int, size: int):
        super().__init__(f"Position ({row}, {col}) is outside a {size}x{size} board")
        self.row = row
        self.col = col
        self.size = size


class InvalidSwapError(TileCrushError, ValueError):
    """The two cells of a swap are not orthogonal neighbours."""

    def __init__(self, src, dst):
        super().__init__(f"Cannot swap non-adjacent cells {src} and {dst}")
        self.src = src
        self.dst = dst


class CascadeLimitError(TileCrushError, RuntimeError):
    """The cascade loop failed to settle within the configured pass limit."""
