from dataclasses import dataclass

from tilecrush.components.board import Board


@dataclass(slots=True)
class BoardState:
    """Holds the current board value. Moves replace it wholesale."""
    board: Board
