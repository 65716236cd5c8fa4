from .movement import Direction, MoveResult, can_move, try_move
from .level import Level
from .dungeon import Dungeon, Transition

__all__ = ["Direction", "MoveResult", "can_move", "try_move", "Level", "Dungeon", "Transition"]
