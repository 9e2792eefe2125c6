from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional

from tilemerge.components.direction import Direction


class TurnPhase(Enum):
    IDLE = auto()
    RESOLVING = auto()
    SETTLING = auto()
    GAME_OVER = auto()


@dataclass(slots=True)
class TurnState:
    """Tracks the in-flight move shared across systems."""

    phase: TurnPhase = TurnPhase.IDLE
    direction: Optional[Direction] = None
    changed: bool = False
    moves_made: int = 0

    @property
    def accepting_input(self) -> bool:
        return self.phase is TurnPhase.IDLE
