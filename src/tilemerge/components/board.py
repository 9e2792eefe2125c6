from dataclasses import dataclass, field
from typing import Dict, Tuple

@dataclass(slots=True)
class Board:
    width: int
    height: int
    # (x, y) -> cell entity; filled once when the board is built.
    cells: Dict[Tuple[int, int], int] = field(default_factory=dict)

    @property
    def capacity(self) -> int:
        return self.width * self.height

    def contains(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height
