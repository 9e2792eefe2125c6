from dataclasses import dataclass
from typing import Optional

@dataclass(slots=True)
class Cell:
    """Fixed grid position.

    tile: entity id of the occupying tile, or None when the cell is empty.
    Only occupancy ever changes; coordinates are set once on board creation.
    """
    x: int
    y: int
    tile: Optional[int] = None
