from dataclasses import dataclass

from tilemerge.components.modifier import TileModifier

@dataclass(slots=True)
class Tile:
    """Numbered game piece.

    cell: entity id of the owning cell; kept in sync with Cell.tile.
    locked: set by a plain merge, cleared when the move settles.
    tier: presentation rank (0 for value 2), advanced by plain merges only.
    """
    value: int
    cell: int
    modifier: TileModifier = TileModifier.NONE
    locked: bool = False
    tier: int = 0

    @property
    def special(self) -> bool:
        return self.modifier is not TileModifier.NONE
