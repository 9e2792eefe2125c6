from enum import Enum


class TileModifier(Enum):
    """Special behaviour carried by a tile, consumed when it merges."""
    NONE = "none"
    DOUBLER = "doubler"
    HALVER = "halver"
