import pytest

from tilemerge.components.modifier import TileModifier
from tilemerge.components.tile import Tile
from tilemerge.systems.grid_ops import BoardFullError, tile_at, tile_count, tile_position
from tilemerge.systems.spawn_policy import SpawnPolicy
from tests.helpers import FixedRandom, build_world, place_rows


@pytest.mark.parametrize(
    "roll, expected",
    [
        (0.0, TileModifier.DOUBLER),
        (0.049, TileModifier.DOUBLER),
        (0.05, TileModifier.HALVER),
        (0.099, TileModifier.HALVER),
        (0.10, TileModifier.NONE),
        (0.75, TileModifier.NONE),
    ],
)
def test_roll_modifier_thresholds(roll, expected):
    policy = SpawnPolicy(rng=FixedRandom([roll]))
    assert policy.roll_modifier() is expected


def test_spawn_places_value_two_in_empty_cell():
    world, _ = build_world()
    place_rows(world, [[4, 0, 0, 0]])
    policy = SpawnPolicy(rng=FixedRandom([0.5], pick=0))
    tile_entity = policy.spawn_tile(world)
    tile = world.component_for_entity(tile_entity, Tile)
    assert tile.value == 2
    assert tile.modifier is TileModifier.NONE
    assert tile.locked is False
    assert tile.tier == 0
    assert tile_position(world, tile_entity) == (1, 0)
    assert tile_at(world, 1, 0) == tile_entity


def test_spawn_can_produce_modifier_tiles():
    world, _ = build_world()
    policy = SpawnPolicy(rng=FixedRandom([0.01, 0.07]))
    first = policy.spawn_tile(world)
    second = policy.spawn_tile(world)
    assert world.component_for_entity(first, Tile).modifier is TileModifier.DOUBLER
    assert world.component_for_entity(second, Tile).modifier is TileModifier.HALVER
    assert tile_count(world) == 2


def test_spawn_on_full_board_fails_loudly():
    world, _ = build_world(2, 2)
    place_rows(world, [[2, 4], [8, 16]])
    with pytest.raises(BoardFullError):
        SpawnPolicy(rng=FixedRandom()).spawn_tile(world)
    assert tile_count(world) == 4


def test_spawn_falls_back_to_world_random():
    world, _ = build_world(rng=FixedRandom([0.02], pick=5))
    tile_entity = SpawnPolicy().spawn_tile(world)
    assert world.component_for_entity(tile_entity, Tile).modifier is TileModifier.DOUBLER
    assert tile_position(world, tile_entity) == (1, 1)


def test_invalid_thresholds_rejected():
    with pytest.raises(ValueError):
        SpawnPolicy(doubler_chance=0.2, halver_chance=0.1)
