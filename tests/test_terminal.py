from tilemerge.components.tile import Tile
from tilemerge.systems.terminal import has_available_merge, is_game_over
from tests.helpers import build_world, place_rows


def test_not_over_while_any_cell_is_empty():
    world, _ = build_world()
    place_rows(world, [
        [2, 4, 2, 4],
        [4, 2, 4, 2],
        [2, 4, 2, 4],
        [4, 2, 4, 0],
    ])
    assert is_game_over(world) is False


def test_full_board_without_merges_is_over():
    world, _ = build_world()
    place_rows(world, [
        [2, 4, 2, 4],
        [4, 2, 4, 2],
        [2, 4, 2, 4],
        [4, 2, 4, 2],
    ])
    assert has_available_merge(world) is False
    assert is_game_over(world) is True


def test_full_board_with_equal_neighbours_is_not_over():
    world, _ = build_world()
    place_rows(world, [
        [2, 4, 2, 4],
        [4, 2, 4, 2],
        [2, 4, 2, 4],
        [4, 2, 8, 8],
    ])
    assert is_game_over(world) is False


def test_full_board_with_modifier_tile_is_not_over():
    world, _ = build_world()
    place_rows(world, [
        [2, 4, 2, 4],
        [4, 2, 4, 2],
        [2, 4, "h", 4],
        [4, 2, 4, 2],
    ])
    assert is_game_over(world) is False


def test_equal_values_on_diagonal_do_not_count():
    world, _ = build_world(2, 2)
    place_rows(world, [[2, 4], [4, 2]])
    assert is_game_over(world) is True


def test_locked_neighbours_cannot_merge():
    world, _ = build_world(2, 1)
    tiles = place_rows(world, [[8, 8]])
    world.component_for_entity(tiles[(0, 0)], Tile).locked = True
    assert is_game_over(world) is True
