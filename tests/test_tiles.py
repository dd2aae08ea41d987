import pytest

from agari.context import Direction, UnknownDirection
from agari.tile import Tile
from agari.tiles import Tiles, TilesError, range_same_tiles


def test_parse_sorts_tiles():
    tiles = Tiles.parse("中3p1s東2m")
    assert str(tiles) == "1s2m3p東中"
    assert tiles.first() == Tile.parse("1s")
    assert tiles.last() == Tile.parse("中")


def test_equality_ignores_red():
    assert Tiles.parse("4p5P6p") == Tiles.parse("4p5p6p")
    assert hash(Tiles.parse("4p5P6p")) == hash(Tiles.parse("4p5p6p"))


def test_with_tile_keeps_order():
    assert str(Tiles.parse("1s3s").with_tile(Tile.parse("2s"))) == "1s2s3s"


def test_meld_checks():
    assert Tiles.parse("東東東").check_peng()
    assert Tiles.parse("3m4m5m").check_chi()
    assert Tiles.parse("9p9p9p9p").check_gang()
    assert Tiles.parse("7s").check_last_tile()


@pytest.mark.parametrize(
    ("text", "check"),
    [
        ("1s1s2s", "check_peng"),
        ("1s1s", "check_peng"),
        ("1s2s4s", "check_chi"),
        ("8s9s1m", "check_chi"),
        ("東南西", "check_chi"),
        ("1s1s1s", "check_gang"),
        ("1s2s", "check_last_tile"),
    ],
)
def test_meld_checks_reject_invalid_groups(text, check):
    with pytest.raises(TilesError):
        getattr(Tiles.parse(text), check)()


def test_middle():
    assert Tiles.parse("4m5m6m").middle() == Tile.parse("5m")
    with pytest.raises(AssertionError):
        Tiles.parse("4m5m").middle()
    with pytest.raises(AssertionError):
        Tiles.parse("4m4m4m4m").middle()


def test_range_same_tiles():
    tiles = Tiles.parse("1s1s1s2s2s2s3s3s3s4s4s4s東東")
    assert range_same_tiles(tiles) == [range(0, 3), range(3, 6), range(6, 9), range(9, 12), range(12, 14)]


def test_range_same_tiles_empty():
    assert range_same_tiles(Tiles()) == []


def test_direction_parse():
    assert Direction.parse("西") == Direction.WEST
    assert Direction.parse("South") == Direction.SOUTH
    assert Direction.parse("NORTH") == Direction.NORTH
    with pytest.raises(UnknownDirection):
        Direction.parse("up")
