import pytest

from agari.context import Context, Lizhi
from agari.tile import Tile
from agari.tiles import Tiles
from agari.tilesets import (
    BothLizhiFuro,
    DorasSpecifiedMoreThanOnce,
    HandNotFound,
    HandSpecifiedMoreThanOnce,
    InvalidNumRed,
    InvalidNumSameTiles,
    InvalidNumTiles,
    LastTileNotFound,
    LastTileSpecifiedMoreThanOnce,
    Tilesets,
)


def test_parse_closed_ron():
    tilesets = Tilesets.parse("5s6s7s4m5m6m4p4p4p5p6p西西 ロン西")
    assert not tilesets.is_zimo
    assert tilesets.last == Tile.parse("西")
    assert len(tilesets.hand) == 13
    assert tilesets.is_menqian()
    assert str(tilesets) == "5s6s7s4m5m6m4p4p4p5p6p西西 ロン西"


def test_parse_melds_in_any_order():
    tilesets = Tilesets.parse("ツモ5P 1p1p1p2p2p2p3p3p3p5p ポン4p4p4p")
    assert tilesets.is_zimo
    assert tilesets.last.is_red
    assert tilesets.pengs == (Tiles.parse("4p4p4p"),)
    assert tilesets.did_furo()
    assert str(tilesets) == "1p1p1p2p2p2p3p3p3p5p ポン4p4p4p ツモ5P"


def test_parse_kans_count_as_three_tiles():
    tilesets = Tilesets.parse("1m2m3m4p 暗槓東東東東 明槓9s9s9s9s チー7p8p9p ロン4p")
    assert tilesets.angangs == (Tiles.parse("東東東東"),)
    assert tilesets.minggangs == (Tiles.parse("9s9s9s9s"),)
    assert tilesets.chis == (Tiles.parse("7p8p9p"),)


def test_concealed_kan_keeps_hand_closed():
    tilesets = Tilesets.parse("1m2m3m4m5m6m7m8m9m4p 暗槓東東東東 ツモ4p")
    assert tilesets.is_menqian()


def test_dora_tokens_are_indicators():
    tilesets = Tilesets.parse("1s2s3s4s5s6s6s7s8s8s9s西西 ロン7s ドラ1s中6s2p")
    assert tilesets.doras == Tiles.parse("2s7s3p白")


def test_full_hand_includes_winning_tile():
    tilesets = Tilesets.parse("1p1p2p2p3p3p4p4p5p5p6p6p7p ツモ7p")
    assert tilesets.full_hand() == Tiles.parse("1p1p2p2p3p3p4p4p5p5p6p6p7p7p")


@pytest.mark.parametrize(
    ("text", "error"),
    [
        ("ロン1s", HandNotFound),
        ("1s2s3s 4s5s6s ロン1s", HandSpecifiedMoreThanOnce),
        ("1s1s1s2s2s2s3s3s3s4s4s4s5s", LastTileNotFound),
        ("1s1s1s2s2s2s3s3s3s4s4s4s5s ロン5s ツモ5s", LastTileSpecifiedMoreThanOnce),
        ("1s1s1s2s2s2s3s3s3s4s4s4s5s ロン5s ドラ1s ドラ2s", DorasSpecifiedMoreThanOnce),
        ("1s5S5M5P5m6m7m8m9m東東東白 ロン5S", InvalidNumRed),
        ("1s1s1s1s2s2s2s3s3s3s4s4s4s ロン1s", InvalidNumSameTiles),
        ("1s1s1s1s2s3s4s5s6s7s8s9s東 ロン東 ドラ1s", InvalidNumSameTiles),
        ("1s1s1s2s2s2s3s3s3s4s4s4s ロン5s", InvalidNumTiles),
    ],
)
def test_parse_rejects_invalid_tilesets(text, error):
    with pytest.raises(error):
        Tilesets.parse(text)


def test_lizhi_with_open_meld_is_rejected():
    with pytest.raises(BothLizhiFuro):
        Tilesets.parse("1p1p1p2p2p2p3p3p3p5p ツモ5p ポン4p4p4p", Context(lizhi=Lizhi.LIZHI))


def test_errors_are_value_errors():
    with pytest.raises(ValueError):
        Tilesets.parse("1s1s1s2s2s2s3s3s3s4s4s4s5s ロン5s チー1s2s4s")
