from __future__ import annotations

from collections.abc import Iterable, Iterator

from agari.tile import HONOR_CHARS, Tile


class TilesError(ValueError):
    pass


class Tiles:
    """A sorted, immutable group of tiles such as a hand, a pair or a meld."""

    __slots__ = ("_tiles",)

    def __init__(self, tiles: Iterable[Tile] = ()) -> None:
        self._tiles: tuple[Tile, ...] = tuple(sorted(tiles))

    @classmethod
    def parse(cls, text: str) -> Tiles:
        tiles: list[Tile] = []
        rest = text
        while rest:
            size = 1 if rest[0] in HONOR_CHARS else 2
            tiles.append(Tile.parse(rest[:size]))
            rest = rest[size:]
        return cls(tiles)

    def first(self) -> Tile:
        return self._tiles[0]

    def last(self) -> Tile:
        return self._tiles[-1]

    def middle(self) -> Tile:
        assert len(self._tiles) == 3, f"middle() called on {len(self._tiles)} tiles"
        return self._tiles[1]

    def with_tile(self, tile: Tile) -> Tiles:
        return Tiles((*self._tiles, tile))

    def check_last_tile(self) -> Tiles:
        if len(self) != 1:
            raise TilesError(f"Winning tile must be a single tile: {self}")
        return self

    def check_peng(self) -> Tiles:
        if len(self) != 3 or not self._all_same():
            raise TilesError(f"Invalid pon: {self}")
        return self

    def check_chi(self) -> Tiles:
        if len(self) != 3:
            raise TilesError(f"Invalid chi: {self}")
        expect: Tile | None = self.first()
        for tile in self:
            if tile != expect:
                raise TilesError(f"Invalid chi: {self}")
            expect = tile.next()
        return self

    def check_gang(self) -> Tiles:
        if len(self) != 4 or not self._all_same():
            raise TilesError(f"Invalid kan: {self}")
        return self

    def _all_same(self) -> bool:
        return all(tile == self.first() for tile in self)

    def __iter__(self) -> Iterator[Tile]:
        return iter(self._tiles)

    def __len__(self) -> int:
        return len(self._tiles)

    def __getitem__(self, index: int) -> Tile:
        return self._tiles[index]

    def __contains__(self, tile: object) -> bool:
        return tile in self._tiles

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Tiles):
            return NotImplemented
        return self._tiles == other._tiles

    def __hash__(self) -> int:
        return hash(self._tiles)

    def __repr__(self) -> str:
        return f"Tiles({self})"

    def __str__(self) -> str:
        return "".join(str(tile) for tile in self._tiles)


def range_same_tiles(tiles: Tiles) -> list[range]:
    """Index ranges of maximal runs of equal tiles in a sorted group."""
    ranges: list[range] = []
    start = 0
    for index in range(1, len(tiles) + 1):
        if index == len(tiles) or tiles[index] != tiles[start]:
            ranges.append(range(start, index))
            start = index
    return ranges
