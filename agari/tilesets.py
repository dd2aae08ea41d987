from __future__ import annotations

from collections import Counter
from collections.abc import Iterator
from dataclasses import dataclass, field
from itertools import chain

from agari.context import Context, Lizhi
from agari.tile import Suit, Tile
from agari.tiles import Tiles

HAND_TILES = 14


class TilesetsError(ValueError):
    pass


class HandNotFound(TilesetsError):
    def __init__(self) -> None:
        super().__init__("Hand is not specified")


class HandSpecifiedMoreThanOnce(TilesetsError):
    def __init__(self) -> None:
        super().__init__("Hand is specified more than once")


class LastTileNotFound(TilesetsError):
    def __init__(self) -> None:
        super().__init__("Winning tile is not specified")


class LastTileSpecifiedMoreThanOnce(TilesetsError):
    def __init__(self) -> None:
        super().__init__("Winning tile is specified more than once")


class DorasSpecifiedMoreThanOnce(TilesetsError):
    def __init__(self) -> None:
        super().__init__("Dora indicators are specified more than once")


class BothLizhiFuro(TilesetsError):
    def __init__(self) -> None:
        super().__init__("Lizhi cannot be declared with an open meld")


class InvalidNumRed(TilesetsError):
    def __init__(self, suit: Suit, num: int) -> None:
        super().__init__(f"Too many red fives for suit {suit.name.lower()}: {num}")


class InvalidNumSameTiles(TilesetsError):
    def __init__(self, tile: Tile) -> None:
        super().__init__(f"Tile appears 5+ times: {tile}")


class InvalidNumTiles(TilesetsError):
    def __init__(self, num: int) -> None:
        super().__init__(f"Total tiles must be {HAND_TILES} at win state (kans count as 3), got {num}")


@dataclass(frozen=True)
class Tilesets:
    """Validated table state of a finished hand."""

    context: Context
    is_zimo: bool
    last: Tile
    hand: Tiles
    pengs: tuple[Tiles, ...] = ()
    chis: tuple[Tiles, ...] = ()
    minggangs: tuple[Tiles, ...] = ()
    angangs: tuple[Tiles, ...] = ()
    doras: Tiles = field(default_factory=Tiles)

    def __post_init__(self) -> None:
        self._check_lizhi_furo()
        self._check_num_reds()
        self._check_num_same_tiles()
        self._check_num_tiles()

    @classmethod
    def parse(cls, text: str, context: Context | None = None) -> Tilesets:
        """Build a table state from `HAND [ポン..] [チー..] [明槓..] [暗槓..] ツモX|ロンX [ドラ..]`."""
        hand: Tiles | None = None
        last: Tile | None = None
        is_zimo = False
        doras: Tiles | None = None
        groups: dict[str, list[Tiles]] = {"ポン": [], "チー": [], "明槓": [], "暗槓": []}

        for token in text.split():
            prefix = next((p for p in (*groups, "ツモ", "ロン", "ドラ") if token.startswith(p)), None)
            if prefix is None:
                if hand is not None:
                    raise HandSpecifiedMoreThanOnce()
                hand = Tiles.parse(token)
                continue

            tiles = Tiles.parse(token[len(prefix):])
            if prefix in ("ツモ", "ロン"):
                if last is not None:
                    raise LastTileSpecifiedMoreThanOnce()
                last = tiles.check_last_tile().first()
                is_zimo = prefix == "ツモ"
            elif prefix == "ドラ":
                if doras is not None:
                    raise DorasSpecifiedMoreThanOnce()
                doras = Tiles(tile.wrapping_next() for tile in tiles)
            elif prefix == "ポン":
                groups[prefix].append(tiles.check_peng())
            elif prefix == "チー":
                groups[prefix].append(tiles.check_chi())
            else:
                groups[prefix].append(tiles.check_gang())

        if hand is None:
            raise HandNotFound()
        if last is None:
            raise LastTileNotFound()

        return cls(
            context=context or Context(),
            is_zimo=is_zimo,
            last=last,
            hand=hand,
            pengs=tuple(groups["ポン"]),
            chis=tuple(groups["チー"]),
            minggangs=tuple(groups["明槓"]),
            angangs=tuple(groups["暗槓"]),
            doras=doras or Tiles(),
        )

    def did_furo(self) -> bool:
        return bool(self.pengs or self.chis or self.minggangs)

    def is_menqian(self) -> bool:
        return not self.did_furo()

    def full_hand(self) -> Tiles:
        """Concealed tiles with the winning tile added."""
        return self.hand.with_tile(self.last)

    def tiles_without_doras(self) -> Iterator[Tile]:
        groups = chain(self.pengs, self.chis, self.minggangs, self.angangs)
        return chain((self.last,), self.hand, chain.from_iterable(groups))

    def _check_lizhi_furo(self) -> None:
        if self.context.lizhi != Lizhi.NONE and self.did_furo():
            raise BothLizhiFuro()

    def _check_num_reds(self) -> None:
        reds = Counter(tile.suit for tile in self.tiles_without_doras() if tile.is_red)
        for suit, num in reds.items():
            if num >= 2:
                raise InvalidNumRed(suit, num)

    def _check_num_same_tiles(self) -> None:
        # indicators are physical tiles too
        indicators = (tile.wrapping_prev() for tile in self.doras)
        counts = Counter(chain(self.tiles_without_doras(), indicators))
        for tile, num in counts.items():
            if num > 4:
                raise InvalidNumSameTiles(tile)

    def _check_num_tiles(self) -> None:
        melds = len(self.pengs) + len(self.chis) + len(self.minggangs) + len(self.angangs)
        num = 1 + len(self.hand) + melds * 3
        if num != HAND_TILES:
            raise InvalidNumTiles(num)

    def __str__(self) -> str:
        parts = [str(self.hand)]
        parts.extend(f"ポン{tiles}" for tiles in self.pengs)
        parts.extend(f"チー{tiles}" for tiles in self.chis)
        parts.extend(f"明槓{tiles}" for tiles in self.minggangs)
        parts.extend(f"暗槓{tiles}" for tiles in self.angangs)
        parts.append(f"{'ツモ' if self.is_zimo else 'ロン'}{self.last}")
        return " ".join(parts)
