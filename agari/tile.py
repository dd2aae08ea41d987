from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from agari.context import Context


class TileError(ValueError):
    pass


class Suit(IntEnum):
    SOUZU = 0
    MANZU = 1
    PINZU = 2
    HONOR = 3


class Honor(IntEnum):
    EAST = 1
    SOUTH = 2
    WEST = 3
    NORTH = 4
    HAKU = 5
    HATU = 6
    CHUN = 7


HONOR_CHARS = {
    "東": Honor.EAST,
    "南": Honor.SOUTH,
    "西": Honor.WEST,
    "北": Honor.NORTH,
    "白": Honor.HAKU,
    "發": Honor.HATU,
    "中": Honor.CHUN,
}
HONOR_NAMES = {honor: char for char, honor in HONOR_CHARS.items()}

SUIT_CHARS = {"s": Suit.SOUZU, "m": Suit.MANZU, "p": Suit.PINZU}
SUIT_NAMES = {suit: char for char, suit in SUIT_CHARS.items()}

WINDS = (Honor.EAST, Honor.SOUTH, Honor.WEST, Honor.NORTH)
DRAGONS = (Honor.HAKU, Honor.HATU, Honor.CHUN)


@dataclass(frozen=True, order=True)
class Tile:
    """A single tile. The red flag never takes part in comparisons."""

    suit: Suit
    rank: int
    is_red: bool = field(default=False, compare=False)

    def __post_init__(self) -> None:
        if self.suit == Suit.HONOR:
            if self.rank not in range(1, 8):
                raise TileError(f"Invalid honor: {self.rank}")
            if self.is_red:
                raise TileError("Honor tiles cannot be red")
            return
        if not 1 <= self.rank <= 9:
            raise TileError(f"Invalid order: {self.rank}")
        if self.is_red and self.rank != 5:
            raise TileError(f"Only 5 can be red: {self.rank}")

    @classmethod
    def honor(cls, honor: Honor) -> Tile:
        return cls(Suit.HONOR, int(honor))

    @classmethod
    def parse(cls, text: str) -> Tile:
        if text in HONOR_CHARS:
            return cls.honor(HONOR_CHARS[text])
        if len(text) != 2:
            raise TileError(f"Invalid tile length: {text!r}")

        order, suit_char = text[0], text[1]
        suit = SUIT_CHARS.get(suit_char.lower())
        if suit is None:
            raise TileError(f"Invalid suit: {text!r}")
        if order not in "123456789":
            raise TileError(f"Invalid order: {text!r}")
        return cls(suit, int(order), is_red=suit_char.isupper())

    @property
    def order(self) -> int | None:
        if self.suit == Suit.HONOR:
            return None
        return self.rank

    @property
    def honor_kind(self) -> Honor | None:
        if self.suit != Suit.HONOR:
            return None
        return Honor(self.rank)

    def is_honor(self) -> bool:
        return self.suit == Suit.HONOR

    def is_terminal(self) -> bool:
        return not self.is_honor() and self.rank in (1, 9)

    def is_terminal_or_honor(self) -> bool:
        return self.is_honor() or self.is_terminal()

    def is_middle_rank(self) -> bool:
        return not self.is_terminal_or_honor()

    def is_wind(self) -> bool:
        return self.honor_kind in WINDS

    def is_premium_honor(self) -> bool:
        return self.honor_kind in DRAGONS

    def is_green_capable(self) -> bool:
        if self.is_honor():
            return self.honor_kind == Honor.HATU
        return self.suit == Suit.SOUZU and self.rank in (2, 3, 4, 6, 8)

    def next(self) -> Tile | None:
        if self.is_honor() or self.rank == 9:
            return None
        return Tile(self.suit, self.rank + 1)

    def prev(self) -> Tile | None:
        if self.is_honor() or self.rank == 1:
            return None
        return Tile(self.suit, self.rank - 1)

    def wrapping_next(self) -> Tile:
        """Tile pointed to by this tile as a dora indicator."""
        if not self.is_honor():
            return Tile(self.suit, self.rank % 9 + 1)
        kind = self.honor_kind
        cycle = WINDS if kind in WINDS else DRAGONS
        return Tile.honor(cycle[(cycle.index(kind) + 1) % len(cycle)])

    def wrapping_prev(self) -> Tile:
        """Dora indicator that points to this tile."""
        if not self.is_honor():
            return Tile(self.suit, (self.rank + 7) % 9 + 1)
        kind = self.honor_kind
        cycle = WINDS if kind in WINDS else DRAGONS
        return Tile.honor(cycle[(cycle.index(kind) - 1) % len(cycle)])

    def value_tile_count(self, context: Context) -> int:
        kind = self.honor_kind
        if kind is None:
            return 0
        if kind in DRAGONS:
            return 1
        return int(context.place.honor == kind) + int(context.player.honor == kind)

    def __str__(self) -> str:
        if self.is_honor():
            return HONOR_NAMES[Honor(self.rank)]
        suit = SUIT_NAMES[self.suit]
        return f"{self.rank}{suit.upper() if self.is_red else suit}"
