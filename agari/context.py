from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from agari.tile import Honor

if TYPE_CHECKING:
    from agari.form import FormKind


class UnknownDirection(ValueError):
    pass


class Direction(str, Enum):
    """Round wind or seat wind."""

    EAST = "東"
    SOUTH = "南"
    WEST = "西"
    NORTH = "北"

    @property
    def honor(self) -> Honor:
        return _DIRECTION_HONORS[self]

    @property
    def display_en(self) -> str:
        return self.name.capitalize()

    @classmethod
    def parse(cls, text: str) -> Direction:
        for direction in cls:
            if text in (direction.value, direction.display_en, direction.name):
                return direction
        raise UnknownDirection(f"Unknown direction: {text}")

    def __str__(self) -> str:
        return self.value


_DIRECTION_HONORS = {
    Direction.EAST: Honor.EAST,
    Direction.SOUTH: Honor.SOUTH,
    Direction.WEST: Honor.WEST,
    Direction.NORTH: Honor.NORTH,
}


class Lizhi(str, Enum):
    NONE = "none"
    LIZHI = "lizhi"
    LIZHI_IPPATSU = "lizhi_ippatsu"
    DOUBLE_LIZHI = "double_lizhi"
    DOUBLE_LIZHI_IPPATSU = "double_lizhi_ippatsu"


@dataclass(frozen=True)
class Context:
    """How the tiles on the table are interpreted."""

    place: Direction = Direction.EAST
    player: Direction = Direction.EAST
    lizhi: Lizhi = Lizhi.NONE
    lucky_forms: tuple[FormKind, ...] = field(default_factory=tuple)
    player_name: str = ""

    def is_parent(self) -> bool:
        return self.player == Direction.EAST
