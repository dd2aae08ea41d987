from __future__ import annotations

from dataclasses import dataclass, field

import structlog

from agari.agaritilesets import AgariTilesets, MachiKind
from agari.form import Form, FormKind
from agari.tiles import Tiles

logger = structlog.get_logger()

BASE_FU = 20


@dataclass(frozen=True)
class FuItem:
    name: str
    fu: int


@dataclass
class FuCalculator:
    """Fu of one decomposition, with a breakdown of where it came from."""

    agari: AgariTilesets
    forms: list[Form]
    items: list[FuItem] = field(default_factory=list)

    def calculate(self) -> int:
        self.items = []
        if self.agari.is_zimo() and any(form.kind == FormKind.PINGHE for form in self.forms):
            self._add("平和ツモ", BASE_FU)
            return BASE_FU

        self._add("副底", BASE_FU)
        if self.agari.is_zimo():
            self._add("ツモ", 2)
        elif self.agari.is_menqian():
            self._add("門前ロン", 10)

        self._add_groups("明刻", self.agari.pengs(), 2)
        self._add_groups("明刻", self.agari.ronghe_mingke(), 2)
        self._add_groups("暗刻", self.agari.kezis_in_hand(), 4)
        self._add_groups("明槓", self.agari.minggangs(), 8)
        self._add_groups("暗槓", self.agari.angangs(), 16)

        pair = self.agari.quetou.first().value_tile_count(self.agari.context) * 2
        if pair:
            self._add("雀頭", pair)

        if self.agari.machi not in (MachiKind.LIANGMIAN, MachiKind.SHUANGPENG):
            self._add("待ち", 2)

        total = sum(item.fu for item in self.items)
        rounded = ((total + 9) // 10) * 10
        if not self.agari.is_zimo() and rounded == BASE_FU:
            # an open hand won on a discard never scores below 30
            rounded = 30
        if rounded > total:
            self._add("切り上げ", rounded - total)

        logger.debug("fu calculated", agari=str(self.agari), total=total, fu=rounded)
        return rounded

    def _add_groups(self, name: str, groups: tuple[Tiles, ...], fu: int) -> None:
        for group in groups:
            # terminals and honors are worth double
            self._add(name, fu * 2 if group.first().is_terminal_or_honor() else fu)

    def _add(self, name: str, fu: int) -> None:
        self.items.append(FuItem(name=name, fu=fu))
        logger.debug("fu item", name=name, fu=fu)
