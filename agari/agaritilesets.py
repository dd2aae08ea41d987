"""Decomposition of a finished hand into a pair and four groups.

A table state is turned into every possible winning shape here: the
concealed tiles plus the winning tile are split into a pair, concealed
triplets and concealed runs, each shape is tagged with the wait the winning
tile completed, and on a discard win the group holding the claimed tile is
reclassified as exposed.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum
from itertools import chain

import structlog

from agari.context import Context
from agari.tile import Tile
from agari.tiles import Tiles, range_same_tiles
from agari.tilesets import Tilesets

logger = structlog.get_logger()


class MachiKind(str, Enum):
    """Wait shape the winning tile completed."""

    LIANGMIAN = "両面"
    SHUANGPENG = "シャンポン"
    BIANZHANG = "ペンチャン"
    QIANZHANG = "カンチャン"
    DANQI = "単騎"
    YANDAN = "ノベタン"

    def __str__(self) -> str:
        return self.value


def enumerate_machis(
    quetou: Tiles,
    anshuns: tuple[Tiles, ...],
    ankes: tuple[Tiles, ...],
    last: Tile,
) -> list[MachiKind]:
    machis: list[MachiKind] = []
    side = _liangmian_or_bianzhang(anshuns, last)
    single = _danqi_or_yandan(quetou, anshuns, last)

    if side == MachiKind.LIANGMIAN:
        machis.append(MachiKind.LIANGMIAN)
    # a completed concealed triplet means the pair and that triplet were both waiting
    if any(kezi.first() == last for kezi in ankes):
        machis.append(MachiKind.SHUANGPENG)
    if side == MachiKind.BIANZHANG:
        machis.append(MachiKind.BIANZHANG)
    if any(shunzi.middle() == last for shunzi in anshuns):
        machis.append(MachiKind.QIANZHANG)
    if single is not None:
        machis.append(single)
    return machis


def _liangmian_or_bianzhang(anshuns: tuple[Tiles, ...], last: Tile) -> MachiKind | None:
    order_last = last.order
    if order_last is None:
        return None

    for shunzi in anshuns:
        if last != shunzi.first() and last != shunzi.last():
            continue
        if shunzi.last().order == 3 and order_last == 3:
            return MachiKind.BIANZHANG
        if shunzi.first().order == 7 and order_last == 7:
            return MachiKind.BIANZHANG
        return MachiKind.LIANGMIAN
    return None


def _danqi_or_yandan(quetou: Tiles, anshuns: tuple[Tiles, ...], last: Tile) -> MachiKind | None:
    if quetou.first() != last:
        return None

    # a run touching the pair means the hand was a four-tile run waiting on either end
    for shunzi in anshuns:
        if shunzi.first() == last.next() or shunzi.last() == last.prev():
            return MachiKind.YANDAN
    return MachiKind.DANQI


class RongmingKind(str, Enum):
    MINGKE = "mingke"
    MINGSHUN = "mingshun"


class RongmingSource(str, Enum):
    SHUNZIS_IN_HAND = "shunzis_in_hand"
    KEZIS_IN_HAND = "kezis_in_hand"
    ANGANGS = "angangs"


@dataclass(frozen=True)
class Rongming:
    """The concealed group a claimed winning tile turned into an exposed one."""

    kind: RongmingKind
    source: RongmingSource
    index: int
    tiles: Tiles


def fix_rong_an_mings(
    tilesets: Tilesets,
    quetou: Tiles,
    kezis_in_hand: tuple[Tiles, ...],
    shunzis_in_hand: tuple[Tiles, ...],
) -> Rongming | None:
    if tilesets.is_zimo:
        return None

    last = tilesets.last

    # runs never care about being concealed, so the claimed tile always completes a run first
    for index, shunzi in enumerate(shunzis_in_hand):
        if last in shunzi:
            return Rongming(RongmingKind.MINGSHUN, RongmingSource.SHUNZIS_IN_HAND, index, shunzi)

    for source, kezis in (
        (RongmingSource.KEZIS_IN_HAND, kezis_in_hand),
        (RongmingSource.ANGANGS, tilesets.angangs),
    ):
        for index, kezi in enumerate(kezis):
            if last in kezi:
                return Rongming(RongmingKind.MINGKE, source, index, kezi)

    assert quetou.first() == last, "claimed tile completes no run, no triplet and no pair"
    return None


def _without(groups: tuple[Tiles, ...], rongming: Rongming | None, source: RongmingSource) -> tuple[Tiles, ...]:
    if rongming is None or rongming.source != source:
        return groups
    return groups[: rongming.index] + groups[rongming.index + 1 :]


@dataclass(frozen=True)
class AgariTilesets:
    """One way of reading a finished hand."""

    tilesets: Tilesets
    machi: MachiKind
    quetou: Tiles
    kezis_in_hand_all: tuple[Tiles, ...]
    shunzis_in_hand_all: tuple[Tiles, ...]
    rongming: Rongming | None = None

    @classmethod
    def new(
        cls,
        tilesets: Tilesets,
        machi: MachiKind,
        quetou: Tiles,
        kezis_in_hand: tuple[Tiles, ...],
        shunzis_in_hand: tuple[Tiles, ...],
    ) -> AgariTilesets:
        rongming = fix_rong_an_mings(tilesets, quetou, kezis_in_hand, shunzis_in_hand)
        return cls(tilesets, machi, quetou, kezis_in_hand, shunzis_in_hand, rongming)

    @classmethod
    def enumerate(cls, tilesets: Tilesets) -> list[AgariTilesets]:
        hand = tilesets.full_hand()
        result: list[AgariTilesets] = []

        for quetou, rest in enumerate_quetou(hand):
            for kezis_in_hand, remains in enumerate_kezi(rest):
                shunzis_in_hand = extract_shunzi(remains)
                if shunzis_in_hand is None:
                    continue

                machis = enumerate_machis(quetou, shunzis_in_hand, kezis_in_hand, tilesets.last)
                for machi in machis:
                    result.append(cls.new(tilesets, machi, quetou, kezis_in_hand, shunzis_in_hand))

        logger.debug("hand decomposed", tilesets=str(tilesets), candidates=len(result))
        return result

    def pengs(self) -> tuple[Tiles, ...]:
        return self.tilesets.pengs

    def chis(self) -> tuple[Tiles, ...]:
        return self.tilesets.chis

    def minggangs(self) -> tuple[Tiles, ...]:
        return self.tilesets.minggangs

    def angangs(self) -> tuple[Tiles, ...]:
        return _without(self.tilesets.angangs, self.rongming, RongmingSource.ANGANGS)

    def kezis_in_hand(self) -> tuple[Tiles, ...]:
        return _without(self.kezis_in_hand_all, self.rongming, RongmingSource.KEZIS_IN_HAND)

    def shunzis_in_hand(self) -> tuple[Tiles, ...]:
        return _without(self.shunzis_in_hand_all, self.rongming, RongmingSource.SHUNZIS_IN_HAND)

    def ronghe_mingke(self) -> tuple[Tiles, ...]:
        if self.rongming is None or self.rongming.kind != RongmingKind.MINGKE:
            return ()
        return (self.rongming.tiles,)

    def ronghe_mingshun(self) -> tuple[Tiles, ...]:
        if self.rongming is None or self.rongming.kind != RongmingKind.MINGSHUN:
            return ()
        return (self.rongming.tiles,)

    def mingkes(self) -> Iterator[Tiles]:
        """Pons, open kans and the triplet completed by a claimed tile."""
        return chain(self.pengs(), self.minggangs(), self.ronghe_mingke())

    def ankes(self) -> Iterator[Tiles]:
        return chain(self.kezis_in_hand(), self.angangs())

    def mingshuns(self) -> Iterator[Tiles]:
        return chain(self.chis(), self.ronghe_mingshun())

    def anshuns(self) -> Iterator[Tiles]:
        return iter(self.shunzis_in_hand())

    def kezis(self) -> Iterator[Tiles]:
        return chain(self.mingkes(), self.ankes())

    def shunzis(self) -> Iterator[Tiles]:
        return chain(self.mingshuns(), self.anshuns())

    def mianzis(self) -> Iterator[Tiles]:
        return chain(self.kezis(), self.shunzis())

    def gangzis(self) -> Iterator[Tiles]:
        return chain(self.minggangs(), self.tilesets.angangs)

    def is_menqian(self) -> bool:
        return self.tilesets.is_menqian()

    def is_zimo(self) -> bool:
        return self.tilesets.is_zimo

    @property
    def context(self) -> Context:
        return self.tilesets.context

    def __str__(self) -> str:
        groups = " ".join(str(mianzi) for mianzi in self.mianzis())
        return f"{groups} {self.quetou} 待ち: {self.machi}"


def enumerate_quetou(tiles: Tiles) -> list[tuple[Tiles, Tiles]]:
    """Every way to take a pair out of the hand, with what is left."""
    result: list[tuple[Tiles, Tiles]] = []
    for same in range_same_tiles(tiles):
        if len(same) < 2:
            continue
        items = list(tiles)
        quetou = Tiles(items[same.start : same.start + 2])
        del items[same.start : same.start + 2]
        result.append((quetou, Tiles(items)))
    return result


def enumerate_kezi(tiles: Tiles) -> list[tuple[tuple[Tiles, ...], Tiles]]:
    """Every subset of the triplet candidates taken out as concealed triplets."""
    assert len(tiles) % 3 == 0, f"remaining tiles are not a multiple of 3: {len(tiles)}"

    candidates = [same for same in range_same_tiles(tiles) if len(same) >= 3]
    assert len(candidates) <= 4, "more than four triplet candidates"

    result: list[tuple[tuple[Tiles, ...], Tiles]] = []
    for mask in range(1 << len(candidates)):
        items = list(tiles)
        kezis: list[Tiles] = []
        removed = 0
        for bit, same in enumerate(candidates):
            if not (mask >> bit) & 1:
                continue
            start = same.start - removed
            kezis.append(Tiles(items[start : start + 3]))
            del items[start : start + 3]
            removed += 3

        assert bin(mask).count("1") == len(kezis)
        result.append((tuple(kezis), Tiles(items)))
    return result


def extract_shunzi(tiles: Tiles) -> tuple[Tiles, ...] | None:
    """Greedily split the rest into runs, lowest tile first.

    Only one grouping is tried, so a rest that could be split into runs some
    other way is still reported as `None`.
    """
    assert len(tiles) % 3 == 0, f"remaining tiles are not a multiple of 3: {len(tiles)}"

    items = list(tiles)
    shunzis: list[Tiles] = []
    while items:
        first = items.pop(0)
        mid = _pop_first(items, first.next())
        if mid is None:
            return None
        last = _pop_first(items, mid.next())
        if last is None:
            return None
        shunzis.append(Tiles((first, mid, last)))
    return tuple(shunzis)


def _pop_first(items: list[Tile], tile: Tile | None) -> Tile | None:
    if tile is None or tile not in items:
        return None
    return items.pop(items.index(tile))
