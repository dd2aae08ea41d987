"""Scoring patterns (役) and their point values.

Two families of checks live here. `special_check_*` look only at the table
state and are shared by every reading of the hand; `check_*` look at one
decomposition. Every check takes its input explicitly and returns a list of
forms, empty when the pattern does not apply.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import Enum

from agari.agaritilesets import AgariTilesets, MachiKind
from agari.context import Lizhi
from agari.tile import Suit, Tile
from agari.tiles import Tiles
from agari.tilesets import Tilesets

YAKUMAN_FAN = 13
QIDUIZI_FU = 25


@dataclass(frozen=True)
class Point:
    """Fan, fu and the number of limit hands."""

    fan: int = 0
    fu: int = 0
    yakuman: int = 0

    def __add__(self, other: Point) -> Point:
        return Point(self.fan + other.fan, self.fu + other.fu, self.yakuman + other.yakuman)

    def __radd__(self, other: int) -> Point:
        # lets sum() start from 0
        if other == 0:
            return self
        return NotImplemented

    def is_true_yakuman(self) -> bool:
        return self.yakuman > 0

    def is_yakuman(self) -> bool:
        return self.is_true_yakuman() or self.fan >= YAKUMAN_FAN

    def base_points(self) -> int:
        if self.is_true_yakuman():
            return 8000 * self.yakuman
        if self.fan >= 13:
            return 8000
        if self.fan >= 11:
            return 6000
        if self.fan >= 8:
            return 4000
        if self.fan >= 6:
            return 3000
        if self.fan >= 5:
            return 2000
        return min(self.fu * 2 ** (self.fan + 2), 2000)

    def value(self, is_parent: bool) -> int:
        points = self.base_points() * (6 if is_parent else 4)
        return ((points + 99) // 100) * 100

    def rank_label(self) -> str | None:
        if self.is_true_yakuman():
            return _yakuman_label(self.yakuman)
        if self.fan >= 13:
            return "数え役満"
        if self.fan >= 11:
            return "三倍満"
        if self.fan >= 8:
            return "倍満"
        if self.fan >= 6:
            return "跳満"
        if self.base_points() >= 2000:
            return "満貫"
        return None

    def display(self) -> str:
        if self.is_true_yakuman():
            return f"{YAKUMAN_FAN * self.yakuman}翻"
        return f"{self.fan}翻"

    def display_full(self, is_parent: bool) -> str:
        value = self.value(is_parent)
        label = self.rank_label()
        if self.is_true_yakuman():
            return f"{value}点 {label}"
        if label is None:
            return f"{self.fan}翻{self.fu}符 {value}点"
        if self.fan < 5:
            return f"{self.fan}翻{self.fu}符 {value}点 {label}"
        return f"{self.fan}翻 {value}点 {label}"


def _yakuman_label(multiplier: int) -> str:
    if multiplier <= 1:
        return "役満"
    if multiplier == 2:
        return "ダブル役満"
    if multiplier == 3:
        return "トリプル役満"
    return f"{multiplier}倍役満"


class FormKind(str, Enum):
    LIZHI = "立直"
    IPPATSU = "一発"
    MENQIAN_QING_ZIMOHU = "門前清自摸和"
    FANPAI = "役牌"
    DUANYAOJIU = "断么九"
    PINGHE = "平和"
    YIBEIKOU = "一盃口"
    HAIDI_MOYUE = "海底摸月"
    HEDI_LAOYU = "河底撈魚"
    LINGSHANG_KAIHUA = "嶺上開花"
    QIANGGANG = "槍槓"
    DOUBLE_LIZHI = "ダブル立直"
    SANSHOKU_DOJUN = "三色同順"
    SANSHOKU_DOKO = "三色同刻"
    SANANKE = "三暗刻"
    IKKI_TUKAN = "一気通貫"
    QIDUIZI = "七対子"
    DUIDUIHE = "対々和"
    HUNQUAN_DAIYAOJIU = "混全帯幺九"
    SANGANGZI = "三槓子"
    SHOUSANYUAN = "小三元"
    HUNLAOTOU = "混老頭"
    LIANGBEIGOU = "二盃口"
    CHUNQUAN_DAIYAOJIU = "純全帯幺九"
    HUNYISE = "混一色"
    QINGYISE = "清一色"
    DORA = "ドラ"
    SIANKE = "四暗刻"
    DAISANYUAN = "大三元"
    KOKUSHIMUSOU = "国士無双"
    LUYISE = "緑一色"
    ZIYISE = "字一色"
    QINGLAOTOU = "清老頭"
    SIGANGZI = "四槓子"
    SHOUSUSHI = "小四喜"
    DAISUSHI = "大四喜"
    JIULIANBAODENG = "九蓮宝燈"
    DIHE = "地和"
    TIANHE = "天和"


_KIND_ORDER = {kind: index for index, kind in enumerate(FormKind)}

# (concealed, open)
_FAN = {
    FormKind.LIZHI: (1, 1),
    FormKind.IPPATSU: (1, 1),
    FormKind.MENQIAN_QING_ZIMOHU: (1, 1),
    FormKind.DUANYAOJIU: (1, 1),
    FormKind.PINGHE: (1, 1),
    FormKind.YIBEIKOU: (1, 1),
    FormKind.HAIDI_MOYUE: (1, 1),
    FormKind.HEDI_LAOYU: (1, 1),
    FormKind.LINGSHANG_KAIHUA: (1, 1),
    FormKind.QIANGGANG: (1, 1),
    FormKind.DOUBLE_LIZHI: (2, 2),
    FormKind.SANSHOKU_DOJUN: (2, 1),
    FormKind.SANSHOKU_DOKO: (2, 2),
    FormKind.SANANKE: (2, 2),
    FormKind.IKKI_TUKAN: (2, 1),
    FormKind.QIDUIZI: (2, 2),
    FormKind.DUIDUIHE: (2, 2),
    FormKind.HUNQUAN_DAIYAOJIU: (2, 1),
    FormKind.SANGANGZI: (2, 2),
    FormKind.SHOUSANYUAN: (2, 2),
    FormKind.HUNLAOTOU: (2, 2),
    FormKind.LIANGBEIGOU: (3, 3),
    FormKind.CHUNQUAN_DAIYAOJIU: (3, 2),
    FormKind.HUNYISE: (3, 2),
    FormKind.QINGYISE: (6, 5),
}

COUNTED_KINDS = frozenset({FormKind.FANPAI, FormKind.DORA})

YAKUMAN_KINDS = frozenset(
    {
        FormKind.SIANKE,
        FormKind.DAISANYUAN,
        FormKind.KOKUSHIMUSOU,
        FormKind.LUYISE,
        FormKind.ZIYISE,
        FormKind.QINGLAOTOU,
        FormKind.SIGANGZI,
        FormKind.SHOUSUSHI,
        FormKind.DAISUSHI,
        FormKind.JIULIANBAODENG,
        FormKind.DIHE,
        FormKind.TIANHE,
    }
)

LUCKY_KINDS = frozenset(
    {
        FormKind.HAIDI_MOYUE,
        FormKind.HEDI_LAOYU,
        FormKind.LINGSHANG_KAIHUA,
        FormKind.QIANGGANG,
        FormKind.DIHE,
        FormKind.TIANHE,
    }
)

_PURE_NAMES = {
    FormKind.SIANKE: "四暗刻単騎",
    FormKind.KOKUSHIMUSOU: "国士無双13面待ち",
    FormKind.JIULIANBAODENG: "純正九蓮宝燈",
}


@dataclass(frozen=True)
class Form:
    """One scoring pattern found in a hand.

    `is_menqian` is fixed when the form is found, so the fan of patterns
    that lose value when the hand is open never has to be resolved later.
    `count` carries the number of value tiles or dora, and `is_pure` marks
    the single-wait variants of the limit hands that have one.
    """

    kind: FormKind
    is_menqian: bool = True
    count: int = 0
    is_pure: bool = False

    def point(self) -> Point:
        if self.kind in YAKUMAN_KINDS:
            return Point(yakuman=1)
        if self.kind in COUNTED_KINDS:
            return Point(fan=self.count)
        concealed, opened = _FAN[self.kind]
        fan = concealed if self.is_menqian else opened
        if self.kind == FormKind.QIDUIZI:
            return Point(fan=fan, fu=QIDUIZI_FU)
        return Point(fan=fan)

    @property
    def name(self) -> str:
        if self.is_pure:
            return _PURE_NAMES[self.kind]
        return self.kind.value

    def sort_key(self) -> tuple[int, int]:
        return (self.point().fan, _KIND_ORDER[self.kind])

    def display(self) -> str:
        return f"{self.point().display()} {self.name}"

    def __str__(self) -> str:
        return self.display()


def _tiles(tilesets: Tilesets) -> list[Tile]:
    return list(tilesets.tiles_without_doras())


# whole-hand checks


def special_check_lucky_forms(tilesets: Tilesets) -> list[Form]:
    return [Form(kind) for kind in tilesets.context.lucky_forms]


def special_check_lizhi(tilesets: Tilesets) -> list[Form]:
    lizhi = tilesets.context.lizhi
    if lizhi == Lizhi.LIZHI:
        return [Form(FormKind.LIZHI)]
    if lizhi == Lizhi.LIZHI_IPPATSU:
        return [Form(FormKind.LIZHI), Form(FormKind.IPPATSU)]
    if lizhi == Lizhi.DOUBLE_LIZHI:
        return [Form(FormKind.DOUBLE_LIZHI)]
    if lizhi == Lizhi.DOUBLE_LIZHI_IPPATSU:
        return [Form(FormKind.DOUBLE_LIZHI), Form(FormKind.IPPATSU)]
    return []


def special_check_menqianqingzimohu(tilesets: Tilesets) -> list[Form]:
    if tilesets.is_menqian() and tilesets.is_zimo:
        return [Form(FormKind.MENQIAN_QING_ZIMOHU)]
    return []


def special_check_duanyaojiu(tilesets: Tilesets) -> list[Form]:
    if all(tile.is_middle_rank() for tile in _tiles(tilesets)):
        return [Form(FormKind.DUANYAOJIU)]
    return []


def special_check_ziyise(tilesets: Tilesets) -> list[Form]:
    if all(tile.is_honor() for tile in _tiles(tilesets)):
        return [Form(FormKind.ZIYISE)]
    return []


def special_check_hunyise_qingyise(tilesets: Tilesets) -> list[Form]:
    tiles = _tiles(tilesets)
    suits = {tile.suit for tile in tiles if not tile.is_honor()}
    if len(suits) != 1:
        return []
    if any(tile.is_honor() for tile in tiles):
        return [Form(FormKind.HUNYISE, is_menqian=tilesets.is_menqian())]
    return [Form(FormKind.QINGYISE, is_menqian=tilesets.is_menqian())]


def special_check_hunlaotou(tilesets: Tilesets) -> list[Form]:
    if all(tile.is_terminal_or_honor() for tile in _tiles(tilesets)):
        return [Form(FormKind.HUNLAOTOU)]
    return []


def special_check_qinglaotou(tilesets: Tilesets) -> list[Form]:
    if all(tile.is_terminal() for tile in _tiles(tilesets)):
        return [Form(FormKind.QINGLAOTOU)]
    return []


def special_check_luyise(tilesets: Tilesets) -> list[Form]:
    if all(tile.is_green_capable() for tile in _tiles(tilesets)):
        return [Form(FormKind.LUYISE)]
    return []


def special_check_dora(tilesets: Tilesets) -> list[Form]:
    tiles = _tiles(tilesets)
    count = sum(1 for dora in tilesets.doras for tile in tiles if tile == dora)
    count += sum(1 for tile in tiles if tile.is_red)
    if count == 0:
        return []
    return [Form(FormKind.DORA, count=count)]


def special_check_qiduizi(tilesets: Tilesets) -> Form | None:
    if tilesets.did_furo() or tilesets.angangs:
        return None
    counts = Counter(tilesets.full_hand())
    if len(counts) == 7 and all(num == 2 for num in counts.values()):
        return Form(FormKind.QIDUIZI)
    return None


def match_target_with_one_more(tilesets: Tilesets, target: Tiles, candidates: Iterable[Tile]) -> bool | None:
    """Whether the hand is `target` plus one of `candidates`.

    Returns None when it is not, otherwise whether the extra tile is the
    winning tile itself, i.e. the hand was waiting on every candidate.
    """
    hand = tilesets.full_hand()
    for candidate in candidates:
        if target.with_tile(candidate) == hand:
            return candidate == tilesets.last
    return None


_YAOJIU = Tiles.parse("1s9s1m9m1p9p東南西北白發中")


def special_check_kokushimuso(tilesets: Tilesets) -> Form | None:
    is_pure = match_target_with_one_more(tilesets, _YAOJIU, _YAOJIU)
    if is_pure is None:
        return None
    return Form(FormKind.KOKUSHIMUSOU, is_pure=is_pure)


def special_check_jiulianbaodeng(tilesets: Tilesets) -> Form | None:
    for suit in (Suit.SOUZU, Suit.MANZU, Suit.PINZU):
        ranks = (1, 1, 1, 2, 3, 4, 5, 6, 7, 8, 9, 9, 9)
        target = Tiles(Tile(suit, rank) for rank in ranks)
        is_pure = match_target_with_one_more(tilesets, target, (Tile(suit, rank) for rank in range(1, 10)))
        if is_pure is not None:
            return Form(FormKind.JIULIANBAODENG, is_pure=is_pure)
    return None


WHOLE_HAND_CHECKS: tuple[Callable[[Tilesets], list[Form]], ...] = (
    special_check_lucky_forms,
    special_check_lizhi,
    special_check_menqianqingzimohu,
    special_check_duanyaojiu,
    special_check_ziyise,
    special_check_hunyise_qingyise,
    special_check_hunlaotou,
    special_check_qinglaotou,
    special_check_luyise,
    special_check_dora,
)


def forms_for_all_base(tilesets: Tilesets) -> list[Form]:
    return [form for check in WHOLE_HAND_CHECKS for form in check(tilesets)]


# decomposition checks


def check_fanpai(agari: AgariTilesets) -> list[Form]:
    count = sum(kezi.first().value_tile_count(agari.context) for kezi in agari.kezis())
    if count == 0:
        return []
    return [Form(FormKind.FANPAI, count=count)]


def check_pinghe(agari: AgariTilesets) -> list[Form]:
    if not agari.is_menqian() or any(True for _ in agari.kezis()):
        return []
    if agari.quetou.first().value_tile_count(agari.context) != 0:
        return []
    if agari.machi != MachiKind.LIANGMIAN:
        return []
    return [Form(FormKind.PINGHE)]


def check_yibeikou_liangbeigou(agari: AgariTilesets) -> list[Form]:
    if not agari.is_menqian():
        return []
    pairs = sum(num // 2 for num in Counter(agari.shunzis()).values())
    assert pairs <= 2, f"{pairs} pairs of identical runs"
    if pairs == 1:
        return [Form(FormKind.YIBEIKOU)]
    if pairs == 2:
        return [Form(FormKind.LIANGBEIGOU)]
    return []


def _suits_by_start(groups: Iterable[Tiles]) -> dict[int, set[Suit]]:
    starts: dict[int, set[Suit]] = {}
    for group in groups:
        first = group.first()
        if first.order is not None:
            starts.setdefault(first.order, set()).add(first.suit)
    return starts


def check_sanshoku_dojun(agari: AgariTilesets) -> list[Form]:
    if any(len(suits) == 3 for suits in _suits_by_start(agari.shunzis()).values()):
        return [Form(FormKind.SANSHOKU_DOJUN, is_menqian=agari.is_menqian())]
    return []


def check_sanshoku_doko(agari: AgariTilesets) -> list[Form]:
    if any(len(suits) == 3 for suits in _suits_by_start(agari.kezis()).values()):
        return [Form(FormKind.SANSHOKU_DOKO)]
    return []


def check_sananke_sianke(agari: AgariTilesets) -> list[Form]:
    num = len(list(agari.ankes()))
    if num == 3:
        return [Form(FormKind.SANANKE)]
    if num == 4:
        return [Form(FormKind.SIANKE, is_pure=agari.machi == MachiKind.DANQI)]
    return []


def check_ikki_tukan(agari: AgariTilesets) -> list[Form]:
    starts: dict[Suit, set[int]] = {}
    for shunzi in agari.shunzis():
        starts.setdefault(shunzi.first().suit, set()).add(shunzi.first().order)
    if any({1, 4, 7} <= orders for orders in starts.values()):
        return [Form(FormKind.IKKI_TUKAN, is_menqian=agari.is_menqian())]
    return []


def check_duiduihe(agari: AgariTilesets) -> list[Form]:
    if len(list(agari.kezis())) == 4:
        return [Form(FormKind.DUIDUIHE)]
    return []


def check_hunquandaiyaojiu_chunquandaiyaojiu(agari: AgariTilesets) -> list[Form]:
    # without a run every tile is a terminal or honor, which is 混老頭 instead
    if not any(True for _ in agari.shunzis()):
        return []
    groups = [*agari.mianzis(), agari.quetou]
    if not all(any(tile.is_terminal_or_honor() for tile in group) for group in groups):
        return []
    if any(tile.is_honor() for group in groups for tile in group):
        return [Form(FormKind.HUNQUAN_DAIYAOJIU, is_menqian=agari.is_menqian())]
    return [Form(FormKind.CHUNQUAN_DAIYAOJIU, is_menqian=agari.is_menqian())]


def check_sangangzi_sigangzi(agari: AgariTilesets) -> list[Form]:
    num = len(list(agari.gangzis()))
    assert num <= 4, f"{num} kans"
    if num == 3:
        return [Form(FormKind.SANGANGZI)]
    if num == 4:
        return [Form(FormKind.SIGANGZI)]
    return []


def check_shousanyuan(agari: AgariTilesets) -> list[Form]:
    dragons = sum(1 for kezi in agari.kezis() if kezi.first().is_premium_honor())
    if dragons == 2 and agari.quetou.first().is_premium_honor():
        return [Form(FormKind.SHOUSANYUAN)]
    return []


def check_daisanyuan(agari: AgariTilesets) -> list[Form]:
    if sum(1 for kezi in agari.kezis() if kezi.first().is_premium_honor()) == 3:
        return [Form(FormKind.DAISANYUAN)]
    return []


def check_shousushi_daisushi(agari: AgariTilesets) -> list[Form]:
    winds = sum(1 for kezi in agari.kezis() if kezi.first().is_wind())
    if winds == 4:
        return [Form(FormKind.DAISUSHI)]
    if winds == 3 and agari.quetou.first().is_wind():
        return [Form(FormKind.SHOUSUSHI)]
    return []


AGARI_CHECKS: tuple[Callable[[AgariTilesets], list[Form]], ...] = (
    check_fanpai,
    check_pinghe,
    check_yibeikou_liangbeigou,
    check_sanshoku_dojun,
    check_sanshoku_doko,
    check_sananke_sianke,
    check_ikki_tukan,
    check_duiduihe,
    check_hunquandaiyaojiu_chunquandaiyaojiu,
    check_sangangzi_sigangzi,
    check_shousanyuan,
    check_daisanyuan,
    check_shousushi_daisushi,
)
