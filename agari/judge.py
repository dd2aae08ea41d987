"""Pick the best-scoring reading of a finished hand and render it."""

from __future__ import annotations

from dataclasses import dataclass, field

import structlog

from agari.agaritilesets import AgariTilesets
from agari.form import (
    AGARI_CHECKS,
    Form,
    FormKind,
    Point,
    forms_for_all_base,
    special_check_jiulianbaodeng,
    special_check_kokushimuso,
    special_check_qiduizi,
)
from agari.fu import FuCalculator, FuItem
from agari.tilesets import Tilesets

logger = structlog.get_logger()


def fix_forms(forms: list[Form]) -> list[Form]:
    """Sort forms for display and drop everything else once a limit hand is present."""
    forms = sorted(forms, key=lambda form: form.sort_key())
    if any(form.point().is_true_yakuman() for form in forms):
        return [form for form in forms if form.point().is_true_yakuman()]
    return forms


@dataclass(frozen=True)
class Judge:
    """A scored reading of a hand.

    `agari` is None for the whole-hand shapes (七対子, 国士無双, 九蓮宝燈),
    which are not read as a pair and four groups.
    """

    tilesets: Tilesets
    forms: list[Form]
    point: Point
    agari: AgariTilesets | None = None
    fu_items: list[FuItem] = field(default_factory=list)

    @classmethod
    def build(
        cls,
        tilesets: Tilesets,
        forms: list[Form],
        agari: AgariTilesets | None = None,
        fu: int | None = None,
        fu_items: list[FuItem] | None = None,
    ) -> Judge | None:
        forms = fix_forms(forms)
        if not forms or all(form.kind == FormKind.DORA for form in forms):
            return None

        point: Point = sum((form.point() for form in forms), Point())
        if fu is not None:
            point = point + Point(fu=fu)
        return cls(tilesets, forms, point, agari, fu_items or [])

    @property
    def is_parent(self) -> bool:
        return self.tilesets.context.is_parent()

    def value(self) -> int:
        return self.point.value(self.is_parent)

    def rank_key(self) -> tuple[int, int]:
        # compared without the seat so every reading of one hand is ranked alike
        return (self.point.value(False), -len(self.forms))

    def header(self) -> str:
        context = self.tilesets.context
        return f"{context.place}場 {context.player}家 {context.player_name}"

    def lines(self) -> list[str]:
        lines = [self.header(), str(self.tilesets)]
        if self.agari is not None:
            lines.append(f"({self.agari})")
        lines.extend(form.display() for form in self.forms)
        lines.append(self.point.display_full(self.is_parent))
        return lines

    def __str__(self) -> str:
        return "\n".join(self.lines())


def judge_agari(agari: AgariTilesets) -> Judge | None:
    forms = forms_for_all_base(agari.tilesets)
    for check in AGARI_CHECKS:
        forms.extend(check(agari))

    calculator = FuCalculator(agari, forms)
    fu = calculator.calculate()
    return Judge.build(agari.tilesets, forms, agari=agari, fu=fu, fu_items=calculator.items)


def judge_whole_hand(tilesets: Tilesets, form: Form | None) -> Judge | None:
    if form is None:
        return None
    return Judge.build(tilesets, [*forms_for_all_base(tilesets), form])


def judge_all(tilesets: Tilesets) -> list[Judge]:
    """Every reading of the hand that scores, in enumeration order."""
    candidates = [judge_agari(agari) for agari in AgariTilesets.enumerate(tilesets)]
    candidates.append(judge_whole_hand(tilesets, special_check_qiduizi(tilesets)))
    candidates.append(judge_whole_hand(tilesets, special_check_kokushimuso(tilesets)))
    candidates.append(judge_whole_hand(tilesets, special_check_jiulianbaodeng(tilesets)))
    return [candidate for candidate in candidates if candidate is not None]


def judge(tilesets: Tilesets) -> Judge | None:
    best: Judge | None = None
    for candidate in judge_all(tilesets):
        logger.debug("candidate judged", forms=[form.name for form in candidate.forms], key=candidate.rank_key())
        # equal keys go to the later candidate
        if best is None or candidate.rank_key() >= best.rank_key():
            best = candidate

    if best is None:
        logger.info("hand does not score", tilesets=str(tilesets))
    else:
        logger.info("hand judged", tilesets=str(tilesets), value=best.value())
    return best
