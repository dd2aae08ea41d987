import pytest

from agari.context import Context, Direction
from agari.form import Form, FormKind
from agari.judge import fix_forms, judge, judge_all
from agari.tilesets import Tilesets


def judged_text(text: str, context: Context | None = None) -> str | None:
    result = judge(Tilesets.parse(text, context))
    return str(result) if result else None


@pytest.mark.parametrize(
    ("text", "context", "expected"),
    [
        (
            "1p1p1p2p2p2p3p3p3p4p4p4p5p ツモ5p",
            Context(),
            "東場 東家 \n"
            "1p1p1p2p2p2p3p3p3p4p4p4p5p ツモ5p\n"
            "(1p1p1p 2p2p2p 3p3p3p 4p4p4p 5p5p 待ち: 単騎)\n"
            "13翻 四暗刻単騎\n"
            "48000点 役満",
        ),
        (
            "1s9s1m9m1p9p東南西北白發中 ツモ中",
            Context(),
            "東場 東家 \n"
            "1s9s1m9m1p9p東南西北白發中 ツモ中\n"
            "13翻 国士無双13面待ち\n"
            "48000点 役満",
        ),
        (
            "1p1p2p2p3p3p4p4p5p5p6p6p7p ツモ7p",
            Context(),
            "東場 東家 \n"
            "1p1p2p2p3p3p4p4p5p5p6p6p7p ツモ7p\n"
            "(1p2p3p 1p2p3p 5p6p7p 5p6p7p 4p4p 待ち: 両面)\n"
            "1翻 門前清自摸和\n"
            "1翻 平和\n"
            "3翻 二盃口\n"
            "6翻 清一色\n"
            "11翻 36000点 三倍満",
        ),
        (
            "1p1p1p2p2p2p3p3p3p5p ツモ5P ポン4p4p4p",
            Context(),
            "東場 東家 \n"
            "1p1p1p2p2p2p3p3p3p5p ポン4p4p4p ツモ5P\n"
            "(4p4p4p 1p1p1p 2p2p2p 3p3p3p 5p5P 待ち: 単騎)\n"
            "1翻 ドラ\n"
            "2翻 三暗刻\n"
            "2翻 対々和\n"
            "5翻 清一色\n"
            "10翻 24000点 倍満",
        ),
        (
            "5s6s7s4m5m6m4p4p4p5p6p西西 ロン西",
            Context(place=Direction.EAST, player=Direction.WEST),
            "東場 西家 \n"
            "5s6s7s4m5m6m4p4p4p5p6p西西 ロン西\n"
            "(西西西 5s6s7s 4m5m6m 4p5p6p 4p4p 待ち: シャンポン)\n"
            "1翻 役牌\n"
            "1翻40符 1300点",
        ),
        (
            "1s2s3s4s5s6s6s7s8s8s9s西西 ロン7s ドラ1s中6s2p",
            Context(),
            "東場 東家 \n"
            "1s2s3s4s5s6s6s7s8s8s9s西西 ロン7s\n"
            "(6s7s8s 1s2s3s 4s5s6s 7s8s9s 西西 待ち: カンチャン)\n"
            "2翻 一気通貫\n"
            "3翻 混一色\n"
            "3翻 ドラ\n"
            "8翻 24000点 倍満",
        ),
    ],
)
def test_judge_renders_best_reading(text, context, expected):
    assert judged_text(text, context) == expected


def test_seven_pairs():
    context = Context(player=Direction.SOUTH, player_name="Alice")
    assert judged_text("1s1s3m3m5p5p7s7s東東白白中 ロン中", context) == (
        "東場 南家 Alice\n"
        "1s1s7s7s3m3m5p5p東東白白中 ロン中\n"
        "2翻 七対子\n"
        "2翻25符 1600点"
    )


def test_multiple_limit_hands_add_up():
    assert judged_text("白白白發發發中中中東東東南 ツモ南") == (
        "東場 東家 \n"
        "東東東南白白白發發發中中中 ツモ南\n"
        "(東東東 白白白 發發發 中中中 南南 待ち: 単騎)\n"
        "13翻 四暗刻単騎\n"
        "13翻 大三元\n"
        "13翻 字一色\n"
        "144000点 トリプル役満"
    )


def test_declared_limit_hand_hides_other_forms():
    context = Context(lucky_forms=(FormKind.TIANHE,))
    result = judge(Tilesets.parse("1m2m3m4p5p6p7s8s9s東東東2p ツモ2p", context))
    assert result is not None
    assert [form.kind for form in result.forms] == [FormKind.TIANHE]
    assert result.lines()[-1] == "48000点 役満"


def test_hand_without_forms_does_not_score():
    context = Context(place=Direction.SOUTH, player=Direction.SOUTH)
    assert judge(Tilesets.parse("1m2m3m4p5p6p7s8s9s東東東2p ロン2p", context)) is None


def test_dora_alone_does_not_score():
    context = Context(place=Direction.SOUTH, player=Direction.SOUTH)
    assert judge(Tilesets.parse("1m2m3m4p5p6p7s8s9s東東東2p ロン2p ドラ1m", context)) is None


def test_non_winning_hand_does_not_score():
    assert judge(Tilesets.parse("1s2s4s5s7s8s1m2m4m5m7m8m東 ロン東")) is None
    assert judge_all(Tilesets.parse("1s2s4s5s7s8s1m2m4m5m7m8m東 ロン東")) == []


def test_judge_all_lists_whole_hand_shapes_last():
    candidates = judge_all(Tilesets.parse("1p1p2p2p3p3p4p4p5p5p6p6p7p ツモ7p"))
    assert candidates[-1].agari is None
    assert [form.kind for form in candidates[-1].forms][-1] == FormKind.QINGYISE
    assert FormKind.QIDUIZI in [form.kind for form in candidates[-1].forms]
    assert all(candidate.agari is not None for candidate in candidates[:-1])


def test_fix_forms_sorts_and_keeps_only_limit_hands():
    forms = [Form(FormKind.QINGYISE), Form(FormKind.PINGHE)]
    assert [form.kind for form in fix_forms(forms)] == [FormKind.PINGHE, FormKind.QINGYISE]

    forms.append(Form(FormKind.JIULIANBAODENG))
    assert fix_forms(forms) == [Form(FormKind.JIULIANBAODENG)]


def test_judge_is_deterministic():
    text = "1p1p2p2p3p3p4p4p5p5p6p6p7p ツモ7p"
    first = judge(Tilesets.parse(text))
    second = judge(Tilesets.parse(text))
    assert str(first) == str(second)
    assert first.point == second.point


def test_four_kans():
    result = judge(Tilesets.parse("1s 暗槓2s2s2s2s 暗槓3m3m3m3m 明槓4p4p4p4p 明槓東東東東 ツモ1s"))
    assert result is not None
    assert [form.kind for form in result.forms] == [FormKind.SIGANGZI]
    assert result.lines()[-2:] == ["13翻 四槓子", "48000点 役満"]


def test_four_concealed_triplets_on_shuangpeng():
    result = judge(Tilesets.parse("1p1p1p2p2p2p3p3p3p4p4p5p5p ツモ5p"))
    assert result is not None
    assert [form.name for form in result.forms] == ["四暗刻"]
    assert result.lines()[-2:] == ["13翻 四暗刻", "48000点 役満"]
