from agari.repository import JudgmentRepository
from agari.schemas import JudgeRequest, JudgeResult


def judge_request(tilesets: str = "5s6s7s4m5m6m4p4p4p5p6p西西 ロン西", **kwargs) -> JudgeRequest:
    return JudgeRequest(tilesets=tilesets, place="東", player="西", **kwargs)


def judge_result(text: str = "東場 西家 \n...") -> JudgeResult:
    return JudgeResult(fan=1, fu=40, value=1300, is_parent=False, text=text)


def test_save_and_get():
    repo = JudgmentRepository(ttl_hours=1)
    judgment = repo.save(judge_request(), judge_result())
    assert repo.get(judgment.id) is judgment
    assert judgment.expires_at > judgment.created_at
    assert judgment.won
    assert judgment.text() == "東場 西家 \n..."


def test_judgment_without_winning_hand_has_no_text():
    repo = JudgmentRepository(ttl_hours=1)
    judgment = repo.save(judge_request(), None)
    assert not judgment.won
    assert judgment.text() is None


def test_find_same_request_returns_latest_identical_request():
    repo = JudgmentRepository(ttl_hours=1)
    repo.save(judge_request(), judge_result("first"))
    latest = repo.save(judge_request(), judge_result("second"))
    repo.save(judge_request(lizhi="lizhi"), judge_result("lizhi"))

    assert repo.find_same_request(judge_request()) is latest
    assert repo.find_same_request(judge_request(player_name="Bob")) is None


def test_stored_request_is_a_copy():
    repo = JudgmentRepository(ttl_hours=1)
    request = judge_request()
    judgment = repo.save(request, judge_result())
    request.player_name = "Bob"
    assert judgment.request.player_name is None


def test_expired_judgments_are_dropped():
    repo = JudgmentRepository(ttl_hours=0)
    judgment = repo.save(judge_request(), judge_result())
    assert repo.get(judgment.id) is None
    assert repo.find_same_request(judge_request()) is None
