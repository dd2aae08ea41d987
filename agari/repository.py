from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from threading import Lock
from uuid import UUID, uuid4

from agari.schemas import JudgeRequest, JudgeResult


@dataclass(frozen=True)
class Judgment:
    """A judged request as it was answered."""

    id: UUID
    request: JudgeRequest
    result: JudgeResult | None
    created_at: datetime
    expires_at: datetime

    @property
    def won(self) -> bool:
        return self.result is not None

    def text(self) -> str | None:
        return self.result.text if self.result else None


class JudgmentRepository:
    """Judgments kept for a while so clients can fetch them again by id.

    An identical request asked again while its judgment is still alive is
    answered from the stored result instead of being judged again.
    """

    def __init__(self, ttl_hours: int = 24) -> None:
        self._ttl = timedelta(hours=ttl_hours)
        self._judgments: dict[UUID, Judgment] = {}
        self._lock = Lock()

    def _utcnow(self) -> datetime:
        return datetime.now(timezone.utc)

    def _drop_expired(self, now: datetime) -> None:
        expired = [judge_id for judge_id, judgment in self._judgments.items() if judgment.expires_at <= now]
        for judge_id in expired:
            del self._judgments[judge_id]

    def save(self, request: JudgeRequest, result: JudgeResult | None) -> Judgment:
        with self._lock:
            now = self._utcnow()
            self._drop_expired(now)
            judgment = Judgment(
                id=uuid4(),
                request=request.model_copy(deep=True),
                result=result,
                created_at=now,
                expires_at=now + self._ttl,
            )
            self._judgments[judgment.id] = judgment
            return judgment

    def get(self, judge_id: UUID) -> Judgment | None:
        with self._lock:
            self._drop_expired(self._utcnow())
            return self._judgments.get(judge_id)

    def find_same_request(self, request: JudgeRequest) -> Judgment | None:
        """Latest live judgment of an identical request."""
        with self._lock:
            self._drop_expired(self._utcnow())
            for judgment in reversed(self._judgments.values()):
                if judgment.request == request:
                    return judgment
            return None
