"""외부 시스템 호출 결과를 상태 코드 대신 태그로 표현합니다."""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class Outcome(Enum):
    SUCCESS = "success"
    CONFLICT = "conflict"  # 이미 존재함 (409)
    NOT_FOUND = "not_found"  # 대상 없음 (404)
    FATAL = "fatal"  # 그 외 모든 실패 (연결 오류, 타임아웃 포함)


@dataclass
class CallResult:
    outcome: Outcome
    data: Any = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.outcome is Outcome.SUCCESS

    @property
    def is_conflict(self) -> bool:
        return self.outcome is Outcome.CONFLICT

    @property
    def is_not_found(self) -> bool:
        return self.outcome is Outcome.NOT_FOUND

    @property
    def is_fatal(self) -> bool:
        return self.outcome is Outcome.FATAL

    def describe(self) -> str:
        return str(self.error) if self.error else self.outcome.value
