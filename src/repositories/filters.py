"""프로젝트 조회 쿼리에 사용하는 조건(predicate) 객체들.

각 조건은 자신의 바인딩 파라미터를 가진 SQLAlchemy 표현식으로 변환되며,
리포지토리는 이를 AND로 결합합니다. 문자열 보간으로 SQL을 조립하지 않습니다.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import FrozenSet, Iterable, Optional

from sqlalchemy import and_, or_, true

from src.database import models


class ProjectFilter:
    def clause(self):
        raise NotImplementedError


@dataclass(frozen=True)
class CreatedAfter(ProjectFilter):
    created: datetime

    def clause(self):
        return models.Project.created >= self.created


@dataclass(frozen=True)
class GitUrlEquals(ProjectFilter):
    git_url: str

    def clause(self):
        return models.Project.git_url == self.git_url


@dataclass(frozen=True)
class NameEquals(ProjectFilter):
    name: str

    def clause(self):
        return models.Project.name == self.name


@dataclass(frozen=True)
class AccessScope(ProjectFilter):
    """비관리자 조회 범위: 허용된 고객의 프로젝트 또는 허용된 프로젝트."""
    customers: FrozenSet[int]
    projects: FrozenSet[int]

    def clause(self):
        return or_(
            models.Project.customer_id.in_(sorted(self.customers)),
            models.Project.id.in_(sorted(self.projects)),
        )


def combine(filters: Iterable[Optional[ProjectFilter]]):
    """None을 제외한 모든 조건을 AND로 결합합니다. 조건이 없으면 항상 참입니다."""
    clauses = [f.clause() for f in filters if f is not None]
    if not clauses:
        return true()
    return and_(*clauses)
