"""요청 단위 자격 증명(credentials)과 그에 대한 권한 판단 로직.

외부 호출이 없는 순수 함수들입니다. 생성/수정/삭제는 허용 또는 거부로 판단하고,
조회는 거부하는 대신 AccessScope 조건을 만들어 쿼리에 주입합니다.
"""
from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, Optional

from src import config
from src.repositories.filters import AccessScope
from src.services.exceptions import UnauthorizedError


@dataclass(frozen=True)
class Credentials:
    role: str
    customers: FrozenSet[int] = field(default_factory=frozenset)
    projects: FrozenSet[int] = field(default_factory=frozenset)

    def __post_init__(self):
        # 토큰에서 온 ID가 문자열일 수 있으므로 정수로 통일합니다.
        object.__setattr__(self, "customers", _to_ids(self.customers))
        object.__setattr__(self, "projects", _to_ids(self.projects))

    @property
    def is_admin(self) -> bool:
        return self.role == config.ADMIN_ROLE


def _to_ids(values: Iterable) -> FrozenSet[int]:
    return frozenset(int(v) for v in values)


def is_allowed(credentials: Credentials, customer_id: Optional[int] = None, project_id: Optional[int] = None) -> bool:
    """
    요청한 작업의 허용 여부를 판단합니다.

    Args:
        credentials: 호출자의 자격 증명.
        customer_id: 생성 작업의 대상 고객 ID.
        project_id: 수정/삭제 작업의 대상 프로젝트 ID.

    Returns:
        관리자이거나, 지정된 대상이 허용 집합에 포함되어 있으면 True.
    """
    if credentials.is_admin:
        return True
    if customer_id is not None:
        return int(customer_id) in credentials.customers
    if project_id is not None:
        return int(project_id) in credentials.projects
    return False


def authorize_create(credentials: Credentials, customer_id: int):
    if not is_allowed(credentials, customer_id=customer_id):
        raise UnauthorizedError("Project creation unauthorized.")


def authorize_project(credentials: Credentials, project_id: int):
    if not is_allowed(credentials, project_id=project_id):
        raise UnauthorizedError("Unauthorized.")


def require_admin(credentials: Credentials):
    if not credentials.is_admin:
        raise UnauthorizedError("Unauthorized.")


def read_scope(credentials: Credentials) -> Optional[AccessScope]:
    """관리자는 None(제한 없음), 그 외에는 '허용 고객 OR 허용 프로젝트' 조건을 반환합니다."""
    if credentials.is_admin:
        return None
    return AccessScope(customers=credentials.customers, projects=credentials.projects)
