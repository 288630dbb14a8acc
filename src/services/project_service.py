import logging
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError

from src.database import models
from src.repositories.filters import CreatedAfter, GitUrlEquals
from src.repositories.interfaces import ICustomerRepository, IProjectRepository
from src.services.access_policy import (
    Credentials, authorize_create, authorize_project, read_scope, require_admin
)
from src.services.exceptions import (
    CollaboratorError, CustomerNotFoundError, PatchEmptyError,
    ProjectNotFoundError, ProjectOperationError, ValidationError
)
from src.services.group_manager import GroupManager
from src.services.index_pattern_service import IndexPatternService
from src.services.role_manager import RoleManager

logger = logging.getLogger("provisioner.projects")

SUCCESS = "success"
REQUIRED_FIELDS = ("name", "customer_id", "git_url", "openshift")


class ProjectService:
    """
    프로젝트의 생성/수정/삭제를 데이터베이스, Keycloak, SearchGuard, Kibana에 걸쳐 조율합니다.

    각 단계는 순서대로 실행되며, 치명적인 실패가 발생하면 남은 단계를 중단하고 예외를 전파합니다.
    이미 완료된 단계는 되돌리지 않습니다. (보상 트랜잭션 없음)
    """

    def __init__(
        self,
        project_repo: IProjectRepository,
        customer_repo: ICustomerRepository,
        group_manager: GroupManager,
        role_manager: RoleManager,
        index_pattern_service: IndexPatternService,
    ):
        """
        ProjectService를 초기화합니다.

        Args:
            project_repo: 프로젝트 데이터에 접근하기 위한 리포지토리.
            customer_repo: 고객(테넌트 이름) 조회용 리포지토리.
            group_manager: Keycloak 그룹 관리자.
            role_manager: SearchGuard 역할 관리자.
            index_pattern_service: Kibana 인덱스 패턴 설정 (실패해도 무시됨).
        """
        self.project_repo = project_repo
        self.customer_repo = customer_repo
        self.group_manager = group_manager
        self.role_manager = role_manager
        self.index_pattern_service = index_pattern_service

    # ------------------------------------------------------------------
    # 조회 (권한 범위로 필터링되며, 거부 대신 빈 결과를 반환)
    # ------------------------------------------------------------------

    def get_all_projects(
        self,
        credentials: Credentials,
        created_after: Optional[datetime] = None,
        git_url: Optional[str] = None,
    ) -> List[models.Project]:
        filters = [
            CreatedAfter(created_after) if created_after else None,
            GitUrlEquals(git_url) if git_url else None,
            read_scope(credentials),
        ]
        return self.project_repo.list(filters)

    def get_project_by_id(self, project_id: int, credentials: Credentials) -> Optional[models.Project]:
        return self.project_repo.find_by_id(project_id, scope=read_scope(credentials))

    def get_project_by_name(self, name: str, credentials: Credentials) -> Optional[models.Project]:
        return self.project_repo.find_by_name(name, scope=read_scope(credentials))

    def get_project_by_git_url(self, git_url: str, credentials: Credentials) -> Optional[models.Project]:
        return self.project_repo.find_by_git_url(git_url, scope=read_scope(credentials))

    def get_project_by_environment_id(self, environment_id: int, credentials: Credentials) -> Optional[models.Project]:
        return self.project_repo.find_by_environment_id(environment_id, scope=read_scope(credentials))

    # ------------------------------------------------------------------
    # 생성/수정/삭제
    # ------------------------------------------------------------------

    def create_project(self, fields: Dict[str, Any], credentials: Credentials) -> models.Project:
        """
        새로운 프로젝트를 생성하고 그룹, 역할, 인덱스 패턴을 준비합니다.

        Args:
            fields: 프로젝트 입력 값. name, customer_id, git_url, openshift는 필수입니다.
            credentials: 호출자의 자격 증명.

        Returns:
            생성된 프로젝트 모델.

        Raises:
            UnauthorizedError: 비관리자가 허용되지 않은 고객에 프로젝트를 만들려 할 때.
            ValidationError: 필수 필드가 없거나 알 수 없는 필드가 있을 때.
            ProjectOperationError: 데이터베이스 저장에 실패했을 때.
            GroupOperationError: 중복 외의 이유로 그룹 생성에 실패했을 때.
            CustomerNotFoundError: 프로젝트의 고객을 찾을 수 없을 때.
            RoleOperationError: SearchGuard 역할 생성에 실패했을 때. (이전 단계는 유지됨)
        """
        authorize_create(credentials, fields.get("customer_id"))
        values = self._clean_fields(fields)
        missing = [f for f in REQUIRED_FIELDS if values.get(f) is None]
        if missing:
            raise ValidationError(f"Missing required field(s): {', '.join(missing)}")

        project = self._store("create project", self.project_repo.create, values)
        name = project.name

        self.group_manager.create_group(name)

        tenant = self._tenant_name(project.customer_id)
        self.role_manager.create_role(name, tenant)

        self.index_pattern_service.provision_index_patterns(name, tenant)
        self.index_pattern_service.ensure_default_index(name, tenant)

        logger.info(f"Created project '{name}' (ID: {project.id}) for customer {project.customer_id}")
        return project

    def update_project(self, project_id: int, patch: Dict[str, Any], credentials: Credentials) -> models.Project:
        """
        프로젝트를 수정하고, 이름/고객 변경을 Keycloak 그룹에 반영합니다.

        고객이 바뀌는 경우, 이전 고객 멤버십만으로 접근하던 사용자는 DB 수정 전에 그룹에서 제거하고,
        새 고객 멤버십만으로 접근하게 되는 사용자는 그룹 이름 변경 후에 추가합니다.

        Raises:
            UnauthorizedError: 비관리자가 허용되지 않은 프로젝트를 수정하려 할 때.
            PatchEmptyError: patch가 비어 있을 때.
            ProjectNotFoundError: 해당 ID의 프로젝트를 찾을 수 없을 때.
            GroupNotFoundError: 이름을 바꿀 그룹을 찾을 수 없을 때.
            CollaboratorError: 데이터베이스 또는 Keycloak 작업이 실패했을 때.
        """
        authorize_project(credentials, project_id)
        values = self._clean_fields(patch)
        if not values:
            raise PatchEmptyError("input.patch requires at least 1 attribute")

        original = self.project_repo.find_by_id(project_id)
        if not original:
            raise ProjectNotFoundError(f"Project with id '{project_id}' not found.")
        original_name = original.name
        original_customer = int(original.customer_id)

        new_name = values.get("name")
        new_customer = values.get("customer_id")
        name_changed = new_name is not None and new_name != original_name
        customer_changed = new_customer is not None and int(new_customer) != original_customer

        if customer_changed:
            self._sync_customer_only_members(project_id, original_customer, original_name, add=False)

        self._store("update project", self.project_repo.update, project_id, values)

        if name_changed:
            self.group_manager.rename_group(original_name, new_name)

        if customer_changed:
            final_name = new_name if name_changed else original_name
            self._sync_customer_only_members(project_id, int(new_customer), final_name, add=True)

        logger.info(f"Updated project {project_id}: {', '.join(sorted(values))}")
        return self.project_repo.find_by_id(project_id)

    def delete_project(self, project_name: str, credentials: Credentials) -> str:
        """
        프로젝트와 그 그룹, 역할을 삭제합니다.

        Raises:
            ProjectNotFoundError: 해당 이름의 프로젝트가 없을 때. (외부 호출 없음)
            UnauthorizedError: 비관리자가 허용되지 않은 프로젝트를 삭제하려 할 때.
            ProjectOperationError: 데이터베이스 삭제에 실패했을 때.
            RoleOperationError: SearchGuard 역할 삭제에 실패했을 때. (DB 행과 그룹은 이미 삭제됨)
        """
        project = self.project_repo.find_by_name(project_name)
        if not project:
            raise ProjectNotFoundError(f"Project '{project_name}' not found.")

        authorize_project(credentials, project.id)

        self._store("delete project", self.project_repo.delete_by_id, project.id)
        self._delete_group_quietly(project_name)
        self.role_manager.delete_role(project_name)

        logger.info(f"Deleted project '{project_name}' (ID: {project.id})")
        return SUCCESS

    def delete_all_projects(self, credentials: Credentials) -> str:
        """모든 프로젝트를 삭제합니다. 관리자 전용이며, 그룹 삭제 실패는 기록만 하고 계속 진행합니다."""
        require_admin(credentials)

        project_names = self.project_repo.list_all_names()
        deleted = self._store("delete all projects", self.project_repo.delete_all)

        for name in project_names:
            self._delete_group_quietly(name)

        logger.info(f"Deleted all projects ({deleted} rows)")
        return SUCCESS

    # ------------------------------------------------------------------
    # 내부 헬퍼
    # ------------------------------------------------------------------

    def _clean_fields(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        unknown = set(fields) - set(models.EDITABLE_FIELDS)
        if unknown:
            raise ValidationError(f"Unknown project field(s): {', '.join(sorted(unknown))}")
        return {k: v for k, v in fields.items() if v is not None}

    def _store(self, action: str, fn: Callable, *args):
        try:
            return fn(*args)
        except SQLAlchemyError as e:
            logger.error(f"Database error during {action}: {e}", exc_info=True)
            raise ProjectOperationError(f"Failed to {action}. Original error: {e}") from e

    def _tenant_name(self, customer_id: int) -> str:
        customer = self.customer_repo.find_by_id(customer_id)
        if not customer:
            raise CustomerNotFoundError(f"Customer with id '{customer_id}' not found.")
        return customer.name

    def _sync_customer_only_members(self, project_id: int, customer_id: int, group_name: str, add: bool):
        users = self.project_repo.list_customer_only_users(project_id, customer_id)
        if not users:
            return

        group_id = self.group_manager.find_group_id_by_name(group_name)
        for user in users:
            user_id = self.group_manager.find_user_id_by_username(user.email)
            if add:
                self.group_manager.add_user_to_group(user_id, group_id)
                logger.debug(f'Added Keycloak user {user.email} to group "{group_name}"')
            else:
                self.group_manager.remove_user_from_group(user_id, group_id)
                logger.debug(f'Removed Keycloak user {user.email} from group "{group_name}"')

    def _delete_group_quietly(self, name: str):
        try:
            self.group_manager.delete_group(name)
        except CollaboratorError as e:
            logger.error(f'Failed to delete Keycloak group "{name}": {e}', exc_info=True)
