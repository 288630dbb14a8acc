import logging

from src.clients.searchguard_client import SearchGuardClient
from src.services.exceptions import RoleOperationError

logger = logging.getLogger("provisioner.roles")


class RoleManager:
    """
    프로젝트마다 같은 이름의 SearchGuard 역할을 관리합니다.

    역할 생성/삭제 실패는 보안상 불일치(권한 누락 또는 남은 권한)이므로 항상 예외로 전파합니다.
    """

    def __init__(self, searchguard: SearchGuardClient):
        self.searchguard = searchguard

    @staticmethod
    def role_body(project_name: str, tenant_name: str) -> dict:
        return {
            "indices": {
                f"*-{project_name}-*": {"*": ["READ"]},
            },
            "tenants": {
                tenant_name: "RW",
            },
        }

    def create_role(self, project_name: str, tenant_name: str):
        result = self.searchguard.put_role(project_name, self.role_body(project_name, tenant_name))
        if not result.ok:
            logger.error(f"SearchGuard create role error: {result.describe()}")
            raise RoleOperationError(f"SearchGuard create role error: {result.describe()}") from result.error
        logger.debug(f'Created SearchGuard role "{project_name}" for tenant "{tenant_name}"')

    def delete_role(self, project_name: str):
        result = self.searchguard.delete_role(project_name)
        if not result.ok:
            logger.error(f"SearchGuard delete role error: {result.describe()}")
            raise RoleOperationError(f"SearchGuard delete role error: {result.describe()}") from result.error
        logger.debug(f'Deleted SearchGuard role "{project_name}"')
