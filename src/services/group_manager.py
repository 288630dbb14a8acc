import logging

from src.clients.keycloak_client import KeycloakClient
from src.services.exceptions import GroupNotFoundError, GroupOperationError, IdentityUserNotFoundError

logger = logging.getLogger("provisioner.groups")


class GroupManager:
    """프로젝트 이름과 Keycloak 그룹을 1:1로 유지합니다."""

    def __init__(self, keycloak: KeycloakClient):
        self.keycloak = keycloak

    def create_group(self, name: str) -> bool:
        """
        프로젝트 이름과 같은 그룹을 생성합니다. 이미 존재하면 경고만 남기고 넘어갑니다.

        Returns:
            새로 생성했으면 True, 이미 존재했으면 False.

        Raises:
            GroupOperationError: 중복 외의 이유로 생성에 실패했을 때.
        """
        result = self.keycloak.create_group(name)
        if result.is_conflict:
            logger.warning(f'Failed to create already existing Keycloak group "{name}"')
            return False
        if not result.ok:
            logger.error(f'Keycloak create group "{name}" error: {result.describe()}')
            raise GroupOperationError(f'Keycloak create group "{name}" error: {result.describe()}') from result.error
        logger.debug(f'Created Keycloak group with name "{name}"')
        return True

    def find_group_id_by_name(self, name: str) -> str:
        """
        이름이 정확히 일치하는 그룹의 ID를 반환합니다.

        Raises:
            GroupNotFoundError: 해당 이름의 그룹이 없을 때.
            GroupOperationError: 조회 자체가 실패했을 때.
        """
        result = self.keycloak.search_groups(name)
        if not result.ok:
            raise GroupOperationError(f'Keycloak group lookup "{name}" error: {result.describe()}') from result.error
        # search는 부분 일치이므로 정확히 같은 이름만 고릅니다.
        for group in result.data or []:
            if group.get("name") == name:
                return group["id"]
        raise GroupNotFoundError(f'Keycloak group "{name}" not found.')

    def rename_group(self, current_name: str, new_name: str):
        group_id = self.find_group_id_by_name(current_name)
        result = self.keycloak.rename_group(group_id, new_name)
        if not result.ok:
            raise GroupOperationError(
                f'Keycloak rename group "{current_name}" to "{new_name}" error: {result.describe()}'
            ) from result.error
        logger.debug(f'Renamed Keycloak group {group_id} from "{current_name}" to "{new_name}"')

    def delete_group(self, name: str) -> bool:
        """
        그룹을 삭제합니다. 그룹이 없으면 이미 삭제된 것으로 보고 성공 처리합니다.

        Returns:
            실제로 삭제했으면 True, 원래 없었으면 False.

        Raises:
            GroupOperationError: 조회 또는 삭제에 실패했을 때.
        """
        try:
            group_id = self.find_group_id_by_name(name)
        except GroupNotFoundError:
            logger.debug(f'Keycloak group "{name}" does not exist, nothing to delete')
            return False

        result = self.keycloak.delete_group(group_id)
        if result.is_not_found:
            logger.debug(f'Keycloak group "{name}" was already deleted')
            return False
        if not result.ok:
            raise GroupOperationError(f'Keycloak delete group "{name}" error: {result.describe()}') from result.error
        logger.debug(f'Deleted Keycloak group "{name}"')
        return True

    def find_user_id_by_username(self, username: str) -> str:
        result = self.keycloak.find_users(username)
        if not result.ok:
            raise GroupOperationError(f'Keycloak user lookup "{username}" error: {result.describe()}') from result.error
        for user in result.data or []:
            if user.get("username") == username:
                return user["id"]
        raise IdentityUserNotFoundError(f'Keycloak user "{username}" not found.')

    def add_user_to_group(self, user_id: str, group_id: str):
        result = self.keycloak.add_user_to_group(user_id, group_id)
        if not result.ok:
            raise GroupOperationError(
                f"Keycloak add user {user_id} to group {group_id} error: {result.describe()}"
            ) from result.error

    def remove_user_from_group(self, user_id: str, group_id: str):
        result = self.keycloak.remove_user_from_group(user_id, group_id)
        if not result.ok:
            raise GroupOperationError(
                f"Keycloak remove user {user_id} from group {group_id} error: {result.describe()}"
            ) from result.error
