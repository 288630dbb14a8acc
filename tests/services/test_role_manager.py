# tests/services/test_role_manager.py
import pytest
from unittest.mock import MagicMock

from src.clients.result import CallResult, Outcome
from src.clients.searchguard_client import SearchGuardClient
from src.services.exceptions import RoleOperationError
from src.services.role_manager import RoleManager


@pytest.fixture
def mock_searchguard() -> MagicMock:
    """SearchGuardClient에 대한 모의 객체. 기본적으로 모든 호출이 성공합니다."""
    client = MagicMock(spec=SearchGuardClient)
    client.put_role.return_value = CallResult(Outcome.SUCCESS)
    client.delete_role.return_value = CallResult(Outcome.SUCCESS)
    return client

@pytest.fixture
def role_manager(mock_searchguard) -> RoleManager:
    return RoleManager(mock_searchguard)


class TestRoleManager:
    def test_create_role_grants_project_indices_and_tenant(self, role_manager, mock_searchguard):
        """역할은 프로젝트 인덱스 읽기와 고객 테넌트 읽기/쓰기 권한을 가져야 합니다."""
        role_manager.create_role("shop", "acme")

        mock_searchguard.put_role.assert_called_once_with("shop", {
            "indices": {"*-shop-*": {"*": ["READ"]}},
            "tenants": {"acme": "RW"},
        })

    @pytest.mark.parametrize("outcome", [Outcome.CONFLICT, Outcome.NOT_FOUND, Outcome.FATAL])
    def test_create_role_failure_is_fatal(self, role_manager, mock_searchguard, outcome):
        """역할 생성은 어떤 실패든 예외로 전파되어야 합니다. (중복도 무시하지 않음)"""
        mock_searchguard.put_role.return_value = CallResult(outcome, error=RuntimeError("500"))

        with pytest.raises(RoleOperationError, match="create role"):
            role_manager.create_role("shop", "acme")

    def test_delete_role(self, role_manager, mock_searchguard):
        role_manager.delete_role("shop")
        mock_searchguard.delete_role.assert_called_once_with("shop")

    def test_delete_role_failure_is_fatal(self, role_manager, mock_searchguard):
        mock_searchguard.delete_role.return_value = CallResult(Outcome.FATAL, error=RuntimeError("timeout"))

        with pytest.raises(RoleOperationError, match="delete role"):
            role_manager.delete_role("shop")
