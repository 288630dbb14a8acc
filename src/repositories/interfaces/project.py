from abc import ABC, abstractmethod
from typing import List, Optional, Dict, Any, Sequence
from src.database import models
from src.repositories.filters import AccessScope, ProjectFilter

class IProjectRepository(ABC):
    @abstractmethod
    def create(self, fields: Dict[str, Any]) -> models.Project:
        """
        새로운 프로젝트를 생성합니다. 생략된(None) 필드에는 플랫폼 기본값을 채웁니다.

        Args:
            fields: 프로젝트 컬럼 이름을 키로 하는 입력 값.

        Returns:
            저장된 프로젝트 모델.
        """
        pass

    @abstractmethod
    def find_by_id(self, project_id: int, scope: Optional[AccessScope] = None) -> Optional[models.Project]:
        """고유 ID로 특정 프로젝트를 조회합니다."""
        pass

    @abstractmethod
    def find_by_name(self, name: str, scope: Optional[AccessScope] = None) -> Optional[models.Project]:
        """이름으로 특정 프로젝트를 조회합니다."""
        pass

    @abstractmethod
    def find_by_git_url(self, git_url: str, scope: Optional[AccessScope] = None) -> Optional[models.Project]:
        """git 저장소 URL로 프로젝트를 조회합니다."""
        pass

    @abstractmethod
    def find_by_environment_id(self, environment_id: int, scope: Optional[AccessScope] = None) -> Optional[models.Project]:
        """환경(environment) ID로 해당 환경이 속한 프로젝트를 조회합니다."""
        pass

    @abstractmethod
    def find_first(self, filters: Sequence[Optional[ProjectFilter]]) -> Optional[models.Project]:
        """모든 조건을 만족하는 첫 번째 프로젝트를 조회합니다."""
        pass

    @abstractmethod
    def list(self, filters: Sequence[Optional[ProjectFilter]] = ()) -> List[models.Project]:
        """모든 조건을 만족하는 프로젝트 목록을 조회합니다."""
        pass

    @abstractmethod
    def list_all_names(self) -> List[str]:
        """모든 프로젝트의 이름 목록을 조회합니다."""
        pass

    @abstractmethod
    def update(self, project_id: int, patch: Dict[str, Any]) -> None:
        """
        프로젝트의 일부 필드를 수정합니다.

        Raises:
            PatchEmptyError: patch에 수정할 필드가 하나도 없을 때.
        """
        pass

    @abstractmethod
    def delete_by_id(self, project_id: int) -> bool:
        """특정 프로젝트를 데이터베이스에서 삭제합니다."""
        pass

    @abstractmethod
    def delete_all(self) -> int:
        """모든 프로젝트를 삭제하고 삭제된 행 수를 반환합니다."""
        pass

    @abstractmethod
    def list_customer_only_users(self, project_id: int, customer_id: int) -> List[models.User]:
        """
        고객 멤버십만으로 프로젝트에 접근하는 사용자 목록을 조회합니다.

        Args:
            project_id: 대상 프로젝트의 ID.
            customer_id: 멤버십을 확인할 고객의 ID.

        Returns:
            customer_id의 멤버이면서 project_id에 대한 직접 권한(project_users)이 없는 사용자 리스트.
        """
        pass
