from contextlib import contextmanager
from typing import List, Optional, Dict, Any, Sequence
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from src import config
from src.database import models
from src.repositories.filters import AccessScope, GitUrlEquals, NameEquals, ProjectFilter, combine
from src.repositories.interfaces import IProjectRepository
from src.services.exceptions import PatchEmptyError

# 입력에서 생략된 필드에 채워지는 값
PROJECT_DEFAULTS = {
    "subfolder": None,
    "openshift_project_pattern": None,
    "active_systems_deploy": config.DEFAULT_DEPLOY_TASK,
    "active_systems_promote": config.DEFAULT_DEPLOY_TASK,
    "active_systems_remove": config.DEFAULT_REMOVE_TASK,
    "branches": "true",
    "pullrequests": "true",
    "production_environment": None,
    "auto_idle": True,
    "storage_calc": True,
    "development_environments_limit": config.DEFAULT_DEVELOPMENT_ENVIRONMENTS_LIMIT,
}

class SqlalchemyProjectRepository(IProjectRepository):
    def __init__(self, db_session: Session):
        self.db = db_session

    def create(self, fields: Dict[str, Any]) -> models.Project:
        values = dict(PROJECT_DEFAULTS)
        values.update({k: v for k, v in fields.items() if v is not None})
        project_model = models.Project(**values)
        with self._transaction():
            self.db.add(project_model)
        self.db.refresh(project_model)
        return project_model

    def find_by_id(self, project_id: int, scope: Optional[AccessScope] = None) -> Optional[models.Project]:
        return self.db.query(models.Project).filter(models.Project.id == project_id, combine([scope])).first()

    def find_by_name(self, name: str, scope: Optional[AccessScope] = None) -> Optional[models.Project]:
        return self.find_first([NameEquals(name), scope])

    def find_by_git_url(self, git_url: str, scope: Optional[AccessScope] = None) -> Optional[models.Project]:
        return self.find_first([GitUrlEquals(git_url), scope])

    def find_by_environment_id(self, environment_id: int, scope: Optional[AccessScope] = None) -> Optional[models.Project]:
        return (
            self.db.query(models.Project)
            .join(models.Environment, models.Environment.project_id == models.Project.id)
            .filter(models.Environment.id == environment_id, combine([scope]))
            .first()
        )

    def find_first(self, filters: Sequence[Optional[ProjectFilter]]) -> Optional[models.Project]:
        return self.db.query(models.Project).filter(combine(filters)).first()

    def list(self, filters: Sequence[Optional[ProjectFilter]] = ()) -> List[models.Project]:
        return self.db.query(models.Project).filter(combine(filters)).order_by(models.Project.id.asc()).all()

    def list_all_names(self) -> List[str]:
        return [row[0] for row in self.db.query(models.Project.name).order_by(models.Project.id.asc()).all()]

    def update(self, project_id: int, patch: Dict[str, Any]) -> None:
        if not patch:
            raise PatchEmptyError("patch must contain at least one field")
        with self._transaction():
            self.db.query(models.Project).filter(models.Project.id == project_id).update(patch, synchronize_session="fetch")

    def delete_by_id(self, project_id: int) -> bool:
        project = self.find_by_id(project_id)
        if project:
            with self._transaction():
                self.db.delete(project)
            return True
        return False

    def delete_all(self) -> int:
        with self._transaction():
            # 프로젝트를 참조하는 행을 먼저 정리합니다.
            self.db.query(models.ProjectUser).delete(synchronize_session=False)
            self.db.query(models.Environment).delete(synchronize_session=False)
            deleted = self.db.query(models.Project).delete(synchronize_session=False)
        self.db.expire_all()
        return deleted

    def list_customer_only_users(self, project_id: int, customer_id: int) -> List[models.User]:
        direct_user_ids = select(models.ProjectUser.user_id).where(models.ProjectUser.project_id == project_id)
        return (
            self.db.query(models.User)
            .join(models.CustomerUser, models.CustomerUser.user_id == models.User.id)
            .filter(
                models.CustomerUser.customer_id == customer_id,
                models.User.id.not_in(direct_user_ids),
            )
            .order_by(models.User.id.asc())
            .all()
        )

    @contextmanager
    def _transaction(self):
        """블록 안의 쓰기 작업을 커밋하고, 실패하면 세션을 롤백한 뒤 예외를 다시 던집니다."""
        try:
            yield
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
