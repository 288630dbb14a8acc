# tests/repositories/test_sqlalchemy_project_repository.py
from datetime import datetime, timedelta

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from src.database import models
from src.repositories.filters import AccessScope, CreatedAfter, GitUrlEquals
from src.repositories.sqlalchemy.sqlalchemy_project_repository import SqlalchemyProjectRepository
from src.services.exceptions import PatchEmptyError

BASE_FIELDS = {"customer_id": 7, "git_url": "git://x", "openshift": 1}


@pytest.fixture
def project_repo(db_session) -> SqlalchemyProjectRepository:
    return SqlalchemyProjectRepository(db_session)


def make_project(repo, name, **overrides):
    fields = dict(BASE_FIELDS, name=name)
    fields.update(overrides)
    return repo.create(fields)


# ===================================================================
#  생성 (create) 테스트
# ===================================================================
class TestCreate:
    def test_create_applies_defaults(self, project_repo, customers):
        """생략된 필드에 플랫폼 기본값이 채워지는지 테스트합니다."""
        project = make_project(project_repo, "acme-site")

        assert project.id is not None
        assert project.active_systems_deploy == "lagoon_openshiftBuildDeploy"
        assert project.active_systems_promote == "lagoon_openshiftBuildDeploy"
        assert project.active_systems_remove == "lagoon_openshiftRemove"
        assert project.branches == "true"
        assert project.pullrequests == "true"
        assert project.auto_idle is True
        assert project.storage_calc is True
        assert project.development_environments_limit == 5
        assert project.subfolder is None
        assert project.openshift_project_pattern is None
        assert project.production_environment is None

    def test_create_keeps_explicit_false(self, project_repo, customers):
        """명시적으로 전달한 False 값은 기본값으로 덮어쓰지 않아야 합니다."""
        project = make_project(project_repo, "idle-off", auto_idle=False, development_environments_limit=2)

        assert project.auto_idle is False
        assert project.development_environments_limit == 2

    def test_create_duplicate_name_rolls_back(self, project_repo, customers):
        """중복 이름은 저장소의 유니크 제약으로 거부되고, 세션은 계속 사용할 수 있어야 합니다."""
        make_project(project_repo, "dup")

        with pytest.raises(IntegrityError):
            make_project(project_repo, "dup")

        assert project_repo.list_all_names() == ["dup"]


# ===================================================================
#  조회 (find / list) 테스트
# ===================================================================
class TestQueries:
    def test_scope_limits_visible_projects(self, project_repo, customers):
        """AccessScope는 '허용 고객 OR 허용 프로젝트' 조건으로 동작해야 합니다."""
        a = make_project(project_repo, "a", customer_id=7)
        b = make_project(project_repo, "b", customer_id=8)
        c = make_project(project_repo, "c", customer_id=8)

        scope = AccessScope(customers=frozenset({7}), projects=frozenset({c.id}))
        visible = project_repo.list([scope])

        assert [p.name for p in visible] == ["a", "c"]
        assert project_repo.find_by_name("b", scope=scope) is None
        assert project_repo.find_by_name("b").id == b.id
        assert project_repo.find_by_id(a.id, scope=scope).name == "a"

    def test_empty_scope_sees_nothing(self, project_repo, customers):
        make_project(project_repo, "a")
        scope = AccessScope(customers=frozenset(), projects=frozenset())

        assert project_repo.list([scope]) == []

    def test_list_combines_filters_with_and(self, project_repo, customers):
        make_project(project_repo, "a", git_url="git://a")
        make_project(project_repo, "b", git_url="git://b")

        yesterday = datetime.now() - timedelta(days=1)
        result = project_repo.list([CreatedAfter(yesterday), GitUrlEquals("git://b"), None])

        assert [p.name for p in result] == ["b"]
        assert project_repo.list([CreatedAfter(datetime.now() + timedelta(days=1))]) == []

    def test_find_by_git_url_and_environment(self, project_repo, db_session, customers):
        project = make_project(project_repo, "envs", git_url="git://envs")
        env = models.Environment(name="main", project_id=project.id)
        db_session.add(env)
        db_session.commit()

        assert project_repo.find_by_git_url("git://envs").id == project.id
        assert project_repo.find_by_environment_id(env.id).id == project.id
        assert project_repo.find_by_environment_id(env.id, scope=AccessScope(frozenset({8}), frozenset())) is None


# ===================================================================
#  수정/삭제 테스트
# ===================================================================
class TestMutations:
    def test_update_changes_only_given_fields(self, project_repo, customers):
        project = make_project(project_repo, "old")

        project_repo.update(project.id, {"name": "new", "branches": "^main$"})

        updated = project_repo.find_by_id(project.id)
        assert updated.name == "new"
        assert updated.branches == "^main$"
        assert updated.git_url == "git://x"

    def test_update_rejects_empty_patch(self, project_repo, customers):
        project = make_project(project_repo, "p")

        with pytest.raises(PatchEmptyError, match="at least one field"):
            project_repo.update(project.id, {})

    def test_delete_by_id(self, project_repo, customers):
        project = make_project(project_repo, "gone")

        assert project_repo.delete_by_id(project.id) is True
        assert project_repo.find_by_id(project.id) is None
        assert project_repo.delete_by_id(project.id) is False

    def test_delete_all(self, project_repo, db_session, customers):
        first = make_project(project_repo, "one")
        make_project(project_repo, "two")
        db_session.add(models.Environment(name="main", project_id=first.id))
        db_session.commit()

        assert project_repo.list_all_names() == ["one", "two"]
        assert project_repo.delete_all() == 2
        assert project_repo.list_all_names() == []
        assert db_session.query(models.Environment).count() == 0

    def test_update_to_duplicate_name_rolls_back(self, project_repo, db_session, customers):
        """유니크 제약 위반으로 수정이 실패하면 세션을 롤백해서 이후 작업이 가능해야 합니다."""
        first = make_project(project_repo, "first")
        make_project(project_repo, "second")

        with pytest.raises(IntegrityError):
            project_repo.update(first.id, {"name": "second"})

        assert project_repo.list_all_names() == ["first", "second"]
        project_repo.update(first.id, {"name": "renamed"})
        assert project_repo.find_by_id(first.id).name == "renamed"

    def test_delete_all_failure_rolls_back(self, project_repo, db_session, customers, monkeypatch):
        """일괄 삭제 도중 커밋이 실패하면 삭제한 행이 모두 되돌려져야 합니다."""
        make_project(project_repo, "one")
        make_project(project_repo, "two")

        def failing_commit():
            raise OperationalError("COMMIT", {}, Exception("disk I/O error"))

        monkeypatch.setattr(db_session, "commit", failing_commit)
        with pytest.raises(OperationalError):
            project_repo.delete_all()
        monkeypatch.undo()

        assert project_repo.list_all_names() == ["one", "two"]


# ===================================================================
#  고객 멤버십만으로 접근하는 사용자 조회 테스트
# ===================================================================
class TestCustomerOnlyUsers:
    def test_excludes_users_with_direct_grant(self, project_repo, db_session, customers):
        """
        u1은 프로젝트 직접 권한이 있고, u2는 고객 멤버십만 있습니다.
        고객 멤버십만으로 접근하는 사용자는 u2뿐이어야 합니다.
        """
        # === Arrange ===
        project = make_project(project_repo, "shop", customer_id=7)
        u1 = models.User(id=1, email="u1@example.com")
        u2 = models.User(id=2, email="u2@example.com")
        u3 = models.User(id=3, email="u3@example.com")
        db_session.add_all([u1, u2, u3])
        db_session.add_all([
            models.CustomerUser(customer_id=7, user_id=1),
            models.CustomerUser(customer_id=7, user_id=2),
            models.CustomerUser(customer_id=8, user_id=3),
            models.ProjectUser(project_id=project.id, user_id=1),
        ])
        db_session.commit()

        # === Act ===
        old_customer_users = project_repo.list_customer_only_users(project.id, 7)
        new_customer_users = project_repo.list_customer_only_users(project.id, 8)

        # === Assert ===
        assert [u.email for u in old_customer_users] == ["u2@example.com"]
        assert [u.email for u in new_customer_users] == ["u3@example.com"]
