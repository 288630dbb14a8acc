# src/app.py
from contextlib import contextmanager
from typing import Iterator, Optional

from sqlalchemy.orm import Session

from src.clients.keycloak_client import KeycloakClient
from src.clients.kibana_client import KibanaClient
from src.clients.searchguard_client import SearchGuardClient
from src.database.database import SessionLocal
from src.repositories.sqlalchemy.sqlalchemy_customer_repository import SqlalchemyCustomerRepository
from src.repositories.sqlalchemy.sqlalchemy_project_repository import SqlalchemyProjectRepository
from src.services.group_manager import GroupManager
from src.services.index_pattern_service import IndexPatternService
from src.services.project_service import ProjectService
from src.services.role_manager import RoleManager

# --------------------------------------------------------------------------
## 의존성 조립 (Repositories + Clients -> Services)
# --------------------------------------------------------------------------

def build_project_service(
    db_session: Session,
    keycloak: Optional[KeycloakClient] = None,
    searchguard: Optional[SearchGuardClient] = None,
    kibana: Optional[KibanaClient] = None,
) -> ProjectService:
    """
    하나의 DB 세션과 외부 서비스 클라이언트로 ProjectService를 조립합니다.
    클라이언트를 넘기지 않으면 설정(config) 값으로 새로 생성합니다.
    """
    project_repo = SqlalchemyProjectRepository(db_session)
    customer_repo = SqlalchemyCustomerRepository(db_session)

    return ProjectService(
        project_repo=project_repo,
        customer_repo=customer_repo,
        group_manager=GroupManager(keycloak or KeycloakClient()),
        role_manager=RoleManager(searchguard or SearchGuardClient()),
        index_pattern_service=IndexPatternService(kibana or KibanaClient()),
    )


@contextmanager
def project_service_session(
    keycloak: Optional[KeycloakClient] = None,
    searchguard: Optional[SearchGuardClient] = None,
    kibana: Optional[KibanaClient] = None,
) -> Iterator[ProjectService]:
    """
    요청 하나 동안 사용할 ProjectService를 제공합니다.
    끝나면 DB 세션과 여기서 생성한 클라이언트(HTTP 연결 풀, 토큰 캐시)를 닫습니다.
    주입받은 클라이언트는 호출자가 관리하므로 닫지 않습니다.
    """
    owned = []
    if keycloak is None:
        keycloak = KeycloakClient()
        owned.append(keycloak)
    if searchguard is None:
        searchguard = SearchGuardClient()
        owned.append(searchguard)
    if kibana is None:
        kibana = KibanaClient()
        owned.append(kibana)

    db_session = SessionLocal()
    try:
        yield build_project_service(db_session, keycloak=keycloak, searchguard=searchguard, kibana=kibana)
    finally:
        db_session.close()
        for client in owned:
            client.close()
