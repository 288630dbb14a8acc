# src/config.py
import logging
import os

# 데이터베이스 연결 문자열 (기본값은 로컬 SQLite)
DATABASE_URL = os.environ.get("DATABASE_URL", "sqlite:///projects.db")

# Keycloak (프로젝트별 접근 그룹 관리)
KEYCLOAK_URL = os.environ.get("KEYCLOAK_URL", "http://keycloak:8080/auth")
KEYCLOAK_REALM = os.environ.get("KEYCLOAK_REALM", "lagoon")
KEYCLOAK_ADMIN_USER = os.environ.get("KEYCLOAK_ADMIN_USER", "admin")
KEYCLOAK_ADMIN_PASSWORD = os.environ.get("KEYCLOAK_ADMIN_PASSWORD", "admin")

# SearchGuard / Kibana (로그 인덱스 권한 및 인덱스 패턴)
SEARCHGUARD_URL = os.environ.get("SEARCHGUARD_URL", "http://logs-db:9200/_searchguard/api")
KIBANA_URL = os.environ.get("KIBANA_URL", "http://logs-db-ui:5601/api")
LOGSDB_ADMIN_USER = os.environ.get("LOGSDB_ADMIN_USER", "admin")
LOGSDB_ADMIN_PASSWORD = os.environ.get("LOGSDB_ADMIN_PASSWORD", "admin")

HTTP_TIMEOUT_SECONDS = float(os.environ.get("HTTP_TIMEOUT_SECONDS", "30"))
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

# 플랫폼 기본값
ADMIN_ROLE = "admin"
DEFAULT_DEPLOY_TASK = "lagoon_openshiftBuildDeploy"
DEFAULT_REMOVE_TASK = "lagoon_openshiftRemove"
DEFAULT_DEVELOPMENT_ENVIRONMENTS_LIMIT = 5


def configure_logging(level: str = LOG_LEVEL):
    """루트 로거에 기본 핸들러를 설치합니다."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
