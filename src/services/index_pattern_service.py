import logging
from typing import List

from src.clients.kibana_client import KibanaClient

logger = logging.getLogger("provisioner.index_patterns")

LOG_CATEGORIES = (
    "application-logs",
    "router-logs",
    "container-logs",
    "lagoon-logs",
)


class IndexPatternService:
    """
    프로젝트별 Kibana 인덱스 패턴과 테넌트 기본 인덱스를 설정합니다.
    모든 작업은 부가적(non-critical)이며 실패해도 예외를 던지지 않습니다.
    """

    def __init__(self, kibana: KibanaClient):
        self.kibana = kibana

    def provision_index_patterns(self, project_name: str, tenant_name: str) -> List[str]:
        """
        LOG_CATEGORIES마다 `<category>-<project>-*` 인덱스 패턴을 생성합니다.

        Args:
            project_name: 대상 프로젝트 이름.
            tenant_name: 패턴을 생성할 테넌트(고객) 이름.

        Returns:
            이번 호출에서 새로 생성된 패턴 목록. 이미 존재하거나 실패한 패턴은 포함되지 않습니다.
        """
        created = []
        for log in LOG_CATEGORIES:
            pattern = f"{log}-{project_name}-*"
            result = self.kibana.create_index_pattern(
                pattern,
                {"title": pattern, "timeFieldName": "@timestamp"},
                tenant=tenant_name,
            )
            if result.ok:
                created.append(pattern)
            elif not result.is_conflict:
                logger.error(f"Kibana Error during setup of index pattern {pattern}: {result.describe()}")
        return created

    def ensure_default_index(self, project_name: str, tenant_name: str) -> bool:
        """
        테넌트에 기본 인덱스가 없을 때만 `container-logs-<project>-*`로 설정합니다.

        Returns:
            기본 인덱스를 새로 설정했으면 True.
        """
        current = self.kibana.get_settings(tenant=tenant_name)
        if not current.ok:
            logger.error(f"Kibana Error during config of default Index: {current.describe()}")
            return False

        body = current.data if current.data is not None else {}
        settings = body.get("settings") if isinstance(body, dict) else None
        if settings is None:
            settings = {}
        if not isinstance(body, dict) or not isinstance(settings, dict):
            logger.error(f"Kibana Error during config of default Index: unexpected settings response {body!r}")
            return False
        if settings.get("defaultIndex"):
            return False

        result = self.kibana.update_settings(
            {
                "defaultIndex": f"container-logs-{project_name}-*",
                "telemetry:optIn": False,
            },
            tenant=tenant_name,
        )
        if not result.ok:
            logger.error(f"Kibana Error during config of default Index: {result.describe()}")
            return False
        return True
